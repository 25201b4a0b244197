import logging
import sys

from .config import LOG_LEVEL, LOG_NAMESPACES


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)

log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_console_handler = None


def configure_logging(level: str = LOG_LEVEL, namespaces=None) -> logging.Logger:
    """
    Attaches a stdout handler to the "shop_admin" logger.

    Modules log through logging.getLogger(__name__), so every logger in the
    package ("shop_admin.features.analytics.service", ...) inherits this
    handler and level. Calling it again replaces the handler instead of
    stacking a second one.
    """
    global _console_handler
    app_logger = logging.getLogger("shop_admin")
    app_logger.setLevel(level)

    # Only our own handler is replaced; handlers attached by others stay.
    if _console_handler is not None:
        app_logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler(sys.stdout)
    _console_handler.setFormatter(log_formatter)
    _console_handler.addFilter(NamespaceFilter(namespaces if namespaces is not None else LOG_NAMESPACES))
    app_logger.addHandler(_console_handler)
    return app_logger

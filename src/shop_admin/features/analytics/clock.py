"""Injectable "now" for the report engine.

Routes receive the clock through the ``get_clock`` dependency, which tests
replace via ``app.dependency_overrides[get_clock]``.
"""

import datetime
from typing import Callable

from .ranges import as_utc

Clock = Callable[[], datetime.datetime]


def system_clock() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def fixed_clock(moment: datetime.datetime) -> Clock:
    frozen = as_utc(moment)

    def _now() -> datetime.datetime:
        return frozen

    return _now


def get_clock() -> Clock:
    return system_clock

"""Shared database building blocks.

Every persisted entity in shop-admin carries a KSUID public identifier
(K-Sortable Unique IDentifier) next to its integer primary key, and the
created/updated timestamps the analytics module filters on."""

from tortoise import fields, models
from ksuid import ksuid


def generate_ksuid() -> str:
    """Return a new time-ordered KSUID as a 27 character string."""
    return str(ksuid.Ksuid())


class TimestampMixin(models.Model):
    # Reports bucket records by created_at, keep it indexed.
    created_at = fields.DatetimeField(auto_now_add=True, db_index=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True

"""
Shared schema configuration.

The storefront script and the admin UI speak camelCase JSON; Python
code uses snake_case field names.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from douanier.domain.clock import to_naive_utc


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ErrorResponse(CamelModel):
    """Error body returned for every handled failure."""

    error: str
    message: str


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize incoming timestamps to naive UTC."""
    return to_naive_utc(value) if value is not None else None

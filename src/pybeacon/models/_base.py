"""Base model shared by beacon and region models.

Every pybeacon model inherits from :class:`BeaconBaseModel` which
provides:

* ``alias_generator=to_camel`` so persisted camelCase keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips blank values
  (``None``, ``""``) so the field default is used.
* Immutability and value hashing (``frozen=True``), which is what lets
  a region act as a dictionary key across process restarts.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Identifier values meaning "match anything" on a region.
_WILDCARDS = frozenset({"", "*"})


def normalize_identifier(value: Any) -> str | None:
    """Normalise a beacon identifier for comparison.

    Identifiers compare case-insensitively (``0x2F234454`` equals
    ``0x2f234454``).  Blank values and ``"*"`` normalise to ``None``.
    """
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in _WILDCARDS:
        return None
    return text


def normalize_bluetooth_address(value: Any) -> str | None:
    """Upper-case a MAC address; blank values become ``None``."""
    if value is None:
        return None
    text = str(value).strip().upper()
    return text or None


class BeaconBaseModel(BaseModel):
    """Base for pybeacon value models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, values: Any) -> Any:
        """Drop top-level ``None`` and blank-string values."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        return cleaned

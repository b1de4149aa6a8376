"""
Shared type definitions for schemas.

Centralizes common type annotations used across the wire and output schemas.

Layering:
- This module provides FOUNDATION types (BaseStrictModel, PermissiveModel, JsonValue)
- records.py (wire schema) builds on PermissiveModel
- messages.py (output schema) builds on BaseStrictModel
"""

from __future__ import annotations

from typing import Annotated, Any

import pydantic
from pydantic.alias_generators import to_camel

__all__ = [
    'BaseStrictModel',
    'CamelStrictModel',
    'JsonValue',
    'OptionalStr',
    'OptionalNumber',
    'PermissiveModel',
]

# ==============================================================================
# Base Strict Model (Foundation)
# ==============================================================================


class BaseStrictModel(pydantic.BaseModel):
    """
    Foundation strict model for values this package constructs itself.

    Uses extra='forbid' to reject unknown fields and frozen=True so that
    instances are immutable once built.
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


class CamelStrictModel(BaseStrictModel):
    """Strict model serialized with camelCase keys for the display layer."""

    model_config = pydantic.ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys, omitting absent (None) fields."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


# ==============================================================================
# Permissive Model (Foundation)
# ==============================================================================


class PermissiveModel(pydantic.BaseModel):
    """
    Foundation permissive model for untrusted input.

    Symmetry with BaseStrictModel:
    - BaseStrictModel: extra='forbid' (rejects unknown fields)
    - PermissiveModel: extra='allow' (accepts unknown fields)

    Transcript records are produced by an engine we do not control, so the
    wire schema keeps whatever it does not model instead of failing.
    """

    model_config = pydantic.ConfigDict(
        extra='allow',  # Accept unknown fields (graceful fallback)
        frozen=True,  # Immutable after creation
    )

    def get_extra_fields(self) -> dict[str, object]:
        """Get extra fields captured by this permissive model.

        Returns only the unknown fields, not defined model fields.
        """
        return dict(self.__pydantic_extra__) if self.__pydantic_extra__ else {}


# ==============================================================================
# Tolerant Primitive Types
# ==============================================================================
#
# Wire fields are optional and must never fail validation because of a value
# with the wrong JSON type. These BeforeValidators coerce such values to None
# so the reconstruction fallbacks take over.
# ==============================================================================


def _str_or_none(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _number_or_none(value: object) -> float | int | None:
    # bool is an int subclass; JSON true is not a duration
    if isinstance(value, bool):
        return None
    return value if isinstance(value, (int, float)) else None


OptionalStr = Annotated[str | None, pydantic.BeforeValidator(_str_or_none)]
"""String field that degrades to None for any non-string JSON value."""

OptionalNumber = Annotated[float | int | None, pydantic.BeforeValidator(_number_or_none)]
"""Numeric field that degrades to None for any non-numeric JSON value."""

JsonValue = pydantic.JsonValue
"""Opaque JSON value (tool inputs, tool result payloads)."""

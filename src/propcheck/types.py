"""Core types for the propcheck validation engine.

This module defines the records shared by every layer:
- ValueErrorType: the kind of violation an error describes
- ValidationError: one path-addressed violation
- MISSING: the value carried by errors for absent object properties
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from propcheck.schema.nodes import SchemaNode


class _Missing:
    """Sentinel for a property that is absent from the validated value."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class ValueErrorType(Enum):
    """The kind of violation a ValidationError describes."""

    TYPE = "type"
    FORMAT = "format"
    UNREGISTERED_FORMAT = "unregisteredFormat"
    OBJECT_REQUIRED_PROPERTY = "objectRequiredProperty"
    CUSTOM = "custom"
    UNREGISTERED_KIND = "unregisteredKind"
    STRING_MIN_LENGTH = "stringMinLength"
    STRING_MAX_LENGTH = "stringMaxLength"
    STRING_PATTERN = "stringPattern"
    NUMBER_MINIMUM = "numberMinimum"
    NUMBER_MAXIMUM = "numberMaximum"
    ARRAY_MIN_ITEMS = "arrayMinItems"
    ARRAY_MAX_ITEMS = "arrayMaxItems"


@dataclass(frozen=True)
class ValidationError:
    """A single schema violation.

    Attributes:
        path: Address of the offending value, rooted at "" (e.g. "/sub/array/0/id")
        schema: The schema node that rejected the value
        value: The offending value, or MISSING for an absent property
        error_type: What kind of violation this is
        message: Human-readable message from the active error function
    """

    path: str
    schema: SchemaNode
    value: Any
    error_type: ValueErrorType
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Debug representation (path, value, message, schema). Omits error_type."""
        result: dict[str, Any] = {"path": self.path}
        if self.value is not MISSING:
            result["value"] = self.value
        result["message"] = self.message
        result["schema"] = self.schema.to_dict()
        return result


# (schema, value) -> bool, installed per kind in the TypeRegistry
TypeCheck = Callable[["SchemaNode", Any], bool]

# (string) -> bool, installed per name in the FormatRegistry
FormatCheck = Callable[[str], bool]

# (error) -> message
ErrorFunction = Callable[[ValidationError], str]

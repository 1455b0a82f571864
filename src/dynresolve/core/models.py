"""Type handles and parsed signatures.

A type handle is whatever the resolver hands back for a type name: a Python
class, one of the eight primitive singletons, or an interned array type built
from a descriptor such as ``"[[I"`` or ``"[Lpkg.Part;"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class PrimitiveKind(str, Enum):
    """Primitive keywords accepted in signatures."""

    BOOLEAN = "boolean"
    BYTE = "byte"
    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def descriptor(self) -> str:
        """Single-letter descriptor code."""
        return _DESCRIPTOR_CODES[self]

    @property
    def value_type(self) -> type:
        """Python type used to hold values of this primitive."""
        return _VALUE_TYPES[self]


_DESCRIPTOR_CODES: dict[PrimitiveKind, str] = {
    PrimitiveKind.BOOLEAN: "Z",
    PrimitiveKind.BYTE: "B",
    PrimitiveKind.CHAR: "C",
    PrimitiveKind.SHORT: "S",
    PrimitiveKind.INT: "I",
    PrimitiveKind.LONG: "J",
    PrimitiveKind.FLOAT: "F",
    PrimitiveKind.DOUBLE: "D",
}

_VALUE_TYPES: dict[PrimitiveKind, type] = {
    PrimitiveKind.BOOLEAN: bool,
    PrimitiveKind.BYTE: int,
    PrimitiveKind.CHAR: str,
    PrimitiveKind.SHORT: int,
    PrimitiveKind.INT: int,
    PrimitiveKind.LONG: int,
    PrimitiveKind.FLOAT: float,
    PrimitiveKind.DOUBLE: float,
}


@dataclass(frozen=True)
class PrimitiveType:
    """Handle for a primitive type. One instance exists per kind."""

    kind: PrimitiveKind

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def descriptor(self) -> str:
        return self.kind.descriptor

    def is_instance(self, value: object) -> bool:
        """Check whether a Python value can stand for this primitive."""
        value_type = self.kind.value_type
        if value_type is int and isinstance(value, bool):
            return False
        if self.kind is PrimitiveKind.CHAR:
            return isinstance(value, str) and len(value) == 1
        return isinstance(value, value_type)

    def __repr__(self) -> str:
        return f"PrimitiveType({self.name})"


PRIMITIVES: dict[str, PrimitiveType] = {
    kind.value: PrimitiveType(kind) for kind in PrimitiveKind
}
PRIMITIVES_BY_CODE: dict[str, PrimitiveType] = {
    kind.descriptor: PRIMITIVES[kind.value] for kind in PrimitiveKind
}


@dataclass(frozen=True)
class ArrayType:
    """Handle for an array type.

    Instances are created by the resolver when a descriptor name is looked up
    and are interned through the type cache.
    """

    component: TypeHandle

    @property
    def dimensions(self) -> int:
        if isinstance(self.component, ArrayType):
            return self.component.dimensions + 1
        return 1

    @property
    def element(self) -> TypeHandle:
        """Innermost non-array component."""
        component = self.component
        while isinstance(component, ArrayType):
            component = component.component
        return component

    @property
    def descriptor(self) -> str:
        return "[" + descriptor_of(self.component)

    def is_instance(self, value: object) -> bool:
        """Check whether a sequence holds only values of the component type."""
        if not isinstance(value, (list, tuple)):
            return False
        return all(value_matches(self.component, item) for item in value)

    def __repr__(self) -> str:
        return f"ArrayType({type_name(self)})"


TypeHandle = Union[type, PrimitiveType, ArrayType]


def type_name(handle: TypeHandle) -> str:
    """Render a type handle as a readable dotted name."""
    if isinstance(handle, PrimitiveType):
        return handle.name
    if isinstance(handle, ArrayType):
        return type_name(handle.element) + "[]" * handle.dimensions
    return f"{handle.__module__}.{handle.__qualname__}"


def descriptor_of(handle: TypeHandle) -> str:
    """Descriptor string for a resolved handle."""
    if isinstance(handle, (PrimitiveType, ArrayType)):
        return handle.descriptor
    return f"L{type_name(handle)};"


def value_matches(handle: TypeHandle, value: object) -> bool:
    """Loose runtime check of a value against a handle (``None`` matches references)."""
    if isinstance(handle, (PrimitiveType, ArrayType)):
        return handle.is_instance(value)
    return value is None or isinstance(value, handle)


class Signature(BaseModel):
    """Parsed constructor or method signature."""

    model_config = {"frozen": True}

    text: str = Field(..., description="Signature as supplied by the caller")
    qualified_name: str = Field(..., description="Owning type name")
    member_name: str | None = Field(None, description="Method name (None for constructors)")
    parameters: tuple[str, ...] = Field(
        default_factory=tuple, description="Trimmed parameter type tokens"
    )

    @property
    def is_constructor(self) -> bool:
        return self.member_name is None

    @property
    def arity(self) -> int:
        return len(self.parameters)

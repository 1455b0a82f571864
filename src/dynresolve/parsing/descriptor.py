"""Type descriptor encoding for array and primitive parameter tokens.

Array parameter types are looked up through the same by-name lookup as plain
types, using descriptor names: ``int[][]`` becomes ``[[I`` and ``pkg.Part[]``
becomes ``[Lpkg.Part;``.
"""

from __future__ import annotations

from dynresolve.core.errors import MalformedSignatureError
from dynresolve.core.models import PRIMITIVES, PRIMITIVES_BY_CODE, PrimitiveType

MAX_ARRAY_DIMENSIONS = 3
ARRAY_SUFFIX = "[]"


def array_dimensions(token: str) -> tuple[str, int]:
    """Split a parameter token into its element token and array depth.

    Args:
        token: Trimmed parameter token, e.g. ``"int[][]"``.

    Returns:
        ``(element_token, dimensions)``; dimensions is 0 for non-array tokens.

    Raises:
        MalformedSignatureError: If the depth exceeds ``MAX_ARRAY_DIMENSIONS``,
            the element is empty, or brackets appear anywhere but at the end.
    """
    element = token
    dimensions = 0
    while element.endswith(ARRAY_SUFFIX):
        element = element[: -len(ARRAY_SUFFIX)].rstrip()
        dimensions += 1
    if dimensions > MAX_ARRAY_DIMENSIONS:
        raise MalformedSignatureError(
            f"The maximum array dimension is {MAX_ARRAY_DIMENSIONS}", token
        )
    if not element or "[" in element or "]" in element:
        raise MalformedSignatureError(f"Invalid parameter type '{token}'", token)
    return element, dimensions


def descriptor_for(element: str) -> str:
    """Descriptor of a non-array token: a letter for primitives, ``L<name>;`` otherwise."""
    primitive = PRIMITIVES.get(element)
    if primitive is not None:
        return primitive.descriptor
    return f"L{element};"


def array_descriptor(token: str) -> str | None:
    """Descriptor name for an array token, or None if ``token`` is not an array."""
    element, dimensions = array_dimensions(token)
    if dimensions == 0:
        return None
    return "[" * dimensions + descriptor_for(element)


def is_descriptor(name: str) -> bool:
    return name.startswith("[")


def parse_descriptor(name: str) -> tuple[int, PrimitiveType | str] | None:
    """Decode an array descriptor name.

    Returns:
        ``(dimensions, element)`` where element is a ``PrimitiveType`` or a
        qualified reference-type name, or None if ``name`` is not a valid
        array descriptor.
    """
    dimensions = len(name) - len(name.lstrip("["))
    if dimensions == 0 or dimensions > MAX_ARRAY_DIMENSIONS:
        return None
    rest = name[dimensions:]
    if len(rest) == 1:
        primitive = PRIMITIVES_BY_CODE.get(rest)
        return (dimensions, primitive) if primitive is not None else None
    if len(rest) > 2 and rest[0] == "L" and rest[-1] == ";":
        element = rest[1:-1]
        if ";" in element or "[" in element or element != element.strip():
            return None
        return dimensions, element
    return None

"""Rich table builders used by the CLI.

Kept separate to keep the command module smaller.
"""

from __future__ import annotations

from rich.table import Table

from dynresolve.core.models import ArrayType, PrimitiveType, type_name


def kind_of(handle) -> str:
    if isinstance(handle, PrimitiveType):
        return "primitive"
    if isinstance(handle, ArrayType):
        return "array"
    return "class"


def describe_type(resolver, handle) -> dict[str, object]:
    """Plain-data description of a type handle (used for --json)."""
    super_type = resolver.get_super_type(handle)
    return {
        "name": type_name(handle),
        "kind": kind_of(handle),
        "super_type": type_name(super_type) if super_type is not None else None,
        "interfaces": [type_name(i) for i in resolver.get_interfaces(handle)],
    }


def build_type_table(resolver, handle) -> Table:
    """Build a (Property, Value) table for `type`."""
    info = describe_type(resolver, handle)
    table = Table(show_header=True, title=info["name"])
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Kind", str(info["kind"]))
    table.add_row("Super type", str(info["super_type"] or "-"))
    table.add_row("Interfaces", ", ".join(info["interfaces"]) or "-")  # type: ignore[arg-type]
    return table


def build_handle_table(handle) -> Table:
    """Build the parameter table for `constructor` and `method`."""
    table = Table(show_header=True, title=repr(handle))
    table.add_column("#")
    table.add_column("Parameter Type")
    table.add_column("Kind")
    for index, parameter in enumerate(handle.parameter_types):
        table.add_row(str(index), type_name(parameter), kind_of(parameter))
    if getattr(handle, "is_static", False):
        table.caption = "static"
    return table

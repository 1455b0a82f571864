"""dynresolve CLI - probe types, constructors and methods by name.

This module provides the command-line interface for dynresolve, enabling
quick checks of what a given interpreter and search path can resolve.
"""

from __future__ import annotations

import ast
import json
import traceback
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

from dynresolve.backends.base import Resolver
from dynresolve.core.errors import BackendError, MalformedSignatureError, ReflectionError

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="dynresolve",
    help="Resolve types, constructors and methods from their names",
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()
err_console = Console(stderr=True)

# Global verbose flag
_verbose: bool = False

EXIT_NOT_FOUND = 1
EXIT_MALFORMED = 2

PathOption = Annotated[
    Optional[list[Path]],
    typer.Option(
        "--path",
        "-p",
        help="Extra directory to search for modules (repeatable)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
]
ModuleOption = Annotated[
    Optional[list[str]],
    typer.Option("--module", "-m", help="Package whose members resolve by relative name (repeatable)"),
]
BackendOption = Annotated[
    Optional[str],
    typer.Option("--backend", "-b", help="Backend name or dotted class path"),
]


def set_verbose(verbose: bool) -> None:
    """Set global verbose mode."""
    global _verbose
    _verbose = verbose


def print_exception(e: Exception) -> None:
    """Print exception details in verbose mode."""
    if _verbose:
        err_console.print("\n[dim]--- Traceback (verbose mode) ---[/dim]")
        err_console.print(f"[dim]{traceback.format_exc()}[/dim]")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with full tracebacks"),
    ] = False,
) -> None:
    """dynresolve CLI - name-based symbol resolution."""
    set_verbose(verbose)


def build_resolver(
    paths: list[Path] | None, modules: list[str] | None, backend: str | None
) -> Resolver:
    """Create a resolver with the command-line search scopes registered."""
    from dynresolve.runtime import create_resolver
    from dynresolve.scopes import ModuleScope, PathScope

    try:
        resolver = create_resolver(backend=backend)
    except BackendError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        print_exception(e)
        raise typer.Exit(1)
    for path in paths or []:
        resolver.add_search_scope(PathScope(path))
    for module in modules or []:
        resolver.add_search_scope(ModuleScope(module))
    return resolver


def fail_malformed(e: MalformedSignatureError) -> None:
    err_console.print(f"[red]Error:[/red] Malformed signature: {e.message}")
    if e.signature:
        err_console.print(f"  Signature: {e.signature}")
    print_exception(e)
    raise typer.Exit(EXIT_MALFORMED)


def parse_argument(text: str) -> Any:
    """Parse a literal argument, falling back to the raw string."""
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError):
        return text


@app.command("type")
def type_command(
    name: Annotated[str, typer.Argument(help="Type name or array descriptor, e.g. 'collections.OrderedDict' or '[[I'")],
    path: PathOption = None,
    module: ModuleOption = None,
    backend: BackendOption = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output machine-readable JSON"),
    ] = False,
) -> None:
    """Resolve a type and show its place in the hierarchy.

    Example:
        dynresolve type collections.OrderedDict
        dynresolve type plugins.Widget --path ./plugins
    """
    from dynresolve.cli._tables import build_type_table, describe_type

    resolver = build_resolver(path, module, backend)
    handle = resolver.get_type(name)
    if handle is None:
        err_console.print(f"[yellow]Not found:[/yellow] {name}")
        raise typer.Exit(EXIT_NOT_FOUND)

    if json_output:
        typer.echo(json.dumps(describe_type(resolver, handle), ensure_ascii=False, indent=2))
        return
    console.print(build_type_table(resolver, handle))


@app.command("constructor")
def constructor_command(
    signature: Annotated[str, typer.Argument(help="Constructor signature, e.g. 'pkg.Widget(int, str)'")],
    path: PathOption = None,
    module: ModuleOption = None,
    backend: BackendOption = None,
) -> None:
    """Resolve a constructor signature.

    Example:
        dynresolve constructor "fractions.Fraction(int, int)"
    """
    from dynresolve.cli._tables import build_handle_table

    resolver = build_resolver(path, module, backend)
    try:
        handle = resolver.get_constructor(signature)
    except MalformedSignatureError as e:
        fail_malformed(e)
        return
    if handle is None:
        err_console.print(f"[yellow]Not found:[/yellow] {signature}")
        raise typer.Exit(EXIT_NOT_FOUND)
    console.print(build_handle_table(handle))


@app.command("method")
def method_command(
    signature: Annotated[str, typer.Argument(help="Method signature, e.g. 'str.startswith(str)'")],
    path: PathOption = None,
    module: ModuleOption = None,
    backend: BackendOption = None,
) -> None:
    """Resolve a method signature.

    Example:
        dynresolve method "time.perf_counter_ns()"
    """
    from dynresolve.cli._tables import build_handle_table

    resolver = build_resolver(path, module, backend)
    try:
        handle = resolver.get_method(signature)
    except MalformedSignatureError as e:
        fail_malformed(e)
        return
    if handle is None:
        err_console.print(f"[yellow]Not found:[/yellow] {signature}")
        raise typer.Exit(EXIT_NOT_FOUND)
    console.print(build_handle_table(handle))


@app.command("call")
def call_command(
    signature: Annotated[str, typer.Argument(help="Static method or constructor signature")],
    args: Annotated[
        Optional[list[str]],
        typer.Argument(help="Arguments as Python literals (plain words are passed as strings)"),
    ] = None,
    new: Annotated[
        bool,
        typer.Option("--new", "-n", help="Treat the signature as a constructor"),
    ] = False,
    path: PathOption = None,
    module: ModuleOption = None,
    backend: BackendOption = None,
) -> None:
    """Invoke a static method (or a constructor with --new) and print the result.

    Example:
        dynresolve call "math.gcd(int, int)" 12 18
        dynresolve call --new "fractions.Fraction(int, int)" 1 3
    """
    resolver = build_resolver(path, module, backend)
    values = [parse_argument(arg) for arg in args or []]
    try:
        handle = resolver.get_constructor(signature) if new else resolver.get_method(signature)
    except MalformedSignatureError as e:
        fail_malformed(e)
        return
    if handle is None:
        err_console.print(f"[yellow]Not found:[/yellow] {signature}")
        raise typer.Exit(EXIT_NOT_FOUND)

    try:
        if new:
            result = handle.new_instance_from(values)
        else:
            result = handle.invoke_with(None, values)
    except ReflectionError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        print_exception(e)
        raise typer.Exit(1)
    console.print(repr(result), markup=False, highlight=False)


if __name__ == "__main__":
    app()

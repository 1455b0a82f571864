"""Constructor and method handles.

A handle is bound once to the capability that performs the actual call and
to a fixed list of parameter types. Every entry point checks the number of
supplied arguments against that list before forwarding to the capability.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from dynresolve.core.errors import ArityMismatchError
from dynresolve.core.models import TypeHandle, type_name

Allocator = Callable[[tuple[Any, ...]], Any]
Executor = Callable[[Any, tuple[Any, ...]], Any]


class _Handle:
    __slots__ = ("_signature", "_parameter_types")

    def __init__(self, signature: str, parameter_types: Sequence[TypeHandle]) -> None:
        self._signature = signature
        self._parameter_types = tuple(parameter_types)

    @property
    def signature(self) -> str:
        """Signature text the handle was resolved from."""
        return self._signature

    @property
    def parameter_types(self) -> tuple[TypeHandle, ...]:
        return self._parameter_types

    @property
    def parameter_count(self) -> int:
        return len(self._parameter_types)

    def _check_arity(self, supplied: int) -> None:
        if supplied != len(self._parameter_types):
            raise ArityMismatchError(len(self._parameter_types), supplied)

    def describe(self) -> str:
        """Signature rebuilt from the resolved parameter types."""
        head = self._signature[: self._signature.find("(")].strip()
        params = ", ".join(type_name(t) for t in self._parameter_types)
        return f"{head}({params})"

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)


class ConstructorHandle(_Handle):
    """Creates instances of one resolved type."""

    __slots__ = ("_allocate",)

    def __init__(
        self, signature: str, parameter_types: Sequence[TypeHandle], allocate: Allocator
    ) -> None:
        super().__init__(signature, parameter_types)
        self._allocate = allocate

    def allocate(self, args: tuple[Any, ...]) -> Any:
        """Run the bound allocation without checking the argument count."""
        return self._allocate(args)

    def new_instance(self, *args: Any) -> Any:
        """Create an instance.

        Raises:
            ArityMismatchError: If ``len(args)`` differs from ``parameter_count``.
            InvocationError: If the allocation itself fails.
        """
        self._check_arity(len(args))
        return self._allocate(args)

    def new_instance_from(self, args: Sequence[Any]) -> Any:
        """Create an instance from a sequence of arguments."""
        args = tuple(args)
        self._check_arity(len(args))
        return self._allocate(args)

    def __repr__(self) -> str:
        return f"{self._signature} constructor"


class MethodHandle(_Handle):
    """Invokes one resolved method.

    The receiver is ignored for static methods; instance methods require one.
    """

    __slots__ = ("_execute", "_is_static")

    def __init__(
        self,
        signature: str,
        parameter_types: Sequence[TypeHandle],
        execute: Executor,
        is_static: bool = False,
    ) -> None:
        super().__init__(signature, parameter_types)
        self._execute = execute
        self._is_static = is_static

    @property
    def is_static(self) -> bool:
        return self._is_static

    def execute(self, receiver: Any, args: tuple[Any, ...]) -> Any:
        """Run the bound call without checking the argument count."""
        return self._execute(receiver, args)

    def invoke(self, receiver: Any, *args: Any) -> Any:
        """Invoke the method on ``receiver`` (None for static methods).

        Raises:
            ArityMismatchError: If ``len(args)`` differs from ``parameter_count``.
            InvocationError: If the call cannot be made (e.g. wrong receiver).
        """
        self._check_arity(len(args))
        return self._execute(receiver, args)

    def invoke_with(self, receiver: Any, args: Sequence[Any]) -> Any:
        """Invoke the method with arguments taken from a sequence."""
        args = tuple(args)
        self._check_arity(len(args))
        return self._execute(receiver, args)

    def __repr__(self) -> str:
        return f"{self._signature} method"

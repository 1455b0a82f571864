"""Full-profile backend built on ``inspect``.

Constructors and methods are matched by name and positional arity, checked
against ``inspect.signature``. Python has no overloading, so parameter types
only need to resolve; checking argument values against them is left to the
call itself.
"""

from __future__ import annotations

import inspect
import logging
from types import ModuleType
from typing import Any, Generic, Protocol

from dynresolve.backends.base import Resolver
from dynresolve.core.errors import InvocationError
from dynresolve.core.models import ArrayType, PrimitiveType, Signature, TypeHandle
from dynresolve.handles import Allocator, ConstructorHandle, MethodHandle

logger = logging.getLogger(__name__)

_MARKER_BASES = (object, Generic, Protocol)


def is_interface(cls: type) -> bool:
    """Protocol classes are the closest thing Python has to interfaces."""
    return cls in _MARKER_BASES[1:] or bool(cls.__dict__.get("_is_protocol", False))


def accepts_positional(target: Any, count: int, skip_receiver: bool = False) -> bool:
    """Check whether ``target`` can be called with ``count`` positional arguments.

    Callables without an introspectable signature are assumed to match.
    """
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        return True
    parameters = list(signature.parameters.values())
    if skip_receiver:
        if not parameters or parameters[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        ):
            return False
        if parameters[0].kind is not inspect.Parameter.VAR_POSITIONAL:
            parameters = parameters[1:]
    try:
        signature.replace(parameters=parameters).bind(*([None] * count))
    except TypeError:
        return False
    return True


def call_target(target: Any, args: tuple[Any, ...], label: str, kind: str) -> Any:
    """Call ``target`` with ``args``, reporting argument binding failures.

    A ``TypeError`` whose traceback ends in this frame was raised while the
    arguments were bound (or inside a builtin), not by Python code of the
    target, and becomes an ``InvocationError``. Anything raised further down
    propagates unchanged.
    """
    try:
        return target(*args)
    except TypeError as e:
        if e.__traceback__ is not None and e.__traceback__.tb_next is None:
            raise InvocationError(f"Illegal argument error for {label} {kind}: {e}", label) from e
        raise


def allocator_for(owner: type, label: str) -> Allocator:
    """Build the allocation capability for ``owner``.

    Abstract classes, protocols and rejected arguments are reported as
    ``InvocationError``; exceptions raised by the constructor body propagate
    unchanged.
    """

    def allocate(args: tuple[Any, ...]) -> Any:
        if inspect.isabstract(owner) or is_interface(owner):
            raise InvocationError(f"Instantiation error for {label} constructor", label)
        return call_target(owner, args, label, "constructor")

    return allocate


class ReflectiveResolver(Resolver):
    """Default backend: classes, modules and callables through ``inspect``."""

    name = "reflective"

    def get_super_type(self, handle: TypeHandle) -> TypeHandle | None:
        if isinstance(handle, PrimitiveType):
            return None
        if isinstance(handle, ArrayType):
            return object
        if handle is object or is_interface(handle):
            return None
        for base in handle.__bases__:
            if not is_interface(base):
                return base
        return object

    def get_interfaces(self, handle: TypeHandle) -> tuple[TypeHandle, ...]:
        if not isinstance(handle, type):
            return ()
        superclass = self.get_super_type(handle)
        return tuple(
            base
            for base in handle.__bases__
            if base is not superclass and base not in _MARKER_BASES
        )

    def _resolve_owner(self, name: str) -> object | None:
        owner = self.get_type(name)
        if owner is not None:
            return owner
        # Module-level functions behave as static methods of their module.
        return self._search(name, lambda found: isinstance(found, ModuleType))

    def _bind_constructor(
        self, signature: Signature, owner: type, parameter_types: tuple[TypeHandle, ...]
    ) -> ConstructorHandle | None:
        if not accepts_positional(owner, len(parameter_types)):
            logger.debug(f"{signature.text}: no constructor accepting {len(parameter_types)} arguments")
            return None
        return ConstructorHandle(
            signature.text, parameter_types, allocator_for(owner, signature.text)
        )

    def _bind_method(
        self, signature: Signature, owner: object, parameter_types: tuple[TypeHandle, ...]
    ) -> MethodHandle | None:
        member = signature.member_name or ""
        arity = len(parameter_types)

        if isinstance(owner, ModuleType):
            function = getattr(owner, member, None)
            if not callable(function) or isinstance(function, type):
                return None
            if not accepts_positional(function, arity):
                return None
            return MethodHandle(
                signature.text,
                parameter_types,
                _static_executor(function, signature.text),
                is_static=True,
            )

        if not isinstance(owner, type):
            return None
        try:
            raw = inspect.getattr_static(owner, member)
        except AttributeError:
            return None

        if isinstance(raw, (staticmethod, classmethod)):
            function = getattr(owner, member)
            if not accepts_positional(function, arity):
                return None
            return MethodHandle(
                signature.text,
                parameter_types,
                _static_executor(function, signature.text),
                is_static=True,
            )

        if not callable(raw) or isinstance(raw, type):
            return None
        if not accepts_positional(getattr(owner, member), arity, skip_receiver=True):
            return None
        return MethodHandle(
            signature.text,
            parameter_types,
            _instance_executor(owner, member, signature.text),
            is_static=False,
        )


def _static_executor(function: Any, label: str):
    def execute(receiver: Any, args: tuple[Any, ...]) -> Any:
        return call_target(function, args, label, "method")

    return execute


def _instance_executor(owner: type, member: str, label: str):
    def execute(receiver: Any, args: tuple[Any, ...]) -> Any:
        if receiver is None:
            raise InvocationError(f"Instance method {label} needs a receiver", label)
        if not isinstance(receiver, owner):
            raise InvocationError(
                f"{type(receiver).__name__} is not an instance of {owner.__qualname__} "
                f"for {label} method",
                label,
            )
        try:
            bound = getattr(receiver, member)
        except AttributeError as e:
            raise InvocationError(f"Illegal access error for {label} method", label) from e
        return call_target(bound, args, label, "method")

    return execute

"""Pooled scratch buffers used to normalize names before lookup."""

from __future__ import annotations

import io
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from dynresolve.core.config import get_config

_pool: list[io.StringIO] = []
_pool_lock = threading.Lock()


def _acquire() -> io.StringIO:
    with _pool_lock:
        if _pool:
            return _pool.pop()
    return io.StringIO()


def _release(buffer: io.StringIO) -> None:
    buffer.seek(0)
    buffer.truncate()
    with _pool_lock:
        if len(_pool) < get_config().scratch_pool_size:
            _pool.append(buffer)


@contextmanager
def scratch_buffer() -> Iterator[io.StringIO]:
    """Borrow an empty text buffer; it goes back to the pool on exit."""
    buffer = _acquire()
    try:
        yield buffer
    finally:
        _release(buffer)


def pooled_buffers() -> int:
    """Number of idle buffers currently held by the pool."""
    with _pool_lock:
        return len(_pool)


def normalize_name(value: str | bytes | bytearray | memoryview | Iterable[str]) -> str:
    """Return ``value`` as a plain ``str``.

    Plain strings pass through untouched. String subclasses, UTF-8 byte
    sequences and iterables of string chunks are copied through a scratch
    buffer.

    Raises:
        TypeError: If ``value`` is not string-like.
    """
    if type(value) is str:
        return value
    with scratch_buffer() as buffer:
        if isinstance(value, str):
            buffer.write(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            buffer.write(bytes(value).decode("utf-8"))
        elif isinstance(value, Iterable):
            for chunk in value:
                if not isinstance(chunk, str):
                    raise TypeError(f"Type name chunks must be str, got {type(chunk).__name__}")
                buffer.write(chunk)
        else:
            raise TypeError(f"Type name must be string-like, got {type(value).__name__}")
        return str(buffer.getvalue())

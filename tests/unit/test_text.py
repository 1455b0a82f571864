"""Unit tests for name normalization and scratch buffers."""

from __future__ import annotations

import pytest

from dynresolve.core.text import normalize_name, pooled_buffers, scratch_buffer


class Name(str):
    """A str subclass standing in for a caller's string-like type."""


class TestNormalizeName:
    """Tests for normalize_name."""

    def test_plain_str_passes_through(self) -> None:
        name = "collections.OrderedDict"
        assert normalize_name(name) is name

    def test_str_subclass(self) -> None:
        result = normalize_name(Name("pkg.Widget"))
        assert result == "pkg.Widget"
        assert type(result) is str

    @pytest.mark.parametrize(
        "value",
        [b"pkg.Widget", bytearray(b"pkg.Widget"), memoryview(b"pkg.Widget")],
    )
    def test_bytes_like(self, value: object) -> None:
        assert normalize_name(value) == "pkg.Widget"  # type: ignore[arg-type]

    def test_iterable_of_chunks(self) -> None:
        assert normalize_name(["pkg", ".", "Widget"]) == "pkg.Widget"

    def test_rejects_non_string(self) -> None:
        with pytest.raises(TypeError):
            normalize_name(42)  # type: ignore[arg-type]

    def test_rejects_non_string_chunks(self) -> None:
        with pytest.raises(TypeError):
            normalize_name(["pkg", 1])  # type: ignore[list-item]


class TestScratchBuffer:
    """Tests for the scratch buffer pool."""

    def test_buffer_is_returned_empty(self) -> None:
        with scratch_buffer() as buffer:
            buffer.write("left over")
        with scratch_buffer() as buffer:
            assert buffer.getvalue() == ""

    def test_buffer_released_on_failure(self) -> None:
        with scratch_buffer():
            pass
        idle = pooled_buffers()
        with pytest.raises(RuntimeError):
            with scratch_buffer():
                raise RuntimeError("fail inside")
        assert pooled_buffers() == idle

    def test_failed_normalization_releases_buffer(self) -> None:
        normalize_name(Name("warm"))
        idle = pooled_buffers()
        with pytest.raises(TypeError):
            normalize_name(["ok", None])  # type: ignore[list-item]
        assert pooled_buffers() == idle

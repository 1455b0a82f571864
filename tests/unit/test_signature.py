"""Unit tests for signature parsing."""

from __future__ import annotations

import pytest

from dynresolve.core.errors import MalformedSignatureError
from dynresolve.parsing.signature import (
    parse_constructor_signature,
    parse_method_signature,
    split_parameters,
)


class TestConstructorSignature:
    """Tests for parse_constructor_signature."""

    def test_widget_signature(self) -> None:
        signature = parse_constructor_signature("pkg.Widget(int,pkg.Part[])")
        assert signature.qualified_name == "pkg.Widget"
        assert signature.member_name is None
        assert signature.parameters == ("int", "pkg.Part[]")

    def test_empty_parameter_list(self) -> None:
        signature = parse_constructor_signature("pkg.Widget()")
        assert signature.parameters == ()

    def test_whitespace_is_trimmed(self) -> None:
        signature = parse_constructor_signature("  pkg.Widget ( int ,  long[] , str )")
        assert signature.qualified_name == "pkg.Widget"
        assert signature.parameters == ("int", "long[]", "str")

    def test_blank_parameter_list(self) -> None:
        assert parse_constructor_signature("pkg.Widget(   )").parameters == ()

    def test_text_is_kept_as_label(self) -> None:
        assert parse_constructor_signature("a.B(int)").text == "a.B(int)"

    @pytest.mark.parametrize(
        "text",
        ["pkg.Widget", "pkg.Widget)", "pkg.Widget(int", "(int)", "pkg.Widget(int) trailing"],
    )
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedSignatureError):
            parse_constructor_signature(text)

    def test_missing_open_parenthesis_message(self) -> None:
        with pytest.raises(MalformedSignatureError, match=r"'\('"):
            parse_constructor_signature("pkg.Widget")

    def test_missing_close_parenthesis_message(self) -> None:
        with pytest.raises(MalformedSignatureError, match=r"'\)'"):
            parse_constructor_signature("pkg.Widget(int")

    def test_malformed_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_constructor_signature("nothing here")


class TestMethodSignature:
    """Tests for parse_method_signature."""

    def test_member_after_last_dot(self) -> None:
        signature = parse_method_signature("pkg.sub.Util.compute(int, double)")
        assert signature.qualified_name == "pkg.sub.Util"
        assert signature.member_name == "compute"
        assert signature.parameters == ("int", "double")

    def test_no_parameters(self) -> None:
        signature = parse_method_signature("pkg.Util.compute()")
        assert signature.qualified_name == "pkg.Util"
        assert signature.parameters == ()

    def test_dots_inside_parameters_are_ignored(self) -> None:
        signature = parse_method_signature("a.B.run(x.y.Z)")
        assert signature.qualified_name == "a.B"
        assert signature.member_name == "run"

    @pytest.mark.parametrize("text", ["compute()", ".compute()", "pkg.Util.()", "pkg.Util.compute"])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedSignatureError):
            parse_method_signature(text)


class TestSplitParameters:
    """Tests for split_parameters."""

    def test_split_and_trim(self) -> None:
        assert split_parameters(" int , char[][] ") == ("int", "char[][]")

    def test_empty_token_kept(self) -> None:
        assert split_parameters("int,,long") == ("int", "", "long")

    def test_trailing_comma(self) -> None:
        assert split_parameters("int,") == ("int", "")

    def test_array_depth_checked_at_parse_time(self) -> None:
        with pytest.raises(MalformedSignatureError, match="maximum array dimension is 3"):
            split_parameters("int[][][][]")

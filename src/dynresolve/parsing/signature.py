"""Signature parsing.

Grammar::

    Ctor      := QualifiedName '(' [ParamList] ')'
    Method    := QualifiedName '.' MemberName '(' [ParamList] ')'
    ParamList := ParamType (',' ParamType)*
    ParamType := PrimitiveKeyword | ParamType '[]' | QualifiedName

Whitespace around commas and around the whole parameter list is ignored.
Parsing never looks anything up; resolving the tokens is the resolver's job.
"""

from __future__ import annotations

from dynresolve.core.errors import MalformedSignatureError
from dynresolve.core.models import Signature
from dynresolve.parsing.descriptor import array_dimensions


def _locate_parentheses(text: str) -> tuple[int, int]:
    open_index = text.find("(")
    if open_index < 0:
        raise MalformedSignatureError("Parenthesis '(' not found", text)
    close_index = text.find(")", open_index + 1)
    if close_index < 0:
        raise MalformedSignatureError("Parenthesis ')' not found", text)
    if text[close_index + 1 :].strip():
        raise MalformedSignatureError("Unexpected text after ')'", text)
    return open_index, close_index


def split_parameters(text: str) -> tuple[str, ...]:
    """Split the text between parentheses into trimmed parameter tokens.

    An empty token (``"int,,long"``) is kept; it names no type, so resolving
    it fails and the whole lookup is absent.

    Raises:
        MalformedSignatureError: On an invalid array suffix.
    """
    text = text.strip()
    if not text:
        return ()
    tokens = tuple(token.strip() for token in text.split(","))
    for token in tokens:
        if token:
            array_dimensions(token)
    return tokens


def parse_constructor_signature(text: str) -> Signature:
    """Parse ``"pkg.Type(argType, ...)"``."""
    open_index, close_index = _locate_parentheses(text)
    qualified_name = text[:open_index].strip()
    if not qualified_name:
        raise MalformedSignatureError("Missing type name", text)
    return Signature(
        text=text,
        qualified_name=qualified_name,
        parameters=split_parameters(text[open_index + 1 : close_index]),
    )


def parse_method_signature(text: str) -> Signature:
    """Parse ``"pkg.Type.member(argType, ...)"``.

    The member name is the segment after the last dot before ``(``.
    """
    open_index, close_index = _locate_parentheses(text)
    head = text[:open_index].strip()
    dot = head.rfind(".")
    if dot < 0:
        raise MalformedSignatureError("Method signature must name its owning type", text)
    qualified_name = head[:dot].strip()
    member_name = head[dot + 1 :].strip()
    if not qualified_name or not member_name:
        raise MalformedSignatureError("Missing type or method name", text)
    return Signature(
        text=text,
        qualified_name=qualified_name,
        member_name=member_name,
        parameters=split_parameters(text[open_index + 1 : close_index]),
    )

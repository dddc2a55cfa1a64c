"""
Textual form of a coding: serializer, parser, and restricted evaluator.

A coding renders as one line of call syntax that names only ``coding`` and ``code``:

    coding(code("Yes", 1), code("Missing", None, missing=True), label="yesno")

The grammar is closed (see ``coding.lark``): literals (strings, numbers, ``True``,
``False``, ``None``), tuples/lists of literals, and calls to exactly the two
constructors. Parsing produces a small AST; evaluation walks that AST against a
fresh, read-only binding table holding only ``code`` and ``coding``. No general
evaluator is involved, so a stored coding string cannot run arbitrary code.

Responsibilities
- ``as_character`` / ``to_expression``: Coding -> one-line string.
- ``parse_expression``: string -> AST (``Call`` rooted at ``coding``).
- ``eval_coding``: string or AST -> Coding, re-running all assembly invariants.

Serialization rules
- label and value are always emitted, positionally.
- ``missing=True`` only when set.
- ``links_from=(...)`` only when requested and different from ``(label,)``.
- ``description=...`` only when different from the label.
- ``label=...`` on the coding call only when a collection label is set.
- Per value kind: integers as digits, floats via ``repr`` (always with ``.`` or an
  exponent), strings as JSON-escaped double-quoted text (U+0085, U+2028 and
  U+2029 escaped as well), booleans as ``True``/``False``, missing as ``None``.

Examples:
    >>> from codings.core.schema import code, coding
    >>> from codings.core.expression import as_character, eval_coding
    >>> yn = coding(code("Yes", 1), code("No", 0))
    >>> as_character(yn)
    'coding(code("Yes", 1), code("No", 0))'
    >>> eval_coding(as_character(yn)) == yn
    True
"""

from __future__ import annotations

import ast
import inspect
import json
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final

from lark import Token, Transformer
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedInput, VisitError

from .errors import GrammarError
from .grammar import CODING_PARSER, CallName, CodeKeyword, CodingKeyword, ValueKind
from .schema import Code, Coding, code, coding
from .typing import Scalar

__all__ = [
    "Literal",
    "Sequence",
    "Call",
    "as_character",
    "to_expression",
    "parse_expression",
    "eval_coding",
]

logger = logging.getLogger(__name__)


# ============================================================================
# AST
# ============================================================================


@dataclass(slots=True, frozen=True)
class Literal:
    """Scalar literal (str, int, float, bool, or None)."""

    value: Scalar


@dataclass(slots=True, frozen=True)
class Sequence:
    """Tuple or list of literals (used for ``links_from``)."""

    items: tuple[Literal, ...]


@dataclass(slots=True, frozen=True)
class Call:
    """
    Call to a named constructor.

    Attributes:
        name (str): Callee name; only ``coding`` and ``code`` evaluate.
        args (tuple): Positional argument nodes.
        kwargs (tuple[tuple[str, node], ...]): Keyword arguments in source order.
    """

    name: str
    args: tuple[Literal | Sequence | Call, ...] = ()
    kwargs: tuple[tuple[str, Literal | Sequence | Call], ...] = ()


Node = Literal | Sequence | Call


# ============================================================================
# Serializer
# ============================================================================


# Line breaks that JSON leaves unescaped under ensure_ascii=False.
_LINE_BREAKS: Final[dict[int, str]] = {
    0x85: "\\u0085",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False).translate(_LINE_BREAKS)


_LITERAL_RULES: Final[dict[ValueKind, Callable[[Any], str]]] = {
    ValueKind.INTEGER: lambda v: str(int(v)),
    ValueKind.FLOAT: repr,
    ValueKind.STRING: _quote,
    ValueKind.BOOLEAN: lambda v: "True" if v else "False",
    ValueKind.MISSING: lambda v: "None",
}


def _code_call(c: Code, include_links_from: bool) -> str:
    parts = [_quote(c.label), _LITERAL_RULES[c.kind](c.value)]
    if c.missing:
        parts.append(f"{CodeKeyword.MISSING.value}=True")
    if include_links_from and c.is_recoded:
        items = ", ".join(_quote(s) for s in c.links_from)
        if len(c.links_from) == 1:
            items += ","
        parts.append(f"{CodeKeyword.LINKS_FROM.value}=({items})")
    if c.description != c.label:
        parts.append(f"{CodeKeyword.DESCRIPTION.value}={_quote(c.description)}")
    return f"{CallName.CODE.value}({', '.join(parts)})"


def as_character(coding: Coding, include_links_from: bool = False) -> str:
    """
    Render a coding as a one-line expression that ``eval_coding`` reconstructs.

    Args:
        coding (Coding): Coding to render.
        include_links_from (bool): Emit lineage for recoded codes. Off by default to
            keep ordinary round trips terse.

    Returns:
        str: Single-line expression.

    Raises:
        TypeError: If coding is not a Coding.
    """
    if not isinstance(coding, Coding):
        raise TypeError(f"expected a Coding, got {type(coding).__name__}")
    parts = [_code_call(c, include_links_from) for c in coding.codes]
    if coding.label is not None:
        parts.append(f"{CodingKeyword.LABEL.value}={_quote(coding.label)}")
    return f"{CallName.CODING.value}({', '.join(parts)})"


to_expression = as_character


# ============================================================================
# Parser
# ============================================================================

_IDENT_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(slots=True, frozen=True)
class _Keyword:
    name: str
    value: Node


def _decode_string(token: Token) -> str:
    try:
        value = ast.literal_eval(str(token))
    except (SyntaxError, ValueError) as exc:
        raise GrammarError(f"invalid string literal {str(token)!r}") from exc
    if not isinstance(value, str):
        raise GrammarError(f"invalid string literal {str(token)!r}")
    return value


def _nodes(items: list[Any]) -> list[Any]:
    return [item for item in items if item is not None and not isinstance(item, Token)]


def _split_arguments(
    name: str, items: list[Any]
) -> tuple[tuple[Node, ...], tuple[tuple[str, Node], ...]]:
    args: list[Node] = []
    kwargs: list[tuple[str, Node]] = []
    for item in items:
        if isinstance(item, _Keyword):
            if any(k == item.name for k, _ in kwargs):
                raise GrammarError(f"{name}() keyword argument {item.name!r} repeated")
            kwargs.append((item.name, item.value))
        elif kwargs:
            raise GrammarError(f"{name}(): positional argument follows keyword argument")
        else:
            args.append(item)
    return tuple(args), tuple(kwargs)


class _ASTBuilder(Transformer):  # type: ignore[type-arg]
    """Turn the Lark parse tree into Literal/Sequence/Call nodes."""

    def start(self, items: list[Any]) -> Call:
        return items[0]

    def string(self, items: list[Token]) -> Literal:
        return Literal(_decode_string(items[0]))

    def number(self, items: list[Token]) -> Literal:
        text = str(items[0])
        is_float = any(ch in text for ch in ".eE")
        return Literal(float(text) if is_float else int(text))

    def true(self, items: list[Token]) -> Literal:
        return Literal(True)

    def false(self, items: list[Token]) -> Literal:
        return Literal(False)

    def none(self, items: list[Token]) -> Literal:
        return Literal(None)

    def sequence(self, items: list[Any]) -> Sequence:
        return Sequence(tuple(_nodes(items)))

    def code_keyword(self, items: list[Token]) -> str:
        return str(items[0])

    coding_keyword = code_keyword

    def code_kwarg(self, items: list[Any]) -> _Keyword:
        # items: [keyword, "=", value]
        return _Keyword(items[0], items[-1])

    def coding_kwarg(self, items: list[Any]) -> _Keyword:
        token = items[-1]
        value = _decode_string(token) if token.type == "STRING" else None
        return _Keyword(items[0], Literal(value))

    def code_args(self, items: list[Any]) -> list[Any]:
        return _nodes(items)

    coding_args = code_args

    def code_call(self, items: list[Any]) -> Call:
        args, kwargs = _split_arguments(CallName.CODE.value, _nodes(items)[0])
        return Call(CallName.CODE.value, args, kwargs)

    def coding_call(self, items: list[Any]) -> Call:
        found = _nodes(items)
        args, kwargs = _split_arguments(CallName.CODING.value, found[0] if found else [])
        return Call(CallName.CODING.value, args, kwargs)


def _unexpected_name(text: str, pos: int) -> str | None:
    start = pos
    while start > 0 and (text[start - 1].isalnum() or text[start - 1] == "_"):
        start -= 1
    m = _IDENT_RE.match(text, start)
    return m.group() if m else None


def parse_expression(text: str) -> Call:
    """
    Parse a textual coding expression into an AST without evaluating it.

    Args:
        text (str): One-line expression, e.g. ``'coding(code("Yes", 1))'``.

    Returns:
        Call: Root ``coding`` call node.

    Raises:
        GrammarError: If text is not a string, does not parse under ``coding.lark``,
            names anything other than ``coding``/``code``, or repeats or misorders
            keyword arguments.
    """
    if not isinstance(text, str):
        raise GrammarError(f"expected expression text, got {type(text).__name__}")
    try:
        tree = CODING_PARSER.parse(text)
        node: Call = _ASTBuilder().transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, GrammarError):
            raise exc.orig_exc from exc
        raise GrammarError(f"invalid coding expression: {exc.orig_exc}") from exc
    except UnexpectedCharacters as exc:
        # Must come before UnexpectedInput.
        name = _unexpected_name(text, exc.pos_in_stream)
        if name is not None:
            raise GrammarError(f"name {name!r} is not defined") from exc
        raise GrammarError(
            f"unexpected character {text[exc.pos_in_stream]!r} at position {exc.pos_in_stream}"
        ) from exc
    except UnexpectedInput as exc:
        token = getattr(exc, "token", "end of expression")
        raise GrammarError(f"unexpected input {str(token)!r} at column {exc.column}") from exc
    except LarkError as exc:
        raise GrammarError(f"invalid coding expression: {exc}") from exc
    logger.debug("parsed coding expression with %d arguments", len(node.args))
    return node


# ============================================================================
# Restricted evaluation
# ============================================================================

_ALLOWED_KEYWORDS: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        CallName.CODE.value: tuple(k.value for k in CodeKeyword),
        CallName.CODING.value: tuple(k.value for k in CodingKeyword),
    }
)


def _evaluate(node: Node, bindings: Mapping[str, Callable[..., Any]], depth: int = 0) -> Any:
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Sequence):
        if not all(isinstance(item, Literal) for item in node.items):
            raise GrammarError("sequences may only contain literals")
        return tuple(item.value for item in node.items)
    if isinstance(node, Call):
        fn = bindings.get(node.name)
        if fn is None:
            raise GrammarError(f"name {node.name!r} is not defined")
        # coding(...) at the root, code(...) directly inside it.
        if depth > 1:
            raise GrammarError(f"{node.name}() cannot be nested this deeply")
        allowed = _ALLOWED_KEYWORDS[node.name]
        for key, _ in node.kwargs:
            if key not in allowed:
                raise GrammarError(f"{node.name}() got an unexpected keyword argument {key!r}")
        if node.name == CallName.CODE.value and len(node.args) > len(allowed):
            raise GrammarError(
                f"code() takes at most {len(allowed)} positional arguments "
                f"({len(node.args)} given)"
            )
        args = [_evaluate(a, bindings, depth + 1) for a in node.args]
        kwargs = {k: _evaluate(v, bindings, depth + 1) for k, v in node.kwargs}
        try:
            inspect.signature(fn).bind(*args, **kwargs)
        except TypeError as exc:
            raise GrammarError(f"{node.name}(): {exc}") from exc
        return fn(*args, **kwargs)
    raise GrammarError(f"unsupported expression node {type(node).__name__}")


def eval_coding(expr: str | Call) -> Coding:
    """
    Evaluate a coding expression with only ``code`` and ``coding`` in scope.

    Args:
        expr (str | Call): Expression text or an AST from ``parse_expression``.

    Returns:
        Coding: Reconstructed coding. Assembly invariants run as usual.

    Raises:
        GrammarError: If expr is neither text nor a ``coding`` call, or references any
            other name.
        SchemaError: If the reconstructed codes violate coding invariants.
        pydantic.ValidationError: If a code's fields are invalid.

    Examples:
        >>> eval_coding('coding(code("Yes", 1), code("No", 0))').labels["No"]
        2
    """
    if isinstance(expr, str):
        expr = parse_expression(expr)
    if not isinstance(expr, Call) or expr.name != CallName.CODING.value:
        raise GrammarError(f"eval_coding() requires a coding expression, got {expr!r}")

    # Scoped to this call only.
    bindings = MappingProxyType({CallName.CODE.value: code, CallName.CODING.value: coding})
    out = _evaluate(expr, bindings)
    logger.debug("evaluated coding expression into %d codes", len(out))
    return out

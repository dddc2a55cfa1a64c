"""
Canonical coding grammar and helpers.

Defines value kinds, the keyword sets of the textual coding format, and canonical
table names. Ships the authoritative Lark grammar for the one-line textual form,
the LALR parser built from it, and zero-IO validators/helpers used across the stack.

Responsibilities
- Define enums whose serialized values are lower_snake.
- Classify scalar values into a ValueKind and a consistency family.
- Expose the grammar text verbatim and the parser compiled from it.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (grammar keywords, table columns): lower_snake

2) Value kinds are explicit:
   - Every Code value is tagged with exactly one ValueKind.
   - INTEGER and FLOAT share the "numeric" family; a coding may mix them.
   - MISSING (``None``) never participates in the consistency check unless
     every value in the coding is missing.

3) The textual format is closed:
   - Only calls to ``coding`` and ``code`` with literal arguments.
   - The ``code_keyword`` and ``coding_keyword`` rules of ``coding.lark`` are kept
     in sync with CodeKeyword and CodingKeyword at import time.

Examples
--------
>>> from codings.core.grammar import ValueKind, value_kind_of, value_family
>>> value_kind_of(1) == ValueKind.INTEGER
True
>>> value_kind_of(True) == ValueKind.BOOLEAN
True
>>> value_family(ValueKind.FLOAT)
'numeric'
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any, Final

from lark import Lark

__all__ = [
    "ValueKind",
    "CallName",
    "CodeKeyword",
    "CodingKeyword",
    "TableName",
    "CODING_GRAMMAR",
    "CODING_PARSER",
    "keyword_terminals",
    # helpers/validators
    "is_lower_snake",
    "is_missing",
    "value_kind_of",
    "value_family",
    "ensure_all_enum_values_lower_snake",
]

# Canonical grammar file next to this module
_GRAMMAR_PATH = Path(__file__).with_name("coding.lark")

CODING_GRAMMAR: Final[str] = _GRAMMAR_PATH.read_text(encoding="utf-8")

# Keyword and call-name tokens are kept so the AST builder can read them.
CODING_PARSER: Final[Lark] = Lark(
    CODING_GRAMMAR,
    start="start",
    parser="lalr",
    keep_all_tokens=True,
)


def keyword_terminals(rule_name: str) -> tuple[str, ...]:
    """
    Literal keywords a grammar rule accepts, in first-seen order.

    Args:
      rule_name (str): Rule in ``coding.lark`` (e.g., "code_keyword").

    Returns:
      tuple[str, ...]: Keyword strings; empty for an unknown rule.

    Examples:
      >>> keyword_terminals("coding_keyword")
      ('label',)
    """
    seen: list[str] = []
    for rule in CODING_PARSER.rules:
        if rule.origin.name != rule_name:
            continue
        for sym in rule.expansion:
            if not sym.is_term:
                continue
            value = CODING_PARSER.get_terminal(sym.name).pattern.value
            if value not in seen:
                seen.append(value)
    return tuple(seen)


# ============================================================================
# VALUE KINDS
# ============================================================================


class ValueKind(Enum):
    """
    Primitive kind of a Code value.

    Serialized values appear in:
      - consistency error messages raised by coding assembly
      - the serialization rule table in codings.core.expression
    """

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    MISSING = "missing"


_NUMERIC_FAMILY: Final[frozenset[ValueKind]] = frozenset({ValueKind.INTEGER, ValueKind.FLOAT})


# ============================================================================
# TEXTUAL FORMAT KEYWORDS
# ============================================================================


class CallName(Enum):
    """The only callables reachable from a textual coding expression."""

    CODING = "coding"
    CODE = "code"


class CodeKeyword(Enum):
    """
    Keyword arguments accepted by ``code(...)``, in positional order.

    Notes:
      Order matches the field order of codings.core.schema.Code; the grammar's
      ``code_keyword`` rule lists the same set.
    """

    LABEL = "label"
    VALUE = "value"
    MISSING = "missing"
    LINKS_FROM = "links_from"
    DESCRIPTION = "description"


class CodingKeyword(Enum):
    """Keyword arguments accepted by ``coding(...)``."""

    LABEL = "label"


# ============================================================================
# TABLE NAMES (LOWER_SNAKE)
# ============================================================================


class TableName(Enum):
    """
    Canonical tabular forms of a coding. Descriptors live in codings.core.tables.
    """

    CONTENTS = "contents"
    XLSFORM_CHOICES = "xlsform_choices"


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Args:
      value (str): Candidate string to validate.

    Returns:
      bool: True if value matches lower_snake (e.g., "links_from"), False otherwise.

    Examples:
      >>> is_lower_snake("links_from")
      True
      >>> is_lower_snake("LinksFrom")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def is_missing(value: Any) -> bool:
    """
    Return True if value is the missing sentinel (``None`` or a float NaN).
    """
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def value_kind_of(value: Any) -> ValueKind:
    """
    Classify a scalar into its ValueKind.

    Args:
      value (Any): Candidate scalar.

    Returns:
      ValueKind: Kind tag for value.

    Raises:
      TypeError: If value is not a supported scalar.

    Notes:
      ``bool`` is checked before ``int`` because it subclasses ``int``.
    """
    if is_missing(value):
        return ValueKind.MISSING
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    raise TypeError(f"unsupported code value type {type(value).__name__!r}")


def value_family(kind: ValueKind) -> str:
    """
    Return the consistency family of a kind ("numeric" for integer/float).

    Examples:
      >>> value_family(ValueKind.INTEGER)
      'numeric'
      >>> value_family(ValueKind.STRING)
      'string'
    """
    return "numeric" if kind in _NUMERIC_FAMILY else kind.value


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Args:
      enums (Iterable[type[Enum]]): Iterable of Enum classes to inspect.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.

    Examples:
      >>> ensure_all_enum_values_lower_snake([
      ...     ValueKind, CallName, CodeKeyword, CodingKeyword, TableName
      ... ])
    """
    for E in enums:
        for m in E:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )


def _assert_rule_matches_enum(rule_name: str, enum_cls: type[Enum]) -> None:
    # Compared as sets; positional order comes from code()'s signature.
    actual = set(keyword_terminals(rule_name))
    expected = {member.value for member in enum_cls}
    if actual != expected:
        issues: list[str] = []
        missing = expected - actual
        extra = actual - expected
        if missing:
            issues.append(f"missing {sorted(missing)}")
        if extra:
            issues.append(f"unexpected {sorted(extra)}")
        raise ValueError(
            f"Grammar rule {rule_name!r} out of sync with {enum_cls.__name__}: "
            + "; ".join(issues)
        )


_assert_rule_matches_enum("code_keyword", CodeKeyword)
_assert_rule_matches_enum("coding_keyword", CodingKeyword)

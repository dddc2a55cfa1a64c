"""
Predicate-based selection over codings.

Every selection returns a new Coding. Matching codes are re-assembled through
codings.core.schema.Coding, so uniqueness and value-kind checks run again and a
selection can never produce an invalid coding. A selection that matches nothing
returns the empty coding; it is not an error.

Examples:
    >>> from codings.core.schema import code, coding
    >>> from codings.core.select import missing_codes, select_codes_by_label
    >>> yn = coding(code("Yes", 1), code("No", 0), code("Missing", None, missing=True))
    >>> [c.label for c in missing_codes(yn)]
    ['Missing']
    >>> [c.label for c in select_codes_by_label(yn, ["No"])]
    ['No']
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

from .errors import LabelSetError
from .schema import EMPTY_CODING, Code, Coding, ensure_coding
from .typing import CodePredicate

__all__ = [
    "select_codes_if",
    "select_codes_by_label",
    "missing_codes",
]

logger = logging.getLogger(__name__)


def select_codes_if(coding: Coding, predicate: CodePredicate, *args: Any, **kwargs: Any) -> Coding:
    """
    Keep the codes for which ``predicate(code, *args, **kwargs)`` is true.

    Args:
        coding (Coding): Source coding.
        predicate (Callable[..., bool]): Applied to every code, in order.
        *args, **kwargs: Forwarded to the predicate.

    Returns:
        Coding: New coding with the matching codes in original order and the source
        collection label; the empty coding if nothing matches.

    Raises:
        TypeError: If coding is not a Coding or predicate is not callable.
    """
    ensure_coding(coding)
    if not callable(predicate):
        raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")

    matching: list[Code] = [c for c in coding.codes if predicate(c, *args, **kwargs)]
    logger.debug("selected %d of %d codes", len(matching), len(coding))
    if not matching:
        return EMPTY_CODING
    return Coding(codes=tuple(matching), label=coding.label)


def select_codes_by_label(coding: Coding, labels: Collection[str]) -> Coding:
    """
    Keep the codes whose label is a member of ``labels``.

    Raises:
        LabelSetError: If labels is a bare string or contains non-strings.
    """
    if isinstance(labels, str) or not isinstance(labels, Collection):
        raise LabelSetError(f"labels must be a collection of strings, got {labels!r}")
    if not all(isinstance(s, str) for s in labels):
        raise LabelSetError(f"labels must be a collection of strings, got {labels!r}")

    wanted = frozenset(labels)
    return select_codes_if(coding, lambda c: c.label in wanted)


def missing_codes(coding: Coding) -> Coding:
    """
    Keep the codes flagged ``missing=True``.

    Returns:
        Coding: Missing codes, or the empty coding when none are flagged or the
        input is already empty.
    """
    ensure_coding(coding)
    if coding.is_empty:
        return coding
    return select_codes_if(coding, lambda c: c.missing)

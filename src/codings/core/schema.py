"""
Core data model: Code (pydantic v2) and Coding (frozen dataclass).

A Code maps one value to a human-readable label and carries lineage, description,
and missing-ness metadata. A Coding is an ordered, uniquely labeled collection of
codes with an optional collection label. Codings are decoupled from any data vector;
the empty coding stands for "no categorical interpretation".

Responsibilities
- Validate single-code fields (label present, supported scalar value, lineage shape).
- Fill code defaults: ``links_from`` -> ``(label,)`` and ``description`` -> ``label``.
- Run every cross-code invariant once, when a Coding is assembled:
  argument kinds, label uniqueness, value-kind consistency.
- Derive the read-only ``labels`` index (label -> 1-based position).

Style
- Zero-IO (stdlib + pydantic only).
- Code field failures surface as pydantic.ValidationError; assembly failures raise the
  SchemaError family from codings.core.errors.

References
- grammar: src/codings/core/grammar.py (ValueKind, value families)
- errors: src/codings/core/errors.py
- tests: tests/core/test_schema_code.py, tests/core/test_schema_coding.py
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

from .errors import CodeTypeError, DuplicateLabelError, SchemaError, ValueTypeError
from .grammar import ValueKind, is_missing, value_family, value_kind_of
from .typing import Scalar

__all__ = [
    "Code",
    "Coding",
    "EMPTY_CODING",
    "code",
    "coding",
    "empty_coding",
    "is_coding",
    "is_empty_coding",
    "coding_labels",
    "coding_label",
    "ensure_coding",
]

logger = logging.getLogger(__name__)


# ============================================================================
# Code
# ============================================================================


class Code(BaseModel):
    """
    One value-to-label mapping with lineage and missing-ness metadata.

    Attributes:
        label (str): Human-readable label, unique within its owning coding.
        value (bool | int | float | str | None): Mapped value; ``None`` is the missing
            sentinel. A float NaN is normalized to ``None``.
        missing (bool): Marks a non-response category, independent of ``value``.
        links_from (tuple[str, ...]): Source labels this code was recoded from.
            Defaults to ``(label,)``.
        description (str): Free text. Defaults to ``label``.

    Raises:
        pydantic.ValidationError: If label is empty, value is not a supported scalar
            or is an infinite float, or links_from is empty.

    Notes:
        Value-kind consistency is not checked here; a lone code cannot see its
        siblings. Coding assembly runs that check.

    Examples:
        >>> from codings.core.schema import Code
        >>> c = Code(label="Yes", value=1)
        >>> c.links_from, c.description
        (('Yes',), 'Yes')
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: StrictStr = Field(..., min_length=1)
    value: StrictBool | StrictInt | StrictFloat | StrictStr | None
    missing: StrictBool = False
    links_from: tuple[StrictStr, ...] = ()
    description: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        """
        Fill lineage/description defaults from the label and normalize NaN values.

        Args:
            data (Any): Raw constructor input.

        Returns:
            Any: Input with ``links_from``/``description`` defaults applied.
        """
        if not isinstance(data, dict):
            return data
        out = dict(data)
        label = out.get("label")
        if "value" in out and is_missing(out["value"]):
            out["value"] = None
        links = out.get("links_from")
        if links is None:
            out["links_from"] = (label,)
        elif isinstance(links, str):
            out["links_from"] = (links,)
        if out.get("description") is None:
            out["description"] = label
        return out

    @field_validator("value")
    @classmethod
    def _check_finite(cls, v: Scalar) -> Scalar:
        if isinstance(v, float) and math.isinf(v):
            raise ValueError("code value must be finite")
        return v

    @field_validator("links_from")
    @classmethod
    def _check_links_from(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("links_from must name at least one source label")
        if any(not s for s in v):
            raise ValueError("links_from labels must be non-empty")
        return v

    @property
    def kind(self) -> ValueKind:
        """ValueKind tag of ``value``."""
        return value_kind_of(self.value)

    @property
    def is_recoded(self) -> bool:
        """True when lineage differs from the code's own label."""
        return self.links_from != (self.label,)

    def _identity(self) -> tuple[Any, ...]:
        # The kind tag keeps True, 1 and 1.0 apart.
        return (self.label, self.kind, self.value, self.missing, self.links_from, self.description)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Code):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())


def code(
    label: str,
    value: Scalar,
    missing: bool = False,
    links_from: str | tuple[str, ...] | list[str] | None = None,
    description: str | None = None,
) -> Code:
    """
    Construct a Code.

    Args:
        label (str): Code label.
        value (Scalar): Mapped value (``None`` for missing).
        missing (bool): Non-response flag.
        links_from (str | Sequence[str] | None): Source labels; defaults to ``label``.
        description (str | None): Description; defaults to ``label``.

    Returns:
        Code: Frozen code instance.

    Examples:
        >>> code("Missing", None, missing=True).missing
        True
    """
    return Code(
        label=label,
        value=value,
        missing=missing,
        links_from=links_from,
        description=description,
    )


# ============================================================================
# Coding
# ============================================================================


def _check_codes(codes: tuple[Any, ...]) -> None:
    if not all(isinstance(c, Code) for c in codes):
        raise CodeTypeError("coding() only accepts code objects as arguments.")

    seen: set[str] = set()
    dupes: list[str] = []
    for c in codes:
        if c.label in seen and c.label not in dupes:
            dupes.append(c.label)
        seen.add(c.label)
    if dupes:
        raise DuplicateLabelError(
            f"Multiple labels set in a single coding. Each label must be unique "
            f"(duplicated: {dupes!r})."
        )

    kinds = [c.kind for c in codes]
    present = [k for k in kinds if k is not ValueKind.MISSING]
    # An all-missing coding compares the missing kinds against each other.
    check = present or kinds
    families = sorted({value_family(k) for k in check})
    if len(families) > 1:
        raise ValueTypeError(
            f"Coding types must be constant (found {', '.join(families)}).\n"
            "Perhaps you forgot to wrap your numbers in quotes?"
        )


@dataclass(frozen=True)
class Coding:
    """
    Ordered, uniquely labeled collection of codes.

    Attributes:
        codes (tuple[Code, ...]): Codes in insertion order.
        label (str | None): Optional name of the categorical variable (e.g., "yesno").
        labels (Mapping[str, int]): Read-only label -> 1-based position index, derived
            at construction and excluded from equality.

    Raises:
        CodeTypeError: If any element of ``codes`` is not a Code.
        DuplicateLabelError: If two codes share a label.
        ValueTypeError: If non-missing values span more than one value family.
        SchemaError: If the empty coding is given a collection label.

    Notes:
        Codings are immutable; selections build new codings and re-run these checks.
        Two empty codings are always equal.

    Examples:
        >>> from codings.core.schema import Coding, code
        >>> c = Coding((code("Yes", 1), code("No", 0)), label="yesno")
        >>> dict(c.labels)
        {'Yes': 1, 'No': 2}
    """

    codes: tuple[Code, ...] = ()
    label: str | None = None
    labels: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        codes = tuple(self.codes)
        object.__setattr__(self, "codes", codes)
        _check_codes(codes)
        if self.label is not None:
            if not isinstance(self.label, str):
                raise SchemaError(f"coding label must be a string, got {self.label!r}")
            if not codes:
                raise SchemaError("the empty coding cannot carry a label")
        index = {c.label: i for i, c in enumerate(codes, start=1)}
        object.__setattr__(self, "labels", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self.codes)

    def __iter__(self) -> Iterator[Code]:
        return iter(self.codes)

    def __getitem__(self, key: int | str) -> Code:
        """Look up a code by 0-based position or by label."""
        if isinstance(key, str):
            return self.codes[self.labels[key] - 1]
        return self.codes[key]

    @property
    def is_empty(self) -> bool:
        return not self.codes


EMPTY_CODING: Coding = Coding()


def coding(*codes: Code, label: str | None = None) -> Coding:
    """
    Assemble codes into a Coding.

    Args:
        *codes (Code): Codes in order.
        label (str | None): Optional collection label.

    Returns:
        Coding: New coding; the empty coding when no codes are given.

    Raises:
        CodeTypeError: If any argument is not a Code.
        DuplicateLabelError: If labels are not unique.
        ValueTypeError: If value kinds are inconsistent.

    Examples:
        >>> yesno = coding(code("Yes", 1), code("No", 0), label="yesno")
        >>> len(yesno)
        2
        >>> coding() is empty_coding()
        True
    """
    if not codes:
        return EMPTY_CODING
    out = Coding(codes=codes, label=label)
    logger.debug("assembled coding %r with %d codes", label, len(out))
    return out


def empty_coding() -> Coding:
    """Return the empty coding (no categorical interpretation)."""
    return EMPTY_CODING


def is_coding(x: Any) -> bool:
    return isinstance(x, Coding)


def is_empty_coding(x: Any) -> bool:
    """
    Check whether an object is the empty coding.

    Examples:
        >>> is_empty_coding(coding())
        True
        >>> is_empty_coding(coding(code("Yes", 1)))
        False
    """
    return isinstance(x, Coding) and x == EMPTY_CODING


def ensure_coding(x: Any) -> Coding:
    if not isinstance(x, Coding):
        raise TypeError(f"expected a Coding, got {type(x).__name__}")
    return x


def coding_labels(coding: Coding) -> Mapping[str, int]:
    """Label -> 1-based position index of a coding."""
    return ensure_coding(coding).labels


def coding_label(coding: Coding) -> str | None:
    """Collection label of a coding, if any."""
    return ensure_coding(coding).label

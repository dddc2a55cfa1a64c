"""
JSON record form of a coding, with canonical dumps and stable hashes.

A coding maps to ``{"label": str | None, "codes": [code_record, ...]}`` where each
code record carries ``label``, ``value``, ``missing``, ``links_from`` (list), and
``description``. Rebuilding from records goes through ``coding()``, so every assembly
invariant runs again. This module is zero-IO.

Notes:
    - Canonical JSON: sort_keys=True, separators=(",", ":"), ensure_ascii=False.
    - ``hash_coding`` is SHA-256 over the UTF-8 canonical record; code order matters,
      key order does not.

Examples:
    >>> from codings.core.schema import code, coding
    >>> from codings.core.serde import coding_from_json, coding_to_json
    >>> yn = coding(code("Yes", 1), code("No", 0), label="yesno")
    >>> coding_from_json(coding_to_json(yn)) == yn
    True
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from .errors import SchemaError
from .schema import Code, Coding, coding
from .typing import JsonDict

__all__ = [
    "json_dumps_canonical",
    "hash_record",
    "coding_to_dict",
    "coding_from_dict",
    "coding_to_json",
    "coding_from_json",
    "hash_coding",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object; no coercion is attempted.

    Returns:
        str: Sorted-key, compact, non-ASCII-preserving JSON.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_record(record: Mapping[str, Any]) -> str:
    """
    SHA-256 hex digest of a mapping's canonical JSON.

    Examples:
        >>> hash_record({"a": 1, "b": 2}) == hash_record({"b": 2, "a": 1})
        True
    """
    return hashlib.sha256(json_dumps_canonical(dict(record)).encode("utf-8")).hexdigest()


def coding_to_dict(c: Coding) -> JsonDict:
    """
    Convert a coding to its JSON-compatible record form.

    Args:
        c (Coding): Coding to convert.

    Returns:
        JsonDict: ``{"label": ..., "codes": [...]}``.
    """
    return {
        "label": c.label,
        "codes": [x.model_dump(mode="json") for x in c.codes],
    }


def coding_from_dict(data: Any) -> Coding:
    """
    Rebuild a coding from its record form.

    Args:
        data (Any): Mapping with a ``codes`` list and optional ``label``.

    Returns:
        Coding: Reassembled coding.

    Raises:
        SchemaError: If data is not a mapping with a list of code records, or if the
            codes violate coding invariants.
        pydantic.ValidationError: If a code record is invalid.
    """
    if not isinstance(data, dict) or not isinstance(data.get("codes"), list):
        raise SchemaError("coding record must be a mapping with a 'codes' list")
    codes = [Code.model_validate(rec) for rec in data["codes"]]
    return coding(*codes, label=data.get("label"))


def coding_to_json(c: Coding) -> str:
    """Canonical JSON string for a coding."""
    return json_dumps_canonical(coding_to_dict(c))


def coding_from_json(s: str) -> Coding:
    """Rebuild a coding from ``coding_to_json`` output."""
    return coding_from_dict(json.loads(s))


def hash_coding(c: Coding) -> str:
    """
    Stable identifier of a coding's record form.

    Examples:
        >>> from codings.core.schema import code, coding
        >>> hash_coding(coding(code("Yes", 1))) == hash_coding(coding(code("Yes", 1)))
        True
    """
    return hash_record(coding_to_dict(c))

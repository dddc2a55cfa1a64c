"""
Core package aggregator for coding contracts (grammar, schema, selection, textual form).

## Contracts (single source of truth)
- Grammar — value kinds, textual-format keywords, Lark grammar and parser, classification helpers.
- Schema — `Code` (pydantic) and `Coding` (frozen dataclass) with assembly invariants.
- Select — predicate-based selection returning new codings.
- Expression — one-line textual form, closed-grammar parser, restricted evaluator.
- Tables — descriptors for the tabular forms materialized by codings.io.
- Hashing/Serde — canonical JSON record form and stable hashes.

## Notes
- Zero-IO policy: stdlib, pydantic, and lark; no file/network IO and no polars.
- Naming policy: enum `.value` and field/column names are lower_snake.
- Every invariant is checked once, when a Coding is assembled; selections and
  deserializers assemble through the same constructor.

## Downstream usage
- codings.io — builds polars frames from `tables` descriptors and converts codings to
  and from XLSForm choice lists.

## Examples
```python
from codings.core.schema import code, coding
from codings.core.select import missing_codes
from codings.core.expression import as_character, eval_coding

yn = coding(code("Yes", 1), code("No", 0), code("Missing", None, missing=True))
[c.label for c in missing_codes(yn)]  # ['Missing']
eval_coding(as_character(yn)) == yn  # True
```
"""

from .errors import (
    CodeTypeError,
    DuplicateLabelError,
    GrammarError,
    LabelSetError,
    SchemaError,
    ValueTypeError,
)
from .expression import as_character, eval_coding, parse_expression, to_expression
from .grammar import ValueKind
from .schema import (
    EMPTY_CODING,
    Code,
    Coding,
    code,
    coding,
    coding_label,
    coding_labels,
    empty_coding,
    is_coding,
    is_empty_coding,
)
from .select import missing_codes, select_codes_by_label, select_codes_if
from .serde import coding_from_json, coding_to_json, hash_coding

__all__ = [
    "Code",
    "Coding",
    "EMPTY_CODING",
    "ValueKind",
    "code",
    "coding",
    "empty_coding",
    "is_coding",
    "is_empty_coding",
    "coding_labels",
    "coding_label",
    "select_codes_if",
    "select_codes_by_label",
    "missing_codes",
    "as_character",
    "to_expression",
    "parse_expression",
    "eval_coding",
    "coding_to_json",
    "coding_from_json",
    "hash_coding",
    "SchemaError",
    "CodeTypeError",
    "DuplicateLabelError",
    "ValueTypeError",
    "LabelSetError",
    "GrammarError",
]

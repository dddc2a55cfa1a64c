"""
codings.io — Polars-backed tabular layer for codings.

## Responsibilities
- Flatten codings into the contents table and typed value series.
- Convert codings to and from XLSForm choice lists.
- Render codings for printing.
- Validate incoming frames against descriptors from codings.core.tables.

## Public API
- CodingSettings — configuration (env > TOML > defaults).
- coding_contents, as_data_frame, coding_values — tabular bridge.
- odk_to_coding, coding_to_odk — XLSForm adapter.
- format_coding, print_coding — presentation.

## Import DAG discipline
- Depends only on stdlib, polars, and codings.core.*.

## Examples
```python
from codings.core.schema import code, coding
from codings.io import as_data_frame, print_coding

yn = coding(code("Yes", 1), code("No", 0), label="yesno")
as_data_frame(yn, suffix="wave1").columns
# ['link', 'label_wave1', 'value_wave1', 'description_wave1']
print_coding(yn)
```
"""

from __future__ import annotations

from .config import CodingSettings
from .errors import IoConfigError, IoError, IoSchemaError
from .frames import as_data_frame, coding_contents, coding_values
from .render import format_coding, print_coding
from .xlsform import coding_to_odk, odk_to_coding

__all__ = [
    "CodingSettings",
    "IoError",
    "IoConfigError",
    "IoSchemaError",
    "coding_contents",
    "as_data_frame",
    "coding_values",
    "odk_to_coding",
    "coding_to_odk",
    "format_coding",
    "print_coding",
]

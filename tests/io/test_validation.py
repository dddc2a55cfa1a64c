import polars as pl
import pytest

from codings.core.grammar import TableName
from codings.core.tables import CONTENTS_DESC
from codings.io.errors import IoSchemaError
from codings.io.validate import validate_frame_against_descriptor, validate_frame_for_table


def test_required_missing_column_raises() -> None:
    # Missing required column 'label' for XLSFORM_CHOICES
    df = pl.DataFrame({"list_name": ["yn"], "name": ["yes"]})
    with pytest.raises(IoSchemaError):
        validate_frame_for_table(df, TableName.XLSFORM_CHOICES)


def test_string_columns_cast_to_utf8() -> None:
    df = pl.DataFrame({"name": [1, 2], "label": ["One", "Two"]})
    out = validate_frame_for_table(df, "xlsform_choices")
    assert out.schema["name"] == pl.Utf8
    assert out.get_column("name").to_list() == ["1", "2"]


def test_strict_rejects_extra_columns() -> None:
    df = pl.DataFrame({"name": ["a"], "label": ["A"], "hint": ["h"]})
    with pytest.raises(IoSchemaError):
        validate_frame_for_table(df, TableName.XLSFORM_CHOICES, strict=True)
    out = validate_frame_for_table(df, TableName.XLSFORM_CHOICES, strict=False)
    assert "hint" in out.columns


def test_scalar_column_rejects_nested_values() -> None:
    df = pl.DataFrame({"name": ["a"], "label": [[1, 2]]})
    with pytest.raises(IoSchemaError):
        validate_frame_for_table(df, TableName.XLSFORM_CHOICES)


def test_link_column_must_be_list() -> None:
    df = pl.DataFrame(
        {"link": ["a"], "label": ["a"], "value": [1], "description": ["a"]}
    )
    with pytest.raises(IoSchemaError):
        validate_frame_against_descriptor(df, CONTENTS_DESC)


def test_link_list_inner_type_cast() -> None:
    df = pl.DataFrame(
        {"link": [[1, 2]], "label": ["a"], "value": [1], "description": ["a"]}
    )
    out = validate_frame_against_descriptor(df, CONTENTS_DESC)
    assert out.schema["link"] == pl.List(pl.Utf8)


def test_non_frame_input_rejected() -> None:
    with pytest.raises(IoSchemaError):
        validate_frame_for_table({"name": ["a"]}, TableName.XLSFORM_CHOICES)


def test_unknown_table_name() -> None:
    with pytest.raises(ValueError):
        validate_frame_for_table(pl.DataFrame(), "no_such_table")

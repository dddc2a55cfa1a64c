import math

import pytest
from pydantic import ValidationError

from codings.core.grammar import ValueKind
from codings.core.schema import Code, code


def test_code_defaults_from_label() -> None:
    c = code("Yes", 1)
    assert c.missing is False
    assert c.links_from == ("Yes",)
    assert c.description == "Yes"
    assert c.is_recoded is False


def test_code_explicit_metadata() -> None:
    c = code("Agree", 1, links_from=["Strongly agree", "Agree"], description="Any agree")
    assert c.links_from == ("Strongly agree", "Agree")
    assert c.description == "Any agree"
    assert c.is_recoded is True


def test_code_links_from_bare_string_is_wrapped() -> None:
    assert code("Yes", 1, links_from="Y").links_from == ("Y",)


def test_code_value_kinds() -> None:
    assert code("a", 1).kind == ValueKind.INTEGER
    assert code("a", 1.5).kind == ValueKind.FLOAT
    assert code("a", "x").kind == ValueKind.STRING
    assert code("a", True).kind == ValueKind.BOOLEAN
    assert code("a", None).kind == ValueKind.MISSING


def test_code_nan_is_missing() -> None:
    c = code("Unknown", math.nan)
    assert c.value is None
    assert c.kind == ValueKind.MISSING


def test_code_missing_flag_independent_of_value() -> None:
    c = code("Refused", -9, missing=True)
    assert c.missing is True
    assert c.value == -9


def test_code_is_frozen_and_hashable() -> None:
    c = code("Yes", 1)
    with pytest.raises(ValidationError):
        c.label = "No"  # type: ignore[misc]
    assert hash(c) == hash(code("Yes", 1))
    assert c == Code(label="Yes", value=1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"label": "", "value": 1},
        {"label": "x", "value": [1, 2]},
        {"label": "x", "value": math.inf},
        {"label": "x", "value": 1, "links_from": ()},
        {"label": 3, "value": 1},
    ],
)
def test_code_invalid_fields_raise(kwargs) -> None:
    with pytest.raises(ValidationError):
        code(**kwargs)


def test_code_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        Code(label="x", value=1, colour="red")


@pytest.mark.parametrize("kwargs", [{"label": "x"}, {"label": "x", "missing": True}])
def test_code_requires_value(kwargs) -> None:
    with pytest.raises(ValidationError):
        Code(**kwargs)


def test_code_equality_tracks_value_kind() -> None:
    assert code("A", True) != code("A", 1)
    assert code("A", 1) != code("A", 1.0)
    assert code("A", 0) != code("A", False)
    assert code("A", 1.5) == code("A", 1.5)
    assert len({code("A", True), code("A", 1), code("A", 1.0)}) == 3

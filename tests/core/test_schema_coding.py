import pytest

from codings.core.errors import (
    CodeTypeError,
    DuplicateLabelError,
    SchemaError,
    ValueTypeError,
)
from codings.core.schema import (
    EMPTY_CODING,
    Coding,
    code,
    coding,
    coding_label,
    coding_labels,
    empty_coding,
    is_coding,
    is_empty_coding,
)
from codings.core.serde import hash_coding


def test_coding_builds_label_index() -> None:
    yn = coding(code("Yes", 1), code("No", 0), code("Missing", None, missing=True))
    assert dict(coding_labels(yn)) == {"Yes": 1, "No": 2, "Missing": 3}
    assert coding_label(yn) is None
    assert [c.label for c in yn] == ["Yes", "No", "Missing"]


def test_coding_label_index_is_read_only() -> None:
    yn = coding(code("Yes", 1))
    with pytest.raises(TypeError):
        yn.labels["No"] = 2  # type: ignore[index]


def test_coding_collection_label_and_lookup() -> None:
    yn = coding(code("Yes", 1), code("No", 0), label="yesno")
    assert coding_label(yn) == "yesno"
    assert yn["No"].value == 0
    assert yn[0].label == "Yes"
    assert len(yn) == 2


def test_coding_rejects_non_codes() -> None:
    with pytest.raises(CodeTypeError, match="only accepts code objects"):
        coding(code("Yes", 1), "No")  # type: ignore[arg-type]


def test_coding_non_code_error_is_also_type_error() -> None:
    with pytest.raises(TypeError):
        coding(1)  # type: ignore[arg-type]


def test_coding_rejects_duplicate_labels() -> None:
    with pytest.raises(DuplicateLabelError, match="unique"):
        coding(code("Yes", 1), code("Yes", 2))


def test_coding_labels_are_case_sensitive() -> None:
    c = coding(code("yes", 1), code("Yes", 2))
    assert len(c) == 2


def test_coding_rejects_mixed_value_kinds() -> None:
    with pytest.raises(ValueTypeError, match="quotes"):
        coding(code("A", 1), code("B", "x"))


def test_coding_accepts_consistent_values() -> None:
    assert len(coding(code("A", 1), code("B", 2))) == 2


def test_coding_accepts_all_missing() -> None:
    assert len(coding(code("A", None), code("B", None))) == 2


def test_coding_ignores_missing_values_in_type_check() -> None:
    c = coding(code("A", "a"), code("B", None, missing=True))
    assert len(c) == 2


def test_coding_integer_and_float_share_numeric_family() -> None:
    assert len(coding(code("A", 1), code("B", 2.5))) == 2


def test_coding_boolean_and_integer_do_not_mix() -> None:
    with pytest.raises(ValueTypeError):
        coding(code("A", True), code("B", 0))


def test_empty_coding_identity() -> None:
    assert empty_coding() == empty_coding()
    assert coding() is EMPTY_CODING
    assert is_empty_coding(coding())
    assert is_empty_coding(Coding())
    assert not is_empty_coding(coding(code("Yes", 1)))
    assert dict(empty_coding().labels) == {}


def test_empty_coding_drops_collection_label_via_constructor() -> None:
    assert is_empty_coding(coding(label="yesno"))


def test_empty_coding_cannot_carry_label_directly() -> None:
    with pytest.raises(SchemaError):
        Coding(codes=(), label="yesno")


def test_coding_equality_is_structural() -> None:
    a = coding(code("Yes", 1), code("No", 0), label="yn")
    b = coding(code("Yes", 1), code("No", 0), label="yn")
    assert a == b
    assert hash(a) == hash(b)
    assert a != coding(code("No", 0), code("Yes", 1), label="yn")
    assert a != coding(code("Yes", 1), code("No", 0))


def test_coding_equality_follows_value_kind() -> None:
    boolean = coding(code("A", True))
    numeric = coding(code("A", 1))
    assert boolean != numeric
    assert hash_coding(boolean) != hash_coding(numeric)
    assert coding(code("A", 1), code("B", 2)) != coding(code("A", 1.0), code("B", 2.0))


def test_direct_construction_runs_invariants() -> None:
    with pytest.raises(DuplicateLabelError):
        Coding(codes=[code("Yes", 1), code("Yes", 2)])


def test_is_coding() -> None:
    assert is_coding(empty_coding())
    assert not is_coding([code("Yes", 1)])


def test_accessors_reject_non_codings() -> None:
    with pytest.raises(TypeError):
        coding_labels([code("Yes", 1)])  # type: ignore[arg-type]

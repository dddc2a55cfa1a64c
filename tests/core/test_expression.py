import pytest
from pydantic import ValidationError

from codings.core.errors import CodeTypeError, DuplicateLabelError, GrammarError
from codings.core.expression import (
    Call,
    Literal,
    Sequence,
    as_character,
    eval_coding,
    parse_expression,
    to_expression,
)
from codings.core.schema import EMPTY_CODING, code, coding


def test_as_character_terse_form() -> None:
    yn = coding(code("Yes", 1), code("No", 0))
    assert as_character(yn) == 'coding(code("Yes", 1), code("No", 0))'
    assert to_expression is as_character


def test_as_character_optional_fields() -> None:
    c = coding(
        code("Missing", None, missing=True, description="No answer"),
        code("Half", 0.5),
        label="scale",
    )
    assert as_character(c) == (
        'coding(code("Missing", None, missing=True, description="No answer"), '
        'code("Half", 0.5), label="scale")'
    )


def test_as_character_lineage_only_on_request() -> None:
    c = coding(code("Agree", 1, links_from=["Agree", "Strongly agree"]))
    assert "links_from" not in as_character(c)
    text = as_character(c, include_links_from=True)
    assert 'links_from=("Agree", "Strongly agree")' in text


def test_as_character_lineage_single_source_is_tuple() -> None:
    c = coding(code("Yes", 1, links_from="Y"))
    assert 'links_from=("Y",)' in as_character(c, include_links_from=True)


def test_as_character_is_single_line() -> None:
    c = coding(
        code("Line\nbreak", "a\tb", description="multi\nline"),
        code("para\u2029graph", "line\u2028sep", description="next\x85line"),
    )
    text = as_character(c)
    assert len(text.splitlines()) == 1
    assert eval_coding(text) == c


def test_as_character_empty_coding() -> None:
    assert as_character(coding()) == "coding()"
    assert eval_coding("coding()") is EMPTY_CODING


def test_as_character_rejects_non_coding() -> None:
    with pytest.raises(TypeError):
        as_character([code("Yes", 1)])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "c",
    [
        coding(code("Yes", 1), code("No", 0), code("Missing", None, missing=True)),
        coding(code("Low", 0.25), code("High", 1e20), label="level"),
        coding(code("a", "x"), code("b", 'say "hi"'), code("c", "it's")),
        coding(code("T", True), code("F", False)),
        coding(code("A", None), code("B", None)),
        coding(code("Neg", -3), code("Pos", 3), label="signed"),
    ],
)
def test_round_trip(c) -> None:
    assert eval_coding(parse_expression(as_character(c))) == c


def test_round_trip_with_lineage() -> None:
    c = coding(code("Agree", 1, links_from=("SA", "A")), code("Disagree", 0))
    assert eval_coding(as_character(c, include_links_from=True)) == c
    # Lineage is dropped by default and falls back to the label.
    assert eval_coding(as_character(c))["Agree"].links_from == ("Agree",)


def test_round_trip_preserves_value_kinds() -> None:
    c = coding(code("One", 1), code("Half", 0.5))
    back = eval_coding(as_character(c))
    assert isinstance(back["One"].value, int)
    assert isinstance(back["Half"].value, float)


def test_parse_accepts_keywords_single_quotes_and_lists() -> None:
    c = eval_coding(
        "coding(code(label='Yes', value=1, links_from=['Y', 'y']), "
        "code('No', 0, False, ['N'], 'Nope',), label='yn')"
    )
    assert c.label == "yn"
    assert c["Yes"].links_from == ("Y", "y")
    assert c["No"].description == "Nope"


def test_parse_returns_ast() -> None:
    node = parse_expression('coding(code("Yes", 1))')
    assert isinstance(node, Call)
    assert node.name == "coding"
    inner = node.args[0]
    assert isinstance(inner, Call)
    assert inner.args == (Literal("Yes"), Literal(1))


@pytest.mark.parametrize(
    "text",
    [
        'coding(code("Yes", secret))',
        'coding(code("Yes", __import__("os")))',
        'coding(code("Yes", 1), open("x"))',
        'print(code("Yes", 1))',
        'code("Yes", 1)',
        '"coding"',
        'coding(code("Yes", 1)',
        'coding(code("Yes", 1)) + 1',
        'coding(code("Yes", 1)); coding()',
        'coding(code("Yes", 1).label)',
        "coding(code('Yes', 1, links_from=(code('x', 1),)))",
        'coding(code("Yes", 1, missing=True, missing=False))',
        'coding(label="x", code("Yes", 1))',
        "",
    ],
)
def test_parse_rejects_outside_grammar(text) -> None:
    with pytest.raises(GrammarError):
        eval_coding(text)


def test_eval_cannot_reach_ambient_names() -> None:
    secret = "do-not-read"  # noqa: F841
    with pytest.raises(GrammarError, match="not defined"):
        eval_coding('coding(code("Yes", secret))')


def test_eval_rejects_unknown_keywords() -> None:
    with pytest.raises(GrammarError):
        eval_coding('coding(code("Yes", 1, colour="red"))')
    with pytest.raises(GrammarError):
        eval_coding('coding(code("Yes", 1), name="yn")')


def test_eval_rejects_too_many_positionals() -> None:
    with pytest.raises(GrammarError):
        eval_coding('coding(code("Yes", 1, False, "Yes", "Yes", "extra"))')


def test_eval_rejects_handmade_ast_with_foreign_call() -> None:
    node = Call("coding", (Call("exec", (Literal("1"),)),))
    with pytest.raises(GrammarError):
        eval_coding(node)


@pytest.mark.parametrize("expr", [42, None, ["coding()"], Literal("coding()")])
def test_eval_rejects_non_expressions(expr) -> None:
    with pytest.raises(GrammarError):
        eval_coding(expr)  # type: ignore[arg-type]


def test_eval_runs_coding_invariants() -> None:
    with pytest.raises(DuplicateLabelError):
        eval_coding('coding(code("Yes", 1), code("Yes", 2))')
    with pytest.raises(CodeTypeError):
        eval_coding('coding(code("Yes", 1), 2)')
    with pytest.raises(ValidationError):
        eval_coding('coding(code("", 1))')


def test_parse_rejects_deep_nesting() -> None:
    text = 'coding(code("a", ' + "[" * 5000 + "]" * 5000 + "))"
    with pytest.raises(GrammarError):
        eval_coding(text)


@pytest.mark.parametrize(
    "text",
    ['coding(code("a"))', 'coding(code(value=1))', 'coding(code("a", label="b"))'],
)
def test_eval_reports_bad_arity_as_grammar_error(text) -> None:
    with pytest.raises(GrammarError):
        eval_coding(text)


def test_eval_rejects_handmade_nested_calls() -> None:
    inner = Call("code", (Literal("a"), Call("code", (Literal("b"), Literal(1)))))
    with pytest.raises(GrammarError):
        eval_coding(Call("coding", (inner,)))
    seq = Call("code", (Literal("a"), Literal(1)), (("links_from", Sequence((inner,))),))
    with pytest.raises(GrammarError):
        eval_coding(Call("coding", (seq,)))


def test_parse_failure_raises_package_error() -> None:
    with pytest.raises(GrammarError) as info:
        parse_expression('coding(code("Yes", 1)')
    assert not type(info.value).__module__.startswith("lark")

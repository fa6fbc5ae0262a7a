import pytest

from lampi.common.span import Span
from lampi.kernel.ast import App, Lam, Pi, Term, Univ, Var
from lampi.kernel.equality import alpha_equal
from lampi.kernel.errors import NotAFunctionType, TypeMismatch, UnboundVariable
from lampi.kernel.pretty import pretty
from lampi.kernel.typing import evaluate, typecheck
from lampi.surface.errors import SurfaceError, format_error
from lampi.surface.parse import parse_term


def test_parse_identifier_and_universe() -> None:
    assert parse_term("x") == Var("x")
    assert parse_term("Type") == Univ()


def test_parse_lambda() -> None:
    assert parse_term("\\x : Type. x") == Lam("x", Univ(), Var("x"))
    assert parse_term("λx : Type. x") == Lam("x", Univ(), Var("x"))


def test_parse_lambda_body_extends_right() -> None:
    assert parse_term("\\f : Type -> Type. f Type") == Lam(
        "f", Pi("_", Univ(), Univ()), App(Var("f"), Univ())
    )


def test_parse_application_is_left_associative() -> None:
    assert parse_term("f a b") == App(App(Var("f"), Var("a")), Var("b"))
    assert parse_term("f (g a)") == App(Var("f"), App(Var("g"), Var("a")))


def test_parse_dependent_pi() -> None:
    assert parse_term("(x : Type) -> P x") == Pi("x", Univ(), App(Var("P"), Var("x")))


def test_parse_arrow_is_right_associative() -> None:
    assert parse_term("A -> B -> C") == Pi("_", Var("A"), Pi("_", Var("B"), Var("C")))
    assert parse_term("(A -> B) -> C") == Pi("_", Pi("_", Var("A"), Var("B")), Var("C"))
    assert parse_term("A → B") == Pi("_", Var("A"), Var("B"))


def test_parse_ignores_comments_and_newlines() -> None:
    src = "-- identity\n\\x : Type.\n  x"
    assert parse_term(src) == Lam("x", Univ(), Var("x"))


def test_parse_records_spans() -> None:
    term = parse_term("f (g a)")
    assert isinstance(term, App)
    assert term.span == Span(0, 6)
    assert term.func.span == Span(0, 1)
    assert term.arg.span == Span(3, 6)


def test_parse_pretty_round_trip() -> None:
    src = "\\A : Type. \\s : A -> A. \\z : A. s (s z)"
    assert pretty(parse_term(src)) == src


@pytest.mark.parametrize(
    ("src", "message"),
    [
        ("", "Unexpected end of input"),
        ("\\x. x", "Unexpected token"),
        ("f )", "Unexpected token"),
        ("x $ y", "Unexpected character '\\$'"),
    ],
)
def test_parse_errors(src: str, message: str) -> None:
    with pytest.raises(SurfaceError, match=message):
        parse_term(src)


def test_surface_error_shows_snippet() -> None:
    with pytest.raises(SurfaceError) as excinfo:
        parse_term("\\x. x")
    assert str(excinfo.value) == "Unexpected token @ 2:3: '.'"


def test_typecheck_parsed_church_boolean() -> None:
    true = "\\t : Type. \\f : Type. t"
    assert typecheck(parse_term(f"({true}) Type Type")) == Univ()


def test_type_errors_point_into_source() -> None:
    src = "\\x : Type. x y"
    with pytest.raises(NotAFunctionType) as excinfo:
        typecheck(parse_term(src))
    assert excinfo.value.term.span == Span(11, 12)
    assert format_error(excinfo.value, src).endswith("@ 11:12: 'x'")


def test_unbound_variable_points_into_source() -> None:
    src = "\\A : Type. \\a : A. zz"
    with pytest.raises(UnboundVariable) as excinfo:
        typecheck(parse_term(src))
    assert excinfo.value.term.span == Span(19, 21)


def test_mismatch_points_at_argument() -> None:
    src = "(\\A : Type. \\a : A. a) Type (\\x : Type. x)"
    with pytest.raises(TypeMismatch) as excinfo:
        typecheck(parse_term(src))
    err = excinfo.value
    assert err.term.span is not None
    assert err.term.span.extract(src) == "\\x : Type. x"


def test_format_error_without_span() -> None:
    with pytest.raises(UnboundVariable) as excinfo:
        typecheck(Var("q"))
    assert format_error(excinfo.value, "") == "Unbound variable q"


def test_arrow_does_not_capture_free_underscore() -> None:
    assert parse_term("Type -> _") == Pi("_0", Univ(), Var("_"))
    term = parse_term("(\\_ : Type. Type -> _) X")
    assert evaluate(term) == Pi("_0", Univ(), Var("X"))
    assert pretty(evaluate(term)) == "Type -> X"


@pytest.mark.parametrize(
    "term",
    [
        Pi("y", Univ(), Var("_")),
        Pi("_", Var("_"), Var("B")),
        Lam("_", Univ(), Pi("y", Var("_"), Var("_"))),
    ],
)
def test_pretty_then_parse_is_alpha_equal(term: Term) -> None:
    assert alpha_equal(parse_term(pretty(term)), term)

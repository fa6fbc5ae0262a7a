import pytest

from lampi.common.span import Span
from lampi.kernel.ast import App, Lam, Pi, Univ, Var
from lampi.kernel.equality import alpha_equal
from lampi.kernel.subst import free_vars, fresh_name, occurs_free, rename, substitute


def test_free_vars_respects_binders() -> None:
    term = Lam("x", Var("A"), App(Var("x"), Var("y")))
    assert free_vars(term) == {"A", "y"}


def test_free_vars_binder_does_not_scope_over_its_own_type() -> None:
    term = Pi("x", Var("x"), Var("x"))
    assert free_vars(term) == {"x"}
    assert occurs_free("x", term)


def test_fresh_name_appends_suffix() -> None:
    assert fresh_name("x", {"y"}) == "x"
    assert fresh_name("x", {"x"}) == "x0"
    assert fresh_name("x", {"x", "x0", "x1"}) == "x2"
    assert fresh_name("x0", {"x0"}) == "x1"
    assert fresh_name("_", {"_"}) == "_0"


def test_substitute_replaces_free_occurrence() -> None:
    term = App(Var("f"), Var("x"))
    assert substitute(term, "x", Univ()) == App(Var("f"), Univ())


def test_substitute_leaves_shadowed_occurrence() -> None:
    term = Lam("x", Var("x"), Var("x"))
    # The annotation is outside the binder's scope; the body is shadowed.
    assert substitute(term, "x", Univ()) == Lam("x", Univ(), Var("x"))


def test_substitute_avoids_capture() -> None:
    term = Lam("x", Univ(), Var("y"))
    result = substitute(term, "y", Var("x"))
    assert result == Lam("x0", Univ(), Var("x"))
    assert result != Lam("x", Univ(), Var("x"))
    assert alpha_equal(result, Lam("z", Univ(), Var("x")))


def test_substitute_renames_bound_occurrences_consistently() -> None:
    term = Pi("x", Univ(), App(Var("x"), Var("y")))
    result = substitute(term, "y", Var("x"))
    assert result == Pi("x0", Univ(), App(Var("x0"), Var("x")))


def test_substitute_renaming_avoids_names_in_body() -> None:
    term = Lam("x", Univ(), App(App(Var("x0"), Var("x")), Var("y")))
    result = substitute(term, "y", Var("x"))
    assert result == Lam("x1", Univ(), App(App(Var("x0"), Var("x1")), Var("x")))


def test_substitute_does_not_rename_when_name_absent() -> None:
    term = Lam("x", Univ(), Var("x"))
    assert substitute(term, "y", Var("x")) is term


def test_substitute_shares_untouched_subtrees() -> None:
    left = Lam("a", Univ(), Var("a"))
    term = App(left, Var("y"))
    result = substitute(term, "y", Univ())
    assert isinstance(result, App)
    assert result.func is left


def test_substitute_leaves_original_untouched() -> None:
    term = App(Var("y"), Var("y"))
    substitute(term, "y", Univ())
    assert term == App(Var("y"), Var("y"))


def test_substitute_keeps_spans_of_rebuilt_nodes() -> None:
    term = App(Var("f"), Var("y", span=Span(2, 3)), span=Span(0, 3))
    result = substitute(term, "y", Univ())
    assert result.span == Span(0, 3)


def test_rename_keeps_occurrence_span() -> None:
    term = Var("x", span=Span(4, 5))
    result = rename(term, "x", "x0")
    assert result == Var("x0")
    assert result.span == Span(4, 5)


def test_var_requires_name() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        Var("")


def _chain(depth: int, leaf: Var) -> App | Var:
    term: App | Var = leaf
    for _ in range(depth):
        term = App(Var("s"), term)
    return term


def _chain_leaf(term) -> tuple[int, object]:
    depth = 0
    while isinstance(term, App):
        depth += 1
        term = term.arg
    return depth, term


def test_substitute_into_long_argument_chain() -> None:
    term = _chain(5000, Var("z"))
    result = substitute(term, "z", Var("a"))
    assert _chain_leaf(result) == (5000, Var("a"))
    assert substitute(term, "q", Var("a")) is term


def test_free_vars_of_long_argument_chain() -> None:
    term = _chain(5000, Var("z"))
    assert free_vars(term) == {"s", "z"}
    assert occurs_free("z", term)
    assert not occurs_free("a", term)

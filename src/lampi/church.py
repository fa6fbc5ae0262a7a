"""Church-encoded booleans and naturals built from ordinary lambda terms."""

from __future__ import annotations

from lampi.kernel.ast import App, Lam, Term, Univ, Var
from lampi.kernel.reduce import normalize
from lampi.kernel.telescope import arrow, mk_app, mk_lams, mk_pis

A = Var("A")
B = Var("B")

# id : (A : Type) -> A -> A
ID = mk_lams(("A", Univ()), ("x", A), body=Var("x"))

# const : (A : Type) -> (B : Type) -> A -> B -> A
CONST = mk_lams(("A", Univ()), ("B", Univ()), ("x", A), ("y", B), body=Var("x"))

BOOL = mk_pis(("A", Univ()), return_ty=arrow(A, A, A))
TRUE = mk_lams(("A", Univ()), ("t", A), ("f", A), body=Var("t"))
FALSE = mk_lams(("A", Univ()), ("t", A), ("f", A), body=Var("f"))


def ite(cond: Term, ty: Term, then: Term, else_: Term) -> Term:
    """``if cond then then else else_`` at result type ``ty``."""

    return mk_app(cond, ty, then, else_)


NAT = mk_pis(("A", Univ()), return_ty=arrow(arrow(A, A), A, A))

_NUMERAL_BINDERS = (("A", Univ()), ("s", arrow(A, A)), ("z", A))


def numeral(value: int) -> Term:
    """Return the Church numeral ``\\A s z. s (s ... z)`` for ``value``."""

    if value < 0:
        raise ValueError("Church numerals are non-negative")
    body: Term = Var("z")
    for _ in range(value):
        body = App(Var("s"), body)
    return mk_lams(*_NUMERAL_BINDERS, body=body)


def _apply_numeral(n: Term, body: Term) -> Term:
    # n A s body
    return mk_app(n, A, Var("s"), body)


SUCC = Lam(
    "n",
    NAT,
    mk_lams(*_NUMERAL_BINDERS, body=App(Var("s"), _apply_numeral(Var("n"), Var("z")))),
)

ADD = mk_lams(
    ("m", NAT),
    ("n", NAT),
    *_NUMERAL_BINDERS,
    body=_apply_numeral(Var("m"), _apply_numeral(Var("n"), Var("z"))),
)

MUL = mk_lams(
    ("m", NAT),
    ("n", NAT),
    ("A", Univ()),
    ("s", arrow(A, A)),
    body=mk_app(Var("m"), A, mk_app(Var("n"), A, Var("s"))),
)


def to_int(term: Term) -> int:
    """Read back a Church numeral after normalizing ``term``."""

    match normalize(term):
        case Lam(_, _, Lam(s, _, Lam(z, _, body))):
            count = 0
            while True:
                match body:
                    case Var(name) if name == z:
                        return count
                    case App(Var(name), inner) if name == s:
                        count += 1
                        body = inner
                    case _:
                        break
    raise ValueError(f"Not a Church numeral: {term}")


__all__ = [
    "ID",
    "CONST",
    "BOOL",
    "TRUE",
    "FALSE",
    "ite",
    "NAT",
    "numeral",
    "SUCC",
    "ADD",
    "MUL",
    "to_int",
]

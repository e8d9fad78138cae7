"""
Combinators lógicos: AND, OR e NOT.

Combinators compõem predicados filhos em um novo predicado que satisfaz
o mesmo contrato (`Predicate`), formando uma árvore cujas folhas são
predicados atômicos. A avaliação é uma caminhada recursiva na árvore.

Política de avaliação (v1):
    - AND avalia `left` primeiro; se falso, `right` não é avaliado
    - OR avalia `left` primeiro; se verdadeiro, `right` não é avaliado
    - NOT inverte o resultado do operando

Decisões arquiteturais:
    - Combinators são dataclasses congeladas (imutáveis, comparáveis)
    - Filhos são validados na construção, nunca na avaliação
    - `all_of`/`any_of` dobram à esquerda: `all_of(a, b, c) == (a AND b) AND c`

Limites explícitos:
    - Não rebalanceia árvores por precedência
    - Não simplifica expressões (ex.: NOT NOT p permanece com dois nós)
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Tuple

from .exceptions import InvalidPredicateError
from .predicate import Composable, Predicate, PredicateKind, ensure_predicate


@dataclass(frozen=True)
class AndPredicate(Composable):
    """Conjunção com curto-circuito."""

    left: Predicate
    right: Predicate

    def __post_init__(self) -> None:
        ensure_predicate(self.left, "left")
        ensure_predicate(self.right, "right")

    @property
    def name(self) -> str:
        return f"({self.left.name} AND {self.right.name})"

    @property
    def kind(self) -> PredicateKind:
        return PredicateKind.AND

    @property
    def children(self) -> Tuple[Predicate, ...]:
        return (self.left, self.right)

    def is_satisfied_by(self, subject: Any) -> bool:
        if not self.left.is_satisfied_by(subject):
            return False
        return bool(self.right.is_satisfied_by(subject))


@dataclass(frozen=True)
class OrPredicate(Composable):
    """Disjunção com curto-circuito."""

    left: Predicate
    right: Predicate

    def __post_init__(self) -> None:
        ensure_predicate(self.left, "left")
        ensure_predicate(self.right, "right")

    @property
    def name(self) -> str:
        return f"({self.left.name} OR {self.right.name})"

    @property
    def kind(self) -> PredicateKind:
        return PredicateKind.OR

    @property
    def children(self) -> Tuple[Predicate, ...]:
        return (self.left, self.right)

    def is_satisfied_by(self, subject: Any) -> bool:
        if self.left.is_satisfied_by(subject):
            return True
        return bool(self.right.is_satisfied_by(subject))


@dataclass(frozen=True)
class NotPredicate(Composable):
    """Negação."""

    operand: Predicate

    def __post_init__(self) -> None:
        ensure_predicate(self.operand, "operand")

    @property
    def name(self) -> str:
        return f"NOT {self.operand.name}"

    @property
    def kind(self) -> PredicateKind:
        return PredicateKind.NOT

    @property
    def children(self) -> Tuple[Predicate, ...]:
        return (self.operand,)

    def is_satisfied_by(self, subject: Any) -> bool:
        return not self.operand.is_satisfied_by(subject)


# ---------------------------------------------------------------------------
# Funções livres
# ---------------------------------------------------------------------------

def and_(left: Predicate, right: Predicate) -> AndPredicate:
    return AndPredicate(left, right)


def or_(left: Predicate, right: Predicate) -> OrPredicate:
    return OrPredicate(left, right)


def not_(operand: Predicate) -> NotPredicate:
    return NotPredicate(operand)


def _fold(kind: str, predicates: Tuple[Predicate, ...]) -> Predicate:
    if not predicates:
        raise InvalidPredicateError(
            message=f"{kind} exige ao menos um predicado",
            details={"received": 0},
        )
    first = ensure_predicate(predicates[0], "operand[0]")
    factory = AndPredicate if kind == "all_of" else OrPredicate
    return reduce(lambda acc, p: factory(acc, p), predicates[1:], first)


def all_of(*predicates: Predicate) -> Predicate:
    """Conjunção n-ária (dobra à esquerda). Um único predicado é retornado como está."""
    return _fold("all_of", predicates)


def any_of(*predicates: Predicate) -> Predicate:
    """Disjunção n-ária (dobra à esquerda). Um único predicado é retornado como está."""
    return _fold("any_of", predicates)

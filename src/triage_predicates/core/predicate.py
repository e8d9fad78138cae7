"""
Contrato canônico de Predicate e variantes atômicas.

Um Predicate é um teste booleano puro, nomeado, sobre um subject. Este
módulo define:
    - o protocolo `Predicate` (conformidade estrutural, sem herança obrigatória)
    - o enum `PredicateKind` que marca as variantes {atomic, and, or, not}
    - o mixin `Composable`, que oferece a composição fluente
    - as variantes atômicas `HasAllTags`, `HasAnyTag` e `FunctionPredicate`

Princípios fundamentais:
    - `is_satisfied_by` é puro e livre de efeitos colaterais
    - Predicados são imutáveis e reutilizáveis entre avaliações
    - Composição sempre cria novas instâncias; nada é mutado
    - Conformidade é garantida por duck typing (@runtime_checkable)

Invariantes:
    - Todo predicado possui `name` textual
    - `is_satisfied_by` sempre retorna `bool`
    - Predicados atômicos não possuem filhos

Limites explícitos:
    - Não implementa os combinators (ver `combinators`)
    - Não registra eventos (ver `evaluation`)
    - Não carrega regras de arquivos (ver `rules`)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, FrozenSet, Optional, Protocol, Tuple, runtime_checkable

from .exceptions import InvalidPredicateError, InvalidSubjectError
from .subject import normalize_tags


class PredicateKind(str, Enum):
    """
    Variantes estruturais de um predicado.

    Os valores são strings para facilitar serialização de traces e
    inspeção de árvores de composição.
    """
    ATOMIC = "atomic"
    AND = "and"
    OR = "or"
    NOT = "not"


@runtime_checkable
class Predicate(Protocol):
    """
    Contrato canônico de um Predicate.

    Atributos obrigatórios:
        - name: identificador legível do predicado
        - kind: variante estrutural (`PredicateKind`)
        - children: filhos diretos (vazio para atômicos)

    Decisões arquiteturais:
        - O protocolo não impõe herança, apenas conformidade estrutural
        - Combinators satisfazem o mesmo protocolo (interface recursiva)
        - Violação do tipo de subject é erro de contrato do chamador
    """
    name: str

    @property
    def kind(self) -> PredicateKind:
        ...

    @property
    def children(self) -> Tuple["Predicate", ...]:
        ...

    def is_satisfied_by(self, subject: Any) -> bool:
        """Avalia o predicado sobre o subject, sem efeitos colaterais."""
        ...


def ensure_predicate(obj: Any, role: str = "predicate") -> Predicate:
    """
    Garante que `obj` satisfaz o contrato estrutural de Predicate.

    Args:
        obj (Any): Objeto candidato.
        role (str): Papel do objeto na composição (usado na mensagem).

    Returns:
        Predicate: O próprio objeto, validado.

    Raises:
        InvalidPredicateError: Se o objeto não satisfaz o protocolo.
    """
    if not isinstance(obj, Predicate) or not callable(getattr(obj, "is_satisfied_by", None)):
        raise InvalidPredicateError(
            message=f"{role} não satisfaz o contrato de Predicate",
            details={"role": role, "received_type": type(obj).__name__},
            hint="Use predicados do pacote ou objetos com name, kind, children e is_satisfied_by.",
        )
    return obj


class Composable:
    """
    Mixin de composição fluente.

    `p1.and_(p2).or_(p3)` constrói `Or(And(p1, p2), p3)`: cada chamada
    embrulha o composto *atual* como operando esquerdo, sem rebalancear
    por precedência. Os operadores `&`, `|` e `~` são equivalentes.

    Os operadores seguem a precedência do Python (`~` > `&` > `|`):
    `p1 | p2 & p3` constrói `Or(p1, And(p2, p3))`, enquanto
    `p1.or_(p2).and_(p3)` constrói `And(Or(p1, p2), p3)`.
    """

    def and_(self, other: Predicate) -> Predicate:
        from .combinators import AndPredicate

        return AndPredicate(self, other)  # type: ignore[arg-type]

    def or_(self, other: Predicate) -> Predicate:
        from .combinators import OrPredicate

        return OrPredicate(self, other)  # type: ignore[arg-type]

    def not_(self) -> Predicate:
        from .combinators import NotPredicate

        return NotPredicate(self)  # type: ignore[arg-type]

    def __and__(self, other: Predicate) -> Predicate:
        return self.and_(other)

    def __or__(self, other: Predicate) -> Predicate:
        return self.or_(other)

    def __invert__(self) -> Predicate:
        return self.not_()


def _subject_tags(subject: Any, predicate_name: str) -> FrozenSet[str]:
    if subject is None:
        raise InvalidSubjectError(
            message="Subject ausente (None)",
            details={"predicate": predicate_name},
        )
    tags = getattr(subject, "tags", None)
    if tags is None:
        raise InvalidSubjectError(
            message="Subject não expõe atributo 'tags'",
            details={"predicate": predicate_name, "subject_type": type(subject).__name__},
            hint="Avalie predicados de tag apenas sobre Subject (ou objetos com 'tags').",
        )
    if isinstance(tags, frozenset):
        return tags
    return normalize_tags(tags)


def _predicate_tags(tags: Any, predicate_type: str) -> FrozenSet[str]:
    try:
        return normalize_tags(tags)
    except InvalidSubjectError as e:
        raise InvalidPredicateError(
            message=f"Tags inválidas na construção de {predicate_type}",
            details={"predicate_type": predicate_type, **e.details},
            hint="Informe uma coleção de tags não vazias (não uma string solta).",
        ) from e


def _default_name(prefix: str, tags: FrozenSet[str]) -> str:
    return f"{prefix}({', '.join(sorted(tags))})"


# ---------------------------------------------------------------------------
# Variantes atômicas
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HasAllTags(Composable):
    """Satisfeito quando o subject possui todas as tags do conjunto.

    Conjunto vazio é satisfeito vacuamente.
    """

    tags: FrozenSet[str]
    name: Optional[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        tags = _predicate_tags(self.tags, "HasAllTags")
        object.__setattr__(self, "tags", tags)
        if not self.name:
            object.__setattr__(self, "name", _default_name("has_all", tags))

    @property
    def kind(self) -> PredicateKind:
        return PredicateKind.ATOMIC

    @property
    def children(self) -> Tuple[Predicate, ...]:
        return ()

    def is_satisfied_by(self, subject: Any) -> bool:
        return self.tags <= _subject_tags(subject, self.name)  # type: ignore[arg-type]


@dataclass(frozen=True)
class HasAnyTag(Composable):
    """Satisfeito quando a interseção entre as tags do subject e o conjunto não é vazia."""

    tags: FrozenSet[str]
    name: Optional[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        tags = _predicate_tags(self.tags, "HasAnyTag")
        object.__setattr__(self, "tags", tags)
        if not self.name:
            object.__setattr__(self, "name", _default_name("has_any", tags))

    @property
    def kind(self) -> PredicateKind:
        return PredicateKind.ATOMIC

    @property
    def children(self) -> Tuple[Predicate, ...]:
        return ()

    def is_satisfied_by(self, subject: Any) -> bool:
        return not self.tags.isdisjoint(_subject_tags(subject, self.name))  # type: ignore[arg-type]


@dataclass(frozen=True)
class FunctionPredicate(Composable):
    """
    Predicado atômico a partir de um callable `subject -> bool`.

    Permite autorar predicados sobre subjects de qualquer tipo. O
    callable deve ser puro; o resultado é convertido para `bool`.
    """

    func: Callable[[Any], Any]
    name: str = ""

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise InvalidPredicateError(
                message="FunctionPredicate exige um callable",
                details={"received_type": type(self.func).__name__},
            )
        if not self.name:
            object.__setattr__(self, "name", getattr(self.func, "__name__", "predicate"))

    @property
    def kind(self) -> PredicateKind:
        return PredicateKind.ATOMIC

    @property
    def children(self) -> Tuple[Predicate, ...]:
        return ()

    def is_satisfied_by(self, subject: Any) -> bool:
        if subject is None:
            raise InvalidSubjectError(
                message="Subject ausente (None)",
                details={"predicate": self.name},
            )
        return bool(self.func(subject))


def predicate(name: Optional[str] = None) -> Callable[[Callable[[Any], Any]], FunctionPredicate]:
    """
    Decorator que transforma uma função em `FunctionPredicate`.

    Exemplo:
        >>> @predicate("adult")
        ... def is_adult(p):
        ...     return p.age >= 18
    """

    def wrap(func: Callable[[Any], Any]) -> FunctionPredicate:
        return FunctionPredicate(func=func, name=name or getattr(func, "__name__", "predicate"))

    return wrap

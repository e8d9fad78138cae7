"""
Fachada de avaliação.

Ponto de entrada para avaliar árvores de predicados sobre subjects,
com registro opcional no `EvaluationContext` e explicação nó a nó.

`explain` percorre a árvore com o mesmo curto-circuito dos combinators:
nós não avaliados aparecem no trace com `evaluated=False` e
`result=None`. Predicados customizados que não expõem filhos são
tratados como folhas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .context import EvaluationContext
from .predicate import Predicate, PredicateKind, ensure_predicate


@dataclass(frozen=True)
class TraceNode:
    """Resultado imutável da avaliação de um nó da árvore."""

    name: str
    kind: PredicateKind
    evaluated: bool
    result: Optional[bool]
    children: Tuple["TraceNode", ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "evaluated": self.evaluated,
            "result": self.result,
            "children": [c.to_dict() for c in self.children],
        }

    def evaluated_names(self) -> List[str]:
        """Nomes dos nós avaliados, em pré-ordem."""
        out: List[str] = []
        if self.evaluated:
            out.append(self.name)
        for c in self.children:
            out.extend(c.evaluated_names())
        return out


def _kind_of(p: Predicate) -> PredicateKind:
    kind = getattr(p, "kind", PredicateKind.ATOMIC)
    try:
        return PredicateKind(kind)
    except ValueError:
        return PredicateKind.ATOMIC


def _skipped(p: Predicate) -> TraceNode:
    kids = tuple(_skipped(c) for c in (getattr(p, "children", ()) or ()))
    return TraceNode(name=p.name, kind=_kind_of(p), evaluated=False, result=None, children=kids)


def _walk(p: Predicate, subject: Any) -> TraceNode:
    kind = _kind_of(p)
    kids = tuple(getattr(p, "children", ()) or ())

    if kind == PredicateKind.AND and len(kids) == 2:
        left = _walk(kids[0], subject)
        right = _walk(kids[1], subject) if left.result else _skipped(kids[1])
        result = bool(left.result and right.result)
        return TraceNode(p.name, kind, True, result, (left, right))

    if kind == PredicateKind.OR and len(kids) == 2:
        left = _walk(kids[0], subject)
        right = _skipped(kids[1]) if left.result else _walk(kids[1], subject)
        result = bool(left.result or right.result)
        return TraceNode(p.name, kind, True, result, (left, right))

    if kind == PredicateKind.NOT and len(kids) == 1:
        inner = _walk(kids[0], subject)
        return TraceNode(p.name, kind, True, not inner.result, (inner,))

    # folha (atômico ou predicado customizado opaco)
    return TraceNode(p.name, PredicateKind.ATOMIC, True, bool(p.is_satisfied_by(subject)))


def evaluate(predicate: Predicate, subject: Any, *, ctx: Optional[EvaluationContext] = None) -> bool:
    """
    Avalia `predicate` sobre `subject`.

    Quando `ctx` é fornecido, registra um evento `info` com o nome do
    predicado, o subject (quando nomeado) e o resultado.

    Raises:
        InvalidPredicateError: Se `predicate` não satisfaz o contrato.
        InvalidSubjectError: Se o subject é incompatível com o predicado.
    """
    ensure_predicate(predicate)
    result = bool(predicate.is_satisfied_by(subject))
    if ctx is not None:
        ctx.log(
            rule_id=predicate.name,
            level="info",
            message="predicate evaluated",
            subject=getattr(subject, "name", None),
            result=result,
        )
    return result


def explain(predicate: Predicate, subject: Any) -> TraceNode:
    """Avalia `predicate` e devolve o trace completo da árvore."""
    ensure_predicate(predicate)
    return _walk(predicate, subject)

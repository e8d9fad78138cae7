# src/triage_predicates/core/__init__.py
"""
Core do Triage Predicates.

Este pacote contém o motor de composição de predicados, independente do
domínio de triagem:

    - subject     → modelo de dados avaliado (nome + tags)
    - predicate   → contrato Predicate, mixin fluente e variantes atômicas
    - combinators → AND / OR / NOT com curto-circuito e formas n-árias
    - evaluation  → fachada de avaliação e explicação (trace)
    - context     → logging estruturado por rodada de avaliação
    - registry    → predicados nomeados
    - config      → carga, merge e hash de rule sets
    - rules       → compilação de regras declarativas
    - batch       → avaliação sobre DataFrames (pandas)

Princípios fundamentais:
    - Avaliação é uma função pura de (árvore, subject)
    - Toda composição produz novas instâncias imutáveis
    - Nenhuma decisão silenciosa: violações de contrato levantam exceções tipadas
"""

from .combinators import AndPredicate, NotPredicate, OrPredicate, all_of, and_, any_of, not_, or_
from .context import EvaluationContext
from .evaluation import TraceNode, evaluate, explain
from .predicate import (
    Composable,
    FunctionPredicate,
    HasAllTags,
    HasAnyTag,
    Predicate,
    PredicateKind,
    ensure_predicate,
    predicate,
)
from .registry import PredicateRegistry
from .subject import Subject

__all__ = [
    "AndPredicate",
    "Composable",
    "EvaluationContext",
    "FunctionPredicate",
    "HasAllTags",
    "HasAnyTag",
    "NotPredicate",
    "OrPredicate",
    "Predicate",
    "PredicateKind",
    "PredicateRegistry",
    "Subject",
    "TraceNode",
    "all_of",
    "and_",
    "any_of",
    "ensure_predicate",
    "evaluate",
    "explain",
    "not_",
    "or_",
    "predicate",
]

# src/triage_predicates/core/rules/__init__.py
"""
Regras declarativas.

Permite descrever árvores de predicados em YAML/JSON (tag sets nomeados e
expressões com `all_tags`, `any_tags`, `and`, `or`, `not`, `ref`) e
compilá-las para um `PredicateRegistry`.

Componentes:
    - planner → ordem determinística de compilação e detecção de ciclos
    - builder → expressão → predicado
    - ruleset → carga + compilação + hash
"""

from .builder import build_predicate, compile_rules
from .planner import collect_references, plan_rules
from .ruleset import RuleSet, load_rule_set

__all__ = [
    "RuleSet",
    "build_predicate",
    "collect_references",
    "compile_rules",
    "load_rule_set",
    "plan_rules",
]

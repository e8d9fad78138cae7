# src/triage_predicates/core/rules/builder.py
"""
Compilação de expressões declarativas em árvores de predicados.

Gramática (v1). Cada expressão é um mapa com exatamente uma chave:

    {all_tags: <tag_set>}          → HasAllTags
    {any_tags: <tag_set>}          → HasAnyTag
    {and: [<expr>, <expr>, ...]}   → AND (dobra à esquerda, ≥ 2 operandos)
    {or:  [<expr>, <expr>, ...]}   → OR  (dobra à esquerda, ≥ 2 operandos)
    {not: <expr>}                  → NOT
    {ref: <nome de regra>}         → predicado já compilado

`<tag_set>` é o nome de uma entrada em `tag_sets` ou uma lista literal
de tags.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..combinators import all_of, any_of, not_
from ..exceptions import InvalidRuleError, InvalidSubjectError, UnknownReferenceError
from ..predicate import HasAllTags, HasAnyTag, Predicate
from ..registry import PredicateRegistry
from ..subject import normalize_tags
from .planner import plan_rules

OPERATORS = ("all_tags", "any_tags", "and", "or", "not", "ref")


def _resolve_tags(value: Any, tag_sets: Mapping[str, Any], *, rule_id: str) -> List[str]:
    if isinstance(value, str):
        if value not in tag_sets:
            raise UnknownReferenceError(
                message=f"Regra '{rule_id}' referencia tag set inexistente '{value}'",
                details={"rule": rule_id, "tag_set": value, "known": sorted(tag_sets)},
            )
        value = tag_sets[value]
    if not isinstance(value, list):
        raise InvalidRuleError(
            message="Tag set deve ser lista de tags ou nome de tag set",
            details={"rule": rule_id, "received_type": type(value).__name__},
        )
    try:
        return sorted(normalize_tags(value))
    except InvalidSubjectError as e:
        raise InvalidRuleError(
            message=f"Tag inválida na regra '{rule_id}'",
            details={"rule": rule_id, **e.details},
        ) from e


def build_predicate(
    expr: Any,
    *,
    tag_sets: Optional[Mapping[str, Any]] = None,
    resolved: Optional[Mapping[str, Predicate]] = None,
    rule_id: str = "<inline>",
    name: Optional[str] = None,
) -> Predicate:
    """
    Compila uma expressão em predicado.

    Args:
        expr (Any): Expressão declarativa.
        tag_sets (Mapping[str, Any]): Tag sets nomeados.
        resolved (Mapping[str, Predicate]): Regras já compiladas (para `ref`).
        rule_id (str): Regra em compilação (usado em mensagens de erro).
        name (Optional[str]): Nome aplicado a predicados atômicos na raiz.

    Raises:
        InvalidRuleError: Forma inválida.
        UnknownReferenceError: `ref` ou tag set inexistente.
    """
    tag_sets = tag_sets or {}
    resolved = resolved or {}

    if not isinstance(expr, Mapping) or len(expr) != 1:
        raise InvalidRuleError(
            message="Expressão deve ser um mapa com exatamente um operador",
            details={"rule": rule_id, "expression": repr(expr), "operators": list(OPERATORS)},
        )

    (op, value), = expr.items()

    if op in ("all_tags", "any_tags"):
        tags = _resolve_tags(value, tag_sets, rule_id=rule_id)
        factory = HasAllTags if op == "all_tags" else HasAnyTag
        return factory(tags=frozenset(tags), name=name)

    if op in ("and", "or"):
        if not isinstance(value, list) or len(value) < 2:
            raise InvalidRuleError(
                message=f"Operador '{op}' exige lista com ao menos dois operandos",
                details={"rule": rule_id, "received": repr(value)},
            )
        operands = [
            build_predicate(v, tag_sets=tag_sets, resolved=resolved, rule_id=rule_id)
            for v in value
        ]
        return all_of(*operands) if op == "and" else any_of(*operands)

    if op == "not":
        return not_(build_predicate(value, tag_sets=tag_sets, resolved=resolved, rule_id=rule_id))

    if op == "ref":
        if not isinstance(value, str) or value not in resolved:
            raise UnknownReferenceError(
                message=f"Regra '{rule_id}' referencia regra não compilada '{value}'",
                details={"rule": rule_id, "reference": repr(value)},
            )
        return resolved[value]

    raise InvalidRuleError(
        message=f"Operador desconhecido: {op}",
        details={"rule": rule_id, "operator": str(op), "operators": list(OPERATORS)},
    )


def compile_rules(config: Mapping[str, Any]) -> PredicateRegistry:
    """
    Compila a seção `rules` de uma configuração em um `PredicateRegistry`.

    As regras são registradas na ordem topológica de `plan_rules`.
    Regras atômicas recebem o próprio nome de regra como `name`.
    """
    tag_sets = config.get("tag_sets") or {}
    rules = config.get("rules") or {}

    if not isinstance(tag_sets, Mapping):
        raise InvalidRuleError(
            message="'tag_sets' deve ser um mapa",
            details={"received_type": type(tag_sets).__name__},
        )
    if not isinstance(rules, Mapping):
        raise InvalidRuleError(
            message="'rules' deve ser um mapa",
            details={"received_type": type(rules).__name__},
        )

    registry = PredicateRegistry()
    compiled: Dict[str, Predicate] = {}
    for rule_id in plan_rules(rules):
        p = build_predicate(
            rules[rule_id],
            tag_sets=tag_sets,
            resolved=compiled,
            rule_id=rule_id,
            name=rule_id,
        )
        compiled[rule_id] = p
        registry.add(rule_id, p)

    return registry

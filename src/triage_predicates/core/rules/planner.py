# src/triage_predicates/core/rules/planner.py
"""
Planejamento da ordem de compilação de regras nomeadas.

Regras podem referenciar outras regras (`{ref: nome}`). Antes de
compilar, as referências formam um grafo que precisa ser um DAG: cada
regra só é compilada depois de todas as regras que referencia.

A ordenação é determinística: quando várias regras estão prontas, a
escolha é feita por ordem lexicográfica do nome (fila de prioridade
sobre as regras sem dependências pendentes).

Limites explícitos:
    - Não valida a forma das expressões além de localizar `ref`
    - Não compila predicados
"""

from __future__ import annotations

import heapq
from typing import Any, Dict, List, Mapping

from ..exceptions import CycleDetectedError, InvalidRuleError, UnknownReferenceError


def collect_references(expr: Any) -> List[str]:
    """Lista, sem repetição e em ordem de aparição, as regras referenciadas por `expr`."""
    found: List[str] = []

    def visit(node: Any) -> None:
        if isinstance(node, Mapping):
            for key, value in node.items():
                if key == "ref":
                    if isinstance(value, str) and value not in found:
                        found.append(value)
                else:
                    visit(value)
        elif isinstance(node, list):
            for item in node:
                visit(item)

    visit(expr)
    return found


def _dependents(deps: Mapping[str, List[str]]) -> Dict[str, List[str]]:
    """Inverte o grafo: regra → regras que a referenciam."""
    out: Dict[str, List[str]] = {name: [] for name in deps}
    for name, refs in deps.items():
        for ref in refs:
            out[ref].append(name)
    return out


def plan_rules(rules: Mapping[str, Any]) -> List[str]:
    """
    Valida referências e produz a ordem topológica de compilação.

    Args:
        rules (Mapping[str, Any]): Mapa nome → expressão.

    Returns:
        List[str]: Nomes de regras em ordem de compilação.

    Raises:
        InvalidRuleError: Se algum nome de regra for inválido.
        UnknownReferenceError: Se uma regra referenciar regra inexistente.
        CycleDetectedError: Se houver ciclo de referências.
    """
    for name in rules:
        if not isinstance(name, str) or not name.strip():
            raise InvalidRuleError(
                message="Nome de regra deve ser string não vazia",
                details={"name": repr(name)},
            )

    deps: Dict[str, List[str]] = {}
    for name, expr in rules.items():
        refs = collect_references(expr)
        for ref in refs:
            if ref not in rules:
                raise UnknownReferenceError(
                    message=f"Regra '{name}' referencia regra inexistente '{ref}'",
                    details={"rule": name, "reference": ref},
                    hint="Declare a regra referenciada em 'rules' ou corrija o nome.",
                )
        deps[name] = refs

    blocked_by: Dict[str, int] = {name: len(refs) for name, refs in deps.items()}
    dependents = _dependents(deps)

    ready = [name for name, n in blocked_by.items() if n == 0]
    heapq.heapify(ready)

    order: List[str] = []
    while ready:
        name = heapq.heappop(ready)
        order.append(name)
        for dependent in dependents[name]:
            blocked_by[dependent] -= 1
            if blocked_by[dependent] == 0:
                heapq.heappush(ready, dependent)

    stuck = sorted(name for name, n in blocked_by.items() if n > 0)
    if stuck:
        raise CycleDetectedError(
            message="Ciclo detectado nas referências entre regras",
            details={"rules": stuck},
            hint="Remova a referência circular; regras devem formar um DAG.",
        )

    return order

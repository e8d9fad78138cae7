"""
Registro de predicados nomeados.

Este módulo define o `PredicateRegistry`, responsável por associar nomes
estáveis a predicados (atômicos ou compostos), permitindo que regras
sejam referenciadas por nome em classificações, lotes tabulares e
rule sets declarativos.

Decisões arquiteturais:
    - Nomes são únicos; duplicidade é erro estrutural
    - A ordem de registro é preservada separadamente do armazenamento
    - Apenas objetos que satisfazem o contrato de Predicate são aceitos

Limites explícitos:
    - Não avalia predicados
    - Não resolve referências entre regras (ver `rules.planner`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from .exceptions import DuplicatePredicateNameError, InvalidPredicateError, UnknownPredicateError
from .predicate import Predicate, ensure_predicate


@dataclass
class PredicateRegistry:
    """Registro canônico de predicados nomeados, em ordem de registro."""

    _predicates: Dict[str, Predicate] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, name: str, predicate: Predicate) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidPredicateError(
                message="Nome de predicado deve ser string não vazia",
                details={"name": repr(name)},
            )
        ensure_predicate(predicate, name)

        if name in self._predicates:
            raise DuplicatePredicateNameError(
                message=f"Predicado duplicado: {name}",
                details={"name": name},
                hint="Use nomes únicos por rule set.",
            )

        self._predicates[name] = predicate
        self._order.append(name)

    def register(self, predicate: Predicate) -> Predicate:
        """Registra usando `predicate.name`; retorna o próprio predicado."""
        ensure_predicate(predicate)
        self.add(predicate.name, predicate)
        return predicate

    def get(self, name: str) -> Predicate:
        if name not in self._predicates:
            raise UnknownPredicateError(
                message=f"Predicado não registrado: {name}",
                details={"name": name, "known": list(self._order)},
            )
        return self._predicates[name]

    def names(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[Predicate]:
        return [self._predicates[n] for n in self._order]

    def items(self) -> List[Tuple[str, Predicate]]:
        return [(n, self._predicates[n]) for n in self._order]

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._order))

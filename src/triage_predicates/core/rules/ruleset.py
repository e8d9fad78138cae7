# src/triage_predicates/core/rules/ruleset.py
"""Rule set compilado e identificado por hash."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config.hashing import compute_config_hash
from ..config.loader import load_config
from ..predicate import Predicate
from ..registry import PredicateRegistry
from .builder import compile_rules


@dataclass(frozen=True)
class RuleSet:
    """
    Registry de regras compiladas + identidade da configuração que o gerou.

    Igualdade e hash usam apenas `config_hash`: dois rule sets compilados
    da mesma configuração efetiva são equivalentes.
    """

    registry: PredicateRegistry = field(compare=False)
    config_hash: str
    config: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def get(self, rule_id: str) -> Predicate:
        return self.registry.get(rule_id)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "RuleSet":
        return cls(
            registry=compile_rules(config),
            config_hash=compute_config_hash(config),
            config=config,
        )


def load_rule_set(*, defaults_path: str, local_path: Optional[str] = None) -> RuleSet:
    """Carrega (defaults + local), compila e identifica um rule set."""
    config = load_config(defaults_path=defaults_path, local_path=local_path)
    return RuleSet.from_config(config)

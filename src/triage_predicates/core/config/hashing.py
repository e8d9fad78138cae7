# src/triage_predicates/core/config/hashing.py
"""
Hashing canônico de configuração.

O hash identifica um rule set efetivo e acompanha o `RuleSet` compilado,
permitindo associar resultados de triagem à versão exata das regras.

Política de hashing (v1):
    - JSON canônico (chaves ordenadas, separadores compactos, UTF-8)
    - conjuntos viram listas ordenadas; Enums viram seus valores
    - SHA-256 (64 caracteres hexadecimais)
"""

import hashlib
import json
from enum import Enum
from typing import Any, Mapping


def _canonical_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Valor não serializável no rule set: {type(value).__name__}")


def canonical_json(config: Mapping[str, Any]) -> str:
    """Serialização determinística usada como entrada do hash."""
    return json.dumps(
        dict(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_canonical_default,
    )


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Hash SHA-256 da configuração efetiva.

    Configurações com o mesmo conteúdo (independente da ordem das chaves)
    produzem o mesmo hash.

    Raises:
        TypeError: Se `config` não for um mapa ou contiver valor não serializável.
    """
    if not isinstance(config, Mapping):
        raise TypeError(f"Config para hashing deve ser um mapa, recebido: {type(config).__name__}")

    digest = hashlib.sha256()
    digest.update(canonical_json(config).encode("utf-8"))
    return digest.hexdigest()

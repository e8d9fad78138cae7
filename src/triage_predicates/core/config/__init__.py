# src/triage_predicates/core/config/__init__.py

"""
Camada de configuração de rule sets.

Este pacote carrega, mescla e identifica arquivos declarativos de regras
(tag sets + expressões de regras) usados para compilar árvores de
predicados sem escrever código.

A configuração é:
    - declarativa (YAML ou JSON)
    - determinística (mesma entrada, mesma saída)
    - identificável por hash canônico

Responsabilidades do pacote:
    - Carregamento de defaults obrigatórios + overrides locais opcionais
    - Validação das seções `tag_sets` e `rules`
    - Merge por entrada de regras e tag sets
    - Hash SHA-256 da configuração efetiva

Limites explícitos:
    - Não compila regras (ver `core.rules`)
    - Não avalia predicados
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidRuleSetSectionError,
    UnsupportedConfigFormatError,
)
from .hashing import canonical_json, compute_config_hash
from .loader import check_rule_set_sections, load_config, read_rule_file
from .merge import RULE_SET_SECTIONS, deep_merge, merge_rule_sets

__all__ = [
    "RULE_SET_SECTIONS",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidRuleSetSectionError",
    "UnsupportedConfigFormatError",
    "canonical_json",
    "check_rule_set_sections",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "merge_rule_sets",
    "read_rule_file",
]

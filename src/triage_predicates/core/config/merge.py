# src/triage_predicates/core/config/merge.py
"""
Merge de configuração de rule sets.

Duas políticas:

`deep_merge` (chaves genéricas, ex.: `meta`)
    - mapa + mapa → merge recursivo
    - mesmo tipo  → override substitui
    - tipos diferentes → ConfigTypeConflictError

`merge_rule_sets` (rule set completo)
    - `tag_sets` e `rules` são mesclados por entrada: uma entrada do
      override substitui a entrada inteira do base (uma regra local nunca
      é fundida com a expressão do defaults)
    - demais chaves seguem `deep_merge`

Nenhum input é mutado.
"""

from copy import deepcopy
from typing import Any, Dict, Mapping

from .errors import ConfigTypeConflictError

RULE_SET_SECTIONS = ("tag_sets", "rules")


def _type_name(value: Any) -> str:
    return type(value).__name__


def _merge_value(key: str, current: Any, incoming: Any) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return deep_merge(current, incoming)
    if type(current) is not type(incoming):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{key}': {_type_name(current)} vs {_type_name(incoming)}"
        )
    return deepcopy(incoming)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override` em um novo dicionário.

    Raises:
        ConfigTypeConflictError: Raízes que não são dict, ou conflito de tipo.
    """
    if not (isinstance(base, dict) and isinstance(override, dict)):
        raise ConfigTypeConflictError(
            f"Merge requer dicts na raiz: {_type_name(base)} vs {_type_name(override)}"
        )

    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, incoming in override.items():
        merged[key] = _merge_value(key, merged[key], incoming) if key in merged else deepcopy(incoming)
    return merged


def _section_entries(config: Mapping[str, Any], section: str) -> Dict[str, Any]:
    entries = config.get(section)
    if entries is None:
        return {}
    if not isinstance(entries, dict):
        raise ConfigTypeConflictError(
            f"Seção '{section}' deve ser dict, recebido: {_type_name(entries)}"
        )
    return entries


def merge_rule_sets(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aplica um rule set local sobre o rule set de defaults.

    Exemplo:
        - base:     {"rules": {"u": {"and": [{"ref": "a"}, {"ref": "b"}]}}}
        - override: {"rules": {"u": {"ref": "a"}}}
        - saída:    {"rules": {"u": {"ref": "a"}}}

    Raises:
        ConfigTypeConflictError: Seção que não é dict, ou conflito fora das seções.
    """
    merged = deep_merge(
        {k: v for k, v in base.items() if k not in RULE_SET_SECTIONS},
        {k: v for k, v in override.items() if k not in RULE_SET_SECTIONS},
    )

    for section in RULE_SET_SECTIONS:
        if section not in base and section not in override:
            continue
        entries = deepcopy(_section_entries(base, section))
        entries.update(deepcopy(_section_entries(override, section)))
        merged[section] = entries

    return merged

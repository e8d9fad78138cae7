# src/triage_predicates/core/config/loader.py
"""
Loader de arquivos de rule set.

Um rule set efetivo é resolvido a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional; ignorado se ausente)

Cada arquivo é validado isoladamente antes do merge:
    - raiz é um mapa (arquivo vazio equivale a `{}`)
    - `tag_sets` e `rules`, quando presentes, são mapas
    - cada tag set é uma lista

O merge segue `merge_rule_sets`: entradas de `tag_sets` e `rules` do
arquivo local substituem as do defaults por nome.

Limites explícitos:
    - Não valida a gramática das expressões (ver `core.rules.builder`)
    - Não compila predicados
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, TextIO, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidRuleSetSectionError,
    UnsupportedConfigFormatError,
)
from .merge import RULE_SET_SECTIONS, merge_rule_sets

PathLike = Union[str, Path]

_READERS: Dict[str, Callable[[TextIO], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def check_rule_set_sections(data: Mapping[str, Any], *, source: Optional[str] = None) -> None:
    """
    Valida a forma das seções de um rule set.

    Raises:
        InvalidRuleSetSectionError: `tag_sets`/`rules` não são mapas, ou
            algum tag set não é lista.
    """
    for section in RULE_SET_SECTIONS:
        value = data.get(section)
        if value is not None and not isinstance(value, dict):
            raise InvalidRuleSetSectionError(
                f"Seção '{section}' deve ser um mapa, recebido: {type(value).__name__}",
                section=section,
                source=source,
            )

    for set_name, tags in (data.get("tag_sets") or {}).items():
        if not isinstance(tags, list):
            raise InvalidRuleSetSectionError(
                f"Tag set '{set_name}' deve ser uma lista, recebido: {type(tags).__name__}",
                section=f"tag_sets.{set_name}",
                source=source,
            )


def read_rule_file(path: PathLike) -> Dict[str, Any]:
    """
    Lê um único arquivo de rule set (YAML ou JSON) e valida sua forma.

    Raises:
        DefaultsNotFoundError: Arquivo inexistente.
        UnsupportedConfigFormatError: Extensão não suportada.
        InvalidConfigRootTypeError: Raiz não é um mapa.
        InvalidRuleSetSectionError: Seções com forma inválida.
    """
    path = Path(path)
    source = str(path)

    if not path.is_file():
        raise DefaultsNotFoundError("Arquivo de rule set não encontrado", source=source)

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: '{path.suffix}' (use .yaml, .yml ou .json)",
            source=source,
        )

    with path.open("r", encoding="utf-8") as f:
        data = reader(f)

    data = {} if data is None else data
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Raiz do rule set deve ser um mapa, recebido: {type(data).__name__}",
            source=source,
        )

    check_rule_set_sections(data, source=source)
    return data


def load_config(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega a configuração efetiva de um rule set.

    Args:
        defaults_path: Caminho do rule set base.
        local_path: Caminho opcional de overrides locais.

    Returns:
        Dict[str, Any]: Configuração efetiva (defaults + local).

    Raises:
        DefaultsNotFoundError: Defaults inexistente.
        UnsupportedConfigFormatError: Formato não suportado.
        InvalidConfigRootTypeError: Raiz não é um mapa.
        InvalidRuleSetSectionError: Seções com forma inválida.
        ConfigTypeConflictError: Conflito de tipo fora das seções de regras.
    """
    effective = read_rule_file(defaults_path)

    if local_path is None or not Path(local_path).exists():
        return effective

    return merge_rule_sets(effective, read_rule_file(local_path))

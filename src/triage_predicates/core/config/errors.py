# src/triage_predicates/core/config/errors.py
"""
Exceções da camada de configuração de rule sets.

Falhas aqui são estruturais (arquivo ausente, formato, raiz, seções do
rule set, conflito de merge) e carregam, quando conhecida, a origem do
problema em `source`. Falhas na gramática das expressões pertencem a
`core.exceptions.InvalidRuleError`.
"""

from typing import Optional


class ConfigError(Exception):
    """Base de todos os erros de carregamento e merge de rule sets."""

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.message} [{self.source}]"


class DefaultsNotFoundError(ConfigError):
    """O arquivo de defaults é obrigatório e não foi encontrado."""


class UnsupportedConfigFormatError(ConfigError):
    """Extensão fora de .yaml, .yml e .json."""


class InvalidConfigRootTypeError(ConfigError):
    """A raiz do arquivo não é um mapa."""


class InvalidRuleSetSectionError(ConfigError):
    """
    Seção de rule set com forma inválida.

    `tag_sets` e `rules` devem ser mapas; cada tag set deve ser uma lista.
    O nome da seção (ou `tag_sets.<nome>`) fica em `section`.
    """

    def __init__(self, message: str, *, section: str, source: Optional[str] = None) -> None:
        super().__init__(message, source=source)
        self.section = section


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o merge.

    Exemplo:
        - base:     {"meta": {"owner": "triage"}}
        - override: {"meta": "triage"}
    """

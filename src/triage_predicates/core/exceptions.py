"""
Triage Predicates: Exceções canônicas (v1)

Este módulo define as exceções tipadas do motor de composição de predicados.

Objetivo:
- Permitir que predicados, combinators e o compilador de regras levantem
  exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/TypeError genéricos em violações de contrato

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Nenhuma exceção representa falha recuperável da avaliação: a avaliação
  é pura e total sobre entradas bem formadas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class PredicateException(Exception):
    """Base class para exceções do Triage Predicates.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Contrato de avaliação
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class InvalidSubjectError(PredicateException):
    """Subject ausente ou de forma incompatível com o predicado."""


@dataclass(frozen=True, eq=False)
class InvalidPredicateError(PredicateException):
    """Objeto não satisfaz o contrato estrutural de Predicate."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class DuplicatePredicateNameError(PredicateException):
    """Dois predicados registrados sob o mesmo nome."""


@dataclass(frozen=True, eq=False)
class UnknownPredicateError(PredicateException):
    """Nome de predicado não registrado."""


# ---------------------------------------------------------------------------
# Regras declarativas
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class InvalidRuleError(PredicateException):
    """Expressão de regra com forma inválida (operador, aridade, tipo)."""


@dataclass(frozen=True, eq=False)
class UnknownReferenceError(PredicateException):
    """Regra referencia outra regra ou tag set inexistente."""


@dataclass(frozen=True, eq=False)
class CycleDetectedError(PredicateException):
    """Referências entre regras formam um ciclo."""

"""
Triage Predicates: Estruturas canônicas de erro (v1)

Este módulo define o payload serializável de erro usado quando uma falha
precisa ser registrada como dado (ex.: avaliação tabular com
`errors="record"`) em vez de propagada.

Erros são artefatos de diagnóstico e devem ser:

- explícitos
- serializáveis
- acionáveis
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import PredicateException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro.

    Campos:
    - type: código estável do erro (nome da classe da exceção)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo de tipos (v1)
# ---------------------------------------------------------------------------

EVALUATION_ERROR = "EVALUATION_ERROR"


def exception_to_payload(exc: Exception) -> ErrorPayload:
    """Converte exceções em ErrorPayload (serializável, acionável).

    Regras:
    - PredicateException: já vem com message/details/hint.
    - Outras exceções: encapsular como EVALUATION_ERROR sem expor stack trace.
    """
    if isinstance(exc, PredicateException):
        return ErrorPayload(
            type=exc.__class__.__name__,
            message=exc.message or "Erro de avaliação",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return ErrorPayload(
        type=EVALUATION_ERROR,
        message=str(exc) or "Erro inesperado durante avaliação",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o predicado customizado e o subject avaliado",
    )

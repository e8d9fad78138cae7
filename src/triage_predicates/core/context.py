"""
Contexto de avaliação compartilhado.

Este módulo define o `EvaluationContext`, a estrutura canônica utilizada
para registrar, de forma explícita e rastreável, o que aconteceu durante
uma rodada de avaliações (uma chamada de triagem, um lote tabular, etc.).

O EvaluationContext atua como o único meio de:
    - registro de logs estruturados de avaliação
    - coleta de warnings não fatais associados a regras

Princípios fundamentais:
    - Isolamento por rodada (cada rodada possui seu próprio contexto)
    - Ausência de estado global compartilhado (nenhum logger global)
    - Estrutura simples e testável

Invariantes:
    - Logs sempre incluem `run_id` e `rule_id`
    - Warnings são agrupados por `rule_id`
    - Predicados nunca recebem o contexto: apenas a fachada de avaliação
      escreve nele, preservando a pureza de `is_satisfied_by`

Limites explícitos:
    - Não avalia predicados
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

LOG_LEVELS = ("debug", "info", "warning", "error")

_EVENT_FIELDS = frozenset({"run_id", "rule_id", "level", "message", "timestamp"})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class EvaluationContext:
    """
    Contexto de uma rodada de avaliações.

    Consolida:
        - identidade da rodada (run_id, created_at)
        - configuração resolvida (quando houver rule set carregado)
        - eventos de log estruturados
        - warnings associados a regras específicas
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def new(
        cls,
        *,
        config: Optional[Dict[str, Any]] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> "EvaluationContext":
        return cls(
            run_id=uuid.uuid4().hex,
            created_at=_utc_now(),
            config=dict(config or {}),
            meta=dict(meta or {}),
        )

    def log(self, *, rule_id: str, level: str, message: str, **extra: Any) -> None:
        """
        Registra um evento estruturado.

        Campos extras (ex.: `subject`, `result`) são anexados ao evento, mas
        não podem sobrescrever os campos canônicos.

        Raises:
            ValueError: Nível fora de `LOG_LEVELS` ou campo canônico em `extra`.
        """
        if level not in LOG_LEVELS:
            raise ValueError(f"level deve ser um de {LOG_LEVELS}, recebido: {level!r}")
        reserved = _EVENT_FIELDS.intersection(extra)
        if reserved:
            raise ValueError(f"campos reservados em extra: {sorted(reserved)}")

        self.events.append(
            dict(
                run_id=self.run_id,
                rule_id=rule_id,
                level=level,
                message=message,
                timestamp=_utc_now().isoformat(),
                **extra,
            )
        )

    def add_warning(self, *, rule_id: str, message: str) -> None:
        self.warnings.setdefault(rule_id, []).append(message)

    def events_for(self, rule_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("rule_id") == rule_id]

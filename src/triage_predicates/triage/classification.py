# src/triage_predicates/triage/classification.py
"""
Classificação de pacientes em níveis de triagem.

A classificação percorre as regras em ordem de prioridade; a primeira
regra satisfeita determina o nível. Nenhuma regra satisfeita → ROUTINE.

    1. urgent      → TriageLevel.URGENT
    2. less_urgent → TriageLevel.LESS_URGENT
    3. (nenhuma)   → TriageLevel.ROUTINE
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from ..core.batch import subjects_from_frame
from ..core.context import EvaluationContext
from ..core.evaluation import evaluate
from ..core.predicate import Predicate
from ..core.subject import Subject
from .rules import less_urgent, urgent

CLASSIFY_RULE_ID = "triage.classify"
LEVEL_COLUMN = "triage_level"


class TriageLevel(str, Enum):
    URGENT = "urgent"
    LESS_URGENT = "less_urgent"
    ROUTINE = "routine"


DEFAULT_POLICY: Tuple[Tuple[TriageLevel, Predicate], ...] = (
    (TriageLevel.URGENT, urgent),
    (TriageLevel.LESS_URGENT, less_urgent),
)


def classify(
    patient: Subject,
    *,
    policy: Sequence[Tuple[TriageLevel, Predicate]] = DEFAULT_POLICY,
    ctx: Optional[EvaluationContext] = None,
) -> TriageLevel:
    """Retorna o nível da primeira regra satisfeita (ou ROUTINE)."""
    level = TriageLevel.ROUTINE
    for candidate, rule in policy:
        if evaluate(rule, patient, ctx=ctx):
            level = candidate
            break

    if ctx is not None:
        ctx.log(
            rule_id=CLASSIFY_RULE_ID,
            level="info",
            message="patient classified",
            subject=patient.name,
            triage_level=level.value,
        )
    return level


def classify_frame(
    df: pd.DataFrame,
    *,
    name_column: str = "name",
    tags_column: str = "symptoms",
    policy: Sequence[Tuple[TriageLevel, Predicate]] = DEFAULT_POLICY,
    ctx: Optional[EvaluationContext] = None,
) -> pd.DataFrame:
    """Cópia de `df` com a coluna `triage_level` (valores textuais de TriageLevel)."""
    patients = subjects_from_frame(df, name_column=name_column, tags_column=tags_column)
    levels: List[str] = [classify(p, policy=policy, ctx=ctx).value for p in patients]

    out = df.copy()
    out[LEVEL_COLUMN] = levels
    return out

# src/triage_predicates/triage/symptoms.py
"""
Catálogo de sintomas do exemplo de triagem.

Os sintomas são divididos em dois grupos:
    - comuns: FEVER, DRY_COUGH, FATIGUE
    - críticos: DIFFICULTY_BREATHING, CHEST_PAIN, LOSS_OF_SPEECH_OR_MOVEMENT

Os valores são strings (str Enum) para que possam ser usados diretamente
como tags de `Subject` e serializados sem conversão.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet


class Symptom(str, Enum):
    FEVER = "FEVER"
    DRY_COUGH = "DRY_COUGH"
    FATIGUE = "FATIGUE"
    DIFFICULTY_BREATHING = "DIFFICULTY_BREATHING"
    CHEST_PAIN = "CHEST_PAIN"
    LOSS_OF_SPEECH_OR_MOVEMENT = "LOSS_OF_SPEECH_OR_MOVEMENT"


COMMON_SYMPTOMS: FrozenSet[str] = frozenset(
    s.value for s in (Symptom.FEVER, Symptom.DRY_COUGH, Symptom.FATIGUE)
)

CRITICAL_SYMPTOMS: FrozenSet[str] = frozenset(
    s.value
    for s in (
        Symptom.DIFFICULTY_BREATHING,
        Symptom.CHEST_PAIN,
        Symptom.LOSS_OF_SPEECH_OR_MOVEMENT,
    )
)

# src/triage_predicates/triage/__init__.py
"""
Exemplo de domínio: triagem de pacientes por sintomas.

Ilustra o Specification Pattern com dois predicados atômicos
(todos os sintomas comuns / algum sintoma crítico) compostos em regras
de prioridade e aplicados a pacientes individuais ou a um DataFrame.
"""

from .classification import TriageLevel, classify, classify_frame
from .rules import (
    has_all_common_symptoms,
    has_any_critical_symptom,
    less_urgent,
    new_patient,
    urgent,
)
from .symptoms import COMMON_SYMPTOMS, CRITICAL_SYMPTOMS, Symptom

__all__ = [
    "COMMON_SYMPTOMS",
    "CRITICAL_SYMPTOMS",
    "Symptom",
    "TriageLevel",
    "classify",
    "classify_frame",
    "has_all_common_symptoms",
    "has_any_critical_symptom",
    "less_urgent",
    "new_patient",
    "urgent",
]

# src/triage_predicates/triage/rules.py
"""
Regras de triagem construídas com o Specification Pattern.

Predicados atômicos:
    - has_all_common_symptoms  → paciente apresenta todos os sintomas comuns
    - has_any_critical_symptom → paciente apresenta ao menos um sintoma crítico

Predicados compostos:
    - urgent      → has_any_critical_symptom
    - less_urgent → has_all_common_symptoms AND NOT has_any_critical_symptom

Os predicados são módulo-level, imutáveis e reutilizáveis.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..core.predicate import HasAllTags, HasAnyTag, Predicate
from ..core.subject import Subject
from .symptoms import COMMON_SYMPTOMS, CRITICAL_SYMPTOMS


has_all_common_symptoms: Predicate = HasAllTags(
    tags=COMMON_SYMPTOMS,
    name="has_all_common_symptoms",
)

has_any_critical_symptom: Predicate = HasAnyTag(
    tags=CRITICAL_SYMPTOMS,
    name="has_any_critical_symptom",
)

urgent: Predicate = has_any_critical_symptom

less_urgent: Predicate = has_all_common_symptoms.and_(has_any_critical_symptom.not_())


def new_patient(name: str, symptoms: Iterable[Any] = ()) -> Subject:
    """Cria o Subject de um paciente; sintomas podem ser `Symptom` ou strings."""
    return Subject(name=name, tags=symptoms)

# src/triage_predicates/__init__.py
"""
Triage Predicates: Specification Pattern para regras de negócio compostas.

Este pacote implementa um motor de composição de predicados: testes
booleanos atômicos sobre um subject são combinados com AND, OR e NOT,
com curto-circuito e aninhamento arbitrário, e avaliados por uma
caminhada recursiva na árvore.

O exemplo de domínio (`triage`) classifica pacientes pelos sintomas:

    >>> from triage_predicates.triage import new_patient, has_all_common_symptoms, has_any_critical_symptom
    >>> p = new_patient("Ana", ["FEVER", "DRY_COUGH", "FATIGUE"])
    >>> has_all_common_symptoms.and_(has_any_critical_symptom).is_satisfied_by(p)
    False
    >>> has_all_common_symptoms.or_(has_any_critical_symptom).is_satisfied_by(p)
    True

Arquitetura em alto nível:
    - core   → predicados, combinators, avaliação, regras declarativas
    - triage → sintomas, regras de prioridade e classificação

Limites explícitos:
    - Sem I/O além da leitura de rule sets declarativos
    - Sem estado global
"""

from .core import (
    AndPredicate,
    EvaluationContext,
    FunctionPredicate,
    HasAllTags,
    HasAnyTag,
    NotPredicate,
    OrPredicate,
    Predicate,
    PredicateKind,
    PredicateRegistry,
    Subject,
    all_of,
    and_,
    any_of,
    evaluate,
    explain,
    not_,
    or_,
    predicate,
)

__version__ = "0.1.0"

__all__ = [
    "AndPredicate",
    "EvaluationContext",
    "FunctionPredicate",
    "HasAllTags",
    "HasAnyTag",
    "NotPredicate",
    "OrPredicate",
    "Predicate",
    "PredicateKind",
    "PredicateRegistry",
    "Subject",
    "all_of",
    "and_",
    "any_of",
    "evaluate",
    "explain",
    "not_",
    "or_",
    "predicate",
]

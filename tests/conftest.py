# tests/conftest.py
"""
Fixtures compartilhados para testes do Triage Predicates.

Este módulo define fixtures reutilizáveis que fornecem:
- pacientes (Subjects) dos cenários canônicos de triagem
- predicados espiões que registram cada avaliação
- rule sets declarativos em YAML
- contexto de avaliação controlado (EvaluationContext)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do pacote são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - Predicados espiões usam FunctionPredicate (duck typing, sem herança)

Invariantes:
    - Nenhuma fixture realiza I/O (arquivos são escritos pelos testes em tmp_path)
    - Nenhuma fixture mantém estado entre testes

Este módulo existe como infraestrutura de teste e não
como validação funcional do motor.
"""

from datetime import datetime, timezone

import pytest


# =====================================================
# Subjects: cenários de triagem
# =====================================================

@pytest.fixture
def common_patient():
    """Paciente com todos os sintomas comuns e nenhum crítico."""
    from triage_predicates.core.subject import Subject

    return Subject(name="Ana", tags=["FEVER", "DRY_COUGH", "FATIGUE"])


@pytest.fixture
def critical_patient():
    """Paciente apenas com um sintoma crítico (CHEST_PAIN)."""
    from triage_predicates.core.subject import Subject

    return Subject(name="Bruno", tags=["CHEST_PAIN"])


@pytest.fixture
def empty_patient():
    """Paciente sem nenhuma tag."""
    from triage_predicates.core.subject import Subject

    return Subject(name="Carla", tags=[])


@pytest.fixture
def all_patients(common_patient, critical_patient, empty_patient):
    """
    Grade de subjects usada em testes de propriedades (leis booleanas).

    Inclui, além dos três cenários canônicos, um paciente com sintomas
    comuns e críticos ao mesmo tempo e um com sintomas parciais.
    """
    from triage_predicates.core.subject import Subject

    return [
        common_patient,
        critical_patient,
        empty_patient,
        Subject(name="Davi", tags=["FEVER", "DRY_COUGH", "FATIGUE", "CHEST_PAIN"]),
        Subject(name="Eva", tags=["FEVER"]),
    ]


# =====================================================
# Predicados espiões
# =====================================================

@pytest.fixture
def spy():
    """
    Fábrica de predicados espiões.

    Retorna um objeto com:
        - `make(name, result)`: cria um FunctionPredicate constante que
          registra `name` em `calls` a cada avaliação
        - `calls`: lista de nomes avaliados, em ordem

    Usado para observar curto-circuito sem depender de exceções.
    """
    from triage_predicates.core.predicate import FunctionPredicate

    class _Spy:
        def __init__(self):
            self.calls = []

        def make(self, name, result):
            def _fn(subject, _name=name, _result=result):
                self.calls.append(_name)
                return _result

            return FunctionPredicate(func=_fn, name=name)

    return _Spy()


@pytest.fixture
def exploding_predicate():
    """Predicado que falha se for avaliado (sentinela de curto-circuito)."""
    from triage_predicates.core.predicate import FunctionPredicate

    def _boom(subject):
        raise AssertionError("predicate must not be evaluated")

    return FunctionPredicate(func=_boom, name="boom")


# =====================================================
# Rule sets declarativos
# =====================================================

@pytest.fixture
def triage_rules_yaml() -> str:
    """
    Rule set de triagem equivalente às regras de `triage.rules`.

    Usado para validar carga, compilação e avaliação de regras declaradas
    em arquivo, incluindo referências entre regras.
    """
    return """
tag_sets:
  common: [FEVER, DRY_COUGH, FATIGUE]
  critical: [DIFFICULTY_BREATHING, CHEST_PAIN, LOSS_OF_SPEECH_OR_MOVEMENT]

rules:
  has_all_common: {all_tags: common}
  has_any_critical: {any_tags: critical}
  urgent: {ref: has_any_critical}
  less_urgent:
    and:
      - {ref: has_all_common}
      - {not: {ref: has_any_critical}}
  attention:
    or:
      - {ref: has_all_common}
      - {ref: has_any_critical}
""".lstrip()


@pytest.fixture
def local_rules_yaml() -> str:
    """Override local: adiciona LOSS_OF_TASTE aos sintomas comuns e uma regra nova."""
    return """
tag_sets:
  common: [FEVER, DRY_COUGH, FATIGUE, LOSS_OF_TASTE]

rules:
  isolated_fever: {all_tags: [FEVER]}
""".lstrip()


# =====================================================
# Contexto de avaliação
# =====================================================

@pytest.fixture
def ctx():
    """EvaluationContext determinístico (run_id e created_at fixos)."""
    from triage_predicates.core.context import EvaluationContext

    return EvaluationContext(
        run_id="run-test-0001",
        created_at=datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc),
        config={},
        meta={"source": "tests"},
    )

# tests/core/subject/test_subject_model.py
"""
Testes do modelo Subject.

Os testes asseguram que:
- tags são deduplicadas, normalizadas e imutáveis
- o conjunto de tags pode ser vazio
- entradas inválidas (nome vazio, string solta como tags, tag vazia) são rejeitadas
- a (de)serialização via dict é estável
"""

import dataclasses
from enum import Enum

import pytest

from triage_predicates.core.exceptions import InvalidSubjectError
from triage_predicates.core.subject import Subject, normalize_tag


class _Color(str, Enum):
    RED = "red"


def test_tags_are_deduplicated_and_normalized():
    s = Subject(name="Ana", tags=["fever", " FEVER ", "Dry_Cough"])
    assert s.tags == frozenset({"FEVER", "DRY_COUGH"})
    assert isinstance(s.tags, frozenset)


def test_empty_tags_are_allowed():
    assert Subject(name="Carla").tags == frozenset()
    assert Subject(name="Carla", tags=[]).tags == frozenset()


def test_enum_tags_use_value():
    assert normalize_tag(_Color.RED) == "RED"
    assert Subject(name="x", tags=[_Color.RED]).has_tag("red")


def test_subject_is_immutable():
    s = Subject(name="Ana", tags=["FEVER"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.name = "Outra"  # type: ignore[misc]


def test_equality_ignores_order_case_and_repetition():
    a = Subject(name="Ana", tags=["FEVER", "FATIGUE"])
    b = Subject(name="Ana", tags=["fatigue", "fever", "FEVER"])
    assert a == b
    assert hash(a) == hash(b)


def test_membership_queries():
    s = Subject(name="Ana", tags=["FEVER", "DRY_COUGH"])
    assert s.has_tag("fever")
    assert s.has_all(["FEVER", "DRY_COUGH"])
    assert not s.has_all(["FEVER", "FATIGUE"])
    assert s.has_any(["FATIGUE", "DRY_COUGH"])
    assert not s.has_any(["CHEST_PAIN"])


@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_invalid_name_is_rejected(name):
    with pytest.raises(InvalidSubjectError):
        Subject(name=name, tags=[])  # type: ignore[arg-type]


def test_bare_string_tags_are_rejected():
    """Uma string solta seria iterada caractere a caractere."""
    with pytest.raises(InvalidSubjectError):
        Subject(name="Ana", tags="FEVER")  # type: ignore[arg-type]


@pytest.mark.parametrize("bad", ["", "  ", 3, None])
def test_invalid_tag_is_rejected(bad):
    with pytest.raises(InvalidSubjectError):
        Subject(name="Ana", tags=["FEVER", bad])


def test_mapping_round_trip():
    s = Subject.from_mapping({"name": "Ana", "tags": ["fatigue", "FEVER"]})
    assert s.to_dict() == {"name": "Ana", "tags": ["FATIGUE", "FEVER"]}
    assert Subject.from_mapping(s.to_dict()) == s


def test_mapping_without_name_is_rejected():
    with pytest.raises(InvalidSubjectError) as exc:
        Subject.from_mapping({"tags": ["FEVER"]})
    assert exc.value.details["keys"] == ["tags"]

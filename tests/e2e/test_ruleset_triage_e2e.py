# tests/e2e/test_ruleset_triage_e2e.py
"""
Teste end-to-end: rule set em arquivo → compilação → triagem em lote.

Fluxo validado:
    1. defaults + override local em YAML
    2. load_rule_set (merge, planejamento, compilação, hash)
    3. regras compiladas equivalentes às regras em código
    4. evaluate_frame e classify com políticas vindas do rule set
"""

from pathlib import Path

import pandas as pd

from triage_predicates.core.batch import evaluate_frame
from triage_predicates.core.config.hashing import compute_config_hash
from triage_predicates.core.evaluation import explain
from triage_predicates.core.rules import load_rule_set
from triage_predicates.triage import TriageLevel, classify, new_patient
from triage_predicates.triage import less_urgent as code_less_urgent
from triage_predicates.triage import urgent as code_urgent


def _write(tmp_path: Path, name: str, text: str) -> str:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_file_rules_match_code_rules(tmp_path: Path, triage_rules_yaml, all_patients):
    rs = load_rule_set(defaults_path=_write(tmp_path, "rules.yaml", triage_rules_yaml))

    for s in all_patients:
        assert rs.get("urgent").is_satisfied_by(s) == code_urgent.is_satisfied_by(s)
        assert rs.get("less_urgent").is_satisfied_by(s) == code_less_urgent.is_satisfied_by(s)
    assert rs.config_hash == compute_config_hash(rs.config)


def test_local_override_changes_behaviour_and_hash(tmp_path: Path, triage_rules_yaml, local_rules_yaml):
    defaults = _write(tmp_path, "rules.yaml", triage_rules_yaml)
    local = _write(tmp_path, "rules.local.yaml", local_rules_yaml)

    base = load_rule_set(defaults_path=defaults)
    merged = load_rule_set(defaults_path=defaults, local_path=local)

    p = new_patient("Ana", ["FEVER", "DRY_COUGH", "FATIGUE"])
    assert base.get("has_all_common").is_satisfied_by(p) is True
    assert merged.get("has_all_common").is_satisfied_by(p) is False
    assert "isolated_fever" in merged.registry
    assert base.config_hash != merged.config_hash


def test_batch_triage_with_file_rules(tmp_path: Path, triage_rules_yaml, ctx):
    rs = load_rule_set(defaults_path=_write(tmp_path, "rules.yaml", triage_rules_yaml))
    df = pd.DataFrame(
        {
            "name": ["Ana", "Bruno", "Carla"],
            "tags": [["FEVER", "DRY_COUGH", "FATIGUE"], ["CHEST_PAIN"], []],
        }
    )

    out = evaluate_frame(df, rs.registry, ctx=ctx)

    assert out["urgent"].tolist() == [False, True, False]
    assert out["less_urgent"].tolist() == [True, False, False]
    assert out["attention"].tolist() == [True, True, False]

    policy = [(TriageLevel.URGENT, rs.get("urgent")), (TriageLevel.LESS_URGENT, rs.get("less_urgent"))]
    assert classify(new_patient("Bruno", ["CHEST_PAIN"]), policy=policy) is TriageLevel.URGENT

    trace = explain(rs.get("less_urgent"), new_patient("Bruno", ["CHEST_PAIN"]))
    assert trace.result is False
    assert trace.children[1].evaluated is False

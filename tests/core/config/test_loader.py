# tests/core/config/test_loader.py
"""
Testes do carregador de rule sets (load_config).

Os testes asseguram que:
- o arquivo defaults é obrigatório
- o arquivo local é opcional e, quando presente, tem prioridade
- formatos não suportados e raízes inválidas são rejeitados
- arquivos vazios equivalem a um mapa vazio

Limites explícitos:
    - Não valida a forma das regras (ver tests/core/rules)
"""

import json
from pathlib import Path

import pytest

try:
    from triage_predicates.core.config.loader import load_config
    from triage_predicates.core.config.errors import (
        ConfigTypeConflictError,
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        InvalidRuleSetSectionError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader e suas exceções tipadas estejam disponíveis.

    Falha imediatamente com mensagem explícita, evitando erros indiretos
    quando o módulo ainda não existe.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/triage_predicates/core/config/loader.py (load_config)\n"
            "- src/triage_predicates/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_defaults_raises(tmp_path: Path):
    """A ausência do arquivo defaults é erro fatal."""
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(tmp_path / "rules.yaml"), local_path=None)


def test_load_defaults_only(tmp_path: Path, triage_rules_yaml):
    """
    Verifica o carregamento do rule set base sem overrides.

    Invariantes:
        - tag sets e regras são preservados integralmente
        - o retorno é um dict puro
    """
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    defaults.write_text(triage_rules_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults))

    assert isinstance(out, dict)
    assert out["tag_sets"]["common"] == ["FEVER", "DRY_COUGH", "FATIGUE"]
    assert out["rules"]["has_any_critical"] == {"any_tags": "critical"}
    assert out["rules"]["less_urgent"]["and"][1] == {"not": {"ref": "has_any_critical"}}


def test_missing_local_is_ok(tmp_path: Path, triage_rules_yaml):
    """O arquivo local é opcional: caminho inexistente é ignorado."""
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    defaults.write_text(triage_rules_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert "isolated_fever" not in out["rules"]


def test_local_overrides_defaults(tmp_path: Path, triage_rules_yaml, local_rules_yaml):
    """
    Verifica a precedência do override local sobre defaults.

    Decisões arquiteturais:
        - listas (tag sets) são sobrescritas integralmente
        - regras novas são adicionadas; regras existentes são preservadas
    """
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    local = tmp_path / "rules.local.yaml"
    defaults.write_text(triage_rules_yaml, encoding="utf-8")
    local.write_text(local_rules_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))

    assert out["tag_sets"]["common"] == ["FEVER", "DRY_COUGH", "FATIGUE", "LOSS_OF_TASTE"]
    assert out["tag_sets"]["critical"][1] == "CHEST_PAIN"
    assert out["rules"]["isolated_fever"] == {"all_tags": ["FEVER"]}
    assert "urgent" in out["rules"]


def test_json_is_supported(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "rules.json"
    defaults.write_text(json.dumps({"rules": {"x": {"any_tags": ["A"]}}}), encoding="utf-8")

    out = load_config(defaults_path=str(defaults))
    assert out == {"rules": {"x": {"any_tags": ["A"]}}}


def test_empty_file_is_empty_dict(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    defaults.write_text("", encoding="utf-8")

    assert load_config(defaults_path=str(defaults)) == {}


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "rules.toml"
    defaults.write_text("x = 1", encoding="utf-8")

    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults))


def test_non_dict_root_raises(tmp_path: Path):
    """Raiz em lista não é um rule set válido."""
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    defaults.write_text("- FEVER\n- CHEST_PAIN\n", encoding="utf-8")

    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults))




def test_type_conflict_outside_rule_sections_raises(tmp_path: Path, triage_rules_yaml):
    """Chaves fora de `tag_sets`/`rules` seguem o deep-merge com checagem de tipo."""
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(triage_rules_yaml + "meta:\n  owner: triage\n", encoding="utf-8")
    local.write_text("meta: triage\n", encoding="utf-8")

    with pytest.raises(ConfigTypeConflictError):
        load_config(defaults_path=str(defaults), local_path=str(local))


@pytest.mark.parametrize(
    "text, section",
    [
        ("tag_sets: FEVER\n", "tag_sets"),
        ("rules: [urgent]\n", "rules"),
        ("tag_sets:\n  common: FEVER\n", "tag_sets.common"),
    ],
)
def test_invalid_sections_are_rejected_at_load(tmp_path: Path, triage_rules_yaml, text, section):
    """
    A forma das seções é validada em cada arquivo, antes do merge.

    Invariantes:
        - o erro aponta a seção e o arquivo de origem
    """
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(triage_rules_yaml, encoding="utf-8")
    local.write_text(text, encoding="utf-8")

    with pytest.raises(InvalidRuleSetSectionError) as exc:
        load_config(defaults_path=str(defaults), local_path=str(local))
    assert exc.value.section == section
    assert exc.value.source == str(local)


def test_local_rule_replaces_default_expression(tmp_path: Path, triage_rules_yaml):
    """
    Uma regra local substitui a expressão inteira do defaults.

    Fundir `{and: [...]}` com `{or: [...]}` produziria uma expressão com
    dois operadores; a substituição por nome evita isso.
    """
    _require_imports()
    defaults = tmp_path / "rules.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(triage_rules_yaml, encoding="utf-8")
    local.write_text(
        "rules:\n  less_urgent:\n    or:\n      - {ref: has_all_common}\n      - {ref: urgent}\n",
        encoding="utf-8",
    )

    out = load_config(defaults_path=str(defaults), local_path=str(local))

    assert out["rules"]["less_urgent"] == {"or": [{"ref": "has_all_common"}, {"ref": "urgent"}]}
    assert out["rules"]["attention"]["or"][0] == {"ref": "has_all_common"}


def test_errors_carry_source_path(tmp_path: Path):
    _require_imports()
    missing = tmp_path / "rules.yaml"
    with pytest.raises(DefaultsNotFoundError) as exc:
        load_config(defaults_path=str(missing))
    assert exc.value.source == str(missing)
    assert str(missing) in str(exc.value)

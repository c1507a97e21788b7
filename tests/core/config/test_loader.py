# tests/core/config/test_loader.py
"""
Testes do load_config do sitepipe.

Cobertura:
- o defaults distribuído no pacote traz todas as seções do builder
  (`site`, `markdown`, `templates`, `listing`)
- overrides locais em YAML e JSON, inclusive `null` para desligar o
  timeout de template
- arquivo local ausente é ignorado; defaults ausente é fatal
- extensões e raízes inválidas viram erros tipados (ConfigError)
"""

import json
from pathlib import Path

import pytest

try:
    from sitepipe.core.config.loader import DEFAULTS_PATH, load_config
    from sitepipe.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando o loader ou suas exceções tipadas não existem."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/sitepipe/core/config/loader.py (load_config)\n"
            "- src/sitepipe/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_packaged_defaults_exist_and_load():
    """
    Verifica que o defaults distribuído com o pacote é carregado sem argumentos.

    Invariantes:
        - Todas as seções consumidas pelo builder estão presentes
        - Os nomes de diretório padrão seguem o layout do site
    """
    _require_imports()
    assert DEFAULTS_PATH.exists()

    cfg = load_config()

    assert set(cfg) >= {"site", "markdown", "templates", "listing"}
    assert cfg["site"]["directories"] == {
        "static": "static",
        "images": "images",
        "templates": "templates",
        "posts": "posts",
    }
    assert cfg["listing"]["output_path"] == "index.html"
    assert cfg["templates"]["ready_timeout_seconds"] == 30


def test_missing_defaults_raises(tmp_path: Path):
    """
    Verifica que um defaults explícito inexistente é erro fatal.

    Limites explícitos:
        - Não valida a mensagem da exceção
    """
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=tmp_path / "nope.yaml")


def test_local_override_yaml(tmp_path: Path):
    """Verifica que o local (YAML) sobrescreve apenas as chaves declaradas."""
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("site:\n  output_dir: public\nlisting:\n  descending: false\n", encoding="utf-8")

    cfg = load_config(local_path=local)

    assert cfg["site"]["output_dir"] == "public"
    assert cfg["site"]["source_dir"] == "site"
    assert cfg["listing"]["descending"] is False
    assert cfg["listing"]["sort_by"] == "date"


def test_local_override_json(tmp_path: Path):
    """Verifica que o local em JSON é aceito e que `null` desliga o timeout."""
    _require_imports()
    local = tmp_path / "local.json"
    local.write_text(json.dumps({"templates": {"ready_timeout_seconds": None}}), encoding="utf-8")

    cfg = load_config(local_path=local)

    assert cfg["templates"]["ready_timeout_seconds"] is None
    assert cfg["templates"]["post"] == "post.jinja"


def test_missing_local_is_ignored(tmp_path: Path):
    _require_imports()
    assert load_config(local_path=tmp_path / "absent.yaml") == load_config()


def test_empty_defaults_is_empty_dict(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("", encoding="utf-8")
    assert load_config(defaults_path=defaults) == {}


def test_unsupported_format_raises(tmp_path: Path):
    """
    Verifica que extensões fora de YAML/JSON são rejeitadas.

    Decisões arquiteturais:
        - O formato é decidido pela extensão, nunca pelo conteúdo
    """
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("site = 1\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=defaults)


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=defaults)

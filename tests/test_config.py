"""
config 載入 / 驗證測試
"""
import json

from figma_html.config import load_config, resolve_token, validate_config


def _write_config(tmp_path, data):
    path = tmp_path / "figma-html.config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_missing_file_returns_empty(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == {}


def test_valid_config_loads_silently(tmp_path, capsys):
    cfg = {
        "figma": {"fileKey": "ABC"},
        "export": {"outputDir": "./out", "outputType": "html", "archive": True},
        "images": {"format": "svg", "scale": 2},
    }
    assert load_config(_write_config(tmp_path, cfg)) == cfg
    assert capsys.readouterr().out == ""


def test_non_object_config_is_ignored(tmp_path, capsys):
    assert load_config(_write_config(tmp_path, ["not", "an", "object"])) == {}
    assert "[config]" in capsys.readouterr().out


def test_unknown_keys_warn(capsys):
    validate_config({"figmaa": {}, "export": {"outputDri": "x"}})
    out = capsys.readouterr().out
    assert "'figmaa'" in out
    assert "[export] 未知欄位 'outputDri'" in out


def test_bad_values_warn(capsys):
    validate_config({
        "export": {"outputType": "react", "includeImages": "yes"},
        "images": {"format": "gif", "scale": 10},
        "figma": "token",
    })
    out = capsys.readouterr().out
    assert "outputType 'react'" in out
    assert "export.includeImages" in out
    assert "images.format 'gif'" in out
    assert "images.scale" in out
    assert "'figma' 應為 JSON 物件" in out


def test_resolve_token_prefers_config(monkeypatch):
    monkeypatch.setenv("FIGMA_TOKEN", "from-env")
    assert resolve_token({"figma": {"personalAccessToken": "from-config"}}) == "from-config"
    assert resolve_token({}) == "from-env"
    monkeypatch.delenv("FIGMA_TOKEN")
    assert resolve_token({"figma": "broken"}) == ""

"""設定檔載入與基本驗證."""

import json
import os
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = "figma-html.config.json"


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


# 環境變數設定（HTTP 逾時秒數、圖片下載並行數）
FIGMA_HTTP_TIMEOUT = _float("FIGMA_HTTP_TIMEOUT", 60.0)
DOWNLOAD_WORKERS = _int("FIGMA_HTML_DOWNLOAD_WORKERS", 8)

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "export", "images"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey"},
    "export": {"outputDir", "outputType", "archive", "includeImages"},
    "images": {"format", "scale"},
}

_VALID_OUTPUT_TYPES = {"html", "css", "both"}
_VALID_IMAGE_FORMATS = {"png", "jpg", "svg", "pdf"}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    export = cfg.get("export", {}) if isinstance(cfg.get("export"), dict) else {}
    output_type = export.get("outputType")
    if output_type and output_type not in _VALID_OUTPUT_TYPES:
        valid = ", ".join(sorted(_VALID_OUTPUT_TYPES))
        _warn(f"export.outputType '{output_type}' 不在已知值中（{valid}）")
    for flag in ("archive", "includeImages"):
        val = export.get(flag)
        if val is not None and not isinstance(val, bool):
            _warn(f"export.{flag} 應為 true/false，目前是 {type(val).__name__}")

    images = cfg.get("images", {}) if isinstance(cfg.get("images"), dict) else {}
    fmt = images.get("format")
    if fmt and fmt not in _VALID_IMAGE_FORMATS:
        valid = ", ".join(sorted(_VALID_IMAGE_FORMATS))
        _warn(f"images.format '{fmt}' 不在已知值中（{valid}）")
    scale = images.get("scale")
    if scale is not None and (isinstance(scale, bool) or not isinstance(scale, (int, float)) or not 0.01 <= scale <= 4):
        _warn(f"images.scale 應為 0.01–4 之間的數字，目前是 {scale!r}")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        _warn(f"'{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def resolve_token(cfg: dict) -> str:
    """config 的 figma.personalAccessToken 優先，其次 FIGMA_TOKEN 環境變數."""
    figma_cfg = cfg.get("figma", {}) if isinstance(cfg.get("figma"), dict) else {}
    return figma_cfg.get("personalAccessToken") or os.environ.get("FIGMA_TOKEN", "")

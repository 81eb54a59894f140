"""
/**
 * @file backend/config/settings.py
 * @description 后端配置加载与合并（config.json + config.local.json）。
 */
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from backend.utils.validators import is_valid_langpair


REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(REPO_ROOT, "config.json")
CONFIG_LOCAL_PATH = os.path.join(REPO_ROOT, "config.local.json")
CONFIG_EXAMPLE_PATH = os.path.join(REPO_ROOT, "config.example.json")

DEFAULT_ENDPOINTS = {
    "grammar": "https://api.languagetoolplus.com/v2/check",
    "translation": "https://api.mymemory.translated.net/get",
}

DEFAULT_MESSAGES = {
    "grammar_failed": "Grammar correction failed. Please try again.",
    "translation_failed": "Translation failed. Please try again.",
}

GRAMMAR_PROVIDERS = ("languagetool", "local")
TRANSLATION_PROVIDERS = ("mymemory", "dictionary")
DEFAULT_DEBOUNCE_MS = 1200

logger = logging.getLogger("config_loader")


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            value = json.load(f)
            return value if isinstance(value, dict) else {}
    except FileNotFoundError:
        return {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    @property
    def endpoints(self) -> Dict[str, str]:
        merged = dict(DEFAULT_ENDPOINTS)
        for key, value in _section(self.raw, "endpoints").items():
            if isinstance(value, str) and value.strip():
                merged[key] = value.strip()
        return merged

    @property
    def api_keys(self) -> Dict[str, str]:
        return _section(self.raw, "api_keys")

    @property
    def providers(self) -> Dict[str, str]:
        return _section(self.raw, "providers")

    @property
    def grammar_provider(self) -> str:
        value = str(self.providers.get("grammar", "") or "").strip().lower()
        return value if value in GRAMMAR_PROVIDERS else GRAMMAR_PROVIDERS[0]

    @property
    def translation_provider(self) -> str:
        value = str(self.providers.get("translation", "") or "").strip().lower()
        return value if value in TRANSLATION_PROVIDERS else TRANSLATION_PROVIDERS[0]

    @property
    def language(self) -> str:
        value = _section(self.raw, "grammar").get("language")
        return value if isinstance(value, str) and value.strip() else "en-US"

    @property
    def langpair(self) -> str:
        value = _section(self.raw, "translation").get("langpair")
        if isinstance(value, str) and is_valid_langpair(value):
            return value.strip()
        return "en|hi"

    @property
    def debounce_ms(self) -> int:
        value = _section(self.raw, "pipeline").get("debounce_ms", DEFAULT_DEBOUNCE_MS)
        if isinstance(value, bool):
            return DEFAULT_DEBOUNCE_MS
        try:
            ms = int(value)
        except (TypeError, ValueError):
            return DEFAULT_DEBOUNCE_MS
        return ms if ms >= 0 else DEFAULT_DEBOUNCE_MS

    @property
    def max_notifications(self) -> int:
        value = _section(self.raw, "pipeline").get("max_notifications", 20)
        return value if isinstance(value, int) and value > 0 else 20

    @property
    def session_ttl_s(self) -> int:
        value = _section(self.raw, "pipeline").get("session_ttl_s", 3600)
        return value if isinstance(value, int) and value > 0 else 3600

    @property
    def request_timeout(self) -> Optional[float]:
        # None 表示沿用 requests 默认行为（不设超时）
        value = _section(self.raw, "http").get("timeout")
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return float(value)
        return None

    @property
    def messages(self) -> Dict[str, str]:
        merged = dict(DEFAULT_MESSAGES)
        for key, value in _section(self.raw, "messages").items():
            if isinstance(value, str) and value:
                merged[key] = value
        return merged

    def resolve_mymemory_email(self) -> Optional[str]:
        return os.getenv("MYMEMORY_EMAIL") or (
            self.api_keys.get("mymemory_email") if isinstance(self.api_keys.get("mymemory_email"), str) else None
        )

    def resolve_languagetool_credentials(self) -> Optional[Dict[str, str]]:
        username = os.getenv("LANGUAGETOOL_USERNAME") or self.api_keys.get("languagetool_username")
        api_key = os.getenv("LANGUAGETOOL_API_KEY") or self.api_keys.get("languagetool_api_key")
        if isinstance(username, str) and username and isinstance(api_key, str) and api_key:
            return {"username": username, "apiKey": api_key}
        return None

    def public_view(self) -> Dict[str, Any]:
        return {
            "endpoints": self.endpoints,
            "providers": {"grammar": self.grammar_provider, "translation": self.translation_provider},
            "language": self.language,
            "langpair": self.langpair,
            "debounce_ms": self.debounce_ms,
            "request_timeout": self.request_timeout,
            "messages": self.messages,
        }


_CACHED_SETTINGS: Optional[Settings] = None
_CONFIG_HASH = ""
_SETTINGS_LOCK = threading.Lock()


def _deep_diff(d1: Dict[str, Any], d2: Dict[str, Any], path="") -> list:
    diffs = []
    for k in sorted(set(d1.keys()) | set(d2.keys())):
        p = f"{path}.{k}" if path else k
        if k not in d1:
            diffs.append(f"Added: {p}")
        elif k not in d2:
            diffs.append(f"Removed: {p}")
        elif isinstance(d1[k], dict) and isinstance(d2[k], dict):
            diffs.extend(_deep_diff(d1[k], d2[k], p))
        elif d1[k] != d2[k]:
            # api_keys 下的值不写入日志
            if p.startswith("api_keys"):
                diffs.append(f"Changed: {p}")
            else:
                diffs.append(f"Changed: {p} ({d1[k]} -> {d2[k]})")
    return diffs


def reload_settings(
    base_path: str = CONFIG_PATH,
    local_path: str = CONFIG_LOCAL_PATH,
    example_path: str = CONFIG_EXAMPLE_PATH,
) -> Settings:
    """
    Re-read the config files and swap in new settings when the content changed.
    Always reads from disk; debouncing of file events lives in ConfigWatcher.
    """
    global _CACHED_SETTINGS, _CONFIG_HASH

    with _SETTINGS_LOCK:
        try:
            base_cfg = _load_json(base_path)
            if not base_cfg.get("endpoints") and os.path.exists(example_path):
                base_cfg = _merge_dicts(_load_json(example_path), base_cfg)

            local_cfg = _load_json(local_path)
            merged = _merge_dicts(base_cfg, local_cfg)

            # Sort keys to ensure consistent hash for same content
            new_hash = hashlib.md5(json.dumps(merged, sort_keys=True).encode("utf-8")).hexdigest()

            if _CACHED_SETTINGS and new_hash == _CONFIG_HASH:
                return _CACHED_SETTINGS

            is_reload = _CACHED_SETTINGS is not None
            if is_reload:
                diffs = _deep_diff(_CACHED_SETTINGS.raw, merged)
                if diffs:
                    logger.info(f"Config changes detected: {'; '.join(diffs)}")

            _CACHED_SETTINGS = Settings(raw=merged)
            _CONFIG_HASH = new_hash

            if is_reload:
                logger.info("Configuration reloaded successfully.")

        except Exception as e:
            logger.error(f"Failed to reload config: {e}. Keeping old config.")
            if not _CACHED_SETTINGS:
                logger.warning("Initializing with empty settings due to load failure.")
                _CACHED_SETTINGS = Settings(raw={})

    return _CACHED_SETTINGS


def load_settings() -> Settings:
    """
    Get current settings. Lazy loads on first call.
    Subsequent reloads are handled by the file watcher calling reload_settings().
    """
    if _CACHED_SETTINGS is None:
        return reload_settings()
    return _CACHED_SETTINGS

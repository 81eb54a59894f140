"""
/**
 * @file backend/services/languagetool_client_service.py
 * @description LanguageTool 调用封装：POST /v2/check，返回 matches。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from backend.config import Settings, load_settings
from backend.services.errors import MalformedResponseError


logger = logging.getLogger(__name__)


def apply_corrections(text: str, matches: Any) -> str:
    """
    Apply the first suggested replacement of every match to ``text``.

    Matches are spliced back-to-front (descending offset) so that a splice
    never moves the offsets of the matches still to be applied.
    A missing or non-list ``matches`` means there is nothing to correct.
    """
    if not isinstance(matches, list):
        return text

    corrections: List[Dict[str, Any]] = []
    for m in matches:
        if not isinstance(m, dict):
            raise MalformedResponseError("match entry is not an object")
        replacements = m.get("replacements")
        if not isinstance(replacements, list) or not replacements:
            continue
        first = replacements[0]
        offset = m.get("offset")
        length = m.get("length")
        if not isinstance(first, dict) or not isinstance(first.get("value"), str):
            raise MalformedResponseError("replacement without a string value")
        if isinstance(offset, bool) or not isinstance(offset, int) or isinstance(length, bool) or not isinstance(length, int):
            raise MalformedResponseError("match offset/length must be integers")
        if offset < 0 or length < 0:
            raise MalformedResponseError("match offset/length must not be negative")
        corrections.append({"offset": offset, "length": length, "replacement": first["value"]})

    corrections.sort(key=lambda c: c["offset"], reverse=True)

    # LanguageTool 的 offset/length 以 UTF-16 code unit 计数，按 UTF-16 字节切片
    buf = text.encode("utf-16-le", errors="surrogatepass")
    for c in corrections:
        start, end = c["offset"] * 2, (c["offset"] + c["length"]) * 2
        buf = buf[:start] + c["replacement"].encode("utf-16-le", errors="surrogatepass") + buf[end:]
    try:
        return buf.decode("utf-16-le")
    except UnicodeDecodeError as e:
        raise MalformedResponseError(f"match splits a surrogate pair: {e}")


class LanguageToolClient:
    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self._initial_settings = settings
        self._session = session or requests

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @property
    def endpoint(self) -> str:
        return self.settings.endpoints["grammar"]

    def _build_form(self, text: str) -> Dict[str, str]:
        form = {"language": self.settings.language, "text": text}
        creds = self.settings.resolve_languagetool_credentials()
        if creds:
            form.update(creds)
        return form

    def check(self, text: str) -> Dict[str, Any]:
        """POST the text and return ``{"status": "success", "matches": [...]}`` or an error dict."""
        try:
            # requests 会以 application/x-www-form-urlencoded 编码 data
            response = self._session.post(
                self.endpoint,
                data=self._build_form(text),
                headers={"Accept": "application/json"},
                timeout=self.settings.request_timeout,
            )
            if not response.ok:
                logger.warning(f"LanguageTool returned HTTP {response.status_code}")
                return {"status": "error", "code": response.status_code, "message": response.text}
            data = response.json()
            if not isinstance(data, dict):
                return {"status": "error", "message": "Unexpected response body"}
            return {"status": "success", "matches": data.get("matches")}
        except ValueError as e:
            # JSONDecodeError 是 ValueError 的子类
            logger.warning(f"LanguageTool response is not JSON: {e}")
            return {"status": "error", "message": f"Invalid JSON: {e}"}
        except requests.RequestException as e:
            logger.warning(f"LanguageTool request failed: {e}")
            return {"status": "error", "message": str(e)}

    def correct(self, text: str) -> Dict[str, Any]:
        result = self.check(text)
        if result.get("status") != "success":
            return result
        try:
            return {"status": "success", "output": apply_corrections(text, result.get("matches"))}
        except MalformedResponseError as e:
            logger.warning(f"LanguageTool payload malformed: {e}")
            return {"status": "error", "message": str(e)}

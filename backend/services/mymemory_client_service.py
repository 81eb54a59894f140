"""
/**
 * @file backend/services/mymemory_client_service.py
 * @description MyMemory 翻译接口封装：GET /get?q=...&langpair=en|hi。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from backend.config import Settings, load_settings
from backend.services.errors import MalformedResponseError


logger = logging.getLogger(__name__)


def extract_translation(data: Any) -> str:
    if not isinstance(data, dict):
        raise MalformedResponseError("response body is not an object")
    status = data.get("responseStatus")
    if status != 200 or isinstance(status, bool):
        raise MalformedResponseError(f"responseStatus={status!r}", code=status if isinstance(status, int) else None)
    response_data = data.get("responseData")
    if not isinstance(response_data, dict) or not isinstance(response_data.get("translatedText"), str):
        raise MalformedResponseError("responseData.translatedText missing")
    return response_data["translatedText"]


class MyMemoryClient:
    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self._initial_settings = settings
        self._session = session or requests

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @property
    def endpoint(self) -> str:
        return self.settings.endpoints["translation"]

    def _build_params(self, text: str) -> Dict[str, str]:
        params = {"q": text, "langpair": self.settings.langpair}
        email = self.settings.resolve_mymemory_email()
        if email:
            params["de"] = email
        return params

    def translate(self, text: str) -> Dict[str, Any]:
        try:
            response = self._session.get(
                self.endpoint,
                params=self._build_params(text),
                timeout=self.settings.request_timeout,
            )
            if not response.ok:
                logger.warning(f"MyMemory returned HTTP {response.status_code}")
                return {"status": "error", "code": response.status_code, "message": response.text}
            return {"status": "success", "output": extract_translation(response.json())}
        except MalformedResponseError as e:
            logger.warning(f"MyMemory payload rejected: {e}")
            result = {"status": "error", "message": str(e)}
            if e.code:
                result["code"] = e.code
            return result
        except ValueError as e:
            logger.warning(f"MyMemory response is not JSON: {e}")
            return {"status": "error", "message": f"Invalid JSON: {e}"}
        except requests.RequestException as e:
            logger.warning(f"MyMemory request failed: {e}")
            return {"status": "error", "message": str(e)}

"""
/**
 * @file backend/services/translation_service.py
 * @description 英译印地语服务（MyMemory 或本地词典），失败时返回兜底文案。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from backend.config import Settings, load_settings
from backend.services.dictionary_translation_service import translate_with_dictionary
from backend.services.mymemory_client_service import MyMemoryClient
from backend.utils import is_blank


logger = logging.getLogger("translation_service")


def translate_en_hi(
    text: str,
    client: Optional[MyMemoryClient] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    s = settings or load_settings()
    if is_blank(text):
        return {"status": "success", "output": ""}

    if s.translation_provider == "dictionary" and client is None:
        return {"status": "success", "output": translate_with_dictionary(text)}

    h = client or MyMemoryClient(settings=s)
    try:
        result = h.translate(text)
    except Exception as e:
        logger.exception("Translation client raised unexpectedly")
        result = {"status": "error", "message": str(e)}

    if result.get("status") == "success" and isinstance(result.get("output"), str):
        return {"status": "success", "output": result["output"]}

    failure = {
        "status": "error",
        "output": s.messages["translation_failed"],
        "message": result.get("message", "Translation API failed"),
    }
    if isinstance(result.get("code"), int):
        failure["code"] = result["code"]
    logger.warning(f"Translation failed: {failure['message']}")
    return failure

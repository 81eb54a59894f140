"""
/**
 * @file backend/services/grammar_service.py
 * @description 英文语法修正服务（LanguageTool 或本地规则），失败时返回兜底文案。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from backend.config import Settings, load_settings
from backend.services.languagetool_client_service import LanguageToolClient
from backend.services.local_grammar_service import fix_grammar_locally
from backend.utils import is_blank


logger = logging.getLogger("grammar_service")


def correct_grammar(
    text: str,
    client: Optional[LanguageToolClient] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    s = settings or load_settings()
    if is_blank(text):
        return {"status": "success", "output": ""}

    if s.grammar_provider == "local" and client is None:
        return {"status": "success", "output": fix_grammar_locally(text)}

    h = client or LanguageToolClient(settings=s)
    try:
        result = h.correct(text)
    except Exception as e:
        logger.exception("Grammar client raised unexpectedly")
        result = {"status": "error", "message": str(e)}

    if result.get("status") == "success" and isinstance(result.get("output"), str):
        return {"status": "success", "output": result["output"]}

    failure = {
        "status": "error",
        "output": s.messages["grammar_failed"],
        "message": result.get("message", "Grammar API failed"),
    }
    if isinstance(result.get("code"), int):
        failure["code"] = result["code"]
    logger.warning(f"Grammar correction failed: {failure['message']}")
    return failure

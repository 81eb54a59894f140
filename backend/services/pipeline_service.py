"""
/**
 * @file backend/services/pipeline_service.py
 * @description 两阶段处理流水线：语法修正 -> 翻译（翻译的是修正后的文本）。
 */
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from backend.config import Settings, load_settings
from backend.services.errors import GrammarServiceError, TranslationServiceError
from backend.services.grammar_service import correct_grammar
from backend.services.translation_service import translate_en_hi
from backend.utils import is_blank


logger = logging.getLogger(__name__)

StageFunc = Callable[..., Dict[str, Any]]


@dataclass
class PipelineResult:
    corrected: str
    translated: str
    status: str  # "success", "empty", "failed", "cancelled"
    stage: Optional[str] = None  # failing stage: "grammar", "translation", "pipeline"
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in ("success", "empty")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _run_stage(func: StageFunc, text: str, settings: Settings, error_cls) -> str:
    result = func(text, settings=settings)
    if not isinstance(result, dict):
        raise error_cls("stage returned no result")
    if result.get("status") != "success" or not isinstance(result.get("output"), str):
        raise error_cls(str(result.get("message") or "service unavailable"), code=result.get("code"))
    return result["output"]


def process_text(
    text: str,
    settings: Optional[Settings] = None,
    grammar: StageFunc = correct_grammar,
    translate: StageFunc = translate_en_hi,
    is_cancelled: Optional[Callable[[], bool]] = None,
) -> PipelineResult:
    """
    Correct ``text`` and translate the corrected text.

    Blank input short-circuits without calling either service. A grammar
    failure fills both slots with their fallback messages and skips the
    translation call; a translation failure keeps the corrected text.
    ``is_cancelled`` is checked between the two stages.
    """
    s = settings or load_settings()
    messages = s.messages
    if is_blank(text):
        return PipelineResult(corrected="", translated="", status="empty")

    try:
        corrected = _run_stage(grammar, text, s, GrammarServiceError)
    except GrammarServiceError as e:
        logger.warning(f"Pipeline grammar stage failed: {e.message}")
        return PipelineResult(
            corrected=messages["grammar_failed"],
            translated=messages["translation_failed"],
            status="failed",
            stage="grammar",
            message=e.message,
        )
    except Exception as e:
        logger.exception("Pipeline failed unexpectedly during grammar stage")
        return fallback_result(messages, str(e))

    if is_cancelled is not None and is_cancelled():
        logger.debug("Pipeline cancelled after grammar stage")
        return PipelineResult(corrected=corrected, translated="", status="cancelled")

    try:
        translated = _run_stage(translate, corrected, s, TranslationServiceError)
    except TranslationServiceError as e:
        logger.warning(f"Pipeline translation stage failed: {e.message}")
        return PipelineResult(
            corrected=corrected,
            translated=messages["translation_failed"],
            status="failed",
            stage="translation",
            message=e.message,
        )
    except Exception as e:
        logger.exception("Pipeline failed unexpectedly during translation stage")
        return fallback_result(messages, str(e))

    return PipelineResult(corrected=corrected, translated=translated, status="success")


def fallback_result(messages: Dict[str, str], message: str) -> PipelineResult:
    return PipelineResult(
        corrected=messages["grammar_failed"],
        translated=messages["translation_failed"],
        status="failed",
        stage="pipeline",
        message=message,
    )

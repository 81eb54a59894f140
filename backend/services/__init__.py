"""
/**
 * @file backend/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .languagetool_client_service import LanguageToolClient, apply_corrections
from .mymemory_client_service import MyMemoryClient
from .grammar_service import correct_grammar
from .translation_service import translate_en_hi
from .local_grammar_service import fix_grammar_locally
from .dictionary_translation_service import translate_with_dictionary
from .pipeline_service import PipelineResult, process_text
from .session_service import SessionNotFound, SessionService

__all__ = [
    "LanguageToolClient",
    "MyMemoryClient",
    "PipelineResult",
    "SessionNotFound",
    "SessionService",
    "apply_corrections",
    "correct_grammar",
    "fix_grammar_locally",
    "process_text",
    "translate_en_hi",
    "translate_with_dictionary",
]

"""
/**
 * @file backend/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .session_models import CopyRequest, SessionInputRequest
from .translate_request_model import GrammarRequest, ProcessRequest, TextRequest, TranslateRequest

__all__ = ["CopyRequest", "GrammarRequest", "ProcessRequest", "SessionInputRequest", "TextRequest", "TranslateRequest"]

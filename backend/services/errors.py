"""
/**
 * @file backend/services/errors.py
 * @description 服务层异常定义（仅在服务内部抛出，出口处统一转换为兜底文案）。
 */
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for upstream service failures."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class GrammarServiceError(ServiceError):
    """Raised when the grammar service cannot be reached or rejects the request."""


class TranslationServiceError(ServiceError):
    """Raised when the translation service cannot be reached or rejects the request."""


class MalformedResponseError(ServiceError):
    """Raised when an upstream payload does not have the expected shape."""


__all__ = ["ServiceError", "GrammarServiceError", "TranslationServiceError", "MalformedResponseError"]

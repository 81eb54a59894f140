"""
/**
 * @file backend/models/translate_request_model.py
 * @description 文本请求模型（Pydantic）：语法修正 / 翻译 / 流水线共用。
 */
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TextRequest(BaseModel):
    text: str = Field("", max_length=20000)


class TranslateRequest(TextRequest):
    pass


class GrammarRequest(TextRequest):
    pass


class ProcessRequest(TextRequest):
    pass

"""
/**
 * @file backend/models/session_models.py
 * @description 实时会话请求模型（Pydantic）。
 */
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SessionInputRequest(BaseModel):
    text: str = Field("", max_length=20000)


class CopyRequest(BaseModel):
    slot: str = Field(..., pattern="^(corrected|translated)$")

"""
/**
 * @file backend/services/local_grammar_service.py
 * @description 本地语法修正（离线模式）：基于正则的常见错误修正。
 */
"""

from __future__ import annotations

import re


# (pattern, replacement) 按顺序应用；\b 按 ASCII 处理
_RULES = [
    (re.compile(r"\bi\b", re.ASCII), "I"),
    (re.compile(r"\bdont\b", re.ASCII), "don't"),
    (re.compile(r"\bcant\b", re.ASCII), "can't"),
    (re.compile(r"\bwont\b", re.ASCII), "won't"),
    (re.compile(r"\byour\b(?=\s+(welcome|right|wrong))", re.ASCII), "you're"),
    (re.compile(r"\bits\b(?=\s+(a|an|the))", re.ASCII), "it's"),
]

_SENTENCE_START_RE = re.compile(r"([.!?])\s*([a-z])")
_FIRST_LETTER_RE = re.compile(r"^([a-z])")


def fix_grammar_locally(text: str) -> str:
    if not (text or "").strip():
        return ""

    corrected = text
    for pattern, replacement in _RULES:
        corrected = pattern.sub(replacement, corrected)

    corrected = _SENTENCE_START_RE.sub(lambda m: f"{m.group(1)} {m.group(2).upper()}", corrected)
    corrected = _FIRST_LETTER_RE.sub(lambda m: m.group(1).upper(), corrected)
    return corrected

"""
/**
 * @file backend/services/dictionary_translation_service.py
 * @description 本地词典翻译（英 -> 印地语，离线模式）：按词/短语替换。
 */
"""

from __future__ import annotations

import re
from typing import Dict, List, Tuple


# 空字符串表示直接删除（冠词）
EN_HI_DICTIONARY: Dict[str, str] = {
    # Greetings & common phrases
    "hello": "नमस्ते",
    "hi": "हैलो",
    "goodbye": "अलविदा",
    "bye": "बाय",
    "good morning": "शुभ प्रभात",
    "good evening": "शुभ संध्या",
    "good night": "शुभ रात्रि",
    "thank you": "धन्यवाद",
    "thanks": "धन्यवाद",
    "welcome": "स्वागत",
    "please": "कृपया",
    "sorry": "माफ करें",
    "excuse me": "माफ करें",
    # Common words
    "yes": "हाँ",
    "no": "नहीं",
    "okay": "ठीक है",
    "ok": "ठीक है",
    "and": "और",
    "or": "या",
    "but": "लेकिन",
    "the": "",
    "a": "",
    "an": "",
    "is": "है",
    "are": "हैं",
    "am": "हूँ",
    "was": "था",
    "were": "थे",
    "will": "होगा",
    "would": "होगा",
    "can": "सकते हैं",
    "could": "सकते थे",
    "have": "पास है",
    "has": "पास है",
    "had": "था",
    "do": "करते हैं",
    "does": "करता है",
    "did": "किया",
    "will be": "होगा",
    "going": "जा रहे",
    "come": "आओ",
    "go": "जाओ",
    # Basic nouns
    "world": "दुनिया",
    "water": "पानी",
    "food": "खाना",
    "house": "घर",
    "home": "घर",
    "family": "परिवार",
    "friend": "दोस्त",
    "friends": "दोस्त",
    "love": "प्यार",
    "time": "समय",
    "day": "दिन",
    "today": "आज",
    "tomorrow": "कल",
    "yesterday": "कल",
    "week": "सप्ताह",
    "month": "महीना",
    "year": "साल",
    "money": "पैसा",
    "work": "काम",
    "job": "नौकरी",
    "school": "स्कूल",
    "book": "किताब",
    "car": "गाड़ी",
    "phone": "फोन",
    "computer": "कंप्यूटर",
    "mother": "माँ",
    "father": "पिता",
    "brother": "भाई",
    "sister": "बहन",
    "son": "बेटा",
    "daughter": "बेटी",
    "man": "आदमी",
    "woman": "औरत",
    "boy": "लड़का",
    "girl": "लड़की",
    "people": "लोग",
    "person": "व्यक्ति",
    # Adjectives
    "good": "अच्छा",
    "bad": "बुरा",
    "happy": "खुश",
    "sad": "उदास",
    "big": "बड़ा",
    "small": "छोटा",
    "new": "नया",
    "old": "पुराना",
    "hot": "गर्म",
    "cold": "ठंड",
    "beautiful": "सुंदर",
    "nice": "अच्छा",
    "great": "बहुत अच्छा",
    "easy": "आसान",
    "difficult": "कठिन",
    "hard": "कठिन",
    "fast": "तेज़",
    "slow": "धीमा",
    "right": "सही",
    "wrong": "गलत",
    "true": "सच",
    "false": "झूठ",
    # Numbers
    "one": "एक",
    "two": "दो",
    "three": "तीन",
    "four": "चार",
    "five": "पांच",
    "six": "छह",
    "seven": "सात",
    "eight": "आठ",
    "nine": "नौ",
    "ten": "दस",
    # Colors
    "red": "लाल",
    "blue": "नीला",
    "green": "हरा",
    "yellow": "पीला",
    "black": "काला",
    "white": "सफेद",
    "orange": "नारंगी",
    "purple": "बैंगनी",
    "pink": "गुलाबी",
    "brown": "भूरा",
}

UNTRANSLATED_TEMPLATE = "Hindi: {text} (अधिक शब्द अनुवाद के लिए शब्दकोश में जोड़े जा सकते हैं)"

_WHITESPACE_RE = re.compile(r"\s+")


def _compile_rules(dictionary: Dict[str, str]) -> List[Tuple[re.Pattern, str]]:
    # 先匹配长短语，再匹配单词；sorted 稳定，同长度保持原顺序
    ordered = sorted(dictionary.items(), key=lambda kv: len(kv[0]), reverse=True)
    rules = []
    for english, hindi in ordered:
        if hindi:
            pattern = re.compile(rf"\b{re.escape(english)}\b", re.IGNORECASE | re.ASCII)
        else:
            pattern = re.compile(rf"\b{re.escape(english)}\b\s*", re.IGNORECASE | re.ASCII)
        rules.append((pattern, hindi))
    return rules


_RULES = _compile_rules(EN_HI_DICTIONARY)


def translate_with_dictionary(text: str) -> str:
    if not (text or "").strip():
        return ""

    translated = text.lower()
    has_translations = False
    for pattern, hindi in _RULES:
        if hindi:
            translated, count = pattern.subn(hindi, translated)
            if count:
                has_translations = True
        else:
            translated = pattern.sub("", translated)

    translated = _WHITESPACE_RE.sub(" ", translated).strip()
    if has_translations:
        return translated
    return UNTRANSLATED_TEMPLATE.format(text=text)

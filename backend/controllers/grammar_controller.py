"""
/**
 * @file backend/controllers/grammar_controller.py
 * @description 语法修正控制器。
 */
"""

from fastapi import APIRouter, HTTPException

from backend.models.translate_request_model import GrammarRequest
from backend.services import correct_grammar


router = APIRouter()


@router.post("/api/grammar")
def grammar(req: GrammarRequest):
    result = correct_grammar(req.text)
    if result.get("status") == "success":
        return result

    code = result.get("code", 502)
    status_code = code if isinstance(code, int) and 400 <= code <= 599 else 502
    raise HTTPException(status_code=status_code, detail=result)

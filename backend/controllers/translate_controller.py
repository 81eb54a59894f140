"""
/**
 * @file backend/controllers/translate_controller.py
 * @description 翻译控制器（英 -> 印地语）。
 */
"""

from fastapi import APIRouter, HTTPException

from backend.models.translate_request_model import TranslateRequest
from backend.services import translate_en_hi


router = APIRouter()


@router.post("/api/translate")
def translate(req: TranslateRequest):
    result = translate_en_hi(req.text)
    if isinstance(result, dict):
        if result.get("status") == "success":
            return result

        # Propagate upstream status code if it is a usable HTTP code
        code = result.get("code", 502)
        status_code = code if isinstance(code, int) and 400 <= code <= 599 else 502

        raise HTTPException(status_code=status_code, detail=result)

    raise HTTPException(status_code=500, detail={"status": "error", "message": "Unknown error", "result": str(result)})

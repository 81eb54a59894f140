"""
/**
 * @file backend/controllers/process_controller.py
 * @description 一次性处理（修正 + 翻译），失败时返回兜底文案而不是错误码。
 */
"""

from fastapi import APIRouter

from backend.models.translate_request_model import ProcessRequest
from backend.services import process_text


router = APIRouter()


@router.post("/api/process")
def process(req: ProcessRequest):
    result = process_text(req.text)
    payload = result.to_dict()
    if result.status == "success":
        payload["notification"] = {
            "title": "Text processed successfully!",
            "description": "Grammar corrected and translated to Hindi",
            "variant": "default",
        }
    elif result.status == "failed":
        payload["notification"] = {
            "title": "Processing failed",
            "description": "Service unavailable, please try again",
            "variant": "destructive",
        }
    return payload

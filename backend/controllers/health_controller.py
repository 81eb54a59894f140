"""
/**
 * @file backend/controllers/health_controller.py
 * @description 健康检查控制器。
 */
"""

from fastapi import APIRouter

from backend.utils import is_valid_url


router = APIRouter()


@router.get("/health")
def health():
    from backend.config import load_settings

    settings = load_settings()

    # 本地模式不依赖远程地址
    endpoint_status = {
        "grammar": settings.grammar_provider == "local" or is_valid_url(settings.endpoints["grammar"]),
        "translation": settings.translation_provider == "dictionary"
        or is_valid_url(settings.endpoints["translation"]),
    }

    is_healthy = all(endpoint_status.values())

    return {
        "status": "ok" if is_healthy else "degraded",
        "checks": {
            "providers": {
                "grammar": settings.grammar_provider,
                "translation": settings.translation_provider,
            },
            "endpoints": endpoint_status,
        },
    }

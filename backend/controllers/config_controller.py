"""
/**
 * @file backend/controllers/config_controller.py
 * @description 运行时配置查看与强制重载（不返回密钥）。
 */
"""

from fastapi import APIRouter

from backend.config.settings import load_settings, reload_settings


router = APIRouter()


@router.get("/api/config/runtime")
def get_runtime():
    return load_settings().public_view()


@router.post("/api/config/reload")
def force_reload():
    s = reload_settings()
    return {"status": "ok", "runtime": s.public_view()}

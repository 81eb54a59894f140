"""
/**
 * @file backend/controllers/__init__.py
 * @description 控制器（路由）导出。
 */
"""

from .config_controller import router as config_router
from .grammar_controller import router as grammar_router
from .health_controller import router as health_router
from .process_controller import router as process_router
from .sessions_controller import router as sessions_router
from .translate_controller import router as translate_router

__all__ = [
    "config_router",
    "grammar_router",
    "health_router",
    "process_router",
    "sessions_router",
    "translate_router",
]

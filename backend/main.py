"""
/**
 * @file backend/main.py
 * @description FastAPI 应用入口（MVC：仅装配路由与中间件）。
 */
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from watchdog.observers import Observer

from backend.config import CONFIG_PATH, ConfigEventHandler, load_settings
from backend.controllers import (
    config_router,
    grammar_router,
    health_router,
    process_router,
    sessions_router,
    translate_router,
)
from backend.services.session_service import SessionService

app = FastAPI(title="Grammar Fixer & Language Translator")
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("main")


_observer = None
_event_handler = None


@app.on_event("startup")
async def startup_event():
    global _observer, _event_handler
    # Initial load
    settings = load_settings()
    logger.info(
        f"Providers: grammar={settings.grammar_provider}, translation={settings.translation_provider}, "
        f"debounce={settings.debounce_ms}ms"
    )
    try:
        _event_handler = ConfigEventHandler()
        _observer = Observer()
        config_dir = os.path.dirname(CONFIG_PATH)
        _observer.schedule(_event_handler, config_dir, recursive=False)
        _observer.start()
        logger.info(f"Config watcher started on {config_dir}")
    except Exception as e:
        logger.error(f"Failed to start config watcher: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    global _observer, _event_handler

    if _event_handler:
        _event_handler.cancel()
        _event_handler = None
    if _observer:
        _observer.stop()
        _observer.join()
        _observer = None
    SessionService.instance().shutdown()


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(grammar_router)
app.include_router(translate_router)
app.include_router(process_router)
app.include_router(sessions_router)
app.include_router(config_router)

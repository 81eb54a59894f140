"""
/**
 * @file backend/config/watcher.py
 * @description 配置文件变更监听：尾沿防抖后重载配置。
 */
"""

import logging
import os
import threading

from watchdog.events import FileSystemEventHandler

from backend.config.settings import CONFIG_LOCAL_PATH, CONFIG_PATH, reload_settings


logger = logging.getLogger("config_watcher")

RELOAD_DELAY_S = 0.5


class ConfigEventHandler(FileSystemEventHandler):
    """
    Handler for config file changes.

    Every relevant event re-arms a single timer, so a burst of writes ends in
    one reload that runs ``delay`` seconds after the last write and sees the
    final file content.
    """

    def __init__(self, paths=(CONFIG_PATH, CONFIG_LOCAL_PATH), delay=RELOAD_DELAY_S,
                 reload=reload_settings, timer_factory=threading.Timer):
        super().__init__()
        self._paths = tuple(os.path.abspath(p) for p in paths)
        self._delay = delay
        self._reload = reload
        self._timer_factory = timer_factory
        self._timer = None
        self._lock = threading.Lock()

    def on_modified(self, event):
        if event.is_directory:
            return

        # Watchdog returns absolute paths usually
        if os.path.abspath(event.src_path) in self._paths:
            self.schedule_reload()

    on_created = on_modified

    def schedule_reload(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self):
        with self._lock:
            self._timer = None
        try:
            self._reload()
        except Exception as e:
            logger.error(f"Config reload from watcher failed: {e}")

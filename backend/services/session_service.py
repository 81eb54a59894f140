"""
/**
 * @file backend/services/session_service.py
 * @description 实时会话：输入防抖（默认 1200ms）、后台两阶段处理、过期结果丢弃、通知（toast）。
 */
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional

from backend.config import Settings, load_settings
from backend.services.pipeline_service import PipelineResult, fallback_result, process_text
from backend.utils import is_blank


logger = logging.getLogger("session_service")

COPY_SLOTS = {
    "corrected": ("corrected_text", "Corrected text"),
    "translated": ("translated_text", "Translation"),
}


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"  # "default" or "destructive"
    created_at: float = field(default_factory=time.time)


@dataclass
class SessionState:
    session_id: str
    input_text: str = ""
    corrected_text: str = ""
    translated_text: str = ""
    is_processing: bool = False
    pending: bool = False
    completed_cycles: int = 0
    notifications: Deque[Notification] = field(default_factory=deque)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


class _Cycle:
    """One debounced processing attempt; ``cancelled`` is the ignore flag."""

    _counter = itertools.count(1)

    def __init__(self, text: str) -> None:
        self.number = next(self._counter)
        self.text = text
        self.cancelled = threading.Event()


class SessionNotFound(KeyError):
    pass


class SessionService:
    _instance = None

    def __init__(
        self,
        settings: Optional[Settings] = None,
        timer_factory: Callable[..., Any] = threading.Timer,
        processor: Callable[..., PipelineResult] = process_text,
    ) -> None:
        self._initial_settings = settings
        self._timer_factory = timer_factory
        self._processor = processor
        self._lock = threading.Lock()
        self._sessions: Dict[str, SessionState] = {}
        self._timers: Dict[str, Any] = {}
        self._cycles: Dict[str, _Cycle] = {}

    @classmethod
    def instance(cls) -> "SessionService":
        if cls._instance is None:
            cls._instance = SessionService()
        return cls._instance

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    # ---- session lifecycle ----

    def create_session(self) -> Dict[str, Any]:
        self.purge_idle()
        state = SessionState(session_id=str(uuid.uuid4()))
        with self._lock:
            self._sessions[state.session_id] = state
        logger.info(f"Session {state.session_id} created")
        return self._snapshot(state)

    def get_session(self, session_id: str) -> Dict[str, Any]:
        with self._lock:
            return self._snapshot(self._require(session_id))

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            self._require(session_id)
            self._cancel_pending(session_id)
            del self._sessions[session_id]
        logger.info(f"Session {session_id} deleted")

    def purge_idle(self, max_age_s: Optional[int] = None) -> int:
        ttl = max_age_s if max_age_s is not None else self.settings.session_ttl_s
        cutoff = time.time() - ttl
        removed = 0
        with self._lock:
            for sid in [sid for sid, st in self._sessions.items() if st.updated_at < cutoff]:
                self._cancel_pending(sid)
                del self._sessions[sid]
                removed += 1
        if removed:
            logger.info(f"Purged {removed} idle session(s)")
        return removed

    def shutdown(self) -> None:
        with self._lock:
            for sid in list(self._sessions.keys()):
                self._cancel_pending(sid)
        logger.info("SessionService stopped.")

    # ---- input handling ----

    def update_input(self, session_id: str, text: str) -> Dict[str, Any]:
        """
        Record a new input value and (re)arm the debounce timer.

        Any pending timer is dropped and the in-flight cycle, if any, is
        flagged so its results are discarded. Blank input clears both output
        slots right away and schedules nothing.
        """
        text = text or ""
        with self._lock:
            state = self._require(session_id)
            state.input_text = text
            state.updated_at = time.time()
            self._cancel_pending(session_id)
            state.is_processing = False

            if is_blank(text):
                state.corrected_text = ""
                state.translated_text = ""
                state.pending = False
                return self._snapshot(state)

            cycle = _Cycle(text)
            self._cycles[session_id] = cycle
            delay = self.settings.debounce_ms / 1000.0
            timer = self._timer_factory(delay, self._run_cycle, args=(session_id, cycle))
            timer.daemon = True
            self._timers[session_id] = timer
            state.pending = True

        # 在锁外启动；若此前已被 cancel，Timer 不会执行回调
        timer.start()
        logger.debug(f"Session {session_id} cycle {cycle.number} armed ({delay:.3f}s)")
        return self.get_session(session_id)

    def process_now(self, session_id: str) -> Dict[str, Any]:
        """Synchronous: run the current input on the calling thread now, superseding any pending timer."""
        with self._lock:
            state = self._require(session_id)
            self._cancel_pending(session_id)
            state.is_processing = False
            state.pending = False
            text = state.input_text
            if is_blank(text):
                state.corrected_text = ""
                state.translated_text = ""
                return self._snapshot(state)
            cycle = _Cycle(text)
            self._cycles[session_id] = cycle

        self._run_cycle(session_id, cycle)
        return self.get_session(session_id)

    def _run_cycle(self, session_id: str, cycle: _Cycle) -> None:
        with self._lock:
            state = self._sessions.get(session_id)
            if state is None or cycle.cancelled.is_set() or self._cycles.get(session_id) is not cycle:
                return
            self._timers.pop(session_id, None)
            state.pending = False
            state.is_processing = True

        settings = self.settings
        logger.info(f"Session {session_id} cycle {cycle.number} started")
        try:
            result = self._processor(cycle.text, settings=settings, is_cancelled=cycle.cancelled.is_set)
        except Exception as e:
            logger.exception(f"Session {session_id} cycle {cycle.number} crashed")
            result = fallback_result(settings.messages, str(e))

        with self._lock:
            state = self._sessions.get(session_id)
            if state is None or cycle.cancelled.is_set() or self._cycles.get(session_id) is not cycle:
                logger.debug(f"Session {session_id} cycle {cycle.number} superseded; result dropped")
                return
            self._cycles.pop(session_id, None)
            state.corrected_text = result.corrected
            state.translated_text = result.translated
            state.is_processing = False
            state.completed_cycles += 1
            state.updated_at = time.time()
            if result.ok:
                self._notify(state, "Text processed successfully!", "Grammar corrected and translated to Hindi")
            else:
                self._notify(state, "Processing failed", "Service unavailable, please try again", "destructive")
        logger.info(f"Session {session_id} cycle {cycle.number} finished: {result.status}")

    # ---- copy & notifications ----

    def copy_slot(self, session_id: str, slot: str) -> Dict[str, Any]:
        if slot not in COPY_SLOTS:
            raise ValueError(f"Unknown slot: {slot}")
        attr, label = COPY_SLOTS[slot]
        with self._lock:
            state = self._require(session_id)
            text = getattr(state, attr)
            if not text:
                note = self._notify(state, "Copy failed", "Please try again", "destructive")
                return {"status": "error", "slot": slot, "text": "", "notification": note}
            note = self._notify(state, f"{label} copied!", "Text copied to clipboard")
            return {"status": "success", "slot": slot, "text": text, "notification": note}

    def drain_notifications(self, session_id: str) -> List[Dict[str, Any]]:
        with self._lock:
            state = self._require(session_id)
            items = [self._notification_dict(n) for n in state.notifications]
            state.notifications.clear()
            return items

    # ---- internals (caller holds the lock) ----

    def _require(self, session_id: str) -> SessionState:
        state = self._sessions.get(session_id)
        if state is None:
            raise SessionNotFound(session_id)
        return state

    def _cancel_pending(self, session_id: str) -> None:
        timer = self._timers.pop(session_id, None)
        if timer is not None:
            timer.cancel()
        cycle = self._cycles.pop(session_id, None)
        if cycle is not None:
            cycle.cancelled.set()

    def _notify(self, state: SessionState, title: str, description: str, variant: str = "default") -> Dict[str, Any]:
        note = Notification(title=title, description=description, variant=variant)
        state.notifications.append(note)
        limit = self.settings.max_notifications
        while len(state.notifications) > limit:
            state.notifications.popleft()
        return self._notification_dict(note)

    @staticmethod
    def _notification_dict(note: Notification) -> Dict[str, Any]:
        return {
            "title": note.title,
            "description": note.description,
            "variant": note.variant,
            "created_at": note.created_at,
        }

    @staticmethod
    def _snapshot(state: SessionState) -> Dict[str, Any]:
        return {
            "session_id": state.session_id,
            "input_text": state.input_text,
            "corrected_text": state.corrected_text,
            "translated_text": state.translated_text,
            "is_processing": state.is_processing,
            "pending": state.pending,
            "completed_cycles": state.completed_cycles,
            "pending_notifications": len(state.notifications),
            "updated_at": state.updated_at,
        }

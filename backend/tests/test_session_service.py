"""
/**
 * @file backend/tests/test_session_service.py
 * @description 实时会话单元测试：防抖、过期结果丢弃、空输入、复制与通知。
 */
"""

import threading
import time
import unittest

from backend.config.settings import Settings
from backend.services.pipeline_service import PipelineResult
from backend.services.session_service import SessionNotFound, SessionService


class FakeTimer:
    """Stands in for threading.Timer; fired explicitly by the test."""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # Call through even when cancelled, as a real timer may lose the race
        self.function(*self.args)


class RecordingProcessor:
    def __init__(self, hook=None):
        self.calls = []
        self.hook = hook

    def __call__(self, text, settings=None, is_cancelled=None):
        self.calls.append(text)
        if self.hook:
            self.hook(text)
        return PipelineResult(corrected=text.upper(), translated=f"hi:{text}", status="success")


class TestSessionService(unittest.TestCase):
    def setUp(self):
        self.timers = []
        self.processor = RecordingProcessor()
        self.service = SessionService(
            settings=Settings(raw={"pipeline": {"debounce_ms": 1200}}),
            timer_factory=self._make_timer,
            processor=self.processor,
        )
        self.sid = self.service.create_session()["session_id"]

    def _make_timer(self, *args, **kwargs):
        timer = FakeTimer(*args, **kwargs)
        self.timers.append(timer)
        return timer

    def test_debounce_interval(self):
        self.service.update_input(self.sid, "hello")
        self.assertEqual(len(self.timers), 1)
        self.assertAlmostEqual(self.timers[0].interval, 1.2)
        self.assertTrue(self.timers[0].started)
        self.assertTrue(self.service.get_session(self.sid)["pending"])
        self.assertEqual(self.processor.calls, [])

    def test_rapid_updates_produce_one_cycle_with_final_text(self):
        for text in ("h", "he", "hel", "hello"):
            self.service.update_input(self.sid, text)

        self.assertEqual([t.cancelled for t in self.timers], [True, True, True, False])
        for timer in self.timers:
            timer.fire()

        state = self.service.get_session(self.sid)
        self.assertEqual(self.processor.calls, ["hello"])
        self.assertEqual(state["completed_cycles"], 1)
        self.assertEqual(state["corrected_text"], "HELLO")
        self.assertEqual(state["translated_text"], "hi:hello")
        self.assertFalse(state["is_processing"])
        self.assertFalse(state["pending"])

    def test_blank_input_clears_outputs_without_processing(self):
        self.service.update_input(self.sid, "hello")
        self.timers[-1].fire()
        self.assertEqual(self.service.get_session(self.sid)["corrected_text"], "HELLO")

        state = self.service.update_input(self.sid, "   ")

        self.assertEqual(state["corrected_text"], "")
        self.assertEqual(state["translated_text"], "")
        self.assertFalse(state["pending"])
        self.assertEqual(len(self.timers), 1)
        self.assertEqual(self.processor.calls, ["hello"])

    def test_blank_input_cancels_pending_cycle(self):
        self.service.update_input(self.sid, "hello")
        self.service.update_input(self.sid, "")
        self.timers[0].fire()
        self.assertEqual(self.processor.calls, [])
        self.assertEqual(self.service.get_session(self.sid)["completed_cycles"], 0)

    def test_in_flight_result_is_dropped_when_input_changes(self):
        def type_more(text):
            if text == "old":
                self.service.update_input(self.sid, "new")

        self.processor.hook = type_more
        self.service.update_input(self.sid, "old")
        self.timers[0].fire()

        state = self.service.get_session(self.sid)
        self.assertEqual(state["corrected_text"], "")
        self.assertEqual(state["completed_cycles"], 0)
        self.assertTrue(state["pending"])

        self.timers[1].fire()
        state = self.service.get_session(self.sid)
        self.assertEqual(state["corrected_text"], "NEW")
        self.assertEqual(state["completed_cycles"], 1)

    def test_processor_crash_uses_fallbacks(self):
        def boom(text, settings=None, is_cancelled=None):
            raise RuntimeError("bug")

        service = SessionService(settings=Settings(raw={}), timer_factory=self._make_timer, processor=boom)
        sid = service.create_session()["session_id"]
        service.update_input(sid, "hello")
        self.timers[-1].fire()

        state = service.get_session(sid)
        self.assertEqual(state["corrected_text"], "Grammar correction failed. Please try again.")
        self.assertEqual(state["translated_text"], "Translation failed. Please try again.")
        notes = service.drain_notifications(sid)
        self.assertEqual(notes[-1]["variant"], "destructive")

    def test_process_now_skips_debounce(self):
        self.service.update_input(self.sid, "hello")
        state = self.service.process_now(self.sid)

        self.assertTrue(self.timers[0].cancelled)
        self.assertEqual(state["corrected_text"], "HELLO")
        self.timers[0].fire()
        self.assertEqual(self.processor.calls, ["hello"])

    def test_success_notification(self):
        self.service.update_input(self.sid, "hello")
        self.timers[0].fire()

        notes = self.service.drain_notifications(self.sid)

        self.assertEqual(len(notes), 1)
        self.assertEqual(notes[0]["title"], "Text processed successfully!")
        self.assertEqual(self.service.drain_notifications(self.sid), [])

    def test_copy_slot(self):
        self.service.update_input(self.sid, "hello")
        self.timers[0].fire()

        result = self.service.copy_slot(self.sid, "translated")

        self.assertEqual(result["status"], "success")
        self.assertEqual(result["text"], "hi:hello")
        self.assertEqual(result["notification"]["title"], "Translation copied!")

    def test_copy_empty_slot_fails(self):
        result = self.service.copy_slot(self.sid, "corrected")
        self.assertEqual(result["status"], "error")
        self.assertEqual(result["notification"]["title"], "Copy failed")
        with self.assertRaises(ValueError):
            self.service.copy_slot(self.sid, "input")

    def test_unknown_and_deleted_sessions(self):
        with self.assertRaises(SessionNotFound):
            self.service.get_session("missing")
        self.service.update_input(self.sid, "hello")
        self.service.delete_session(self.sid)
        self.assertTrue(self.timers[0].cancelled)
        self.timers[0].fire()
        self.assertEqual(self.processor.calls, [])

    def test_purge_idle(self):
        self.assertEqual(self.service.purge_idle(max_age_s=3600), 0)
        self.assertEqual(self.service.purge_idle(max_age_s=-1), 1)
        with self.assertRaises(SessionNotFound):
            self.service.get_session(self.sid)


class TestSessionServiceWithRealTimers(unittest.TestCase):
    def test_debounced_cycle_runs_in_background(self):
        done = threading.Event()
        calls = []

        def processor(text, settings=None, is_cancelled=None):
            calls.append(text)
            done.set()
            return PipelineResult(corrected=text, translated="ok", status="success")

        service = SessionService(settings=Settings(raw={"pipeline": {"debounce_ms": 20}}), processor=processor)
        sid = service.create_session()["session_id"]
        service.update_input(sid, "first")
        service.update_input(sid, "second")

        self.assertTrue(done.wait(5))
        deadline = time.time() + 5
        while service.get_session(sid)["completed_cycles"] < 1 and time.time() < deadline:
            time.sleep(0.01)

        self.assertEqual(calls, ["second"])
        self.assertEqual(service.get_session(sid)["corrected_text"], "second")
        service.shutdown()


if __name__ == "__main__":
    unittest.main()

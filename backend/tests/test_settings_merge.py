"""
/**
 * @file backend/tests/test_settings_merge.py
 * @description 配置合并单元测试。
 */
"""

import json
import os
import tempfile
import unittest

from backend.config.settings import DEFAULT_DEBOUNCE_MS, Settings, reload_settings


class TestSettingsMerge(unittest.TestCase):
    def _write(self, path, data):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def test_merge_base_and_local(self):
        with tempfile.TemporaryDirectory() as tmp:
            base_path = os.path.join(tmp, "config.json")
            local_path = os.path.join(tmp, "config.local.json")
            example_path = os.path.join(tmp, "config.example.json")

            self._write(base_path, {
                "endpoints": {"grammar": "https://lt.example/v2/check"},
                "providers": {"grammar": "languagetool"},
                "pipeline": {"debounce_ms": 800},
            })
            self._write(local_path, {"providers": {"grammar": "local"}})
            self._write(example_path, {})

            s = reload_settings(base_path=base_path, local_path=local_path, example_path=example_path)
            self.assertEqual(s.grammar_provider, "local")
            self.assertEqual(s.endpoints["grammar"], "https://lt.example/v2/check")
            self.assertEqual(s.debounce_ms, 800)

    def test_example_used_when_base_has_no_endpoints(self):
        with tempfile.TemporaryDirectory() as tmp:
            base_path = os.path.join(tmp, "config.json")
            example_path = os.path.join(tmp, "config.example.json")
            self._write(example_path, {"endpoints": {"translation": "https://mm.example/get"}})

            s = reload_settings(
                base_path=base_path,
                local_path=os.path.join(tmp, "missing.json"),
                example_path=example_path,
            )
            self.assertEqual(s.endpoints["translation"], "https://mm.example/get")

    def test_corrupted_config_keeps_dict(self):
        fd, path = tempfile.mkstemp()
        os.close(fd)
        with open(path, "w") as f:
            f.write("{invalid json")
        try:
            s = reload_settings(base_path=path, local_path=path, example_path=path)
            self.assertIsInstance(s.raw, dict)
        finally:
            os.remove(path)

    def test_second_edit_within_half_second_takes_effect(self):
        with tempfile.TemporaryDirectory() as tmp:
            base_path = os.path.join(tmp, "config.json")
            kwargs = dict(
                base_path=base_path,
                local_path=os.path.join(tmp, "missing.json"),
                example_path=os.path.join(tmp, "missing.example.json"),
            )
            self._write(base_path, {"endpoints": {"grammar": "https://lt.example"}, "pipeline": {"debounce_ms": 100}})
            self.assertEqual(reload_settings(**kwargs).debounce_ms, 100)

            self._write(base_path, {"endpoints": {"grammar": "https://lt.example"}, "pipeline": {"debounce_ms": 300}})
            self.assertEqual(reload_settings(**kwargs).debounce_ms, 300)

            self._write(base_path, {"endpoints": {"grammar": "https://lt.example"}, "pipeline": {"debounce_ms": 500}})
            self.assertEqual(reload_settings(**kwargs).debounce_ms, 500)

    def test_partial_write_keeps_previous_then_recovers(self):
        with tempfile.TemporaryDirectory() as tmp:
            base_path = os.path.join(tmp, "config.json")
            kwargs = dict(
                base_path=base_path,
                local_path=os.path.join(tmp, "missing.json"),
                example_path=os.path.join(tmp, "missing.example.json"),
            )
            self._write(base_path, {"endpoints": {"grammar": "https://lt.example"}, "pipeline": {"debounce_ms": 100}})
            reload_settings(**kwargs)

            with open(base_path, "w", encoding="utf-8") as f:
                f.write('{"pipeline": {"debounce')
            self.assertEqual(reload_settings(**kwargs).debounce_ms, 100)

            self._write(base_path, {"endpoints": {"grammar": "https://lt.example"}, "pipeline": {"debounce_ms": 300}})
            self.assertEqual(reload_settings(**kwargs).debounce_ms, 300)


class TestSettingsDefaults(unittest.TestCase):
    def test_defaults(self):
        s = Settings(raw={})
        self.assertEqual(s.language, "en-US")
        self.assertEqual(s.langpair, "en|hi")
        self.assertEqual(s.debounce_ms, DEFAULT_DEBOUNCE_MS)
        self.assertEqual(s.grammar_provider, "languagetool")
        self.assertEqual(s.translation_provider, "mymemory")
        self.assertIsNone(s.request_timeout)
        self.assertEqual(s.messages["grammar_failed"], "Grammar correction failed. Please try again.")

    def test_invalid_values_fall_back(self):
        s = Settings(raw={
            "pipeline": {"debounce_ms": -5},
            "providers": {"grammar": "nonsense", "translation": "Dictionary"},
            "translation": {"langpair": "en-hi"},
            "http": {"timeout": True},
        })
        self.assertEqual(s.debounce_ms, DEFAULT_DEBOUNCE_MS)
        self.assertEqual(s.grammar_provider, "languagetool")
        self.assertEqual(s.translation_provider, "dictionary")
        self.assertEqual(s.langpair, "en|hi")
        self.assertIsNone(s.request_timeout)

    def test_public_view_hides_keys(self):
        s = Settings(raw={"api_keys": {"languagetool_api_key": "secret"}})
        self.assertNotIn("secret", json.dumps(s.public_view()))


if __name__ == "__main__":
    unittest.main()

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_compat.core.config import Settings, load_settings  # noqa: E402
from resume_compat.core.config.scoring import (  # noqa: E402
    get_scoring_config,
    get_scoring_value,
    reset_scoring_config_cache,
)


def _settings(scoring_config_path):
    return Settings(
        log_level="INFO",
        log_format="%(message)s",
        scoring_config_path=scoring_config_path,
        job_keyword_limit=50,
        log_candidate_names=False,
    )


class ScoringConfigTests(unittest.TestCase):
    def setUp(self):
        reset_scoring_config_cache()

    def tearDown(self):
        reset_scoring_config_cache()

    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("ats.weights.formatting"), 0.3)
        self.assertEqual(get_scoring_value("ranking.tiers.strong_hire.score"), 85)

    def test_missing_paths_return_default(self):
        self.assertIsNone(get_scoring_value("ats.weights.nope"))
        self.assertEqual(get_scoring_value("ats.weights.formatting.deeper", 7), 7)
        self.assertEqual(get_scoring_value("", "fallback"), "fallback")

    def test_config_is_cached(self):
        self.assertIs(get_scoring_config(), get_scoring_config())

    def test_override_path_is_used(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("ats:\n  weights:\n    formatting: 0.5\n", encoding="utf-8")
            with patch("resume_compat.core.config.scoring.settings", _settings(str(path))):
                self.assertEqual(get_scoring_value("ats.weights.formatting"), 0.5)
                self.assertEqual(get_scoring_value("ats.weights.readability", 0.25), 0.25)

    def test_missing_file_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            missing = str(Path(tmp) / "absent.yaml")
            with patch("resume_compat.core.config.scoring.settings", _settings(missing)):
                with self.assertRaises(RuntimeError):
                    get_scoring_config()

    def test_invalid_yaml_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("ats: [unclosed\n", encoding="utf-8")
            with patch("resume_compat.core.config.scoring.settings", _settings(str(path))):
                with self.assertRaises(RuntimeError):
                    get_scoring_config()

    def test_non_mapping_yaml_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with patch("resume_compat.core.config.scoring.settings", _settings(str(path))):
                with self.assertRaises(RuntimeError):
                    get_scoring_config()


class SettingsTests(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            loaded = load_settings()
        self.assertEqual(loaded.log_level, "INFO")
        self.assertIsNone(loaded.scoring_config_path)
        self.assertEqual(loaded.job_keyword_limit, 50)
        self.assertFalse(loaded.log_candidate_names)

    def test_environment_overrides(self):
        env = {"LOG_LEVEL": "debug", "JOB_KEYWORD_LIMIT": "12", "LOG_CANDIDATE_NAMES": "yes"}
        with patch.dict(os.environ, env, clear=True):
            loaded = load_settings()
        self.assertEqual(loaded.log_level, "DEBUG")
        self.assertEqual(loaded.job_keyword_limit, 12)
        self.assertTrue(loaded.log_candidate_names)

    def test_bad_integer_falls_back(self):
        with patch.dict(os.environ, {"JOB_KEYWORD_LIMIT": "lots"}, clear=True):
            self.assertEqual(load_settings().job_keyword_limit, 50)


if __name__ == "__main__":
    unittest.main()

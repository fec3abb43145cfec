import logging
import os
import tempfile
from pathlib import Path
from unittest import TestCase, mock

from config.log_config import LOGGING_CONFIG, SUCCESS_LEVEL, build_logging_config, setup_logging
from config.settings import Settings, load_settings
from main import create_ocr_service
from domain.ocr_provider import OCRProvider, OCRResult
from domain.ocr_service import PatternOCRService


class _NullOCR(OCRProvider):
    def extract_text(self, image_paths):
        return OCRResult(full_text="")


class LoadSettingsTest(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.env_file = Path(self.tmpdir.name) / ".env"

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_defaults_without_variables(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = load_settings(self.env_file)
        self.assertEqual(settings, Settings())

    def test_environment_values_are_parsed(self):
        env = {
            "PATTERN_CATALOG_LOG_LEVEL": "debug",
            "PATTERN_CATALOG_PREFILL_MIN_CONFIDENCE": "0.55",
            "PATTERN_CATALOG_SHOW_OCR_DETAILS": "off",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings(self.env_file)
        self.assertEqual(settings.log_level, logging.DEBUG)
        self.assertAlmostEqual(settings.prefill_min_confidence, 0.55)
        self.assertFalse(settings.show_ocr_details)

    def test_dotenv_does_not_override_environment(self):
        self.env_file.write_text(
            "# commentaire\n"
            "PATTERN_CATALOG_PREFILL_MIN_CONFIDENCE=0.4\n"
            "PATTERN_CATALOG_LOG_LEVEL=WARNING\n",
            encoding="utf-8",
        )
        with mock.patch.dict(os.environ, {"PATTERN_CATALOG_LOG_LEVEL": "ERROR"}, clear=True):
            settings = load_settings(self.env_file)
        self.assertEqual(settings.log_level, logging.ERROR)
        self.assertAlmostEqual(settings.prefill_min_confidence, 0.4)

    def test_empty_value_falls_back_to_default(self):
        with mock.patch.dict(os.environ, {"PATTERN_CATALOG_SHOW_OCR_DETAILS": "  "}, clear=True):
            settings = load_settings(self.env_file)
        self.assertTrue(settings.show_ocr_details)

    def test_invalid_values_raise_runtime_error(self):
        for key, value in (
            ("PATTERN_CATALOG_LOG_LEVEL", "chatty"),
            ("PATTERN_CATALOG_PREFILL_MIN_CONFIDENCE", "1.5"),
            ("PATTERN_CATALOG_PREFILL_MIN_CONFIDENCE", "abc"),
            ("PATTERN_CATALOG_SHOW_OCR_DETAILS", "maybe"),
        ):
            with self.subTest(key=key, value=value):
                with mock.patch.dict(os.environ, {key: value}, clear=True):
                    with self.assertRaises(RuntimeError):
                        load_settings(self.env_file)


class LoggingConfigTest(TestCase):
    def test_build_logging_config_does_not_mutate_template(self):
        config = build_logging_config(logging.WARNING, {"domain": logging.DEBUG})
        self.assertEqual(config["root"]["level"], "WARNING")
        self.assertEqual(config["loggers"]["domain"], {"level": "DEBUG"})
        self.assertEqual(LOGGING_CONFIG["root"]["level"], "INFO")
        self.assertNotIn("domain", LOGGING_CONFIG["loggers"])

    def test_setup_logging_registers_success_level(self):
        setup_logging(logging.INFO)
        self.assertEqual(logging.getLevelName(SUCCESS_LEVEL), "SUCCESS")
        self.assertTrue(hasattr(logging.getLogger("tests"), "success"))
        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_create_ocr_service_wires_settings(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch.dict(os.environ, {"PATTERN_CATALOG_LOG_LEVEL": "WARNING"}, clear=True):
                service = create_ocr_service(_NullOCR(), Path(tmpdir) / ".env")
        self.assertIsInstance(service, PatternOCRService)
        self.assertEqual(logging.getLogger().level, logging.WARNING)

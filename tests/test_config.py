"""
Tests for Pydantic configuration validation and component wiring.
"""

import os
import tempfile
import unittest
from unittest.mock import Mock

import yaml

from crosspage_selector.config_models import BrowserConfig, load_and_validate_config, validate_config
from crosspage_selector.core.factory import ComponentFactory
from crosspage_selector.http.client import RequestsHttpClient


class TestConfigValidation(unittest.TestCase):
    def test_defaults(self):
        config = BrowserConfig()
        self.assertEqual(config.source.base_url, "https://api.artic.edu/api/v1/artworks")
        self.assertEqual(config.view.page_size, 10)
        self.assertEqual(config.view.page_size_options, [5, 10, 20])
        self.assertEqual(config.source.default_total, 100)
        self.assertEqual(config.source.retry.max_attempts, 1)

    def test_page_size_must_be_an_option(self):
        with self.assertRaises(ValueError) as cm:
            validate_config({"view": {"page_size": 15}})
        self.assertIn("view", str(cm.exception))

    def test_invalid_base_url(self):
        with self.assertRaises(ValueError) as cm:
            validate_config({"source": {"base_url": "ftp://example.com"}})
        self.assertIn("source.base_url", str(cm.exception))

    def test_param_names_must_differ(self):
        with self.assertRaises(ValueError):
            validate_config({"source": {"page_param": "p", "limit_param": "p"}})

    def test_options_are_sorted_and_deduped(self):
        config = validate_config({"view": {"page_size": 20, "page_size_options": [20, 5, 20, 50]}})
        self.assertEqual(config.view.page_size_options, [5, 20, 50])


class TestConfigFile(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil

        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _write(self, name, text):
        path = os.path.join(self.tmp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_load_valid_file(self):
        path = self._write(
            "browser.yaml",
            yaml.safe_dump({"source": {"base_url": "https://example.com/api"}, "view": {"page_size": 5}}),
        )
        config = load_and_validate_config(path)
        self.assertEqual(config.source.base_url, "https://example.com/api")
        self.assertEqual(config.view.page_size, 5)

    def test_empty_file_uses_defaults(self):
        config = load_and_validate_config(self._write("empty.yaml", ""))
        self.assertEqual(config, BrowserConfig())

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_and_validate_config(os.path.join(self.tmp_dir, "nope.yaml"))

    def test_malformed_yaml(self):
        with self.assertRaises(ValueError) as cm:
            load_and_validate_config(self._write("bad.yaml", "view: [unclosed"))
        self.assertIn("Invalid YAML", str(cm.exception))

    def test_shipped_config_is_valid(self):
        root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        config = load_and_validate_config(os.path.join(root, "configs", "browser.yaml"))
        self.assertEqual(config.view.page_size_options, [5, 10, 20])


class TestComponentFactory(unittest.TestCase):
    def test_build_wires_config(self):
        config = validate_config(
            {
                "source": {"base_url": "https://example.com/api", "retry": {"max_attempts": 3}},
                "view": {"page_size": 20, "max_fetches": 4},
            }
        )
        built = ComponentFactory(config).build()

        self.assertIsInstance(built.client, RequestsHttpClient)
        self.assertEqual(built.client.retry.max_attempts, 3)
        self.assertEqual(built.fetcher.base_url, "https://example.com/api")
        self.assertIn("User-Agent", built.fetcher.headers)
        self.assertEqual(built.session.view.page_size, 20)
        self.assertIs(built.runner.session, built.session)
        self.assertIs(built.runner.source, built.fetcher)
        self.assertEqual(built.runner.max_fetches, 4)

    def test_injected_client(self):
        client = Mock()
        built = ComponentFactory(BrowserConfig(), client=client).build()
        self.assertIs(built.fetcher.client, client)


if __name__ == "__main__":
    unittest.main()

"""Tests for lookalike.config."""

import tempfile
import unittest
from pathlib import Path

from lookalike.config import (
    LookalikeConfig,
    config_from_mapping,
    load_config_file,
    validate_config,
)


class TestLookalikeConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = LookalikeConfig()
        self.assertEqual(config.registry_url, "https://registry.npmjs.org")
        self.assertEqual(config.timeout, 10.0)
        self.assertEqual(config.search_size, 10)
        self.assertEqual(config.similarity_threshold, 2)

    def test_trailing_slash_kept_until_normalized(self) -> None:
        config = LookalikeConfig(registry_url="https://npm.example.com/")
        self.assertEqual(config.registry_url, "https://npm.example.com/")
        self.assertEqual(config.normalized().registry_url, "https://npm.example.com")

    def test_wrong_url_type_does_not_crash_construction(self) -> None:
        config = config_from_mapping({"registry_url": 5})
        self.assertEqual(config.registry_url, 5)


class TestLoadConfigFile(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmpdir.name)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_load_mapping(self) -> None:
        path = self.dir / "lookalike.yaml"
        path.write_text("timeout: 3\nsearch_size: 20\n", encoding="utf-8")
        self.assertEqual(load_config_file(path), {"timeout": 3, "search_size": 20})

    def test_empty_file(self) -> None:
        path = self.dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        self.assertEqual(load_config_file(path), {})

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config_file(self.dir / "nope.yaml")

    def test_not_a_mapping(self) -> None:
        path = self.dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with self.assertRaisesRegex(ValueError, "mapping"):
            load_config_file(path)


class TestConfigFromMapping(unittest.TestCase):
    def test_file_values(self) -> None:
        config = config_from_mapping({"timeout": 2.5, "similarity_threshold": 1})
        self.assertEqual(config.timeout, 2.5)
        self.assertEqual(config.similarity_threshold, 1)
        self.assertEqual(config.search_size, 10)

    def test_cli_overrides_win(self) -> None:
        config = config_from_mapping(
            {"timeout": 2.5, "search_size": 5},
            cli_overrides={"timeout": 7.0, "search_size": None},
        )
        self.assertEqual(config.timeout, 7.0)
        self.assertEqual(config.search_size, 5)

    def test_unknown_key(self) -> None:
        with self.assertRaisesRegex(ValueError, "registry"):
            config_from_mapping({"registry": "https://npm.example.com"})


class TestValidateConfig(unittest.TestCase):
    def test_valid(self) -> None:
        self.assertEqual(validate_config(LookalikeConfig()), [])

    def test_invalid_fields(self) -> None:
        config = LookalikeConfig(
            registry_url="ftp://npm.example.com",
            timeout=0,
            search_size=0,
            similarity_threshold=-1,
        )
        fields = [e.field for e in validate_config(config)]
        self.assertEqual(
            fields, ["registry_url", "timeout", "search_size", "similarity_threshold"]
        )

    def test_wrong_types_reported_before_ranges(self) -> None:
        config = config_from_mapping(
            {
                "registry_url": 5,
                "timeout": "fast",
                "search_size": 2.5,
                "similarity_threshold": True,
            }
        )
        errors = validate_config(config)
        self.assertEqual(
            [e.field for e in errors],
            ["registry_url", "timeout", "search_size", "similarity_threshold"],
        )
        self.assertIn("must be a string, got int", errors[0].message)
        self.assertIn("must be a number, got str", errors[1].message)

    def test_int_timeout_accepted(self) -> None:
        self.assertEqual(validate_config(config_from_mapping({"timeout": 3})), [])

    def test_search_size_upper_bound(self) -> None:
        errors = validate_config(LookalikeConfig(search_size=251))
        self.assertEqual([e.field for e in errors], ["search_size"])
        self.assertEqual(validate_config(LookalikeConfig(search_size=250)), [])


if __name__ == "__main__":
    unittest.main()

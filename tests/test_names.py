"""Tests for lookalike.names."""

import unittest

from lookalike.names import (
    encode_package_path,
    normalize_package_name,
    split_scope,
    strip_scope,
)


class TestNormalizePackageName(unittest.TestCase):
    def test_known_names(self) -> None:
        cases = [
            ("esbuild", "esbuild"),
            ("@scope/package", "package"),
            ("ESBuild", "esbuild"),
            ("my.package", "mypackage"),
            ("my-package", "mypackage"),
            ("my_package", "mypackage"),
            ("jslint", "lint"),
            ("nodefoo", "foo"),
            ("foojs", "foo"),
            ("foonode", "foo"),
            ("foo-js", "foo"),
            ("foo-node", "foo"),
            ("@foo/bar", "bar"),
        ]
        for name, expected in cases:
            with self.subTest(name=name):
                self.assertEqual(normalize_package_name(name), expected)

    def test_empty_string(self) -> None:
        self.assertEqual(normalize_package_name(""), "")

    def test_scope_only(self) -> None:
        self.assertEqual(normalize_package_name("@scope/"), "")

    def test_affix_alone_is_kept(self) -> None:
        self.assertEqual(normalize_package_name("js"), "js")
        self.assertEqual(normalize_package_name("node"), "node")

    def test_prefix_wins_over_suffix(self) -> None:
        # "nodejs" would become "node" if suffixes were tried first.
        self.assertEqual(normalize_package_name("nodejs"), "js")
        self.assertEqual(normalize_package_name("Node.js"), "js")

    def test_exposed_affix_is_stripped_too(self) -> None:
        self.assertEqual(normalize_package_name("nodejsfoo"), "foo")
        self.assertEqual(normalize_package_name("js-foo-node"), "foo")

    def test_separator_insensitive(self) -> None:
        keys = {normalize_package_name(n) for n in ("my-package", "my_package", "my.package")}
        self.assertEqual(keys, {"mypackage"})

    def test_case_insensitive(self) -> None:
        self.assertEqual(normalize_package_name("ESBuild"), "esbuild")

    def test_scope_insensitive(self) -> None:
        for scope in ("babel", "types", "a-b.c"):
            for name in ("core", "my-package", "react-dom"):
                with self.subTest(scope=scope, name=name):
                    self.assertEqual(
                        normalize_package_name(f"@{scope}/{name}"),
                        normalize_package_name(name),
                    )

    def test_idempotent(self) -> None:
        names = [
            "",
            "js",
            "node",
            "nodejs",
            "jsnode",
            "nodejsfoo",
            "foo-js-node",
            "@swc/core-linux-x64-gnu",
            "Node.js",
            "my_Package.JS",
            "react",
        ]
        for name in names:
            with self.subTest(name=name):
                once = normalize_package_name(name)
                self.assertEqual(normalize_package_name(once), once)


class TestScopeHelpers(unittest.TestCase):
    def test_split_scoped(self) -> None:
        self.assertEqual(split_scope("@babel/core"), ("@babel", "core"))

    def test_split_unscoped(self) -> None:
        self.assertEqual(split_scope("react"), (None, "react"))

    def test_split_scope_only(self) -> None:
        self.assertEqual(split_scope("@scope/"), ("@scope", ""))

    def test_strip_scope(self) -> None:
        self.assertEqual(strip_scope("@esbuild/linux-x64"), "linux-x64")
        self.assertEqual(strip_scope("lodash"), "lodash")


class TestEncodePackagePath(unittest.TestCase):
    def test_unscoped_unchanged(self) -> None:
        self.assertEqual(encode_package_path("some-package"), "some-package")

    def test_scoped_slash_encoded(self) -> None:
        self.assertEqual(encode_package_path("@vue/core"), "@vue%2Fcore")


if __name__ == "__main__":
    unittest.main()

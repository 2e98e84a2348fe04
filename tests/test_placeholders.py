from __future__ import annotations

import unittest

from nativepkg.placeholders import PlaceholderError, PlaceholderResolver


class PlaceholderResolverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.context = {
            "project": {
                "base_dir": "/src/demo",
                "build_dir": "{{project.base_dir}}/target",
                "package_dir": "{{project.build_dir}}/native-package",
                "version": 2,
                "nested": {"key": "value"},
            },
            "env": {"HOME": "/home/dev"},
        }
        self.resolver = PlaceholderResolver(self.context)

    def test_resolve_placeholder(self) -> None:
        self.assertEqual(self.resolver.resolve("{{project.base_dir}}/out"), "/src/demo/out")

    def test_nested_variable_resolution(self) -> None:
        self.assertEqual(self.resolver.resolve("{{ project.package_dir }}"), "/src/demo/target/native-package")

    def test_non_string_values_are_converted(self) -> None:
        self.assertEqual(self.resolver.resolve("v{{project.version}}"), "v2")

    def test_text_without_placeholders(self) -> None:
        self.assertEqual(self.resolver.resolve("plain/path"), "plain/path")

    def test_missing_path(self) -> None:
        with self.assertRaises(PlaceholderError):
            self.resolver.resolve("{{project.unknown}}")

    def test_table_is_not_a_value(self) -> None:
        with self.assertRaises(PlaceholderError):
            self.resolver.resolve("{{project.nested}}")

    def test_cycle_detection(self) -> None:
        resolver = PlaceholderResolver({"a": {"x": "{{a.y}}", "y": "{{a.x}}"}})
        with self.assertRaises(PlaceholderError) as ctx:
            resolver.resolve("{{a.x}}")
        self.assertIn("a.x -> a.y -> a.x", str(ctx.exception))

    def test_cache_can_be_cleared(self) -> None:
        context = {"env": {"HOME": "/one"}}
        resolver = PlaceholderResolver(context)
        self.assertEqual(resolver.resolve("{{env.HOME}}"), "/one")
        context["env"]["HOME"] = "/two"
        self.assertEqual(resolver.resolve("{{env.HOME}}"), "/one")
        resolver.clear_cache()
        self.assertEqual(resolver.resolve("{{env.HOME}}"), "/two")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

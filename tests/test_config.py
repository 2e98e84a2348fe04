from __future__ import annotations

from pathlib import Path
import json
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from nativepkg.config import build_config, load_package_config
from nativepkg.config_loader import find_config_file, load_config_file, merge_mappings
from nativepkg.errors import ConfigurationError


class BuildConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.base = Path("/work/project")

    def test_defaults_follow_build_directory(self) -> None:
        config = build_config({"package": {"artifact_id": "demo", "version": "2.1"}}, base_dir=self.base)

        self.assertEqual(config.name, "demo")
        self.assertEqual(config.build_dir, self.base / "target")
        self.assertEqual(config.package_dir, self.base / "target" / "native-package")
        self.assertEqual(config.native_src, self.base / "target" / "generated-sources" / "hawtjni" / "native")
        self.assertEqual(config.resources, self.base / "src" / "main" / "native-package")
        self.assertEqual(config.encoding, "UTF-8")
        self.assertEqual(config.classifier, "native-src")
        self.assertEqual(config.archive_format, "zip")
        self.assertEqual(config.package_name, "demo-2.1-native-src")
        self.assertEqual(config.archive_path, self.base / "target" / "demo-2.1-native-src.zip")

    def test_placeholders_reference_other_settings(self) -> None:
        config = build_config(
            {
                "package": {
                    "artifact_id": "demo",
                    "version": "1.0",
                    "name": "demo-jni",
                    "build_dir": "out",
                    "package_dir": "{{project.build_dir}}/{{project.name}}-{{project.version}}",
                }
            },
            base_dir=self.base,
        )
        self.assertEqual(config.package_dir, self.base / "out" / "demo-jni-1.0")

    def test_env_placeholders(self) -> None:
        with patch.dict("os.environ", {"NATIVE_SRC": "/opt/native"}):
            config = build_config(
                {"package": {"artifact_id": "demo", "version": "1.0", "native_src": "{{env.NATIVE_SRC}}"}},
                base_dir=self.base,
            )
        self.assertEqual(config.native_src, Path("/opt/native"))

    def test_empty_optional_trees_are_disabled(self) -> None:
        config = build_config(
            {"package": {"artifact_id": "demo", "version": "1.0", "native_src": "", "resources": ""}},
            base_dir=self.base,
        )
        self.assertIsNone(config.native_src)
        self.assertIsNone(config.resources)

    def test_archive_format_changes_extension(self) -> None:
        config = build_config(
            {"package": {"artifact_id": "demo", "version": "1.0", "format": "tar.gz"}},
            base_dir=self.base,
        )
        self.assertEqual(config.archive_format, "gztar")
        self.assertEqual(config.archive_path.name, "demo-1.0-native-src.tar.gz")

    def test_missing_required_settings(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_config({"package": {"version": "1.0"}}, base_dir=self.base)
        with self.assertRaises(ConfigurationError):
            build_config({"package": {"artifact_id": "demo"}}, base_dir=self.base)
        with self.assertRaises(ConfigurationError):
            build_config({}, base_dir=self.base)

    def test_invalid_values(self) -> None:
        base = {"artifact_id": "demo", "version": "1.0"}
        with self.assertRaises(ConfigurationError):
            build_config({"package": {**base, "encoding": "no-such-codec"}}, base_dir=self.base)
        with self.assertRaises(ConfigurationError):
            build_config({"package": {**base, "format": "rar"}}, base_dir=self.base)
        with self.assertRaises(ConfigurationError):
            build_config({"package": {**base, "classifier": ["a"]}}, base_dir=self.base)

    def test_circular_placeholders(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_config(
                {
                    "package": {
                        "artifact_id": "demo",
                        "version": "1.0",
                        "build_dir": "{{project.package_dir}}",
                        "package_dir": "{{project.build_dir}}/pkg",
                    }
                },
                base_dir=self.base,
            )


class LoadPackageConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.workspace = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_loads_toml_from_workspace(self) -> None:
        (self.workspace / "native-package.toml").write_text(
            textwrap.dedent(
                """
                [package]
                artifact_id = "leveldbjni"
                version = "1.8"
                classifier = "native-src"
                """
            ),
            encoding="utf-8",
        )

        config = load_package_config(workspace=self.workspace)

        self.assertEqual(config.artifact_id, "leveldbjni")
        self.assertEqual(config.base_dir, self.workspace.resolve())

    def test_overrides_win_over_file(self) -> None:
        path = self.workspace / "settings.json"
        path.write_text(json.dumps({"package": {"artifact_id": "demo", "version": "1.0"}}), encoding="utf-8")

        config = load_package_config(path, overrides={"version": "2.0", "classifier": None}, workspace=self.workspace)

        self.assertEqual(config.version, "2.0")
        self.assertEqual(config.classifier, "native-src")

    def test_yaml_configuration(self) -> None:
        path = self.workspace / "native-package.yaml"
        path.write_text("package:\n  artifact_id: demo\n  version: '3.0'\n  name: demo-core\n", encoding="utf-8")

        config = load_package_config(path)

        self.assertEqual(config.name, "demo-core")
        self.assertEqual(config.build_dir, self.workspace.resolve() / "target")

    def test_overrides_without_file(self) -> None:
        config = load_package_config(overrides={"artifact_id": "demo", "version": "1.0"}, workspace=self.workspace)
        self.assertEqual(config.package_name, "demo-1.0-native-src")

    def test_missing_explicit_file(self) -> None:
        with self.assertRaises(ConfigurationError):
            load_package_config(self.workspace / "absent.toml")

    def test_malformed_file(self) -> None:
        path = self.workspace / "native-package.toml"
        path.write_text("[package\n", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_package_config(path)

    def test_ambiguous_configuration_files(self) -> None:
        (self.workspace / "native-package.toml").write_text("", encoding="utf-8")
        (self.workspace / "native-package.json").write_text("{}", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_package_config(workspace=self.workspace)


class ConfigLoaderTests(unittest.TestCase):
    def test_merge_mappings_is_deep(self) -> None:
        base = {"package": {"artifact_id": "demo", "version": "1.0"}, "other": 1}
        overlay = {"package": {"version": "2.0"}}
        self.assertEqual(
            merge_mappings(base, overlay),
            {"package": {"artifact_id": "demo", "version": "2.0"}, "other": 1},
        )
        self.assertEqual(base["package"]["version"], "1.0")

    def test_unsupported_extension(self) -> None:
        with self.assertRaises(ValueError):
            load_config_file(Path("settings.ini"))

    def test_root_must_be_mapping(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.json"
            path.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(TypeError):
                load_config_file(path)

    def test_package_entry_must_be_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "native-package.toml"
            path.write_text('package = "demo"\n', encoding="utf-8")
            with self.assertRaises(TypeError):
                load_config_file(path)

    def test_empty_yaml_is_empty_configuration(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "native-package.yaml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(load_config_file(path), {})

    def test_find_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.assertIsNone(find_config_file(root))
            (root / "native-package.yml").write_text("package: {}\n", encoding="utf-8")
            self.assertEqual(find_config_file(root), root / "native-package.yml")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

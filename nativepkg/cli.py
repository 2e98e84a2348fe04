"""Command line interface for native-package."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any, Dict, Iterable
import sys

from .config import load_package_config
from .console import Console
from .errors import PackagingError
from .package import PackageBuilder, RecordingArtifactRegistry
from .resources import DirectoryTemplateProvider, default_template_provider
from .variables import VariableResolver


_OVERRIDE_OPTIONS: Dict[str, str] = {
    "name": "name",
    "artifact_id": "artifact_id",
    "version": "version",
    "build_dir": "build_dir",
    "package_dir": "package_dir",
    "native_src": "native_src",
    "resources": "resources",
    "encoding": "encoding",
    "classifier": "classifier",
    "archive_format": "format",
}


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(prog="native-package", description="Autotools source package generator for native code")
    subparsers = parser.add_subparsers(dest="command", required=True)

    package_parser = subparsers.add_parser("package", help="Stage native sources and build the package archive")
    package_parser.add_argument("--config", type=Path, help="Configuration file (default: ./native-package.{toml,json,yaml})")
    package_parser.add_argument("--name", help="Library base name used in the generated files (default: artifact id)")
    package_parser.add_argument("--artifact-id", help="Artifact id used to name the archive")
    package_parser.add_argument("--version", help="Project version")
    package_parser.add_argument("--build-dir", help="Build output directory for the archive and temporary files")
    package_parser.add_argument("--package-dir", help="Staging directory for the package contents")
    package_parser.add_argument("--native-src", help="Directory of native sources copied into src/")
    package_parser.add_argument("--resources", help="Directory of extra files copied into the package root")
    package_parser.add_argument("--encoding", help="Text encoding of the filtered templates (default: UTF-8)")
    package_parser.add_argument("--classifier", help="Classifier of the package archive (default: native-src)")
    package_parser.add_argument("--format", dest="archive_format", help="Archive format: zip, tar, gztar, xztar or zst (default: zip)")
    package_parser.add_argument("--template-dir", type=Path, help="Use templates from this directory instead of the bundled ones")
    package_parser.add_argument("--show-vars", action="store_true", help="Display the template variables after staging")
    package_parser.add_argument(
        "--log-level",
        choices=sorted(Console.LEVELS, key=Console.LEVELS.__getitem__),
        default="error",
        help="Console verbosity (default: error)",
    )

    return parser.parse_args(list(argv))


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    workspace = Path.cwd()

    if args.command == "package":
        return _handle_package(args, workspace)
    raise ValueError(f"Unknown command: {args.command}")


def _collect_overrides(args: Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for attribute, key in _OVERRIDE_OPTIONS.items():
        value = getattr(args, attribute, None)
        if value is not None:
            overrides[key] = value
    return overrides


def _handle_package(args: Namespace, workspace: Path) -> int:
    console = Console(args.log_level)
    registry = RecordingArtifactRegistry()

    try:
        config = load_package_config(args.config, overrides=_collect_overrides(args), workspace=workspace)
        provider = DirectoryTemplateProvider(args.template_dir) if args.template_dir else default_template_provider()
        builder = PackageBuilder(config=config, console=console, provider=provider, registry=registry)
        builder.build()
    except PackagingError as exc:
        console.error(str(exc))
        return 1

    if args.show_vars:
        from pprint import pprint

        variables = VariableResolver(name=config.name, version=config.version).resolve(
            builder.staging_context().source_staging_dir)
        print("Template variables:")
        pprint(dict(variables))

    for line in registry.iter_formatted():
        print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

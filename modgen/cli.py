"""Command-line entry point for modgen.

Usage::

    modgen --name "My Module" --package com.example.mymodule --scopes GD
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.markup import escape

from modgen.config import GeneratorSettings
from modgen.scaffolder.errors import ConfigError, MaterializationIOError, TargetNotEmptyError
from modgen.scaffolder.generator import ModuleGenerator
from modgen.scaffolder.validation import RawGenerationParams, validate
from modgen.scaffolder.models import GradleDsl, SourceLanguage
from modgen.utils import console, print_error, print_success, print_summary_table, print_warning

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_IO_ERROR = 2


def _replacement(value: str) -> tuple[str, str]:
    key, sep, replacement = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{value}'")
    return key, replacement


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modgen",
        description="Generate an Ignition module project skeleton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Scopes: G (Gateway), D (Designer), C (Vision Client).\n\n"
            "Examples:\n"
            "  modgen --name 'My Module' --package com.example.mymodule --scopes G\n"
            "  modgen --name Charts --package org.acme.charts --scopes GDC -d ./work\n"
            "  modgen -n Charts -p org.acme.charts -s G --language kotlin --build-dsl groovy\n"
        ),
    )
    parser.add_argument("--name", "-n", required=True, help="Human readable module name")
    parser.add_argument("--package", "-p", required=True, help="Root package, e.g. com.example.thing")
    parser.add_argument("--scopes", "-s", required=True, help="Scope letters, e.g. GDC")
    parser.add_argument(
        "--dir", "-d",
        default=".",
        help="Parent directory for the project folder (default: current directory)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Allow generating into an existing, non-empty project folder",
    )
    parser.add_argument(
        "--no-tooling",
        action="store_true",
        help="Skip Gradle wrapper properties and .gitignore/.gitattributes",
    )
    parser.add_argument(
        "--require-signing",
        action="store_true",
        help="Generate a build that signs the module",
    )
    parser.add_argument(
        "--debug-plugin",
        action="store_true",
        help="Resolve Gradle plugins from mavenLocal() first",
    )
    parser.add_argument(
        "--language",
        choices=[lang.value for lang in SourceLanguage],
        default=SourceLanguage.JAVA.value,
        help="Language of the generated hook classes (default: java)",
    )
    parser.add_argument(
        "--build-dsl",
        choices=[dsl.value for dsl in GradleDsl],
        default=GradleDsl.KOTLIN.value,
        help="DSL of the generated build scripts (default: kotlin)",
    )
    parser.add_argument(
        "--settings-dsl",
        choices=[dsl.value for dsl in GradleDsl],
        default=GradleDsl.KOTLIN.value,
        help="DSL of the generated settings script (default: kotlin)",
    )
    parser.add_argument(
        "--root-plugin-config",
        default="",
        help="Body of the root plugins block, replacing the generated one",
    )
    parser.add_argument(
        "--replace",
        action="append",
        type=_replacement,
        default=[],
        metavar="KEY=VALUE",
        help="Extra literal replacement applied to generated files (repeatable)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        metavar="FILE",
        help="JSON file with generator settings; MODGEN_* variables still override it",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``modgen``."""
    args = build_parser().parse_args(argv)
    sys.exit(run(args))


def run(args: argparse.Namespace) -> int:
    """Validate, generate and report.  Returns the process exit status."""
    base = None
    if args.settings is not None:
        try:
            base = GeneratorSettings.load(args.settings)
        except OSError as exc:
            print_error(escape(f"Cannot read settings file {args.settings}: {exc}"))
            return EXIT_IO_ERROR
        except ValidationError as exc:
            print_error(escape(f"Invalid settings file {args.settings}: {exc}"))
            return EXIT_INVALID
    settings = GeneratorSettings.from_env(base)
    if args.require_signing:
        settings = settings.model_copy(update={"skip_module_signing": False})
    if args.debug_plugin:
        settings = settings.model_copy(update={"debug_plugin_config": True})

    raw = RawGenerationParams(
        module_name=args.name,
        package_name=args.package,
        scopes=args.scopes,
        parent_dir=Path(args.dir),
        include_build_tooling=not args.no_tooling,
        overwrite=args.overwrite,
        project_language=SourceLanguage(args.language),
        settings_dsl=GradleDsl(args.settings_dsl),
        build_dsl=GradleDsl(args.build_dsl),
        root_plugin_config=args.root_plugin_config,
        custom_replacements=dict(args.replace),
        settings=settings,
    )

    try:
        config = validate(raw)
    except ConfigError as exc:
        print_error("Cannot generate the module:")
        for violation in exc.violations:
            console.print(f"  - [bold]{violation.kind.value}[/bold]: {escape(violation.message)}")
        return EXIT_INVALID

    for warning in config.warnings:
        print_warning(escape(warning))

    try:
        result = ModuleGenerator(config).generate()
    except TargetNotEmptyError as exc:
        print_error(escape(str(exc)))
        return EXIT_INVALID
    except MaterializationIOError as exc:
        print_error(escape(str(exc)))
        return EXIT_IO_ERROR

    print_summary_table(
        {
            "Module": config.module_name,
            "Module id": f"{config.package_name}.{config.module_id}",
            "Scopes": ", ".join(s.folder_name for s in config.effective_scopes),
            "Language": config.project_language.value,
            "Location": str(result.root),
            "Files written": str(len(result.files)),
        },
        title="Module generated",
    )
    print_success(f"Project created at {result.root}")
    return EXIT_OK


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Skill Builder - command line interface.

Usage:
    skill-builder check [path] [--format text|json|markdown] [--verbose] [--lang zh]
    skill-builder create [name] [--path DIR] [--template basic|advanced|analyzer]
    skill-builder init [--force]
    skill-builder update [path] [--add-language L] [--add-dependency D] [--bump PART]

Output format, verbosity and language default to the skill's .skill.yml
``settings:`` block, then SKB_FORMAT / SKB_VERBOSE / SKB_LANGUAGE; flags win.
SKB_POLYGLOT points at an extra polyglot.json with message translations.

Exit codes:
    0 - Success (check: no errors)
    1 - Check found errors, or the command failed
    2 - Usage error
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from skb_config import Settings, load_settings
from skb_create import create_skill, print_create_result
from skb_init import init_skill, print_init_result
from skb_report import format_output
from skb_templates import TEMPLATES
from skb_translations import Translator, load_translations, make_translator
from skb_update import VERSION_PARTS, print_update_result, update_skill
from skb_validation_common import EXIT_FAILED, EXIT_OK, OUTPUT_FORMATS, SkillBuilderError, colorize
from validate_skill import validate_skill

__version__ = "1.0.0"


def _translator(settings: Settings, language: str | None = None) -> Translator:
    translations = load_translations(settings.polyglot_path)
    return make_translator(translations, settings.language if language is None else language)


def cmd_check(args: argparse.Namespace) -> int:
    skill_path = Path(args.path)
    settings = load_settings(skill_path)
    output_format = args.format or settings.output_format
    verbose = args.verbose or settings.verbose
    t = _translator(settings, args.lang)

    report = validate_skill(args.path, translate=t, verbose=verbose)
    print(format_output(report, output_format, t))
    return report.exit_code


def cmd_create(args: argparse.Namespace) -> int:
    t = _translator(load_settings())
    try:
        result = create_skill(args.name, args.path, args.template, translate=t)
    except (SkillBuilderError, ValueError, OSError) as e:
        print(colorize(f"Error: {e}", "error", sys.stderr), file=sys.stderr)
        return EXIT_FAILED
    print_create_result(result, t)
    return EXIT_OK


def cmd_init(args: argparse.Namespace) -> int:
    cwd = Path.cwd()
    t = _translator(load_settings(cwd))
    try:
        result = init_skill(cwd, force=args.force, translate=t)
    except (SkillBuilderError, OSError) as e:
        print(colorize(f"Error: {e}", "error", sys.stderr), file=sys.stderr)
        return EXIT_FAILED
    print_init_result(result, t)
    return EXIT_OK if result.success else EXIT_FAILED


def cmd_update(args: argparse.Namespace) -> int:
    t = _translator(load_settings(Path(args.path)))
    try:
        result = update_skill(args.path, args.add_language, args.add_dependency, args.bump, translate=t)
    except SkillBuilderError as e:
        print(colorize(f"Error: {e}", "error", sys.stderr), file=sys.stderr)
        return EXIT_FAILED
    print_update_result(result)
    return EXIT_OK if result.success else EXIT_FAILED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skill-builder",
        description="Validate and scaffold Claude skills",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s check                          Validate current directory as a skill
  %(prog)s check ./my-skill -f markdown   Markdown report
  %(prog)s create my-awesome-skill        Create a new skill
  %(prog)s init                           Initialize current directory as a skill
  %(prog)s update --add-language zh       Add Chinese language support
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Validate a skill")
    check.add_argument("path", nargs="?", default=".", help="Path to skill directory")
    check.add_argument("--format", "-f", choices=OUTPUT_FORMATS, help="Output format (default: text)")
    check.add_argument("--verbose", "-v", action="store_true", help="Print progress to stderr")
    check.add_argument("--lang", help="Message language (locale code, e.g. zh)")
    check.set_defaults(func=cmd_check)

    create = subparsers.add_parser("create", help="Create a new skill")
    create.add_argument("name", nargs="?", default="my-new-skill", help="Name of skill (kebab-case)")
    create.add_argument("--path", "-p", default=".", help="Directory to create skill in")
    create.add_argument("--template", "-t", choices=TEMPLATES, default="basic", help="Template to use")
    create.set_defaults(func=cmd_create)

    init = subparsers.add_parser("init", help="Initialize current directory as a skill")
    init.add_argument("--force", "-f", action="store_true", help="Overwrite existing files")
    init.set_defaults(func=cmd_init)

    update = subparsers.add_parser("update", help="Update an existing skill")
    update.add_argument("path", nargs="?", default=".", help="Path to skill directory")
    update.add_argument("--add-language", help="Add a new language (locale code)")
    update.add_argument("--add-dependency", help="Add a dependency (name or name@version)")
    update.add_argument("--bump", choices=VERSION_PARTS, help="Bump package.json version")
    update.set_defaults(func=cmd_update)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

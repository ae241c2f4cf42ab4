#!/usr/bin/env python3
"""
Skill Builder - Skill Validator

Validates a skill directory against the skill package conventions:
SKILL.md with frontmatter, package.json, polyglot.json, the CLI entry point,
open source housekeeping files, marketplace.json and bundled resources.

Every finding is recorded as a CheckResult; nothing here raises for a bad
skill. The only early exit is a target directory that does not exist.

Usage:
    python scripts/validate_skill.py path/to/skill/
    python scripts/validate_skill.py path/to/skill/ --format json
    python scripts/validate_skill.py path/to/skill/ --format markdown --verbose

Exit codes:
    0 - No errors (warnings and info do not block)
    1 - At least one error
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from skb_report import format_output
from skb_translations import Translator, make_translator
from skb_validation_common import (
    ARGV_INDICATORS,
    BEST_PRACTICE_PATHS,
    BUILD_OUTPUT_DIR,
    BUNDLED_RESOURCES,
    CLI_ENTRY_POINT,
    FRONTMATTER_DELIMITER,
    MARKETPLACE_REQUIRED_FIELDS,
    MAX_SKILL_WORDS,
    MODULE_TYPE,
    OPEN_SOURCE_FILES,
    OUTPUT_FORMATS,
    PACKAGE_JSON_FIELDS,
    PACKAGE_NAME_PATTERN,
    RECOMMENDED_FILES,
    REQUIRED_FILES,
    USAGE_PHRASES,
    VALID_MARKETPLACES,
    OutputFormat,
    ValidationReport,
    is_path_gitignored,
    parse_gitignore,
)


class _InvalidJSON(Exception):
    """Raised by _load_json when a file cannot be read or parsed."""


def _progress(message: str, verbose: bool) -> None:
    if verbose:
        print(message, file=sys.stderr)


def _file_check_name(rel_path: str) -> str:
    return "file_" + rel_path.replace("/", "_")


def _load_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError, RecursionError) as e:
        raise _InvalidJSON(str(e)) from e


def _load_json_object(path: Path) -> dict[str, Any]:
    data = _load_json(path)
    if not isinstance(data, dict):
        raise _InvalidJSON(f"{path.name} must contain a JSON object")
    return data


# =============================================================================
# Frontmatter
# =============================================================================


def find_frontmatter(content: str) -> tuple[int, int] | None:
    """Locate the header block between the opening and closing delimiters.

    This is intentionally not a YAML parser. The block opens with ``---`` at
    offset 0; it closes at the first later line that starts with ``---``.

    Returns:
        (start, end) offsets of the header text, where ``content[end:]`` begins
        with the closing delimiter, or None when no closing delimiter exists.
    """
    if not content.startswith(FRONTMATTER_DELIMITER):
        return None

    first_newline = content.find("\n")
    if first_newline == -1:
        return None

    start = first_newline + 1
    offset = start
    while offset < len(content):
        if content.startswith(FRONTMATTER_DELIMITER, offset):
            return start, offset
        next_newline = content.find("\n", offset)
        if next_newline == -1:
            break
        offset = next_newline + 1
    return None


def header_value(header: str, key: str) -> str | None:
    """Raw remainder of the line after the first ``key:`` in the header text.

    Matches anywhere in the header, not only at the start of a line.
    """
    marker = f"{key}:"
    index = header.find(marker)
    if index == -1:
        return None
    line_end = header.find("\n", index)
    value = header[index + len(marker) : line_end if line_end != -1 else len(header)]
    return value.strip()


# =============================================================================
# Check groups
# =============================================================================


def validate_required_files(skill_path: Path, report: ValidationReport, t: Translator) -> None:
    """Required files: error when missing."""
    for rel_path in REQUIRED_FILES:
        exists = (skill_path / rel_path).exists()
        report.check(
            "structure",
            _file_check_name(rel_path),
            exists,
            "error",
            t("error_missing_required", file=rel_path),
        )


def validate_skill_md(skill_path: Path, report: ValidationReport) -> None:
    """Validate SKILL.md frontmatter, body and length."""
    skill_md = skill_path / "SKILL.md"
    if not skill_md.is_file():
        return

    try:
        content = skill_md.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        report.add_check("SKILL.md", "readable", False, "error", "Could not read SKILL.md")
        return

    has_frontmatter = report.check(
        "SKILL.md",
        "has_frontmatter",
        content.startswith(FRONTMATTER_DELIMITER),
        "error",
        f"SKILL.md must start with YAML frontmatter ({FRONTMATTER_DELIMITER})",
    )

    bounds = find_frontmatter(content) if has_frontmatter else None
    if bounds is not None:
        header = content[bounds[0] : bounds[1]]

        report.check(
            "SKILL.md",
            "frontmatter_has_name",
            "name:" in header,
            "error",
            'Frontmatter must include "name:" field',
        )
        has_description = report.check(
            "SKILL.md",
            "frontmatter_has_description",
            "description:" in header,
            "error",
            'Frontmatter must include "description:" field',
        )
        report.check(
            "SKILL.md",
            "frontmatter_has_license",
            "license:" in header,
            "info",
            'Consider adding "license:" field to frontmatter',
        )

        description = header_value(header, "description") if has_description else None
        if description:
            lowered = description.lower()
            report.check(
                "SKILL.md",
                "describes_when_to_use",
                any(phrase in lowered for phrase in USAGE_PHRASES),
                "warning",
                'Description should explain when to use this skill (e.g., "Use this skill when...")',
            )

    body = content[bounds[1] + len(FRONTMATTER_DELIMITER) :] if bounds is not None else ""
    report.check(
        "SKILL.md",
        "has_markdown_body",
        bool(body.strip()),
        "warning",
        "SKILL.md should have markdown body content after frontmatter",
    )

    word_count = len(content.split())
    report.check(
        "SKILL.md",
        "concise_content",
        word_count <= MAX_SKILL_WORDS,
        "warning",
        f"SKILL.md is quite long ({word_count} words). Consider moving detailed reference "
        "material to references/ directory (concise is key)",
        ok_message=f"SKILL.md is concise ({word_count} words)",
    )


def validate_recommended_files(skill_path: Path, report: ValidationReport, t: Translator) -> None:
    """Recommended files: warning only when missing."""
    for rel_path in RECOMMENDED_FILES:
        if rel_path in REQUIRED_FILES or (skill_path / rel_path).exists():
            continue
        report.add_check(
            "structure",
            _file_check_name(rel_path),
            False,
            "warning",
            t("warning_missing_file", file=rel_path),
        )


def validate_package_json(skill_path: Path, report: ValidationReport, t: Translator) -> None:
    """Validate package.json fields, name format, module type and bin entry."""
    package_path = skill_path / "package.json"
    if not package_path.is_file():
        return

    try:
        package = _load_json_object(package_path)
    except _InvalidJSON:
        report.add_check(
            "package.json", "valid_json", False, "error", t("error_invalid_package_json", path=package_path)
        )
        return

    for field_name in PACKAGE_JSON_FIELDS:
        report.check(
            "package.json",
            f"field_{field_name}",
            field_name in package,
            "warning",
            f"Missing field: {field_name}",
        )

    name = package.get("name")
    if name:
        report.check(
            "package.json",
            "name_format",
            isinstance(name, str) and bool(PACKAGE_NAME_PATTERN.match(name)),
            "warning",
            "Name should be kebab-case (lowercase with hyphens)",
        )

    module_type = package.get("type")
    if module_type:
        report.check(
            "package.json",
            "is_module",
            module_type == MODULE_TYPE,
            "warning",
            f'Type should be "{MODULE_TYPE}"',
        )

    bin_field = package.get("bin")
    if bin_field:
        if isinstance(bin_field, str):
            bin_path = bin_field
        elif isinstance(bin_field, dict) and isinstance(name, str):
            bin_path = bin_field.get(name)
        else:
            bin_path = None
        report.check(
            "package.json",
            "bin_correct",
            bin_path == CLI_ENTRY_POINT,
            "info",
            f'bin should point to "{CLI_ENTRY_POINT}"',
        )


def validate_polyglot_json(skill_path: Path, report: ValidationReport) -> None:
    """Validate polyglot.json default locale and language coverage."""
    polyglot_path = skill_path / "polyglot.json"
    if not polyglot_path.is_file():
        report.add_check(
            "polyglot.json", "exists", False, "warning", "Consider using polyglot.json for internationalization"
        )
        return

    try:
        polyglot = _load_json_object(polyglot_path)
    except _InvalidJSON:
        report.add_check("polyglot.json", "valid_json", False, "error", "polyglot.json contains invalid JSON")
        return

    entries = [value for value in polyglot.values() if isinstance(value, dict)]

    report.check(
        "polyglot.json",
        "has_default_language",
        any("" in entry for entry in entries),
        "warning",
        "Each key should have a default (empty string) translation",
    )

    # dict keeps first-seen order, so the language list is deterministic
    languages: dict[str, None] = {}
    for entry in entries:
        for locale in entry:
            languages.setdefault(locale, None)

    report.check(
        "polyglot.json",
        "multiple_languages",
        len(languages) > 1,
        "info",
        "Consider adding multiple language support",
        ok_message=f"Found {len(languages)} languages: {', '.join(languages)}",
    )


def validate_cli_entry(skill_path: Path, report: ValidationReport) -> None:
    """Validate the built CLI entry point (shebang and argument parsing)."""
    cli_path = skill_path / CLI_ENTRY_POINT
    if not cli_path.is_file():
        return

    try:
        content = cli_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        report.add_check("cli", "readable", False, "warning", f"Could not read {CLI_ENTRY_POINT}")
        return

    report.check(
        "cli",
        "has_shebang",
        content.startswith("#!/"),
        "info",
        "CLI file should start with shebang (#!/usr/bin/env node)",
    )
    report.check(
        "cli",
        "parses_args",
        any(indicator in content for indicator in ARGV_INDICATORS),
        "warning",
        "CLI should parse command line arguments",
    )


def validate_best_practices(skill_path: Path, report: ValidationReport) -> None:
    """Configuration, layout, .gitignore and open source housekeeping files."""
    for name, rel_path, severity, message in BEST_PRACTICE_PATHS:
        report.check("best_practices", name, (skill_path / rel_path).exists(), severity, message)

    gitignore_path = skill_path / ".gitignore"
    if gitignore_path.is_file():
        patterns = parse_gitignore(gitignore_path)
        report.check(
            "best_practices",
            "ignores_dist",
            is_path_gitignored(BUILD_OUTPUT_DIR, patterns),
            "warning",
            f"Add /{BUILD_OUTPUT_DIR} to .gitignore",
        )

    for name, rel_path, severity, message in OPEN_SOURCE_FILES:
        report.check("best_practices", name, (skill_path / rel_path).exists(), severity, message)


def validate_marketplace_json(skill_path: Path, report: ValidationReport) -> None:
    """Validate the optional marketplace.json listing metadata."""
    marketplace_path = skill_path / "marketplace.json"
    present = report.check(
        "marketplace",
        "has_marketplace_json",
        marketplace_path.is_file(),
        "info",
        "Consider adding marketplace.json for market distribution",
    )
    if not present:
        return

    try:
        marketplace = _load_json_object(marketplace_path)
    except _InvalidJSON:
        report.add_check("marketplace", "valid_json", False, "error", "marketplace.json contains invalid JSON")
        return

    for field_name in MARKETPLACE_REQUIRED_FIELDS:
        report.check(
            "marketplace",
            f"field_{field_name}",
            field_name in marketplace,
            "warning",
            f"Missing marketplace field: {field_name}",
        )

    for field_name in ("categories", "keywords"):
        value = marketplace.get(field_name)
        if value:
            report.check(
                "marketplace",
                f"has_valid_{field_name}",
                isinstance(value, list) and len(value) > 0,
                "warning",
                f"{field_name} should be a non-empty array",
            )

    market = marketplace.get("marketplace")
    if market:
        report.check(
            "marketplace",
            "valid_marketplace",
            market in VALID_MARKETPLACES,
            "warning",
            f"marketplace should be one of: {', '.join(VALID_MARKETPLACES)}",
        )

    repository = marketplace.get("repository")
    if repository:
        report.check(
            "marketplace",
            "valid_repository_url",
            isinstance(repository, str) and repository.startswith("https://"),
            "warning",
            "repository should be a valid HTTPS URL",
        )


def validate_bundled_resources(skill_path: Path, report: ValidationReport) -> None:
    """Bundled resource directories are advisory only; they never fail."""
    for dir_name, purpose in BUNDLED_RESOURCES.items():
        if (skill_path / dir_name).is_dir():
            report.add_check("bundled_resources", f"has_{dir_name}", True, "success", f"Found {dir_name}/ directory")
        else:
            report.add_check(
                "bundled_resources", f"has_{dir_name}", True, "info", f"Consider adding {dir_name}/ for {purpose}"
            )


def build_recommendations(skill_path: Path, report: ValidationReport, t: Translator) -> list[str]:
    recommendations: list[str] = []
    if report.warnings:
        recommendations.append(t("recommend_address_warnings"))
    if not (skill_path / "polyglot.json").exists():
        recommendations.append(t("recommend_add_polyglot"))
    if not (skill_path / "README.md").exists():
        recommendations.append(t("recommend_add_readme"))
    return recommendations


# =============================================================================
# Entry points
# =============================================================================


def validate_skill(
    skill_path: Path | str,
    translate: Translator | None = None,
    verbose: bool = False,
) -> ValidationReport:
    """Validate a complete skill directory.

    Args:
        skill_path: Path to the skill directory
        translate: Message lookup ``t(key, **fields)``; defaults to the built-in catalog
        verbose: Print progress lines to stderr

    Returns:
        Finalized ValidationReport. A missing directory yields a report with a
        single error check.
    """
    t = translate or make_translator()
    report = ValidationReport(skill_path=str(skill_path))
    path = Path(skill_path)

    _progress(t("info_checking_structure"), verbose)
    # Path("") is ".", so the raw value is checked
    if not os.path.isdir(skill_path):
        report.add_check("structure", "directory_exists", False, "error", t("error_no_skill_dir", path=skill_path))
        return report.finalize()

    validate_required_files(path, report, t)

    _progress(t("info_checking_skill_md"), verbose)
    validate_skill_md(path, report)

    validate_recommended_files(path, report, t)

    _progress(t("info_checking_package"), verbose)
    validate_package_json(path, report, t)

    _progress(t("info_checking_polyglot"), verbose)
    validate_polyglot_json(path, report)

    _progress(t("info_checking_cli"), verbose)
    validate_cli_entry(path, report)

    _progress(t("info_checking_best_practices"), verbose)
    validate_best_practices(path, report)

    _progress(t("info_checking_marketplace"), verbose)
    validate_marketplace_json(path, report)

    _progress(t("info_checking_resources"), verbose)
    validate_bundled_resources(path, report)

    return report.finalize(build_recommendations(path, report, t))


def check_skill(
    skill_path: Path | str,
    output_format: OutputFormat = "text",
    verbose: bool = False,
    translate: Translator | None = None,
) -> str:
    """Validate a skill and return the rendered report.

    Performs no writes and does not map the result to an exit code; callers
    that need one should use ``validate_skill`` and ``ValidationReport.exit_code``.
    """
    t = translate or make_translator()
    report = validate_skill(skill_path, translate=t, verbose=verbose)
    return format_output(report, output_format, t)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Validate a skill directory")
    parser.add_argument("skill_path", nargs="?", default=".", help="Path to the skill directory")
    parser.add_argument("--format", "-f", choices=OUTPUT_FORMATS, default="text", help="Output format")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print progress to stderr")
    args = parser.parse_args()

    report = validate_skill(args.skill_path, verbose=args.verbose)
    print(format_output(report, args.format))
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Skill Builder - Common Module

Shared validation infrastructure for the skill checker and its reporters.
This module contains:
- Type definitions (Severity, OutputFormat, CheckResult, ValidationReport)
- The rule table (required/recommended files, manifest and marketplace rules)
- Utility functions (gitignore matching, colors, exit codes)

The evaluator, reporters and scaffolding commands all import from here so the
rule set has exactly one definition.
"""

from __future__ import annotations

import fnmatch
import json
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

# =============================================================================
# Type Definitions
# =============================================================================

# Check result severities
# - error:   blocks validation (report.success becomes False)
# - warning: never blocks, always reported
# - info:    advisory, suggests an optional improvement
# - success: check satisfied
Severity = Literal["error", "warning", "info", "success"]

SEVERITIES: tuple[Severity, ...] = ("error", "warning", "info", "success")

# Output encodings understood by the reporter
OutputFormat = Literal["text", "json", "markdown"]

OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("text", "json", "markdown")

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_OK = 0  # No error-severity checks
EXIT_FAILED = 1  # At least one error-severity check (or a command failure)

# =============================================================================
# Rule Table
# =============================================================================

# Files whose absence is an error
REQUIRED_FILES: tuple[str, ...] = ("SKILL.md",)

# Files whose absence is a warning
RECOMMENDED_FILES: tuple[str, ...] = (
    "package.json",
    "README.md",
    "polyglot.json",
    ".skill.yml",
)

# Expected CLI entry point, relative to the skill root
CLI_ENTRY_POINT = "dist/cli/index.js"

# Optional bundled resource directories and what each one is for
BUNDLED_RESOURCES: dict[str, str] = {
    "scripts": "executable code that is repeatedly rewritten or requires deterministic reliability",
    "references": "documentation and reference material to be loaded into context as needed",
    "assets": "files used in the output Claude produces (templates, images, fonts, etc.)",
}

# Fields expected in package.json
PACKAGE_JSON_FIELDS: tuple[str, ...] = ("name", "version", "description", "type", "main", "bin")

# package.json name must be kebab-case: lowercase alphanumeric segments joined by single hyphens
PACKAGE_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

# package.json "type" must be this value
MODULE_TYPE = "module"

# Fields expected in marketplace.json
MARKETPLACE_REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "version",
    "description",
    "categories",
    "keywords",
    "author",
    "license",
    "repository",
    "homepage",
    "bugs",
    "marketplace",
)

# Listing services a skill can be published to
VALID_MARKETPLACES: tuple[str, ...] = ("skillsmp", "daymade", "hexrays", "smartscope")

# A description containing one of these phrases explains when the skill applies
USAGE_PHRASES: tuple[str, ...] = ("use when", "use this skill", "should be used", "when to")

# Words in SKILL.md above which the content should be split into references/
MAX_SKILL_WORDS = 5000

# Opening and closing line of the SKILL.md header block
FRONTMATTER_DELIMITER = "---"

# Substrings in the CLI entry point that indicate argument parsing
ARGV_INDICATORS: tuple[str, ...] = ("yargs", "argv", "process.argv")

# Best-practice checks for plain file/directory presence:
# (name, relative path, severity when missing, message when missing)
BEST_PRACTICE_PATHS: tuple[tuple[str, str, Severity, str], ...] = (
    ("has_skill_yml", ".skill.yml", "info", "Consider adding .skill.yml for configuration"),
    ("has_locales", "locales", "info", "Consider adding locales directory for additional translations"),
    ("has_src_directory", "src", "info", "Source code should be in src/ directory"),
)

# Open source housekeeping files: (name, file, severity when missing, message when missing)
OPEN_SOURCE_FILES: tuple[tuple[str, str, Severity, str], ...] = (
    ("has_license_file", "LICENSE", "warning", "Add LICENSE file for proper open source distribution"),
    ("has_contributing", "CONTRIBUTING.md", "info", "Consider adding CONTRIBUTING.md for contributors"),
    ("has_changelog", "CHANGELOG.md", "info", "Consider adding CHANGELOG.md for version tracking"),
)

# Build output directory that .gitignore should exclude
BUILD_OUTPUT_DIR = "dist"

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class CheckResult:
    """Single atomic check outcome.

    Attributes:
        category: Group tag (structure, SKILL.md, package.json, polyglot.json, cli,
            best_practices, marketplace, bundled_resources)
        name: Machine identifier, unique per category within one run
        passed: Whether the check was satisfied
        severity: error, warning, info or success
        message: Human-readable explanation (empty when nothing needs saying)
    """

    category: str
    name: str
    passed: bool
    severity: Severity = "success"
    message: str = ""

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity!r}")
        if self.severity == "error" and self.passed:
            raise ValueError(f"Check {self.category}/{self.name}: error severity requires passed=False")
        if self.severity == "success" and not self.passed:
            raise ValueError(f"Check {self.category}/{self.name}: success severity requires passed=True")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category,
            "name": self.name,
            "passed": self.passed,
            "severity": self.severity,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckResult:
        return cls(
            category=data["category"],
            name=data["name"],
            passed=data["passed"],
            severity=data["severity"],
            message=data.get("message", ""),
        )


@dataclass
class ValidationReport:
    """Aggregated results of one validation run.

    Checks are only ever appended. ``success`` is derived from the checks, so
    once an error-severity check is added it stays False for the rest of the
    run. ``errors`` and ``warnings`` are read-only views in emission order.
    Call ``finalize`` once all checks are in to add recommendations and
    freeze the report.
    """

    skill_path: str
    skill_name: str = ""
    checks: list[CheckResult] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    finalized: bool = field(default=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.skill_name:
            self.skill_name = os.path.basename(os.path.normpath(self.skill_path))

    def add_check(
        self,
        category: str,
        name: str,
        passed: bool,
        severity: Severity = "success",
        message: str = "",
    ) -> CheckResult:
        """Append a check result."""
        if self.finalized:
            raise RuntimeError("Cannot add checks to a finalized report")
        result = CheckResult(category, name, passed, severity, message)
        self.checks.append(result)
        return result

    def check(
        self,
        category: str,
        name: str,
        condition: bool,
        fail_severity: Severity,
        fail_message: str,
        ok_message: str = "",
    ) -> bool:
        """Append success when ``condition`` holds, ``fail_severity`` otherwise.

        Returns the condition so callers can branch on it.
        """
        if condition:
            self.add_check(category, name, True, "success", ok_message)
        else:
            self.add_check(category, name, False, fail_severity, fail_message)
        return condition

    def finalize(self, recommendations: list[str] | None = None) -> ValidationReport:
        """Append recommendations and freeze the report."""
        if self.finalized:
            raise RuntimeError("Report is already finalized")
        self.recommendations.extend(recommendations or [])
        self.finalized = True
        return self

    @property
    def success(self) -> bool:
        """True iff no check has error severity."""
        return not any(c.severity == "error" for c in self.checks)

    @property
    def errors(self) -> list[CheckResult]:
        return [c for c in self.checks if c.severity == "error"]

    @property
    def warnings(self) -> list[CheckResult]:
        return [c for c in self.checks if c.severity == "warning"]

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.success else EXIT_FAILED

    def checks_in(self, *categories: str) -> list[CheckResult]:
        """Checks belonging to any of ``categories``, in emission order."""
        return [c for c in self.checks if c.category in categories]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "skillPath": self.skill_path,
            "skillName": self.skill_name,
            "checks": [c.to_dict() for c in self.checks],
            "errors": [c.to_dict() for c in self.errors],
            "warnings": [c.to_dict() for c in self.warnings],
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationReport:
        """Rebuild a finalized report from ``to_dict`` output."""
        report = cls(
            skill_path=data["skillPath"],
            skill_name=data["skillName"],
            checks=[CheckResult.from_dict(c) for c in data.get("checks", [])],
        )
        return report.finalize(list(data.get("recommendations", [])))


# =============================================================================
# Exceptions (write-side commands only; validation never raises)
# =============================================================================


class SkillBuilderError(Exception):
    """Base class for create/init/update failures."""


class SkillExistsError(SkillBuilderError):
    """Target directory for a new skill already exists."""


class SkillNotFoundError(SkillBuilderError):
    """Skill directory to update does not exist."""


class ManifestError(SkillBuilderError):
    """package.json or polyglot.json cannot be read, parsed or patched."""


# =============================================================================
# Gitignore Support
# =============================================================================


def parse_gitignore(gitignore_path: Path) -> list[str]:
    """Parse a .gitignore file and return list of patterns.

    Args:
        gitignore_path: Path to .gitignore file

    Returns:
        List of gitignore patterns (comments and empty lines stripped)
    """
    patterns: list[str] = []
    try:
        with open(gitignore_path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                # Skip empty lines and comments
                if not line or line.startswith("#"):
                    continue
                patterns.append(line)
    except (OSError, UnicodeDecodeError):
        pass
    return patterns


def is_path_gitignored(rel_path: str, patterns: list[str]) -> bool:
    """Check if a relative path matches any gitignore pattern.

    Negation patterns are skipped; ``**`` is treated as a single wildcard.
    """
    rel_path = rel_path.replace("\\", "/").strip("/")
    path_parts = rel_path.split("/")

    for pattern in patterns:
        if pattern.startswith("!"):
            continue

        # Directory-only patterns (dist/) match the directory itself
        pattern = pattern.rstrip("/")

        is_anchored = pattern.startswith("/")
        if is_anchored:
            pattern = pattern[1:]

        if "**" in pattern:
            pattern = pattern.replace("**/", "*/").replace("/**", "/*")

        if fnmatch.fnmatch(rel_path, pattern):
            return True
        if not is_anchored and any(fnmatch.fnmatch(part, pattern) for part in path_parts):
            return True

    return False


# =============================================================================
# Utility Functions
# =============================================================================


def read_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON file whose root must be an object.

    Raises:
        ManifestError: the file cannot be read, is not valid JSON, or is not an object
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError, RecursionError) as e:
        raise ManifestError(f"Failed to read {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"{path.name} must contain a JSON object")
    return data


def json_text(data: Any) -> str:
    """JSON with 2-space indentation and a trailing newline, as written to skill files."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(path: Path, data: Any) -> None:
    path.write_text(json_text(data), encoding="utf-8")


def is_valid_kebab_case(name: str) -> bool:
    """Check if name follows kebab-case convention."""
    return bool(PACKAGE_NAME_PATTERN.match(name))


def to_class_name(name: str) -> str:
    """Convert a kebab-case skill name to PascalCase (my-skill -> MySkill)."""
    return "".join(word[:1].upper() + word[1:] for word in name.split("-"))


# =============================================================================
# Color Formatting (for terminal output)
# =============================================================================

# ANSI color codes
COLORS = {
    "error": "\033[91m",  # Red
    "warning": "\033[93m",  # Yellow
    "info": "\033[90m",  # Gray
    "success": "\033[92m",  # Green
    "RESET": "\033[0m",
    "BOLD": "\033[1m",
}


def use_color(stream: Any = None) -> bool:
    """Colors only on a TTY, and never when NO_COLOR is set."""
    stream = stream or sys.stdout
    return "NO_COLOR" not in os.environ and hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, level: str, stream: Any = None) -> str:
    """Apply color to text based on level."""
    if not use_color(stream):
        return text
    color = COLORS.get(level, "")
    return f"{color}{text}{COLORS['RESET']}"

#!/usr/bin/env python3
"""Tests for skb_validation_common.py - result types, rule table and helpers."""

from pathlib import Path

import pytest
from skb_validation_common import (
    BEST_PRACTICE_PATHS,
    CLI_ENTRY_POINT,
    MARKETPLACE_REQUIRED_FIELDS,
    OPEN_SOURCE_FILES,
    PACKAGE_JSON_FIELDS,
    PACKAGE_NAME_PATTERN,
    RECOMMENDED_FILES,
    REQUIRED_FILES,
    SEVERITIES,
    VALID_MARKETPLACES,
    CheckResult,
    ManifestError,
    ValidationReport,
    colorize,
    is_path_gitignored,
    is_valid_kebab_case,
    parse_gitignore,
    read_json_object,
    to_class_name,
)


class TestCheckResult:
    """CheckResult severity and passed flag must agree."""

    def test_error_cannot_pass(self) -> None:
        """An error is always a failure."""
        with pytest.raises(ValueError):
            CheckResult("structure", "x", True, "error")

    def test_success_cannot_fail(self) -> None:
        """A success is always a pass."""
        with pytest.raises(ValueError):
            CheckResult("structure", "x", False, "success")

    def test_unknown_severity(self) -> None:
        """Only the four severities are accepted."""
        with pytest.raises(ValueError):
            CheckResult("structure", "x", False, "fatal")

    @pytest.mark.parametrize("passed", [True, False])
    def test_info_and_warning_either_way(self, passed: bool) -> None:
        """Info and warning carry no constraint on passed."""
        CheckResult("bundled_resources", "x", passed, "info")
        CheckResult("best_practices", "x", passed, "warning")

    def test_frozen(self) -> None:
        """Results cannot be modified after creation."""
        result = CheckResult("structure", "x", True)
        with pytest.raises(AttributeError):
            result.passed = False  # type: ignore[misc]


class TestValidationReport:
    """Aggregation and finalization."""

    def test_empty_report_succeeds(self) -> None:
        """No checks means success."""
        report = ValidationReport(skill_path="/tmp/demo")
        assert report.success
        assert report.errors == []
        assert report.warnings == []
        assert report.exit_code == 0

    def test_error_is_sticky(self) -> None:
        """Once an error is recorded later successes do not clear it."""
        report = ValidationReport(skill_path="/tmp/demo")
        report.add_check("structure", "a", False, "error", "bad")
        report.add_check("structure", "b", True)
        assert not report.success
        assert report.exit_code == 1

    def test_check_helper(self) -> None:
        """check() records success or the failure severity and returns the condition."""
        report = ValidationReport(skill_path="/tmp/demo")
        assert report.check("cli", "ok", True, "warning", "fail", "fine") is True
        assert report.check("cli", "bad", False, "warning", "fail", "fine") is False
        assert report.checks[0] == CheckResult("cli", "ok", True, "success", "fine")
        assert report.checks[1] == CheckResult("cli", "bad", False, "warning", "fail")

    def test_finalize_freezes(self) -> None:
        """No checks can be added after finalize, and finalize runs once."""
        report = ValidationReport(skill_path="/tmp/demo").finalize(["rec"])
        assert report.recommendations == ["rec"]
        with pytest.raises(RuntimeError):
            report.add_check("structure", "late", True)
        with pytest.raises(RuntimeError):
            report.finalize()

    def test_skill_name_default(self) -> None:
        """skill_name defaults to the directory basename."""
        assert ValidationReport(skill_path="/a/b/my-skill/").skill_name == "my-skill"
        assert ValidationReport(skill_path="/a/x", skill_name="given").skill_name == "given"

    def test_checks_in(self) -> None:
        """checks_in filters by category and keeps order."""
        report = ValidationReport(skill_path="/tmp/demo")
        report.add_check("package.json", "a", True)
        report.add_check("structure", "b", True)
        report.add_check("best_practices", "c", True)
        assert [c.name for c in report.checks_in("best_practices", "package.json")] == ["a", "c"]


class TestRuleTable:
    """The rule table is plain data; each entry is checked directly."""

    def test_required_and_recommended_disjoint(self) -> None:
        """A file is either required or recommended, never both."""
        assert set(REQUIRED_FILES).isdisjoint(RECOMMENDED_FILES)
        assert REQUIRED_FILES == ("SKILL.md",)

    def test_package_fields(self) -> None:
        """All six package.json fields are expected."""
        assert PACKAGE_JSON_FIELDS == ("name", "version", "description", "type", "main", "bin")

    def test_marketplace_fields(self) -> None:
        """Eleven listing fields, including the marketplace itself."""
        assert len(MARKETPLACE_REQUIRED_FIELDS) == 11
        assert "marketplace" in MARKETPLACE_REQUIRED_FIELDS
        assert VALID_MARKETPLACES == ("skillsmp", "daymade", "hexrays", "smartscope")

    @pytest.mark.parametrize("name, rel_path, severity, message", BEST_PRACTICE_PATHS + OPEN_SOURCE_FILES)
    def test_best_practice_entries(self, name: str, rel_path: str, severity: str, message: str) -> None:
        """Best practice entries never block and always explain themselves."""
        assert name.startswith("has_")
        assert severity in SEVERITIES
        assert severity not in ("error", "success")
        assert message

    @pytest.mark.parametrize(
        "name, valid",
        [
            ("my-skill", True),
            ("skill2", True),
            ("a-b-c", True),
            ("My_Skill", False),
            ("my--skill", False),
            ("-skill", False),
            ("skill-", False),
            ("", False),
        ],
    )
    def test_name_pattern(self, name: str, valid: bool) -> None:
        """Kebab-case names only."""
        assert bool(PACKAGE_NAME_PATTERN.match(name)) is valid
        assert is_valid_kebab_case(name) is valid

    def test_cli_entry_point(self) -> None:
        assert CLI_ENTRY_POINT == "dist/cli/index.js"


class TestGitignore:
    """Pattern parsing and matching."""

    def test_parse_skips_comments_and_blanks(self, tmp_path: Path) -> None:
        """Comments and blank lines are dropped."""
        path = tmp_path / ".gitignore"
        path.write_text("# comment\n\nnode_modules/\n  dist/  \n")
        assert parse_gitignore(path) == ["node_modules/", "dist/"]

    def test_parse_missing_file(self, tmp_path: Path) -> None:
        """A missing file has no patterns."""
        assert parse_gitignore(tmp_path / ".gitignore") == []

    @pytest.mark.parametrize(
        "rel_path, patterns, ignored",
        [
            ("dist", ["dist/"], True),
            ("dist", ["/dist"], True),
            ("dist/cli/index.js", ["dist"], True),
            ("dist", ["!dist"], False),
            ("src/dist", ["/dist"], False),
            ("build", ["dist/"], False),
            ("dist/cli/index.js", ["**/index.js"], True),
        ],
    )
    def test_matching(self, rel_path: str, patterns: list[str], ignored: bool) -> None:
        """Anchored, directory and negated patterns."""
        assert is_path_gitignored(rel_path, patterns) is ignored


class TestHelpers:
    """Small utility functions."""

    def test_read_json_object(self, tmp_path: Path) -> None:
        """Objects load; anything else raises ManifestError."""
        good = tmp_path / "good.json"
        good.write_text('{"a": 1}')
        assert read_json_object(good) == {"a": 1}

        bad = tmp_path / "bad.json"
        bad.write_text("{")
        with pytest.raises(ManifestError):
            read_json_object(bad)

        array = tmp_path / "array.json"
        array.write_text("[]")
        with pytest.raises(ManifestError, match="JSON object"):
            read_json_object(array)

    @pytest.mark.parametrize("content", ["{\"v\": " + "1" * 5000 + "}", "[" * 100_000 + "]" * 100_000])
    def test_read_json_object_decoder_limits(self, tmp_path: Path, content: str) -> None:
        """Digit limits and nesting depth surface as ManifestError."""
        path = tmp_path / "package.json"
        path.write_text(content)
        with pytest.raises(ManifestError):
            read_json_object(path)

    def test_to_class_name(self) -> None:
        assert to_class_name("my-new-skill") == "MyNewSkill"
        assert to_class_name("skill") == "Skill"

    def test_colorize_plain_when_not_tty(self) -> None:
        """Non-TTY streams get uncolored text."""

        class NotATty:
            def isatty(self) -> bool:
                return False

        assert colorize("text", "error", NotATty()) == "text"

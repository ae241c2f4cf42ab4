#!/usr/bin/env python3
"""
Skill Builder - Report rendering.

Three pure renderers over a ValidationReport:

- ``format_json``: lossless, machine-readable; ``ValidationReport.from_dict``
  reverses it.
- ``format_text``: symbols and one line per check, messages only for failures.
- ``format_markdown``: summary list plus one table per category group.

None of them perform I/O, and all keep checks in emission order.
"""

from __future__ import annotations

import json
from typing import Callable

from skb_translations import Translator, make_translator
from skb_validation_common import CheckResult, OutputFormat, ValidationReport

# Status glyphs per severity
ICONS = {
    "success": "✅",
    "warning": "⚠️",
    "info": "ℹ️",
    "error": "❌",
}

# Markdown table sections: (header key, categories, shown even when empty)
MARKDOWN_SECTIONS: tuple[tuple[str, tuple[str, ...], bool], ...] = (
    ("header_structure", ("structure",), True),
    ("header_skill_md", ("SKILL.md",), False),
    ("header_best_practices", ("best_practices", "package.json"), True),
    ("header_localization", ("polyglot.json",), False),
    ("header_cli", ("cli",), False),
    ("header_marketplace", ("marketplace",), False),
    ("header_bundled_resources", ("bundled_resources",), False),
)


def check_icon(check: CheckResult) -> str:
    """Glyph for a check: passed checks are always ✅."""
    if check.passed:
        return ICONS["success"]
    return ICONS[check.severity]


def format_json(report: ValidationReport, translate: Translator | None = None) -> str:
    """Serialize the full report as JSON."""
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def format_text(report: ValidationReport, translate: Translator | None = None) -> str:
    """Render the report as plain text with status symbols."""
    t = translate or make_translator()
    lines: list[str] = []

    lines.append(f"🔍 {t('report_title')}")
    lines.append(f"📁 {t('label_path')}: {report.skill_path}")
    lines.append(f"📦 {t('label_name')}: {report.skill_name}")
    lines.append("")

    if report.success:
        lines.append(f"✅ {t('validation_passed')}")
    else:
        lines.append(f"❌ {t('validation_failed', count=len(report.errors))}")

    if report.warnings:
        lines.append(f"⚠️  {t('validation_warnings', count=len(report.warnings))}")

    lines.append("")
    lines.append(f"📊 {t('checks_summary')}")
    lines.append("─" * 50)

    for check in report.checks:
        lines.append(f"{check_icon(check)} [{check.category}] {check.name}")
        if check.message and not check.passed:
            lines.append(f"   {check.message}")

    if report.recommendations:
        lines.append("")
        lines.append(f"💡 {t('header_recommendations')}:")
        for rec in report.recommendations:
            lines.append(f"  • {rec}")

    return "\n".join(lines)


def _md_cell(text: str) -> str:
    """Escape a value for use inside a markdown table cell."""
    return text.replace("\\", "\\\\").replace("|", "\\|").replace("\n", " ")


def _md_code(text: str) -> str:
    """Inline code span that survives backticks in ``text``."""
    text = text.replace("\n", " ")
    if "`" in text:
        return f"`` {text} ``"
    return f"`{text}`"


def _md_table(checks: list[CheckResult], t: Translator, strip_prefix: str = "") -> list[str]:
    lines = [
        f"| {t('label_status')} | {t('label_check')} | {t('label_message')} |",
        "|:---:|---|---|",
    ]
    for check in checks:
        name = check.name
        if strip_prefix and name.startswith(strip_prefix):
            name = name[len(strip_prefix) :]
        lines.append(f"| {check_icon(check)} | `{_md_cell(name)}` | {_md_cell(check.message or 'OK')} |")
    return lines


def format_markdown(report: ValidationReport, translate: Translator | None = None) -> str:
    """Render the report as markdown: summary block and per-category tables."""
    t = translate or make_translator()
    lines: list[str] = []

    status = f"✅ {t('status_passed')}" if report.success else f"❌ {t('status_failed')}"

    lines.append(f"# 🔍 {t('report_title_markdown')}")
    lines.append("")
    lines.append(f"## {t('header_summary')}")
    lines.append("")
    lines.append(f"- **{t('label_skill')}**: {_md_cell(report.skill_name)}")
    lines.append(f"- **{t('label_path')}**: {_md_code(report.skill_path)}")
    lines.append(f"- **{t('label_status')}**: {status}")
    lines.append(f"- **{t('label_errors')}**: {len(report.errors)}")
    lines.append(f"- **{t('label_warnings')}**: {len(report.warnings)}")

    for header_key, categories, always in MARKDOWN_SECTIONS:
        checks = report.checks_in(*categories)
        if not checks and not always:
            continue
        lines.append("")
        lines.append(f"## {t(header_key)}")
        lines.append("")
        if checks:
            strip_prefix = "file_" if categories == ("structure",) else ""
            lines.extend(_md_table(checks, t, strip_prefix))
        else:
            lines.append("_-_")

    if report.recommendations:
        lines.append("")
        lines.append(f"## {t('header_recommendations')}")
        lines.append("")
        for rec in report.recommendations:
            lines.append(f"- {rec}")

    return "\n".join(lines)


RENDERERS: dict[str, Callable[[ValidationReport, Translator | None], str]] = {
    "json": format_json,
    "text": format_text,
    "markdown": format_markdown,
}


def format_output(
    report: ValidationReport,
    output_format: OutputFormat = "text",
    translate: Translator | None = None,
) -> str:
    """Render ``report`` in the requested format."""
    renderer = RENDERERS.get(output_format)
    if renderer is None:
        raise ValueError(f"Unknown output format: {output_format!r} (expected one of {', '.join(RENDERERS)})")
    return renderer(report, translate)

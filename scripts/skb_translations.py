#!/usr/bin/env python3
"""
Skill Builder - Message catalog.

Messages use the same shape as a skill's own polyglot.json: each key maps a
locale code to a translated string, and the empty-string locale is the
default. Lookups fall back from the requested locale to the default entry,
and from there to the key itself, so a missing translation never breaks
output.
"""

from __future__ import annotations

import copy
import json
import sys
from pathlib import Path
from typing import Callable

Translations = dict[str, dict[str, str]]
Translator = Callable[..., str]

DEFAULT_MESSAGES: Translations = {
    # Progress (stderr, --verbose only)
    "info_checking_structure": {"": "Checking skill structure...", "zh": "正在检查技能结构..."},
    "info_checking_skill_md": {"": "Checking SKILL.md...", "zh": "正在检查 SKILL.md..."},
    "info_checking_package": {"": "Checking package.json...", "zh": "正在检查 package.json..."},
    "info_checking_polyglot": {"": "Checking polyglot.json...", "zh": "正在检查 polyglot.json..."},
    "info_checking_cli": {"": "Checking CLI entry point...", "zh": "正在检查命令行入口..."},
    "info_checking_best_practices": {"": "Checking best practices...", "zh": "正在检查最佳实践..."},
    "info_checking_marketplace": {"": "Checking marketplace readiness...", "zh": "正在检查市场发布准备..."},
    "info_checking_resources": {"": "Checking bundled resources...", "zh": "正在检查附带资源..."},
    # Check messages
    "error_no_skill_dir": {"": "Skill directory not found: {path}", "zh": "未找到技能目录: {path}"},
    "error_missing_required": {"": "Missing required file: {file}", "zh": "缺少必需文件: {file}"},
    "warning_missing_file": {"": "Recommended file missing: {file}", "zh": "缺少推荐文件: {file}"},
    "error_invalid_package_json": {"": "Invalid JSON in {path}", "zh": "{path} 中的 JSON 无效"},
    # Report
    "report_title": {"": "Skill Validation Results", "zh": "技能验证结果"},
    "report_title_markdown": {"": "Skill Validation Report", "zh": "技能验证报告"},
    "label_path": {"": "Path", "zh": "路径"},
    "label_name": {"": "Name", "zh": "名称"},
    "label_skill": {"": "Skill", "zh": "技能"},
    "label_status": {"": "Status", "zh": "状态"},
    "label_errors": {"": "Errors", "zh": "错误"},
    "label_warnings": {"": "Warnings", "zh": "警告"},
    "label_check": {"": "Check", "zh": "检查项"},
    "label_message": {"": "Message", "zh": "信息"},
    "status_passed": {"": "Passed", "zh": "通过"},
    "status_failed": {"": "Failed", "zh": "未通过"},
    "validation_passed": {"": "All checks passed", "zh": "所有检查均已通过"},
    "validation_failed": {"": "Validation failed with {count} error(s)", "zh": "验证失败, 共 {count} 个错误"},
    "validation_warnings": {"": "{count} warning(s) found", "zh": "发现 {count} 个警告"},
    "checks_summary": {"": "Checks Summary:", "zh": "检查摘要:"},
    "header_summary": {"": "Summary", "zh": "摘要"},
    "header_structure": {"": "Structure", "zh": "结构"},
    "header_skill_md": {"": "SKILL.md", "zh": "SKILL.md"},
    "header_best_practices": {"": "Best Practices", "zh": "最佳实践"},
    "header_localization": {"": "Localization", "zh": "本地化"},
    "header_cli": {"": "CLI", "zh": "命令行"},
    "header_marketplace": {"": "Marketplace", "zh": "市场"},
    "header_bundled_resources": {"": "Bundled Resources", "zh": "附带资源"},
    "header_recommendations": {"": "Recommendations", "zh": "建议"},
    # Recommendations
    "recommend_address_warnings": {"": "Address warnings to improve skill quality", "zh": "处理警告以提升技能质量"},
    "recommend_add_polyglot": {
        "": "Add polyglot.json for internationalization support",
        "zh": "添加 polyglot.json 以支持国际化",
    },
    "recommend_add_readme": {"": "Add README.md with documentation", "zh": "添加包含文档的 README.md"},
    # Scaffolding and update
    "success_skill_created": {"": "Skill {name} created at {path}", "zh": "技能 {name} 已创建于 {path}"},
    "success_skill_initialized": {"": "Skill initialized at {path}", "zh": "技能已在 {path} 初始化"},
    "error_already_initialized": {
        "": "Directory is already initialized as a skill. Use --force to overwrite.",
        "zh": "该目录已初始化为技能。使用 --force 覆盖。",
    },
    "next_steps": {"": "Next steps:", "zh": "后续步骤:"},
    "created_files": {"": "Created:", "zh": "已创建:"},
    "skipped_files": {"": "Skipped (already exist):", "zh": "已跳过 (已存在):"},
    "no_updates": {
        "": "No updates specified. Use --add-language, --add-dependency or --bump.",
        "zh": "未指定更新。请使用 --add-language、--add-dependency 或 --bump。",
    },
    "updated_items": {"": "Updated {count} item(s)", "zh": "已更新 {count} 项"},
}


def merge_translations(base: Translations, overlay: Translations) -> Translations:
    """Return ``base`` with per-locale entries from ``overlay`` applied on top."""
    merged = copy.deepcopy(base)
    for key, entries in overlay.items():
        if not isinstance(entries, dict):
            continue
        merged.setdefault(key, {}).update({str(k): str(v) for k, v in entries.items()})
    return merged


def load_translations(path: Path | None = None) -> Translations:
    """Load the built-in catalog, overlaid with a polyglot.json file if given.

    An unreadable or malformed overlay is reported on stderr and ignored.
    """
    translations = copy.deepcopy(DEFAULT_MESSAGES)
    if path is None or not path.is_file():
        return translations

    try:
        with open(path, encoding="utf-8") as f:
            overlay = json.load(f)
    except (OSError, ValueError, RecursionError) as e:
        print(f"Warning: ignoring translations file {path}: {e}", file=sys.stderr)
        return translations

    if not isinstance(overlay, dict):
        print(f"Warning: ignoring translations file {path}: root must be an object", file=sys.stderr)
        return translations

    return merge_translations(translations, overlay)


def translate(translations: Translations, key: str, language: str = "", **fields: object) -> str:
    """Look up ``key`` for ``language`` and substitute ``{field}`` placeholders.

    Placeholders are replaced literally, so stray braces in a translation are
    left alone.
    """
    entries = translations.get(key) or {}
    text = entries.get(language) or entries.get("") or key
    for name, value in fields.items():
        text = text.replace("{" + name + "}", str(value))
    return text


def make_translator(translations: Translations | None = None, language: str = "") -> Translator:
    """Bind a catalog and language into a ``t(key, **fields)`` callable."""
    catalog = DEFAULT_MESSAGES if translations is None else translations

    def t(key: str, **fields: object) -> str:
        return translate(catalog, key, language, **fields)

    return t

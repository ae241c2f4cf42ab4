#!/usr/bin/env python3
"""
Skill Builder - Initialize an existing directory as a skill.

Writes the standard skill files into the directory, leaving files that
already exist untouched unless --force is given. The skill name is taken
from the directory name.

Used by `skill-builder init`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from skb_templates import (
    generate_cli,
    generate_gitignore,
    generate_license,
    generate_package_json,
    generate_polyglot_json,
    generate_readme,
    generate_skill_md,
    generate_skill_yml,
)
from skb_translations import Translator, make_translator
from skb_validation_common import (
    SkillNotFoundError,
    colorize,
    json_text,
    read_json_object,
    to_class_name,
)


@dataclass
class InitResult:
    """Outcome of init_skill."""

    path: Path
    success: bool = True
    message: str = ""
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def init_skill(cwd: Path | str, force: bool = False, translate: Translator | None = None) -> InitResult:
    """Write skill files into ``cwd``.

    Refuses (success=False) when package.json already declares the directory
    name, unless ``force`` is set.

    Raises:
        SkillNotFoundError: ``cwd`` is not a directory
        ManifestError: an existing package.json cannot be parsed
    """
    t = translate or make_translator()
    root = Path(cwd).resolve()
    result = InitResult(path=root)

    if not root.is_dir():
        raise SkillNotFoundError(f"Not a directory: {root}")

    name = root.name
    class_name = to_class_name(name)

    package_path = root / "package.json"
    if package_path.is_file() and not force:
        existing = read_json_object(package_path)
        if existing.get("name") == name:
            result.success = False
            result.message = t("error_already_initialized")
            return result

    files = {
        "SKILL.md": generate_skill_md(name, class_name),
        "package.json": json_text(generate_package_json(name)),
        "polyglot.json": json_text(generate_polyglot_json(name, class_name)),
        "src/cli/index.js": generate_cli(name),
        "README.md": generate_readme(name, class_name),
        "LICENSE": generate_license(name),
        ".gitignore": generate_gitignore(),
        ".skill.yml": generate_skill_yml(name),
    }

    for rel_path, content in files.items():
        path = root / rel_path
        if path.exists() and not force:
            result.skipped.append(rel_path)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        result.created.append(rel_path)

    result.message = t("success_skill_initialized", path=root)
    return result


def print_init_result(result: InitResult, translate: Translator | None = None) -> None:
    t = translate or make_translator()
    if not result.success:
        print(colorize(result.message, "error", sys.stderr), file=sys.stderr)
        return
    print(colorize(f"✓ {result.message}", "success"))
    if result.created:
        print(t("created_files"))
        for rel_path in result.created:
            print(f"  + {rel_path}")
    if result.skipped:
        print(t("skipped_files"))
        for rel_path in result.skipped:
            print(f"  - {rel_path}")


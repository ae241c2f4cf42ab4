#!/usr/bin/env python3
"""
Skill Builder - Create a new skill directory.

Used by `skill-builder create`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from skb_templates import (
    ANALYZER_TEMPLATES,
    TEMPLATES,
    generate_analyzer,
    generate_bunfig,
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
    SkillExistsError,
    colorize,
    is_valid_kebab_case,
    to_class_name,
    write_json,
)

# Directories created for every new skill
SKILL_DIRS = ("src/cli", "locales", "dist/cli", "dist/analyzer")


@dataclass
class CreateResult:
    """Outcome of create_skill."""

    skill_path: Path
    skill_name: str
    message: str
    files: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)


def create_skill(
    name: str,
    base_path: Path | str = ".",
    template: str = "basic",
    translate: Translator | None = None,
) -> CreateResult:
    """Create ``<base_path>/<name>/`` pre-filled with a working skill.

    Raises:
        ValueError: name is not kebab-case or template is unknown
        SkillExistsError: the target directory already exists
    """
    t = translate or make_translator()

    if not is_valid_kebab_case(name):
        raise ValueError(f"Skill name must be kebab-case (lowercase letters, digits, single hyphens): {name}")
    if template not in TEMPLATES:
        raise ValueError(f"Unknown template: {template} (expected one of {', '.join(TEMPLATES)})")

    skill_path = Path(base_path) / name
    if skill_path.exists():
        raise SkillExistsError(f"Directory already exists: {skill_path}")

    for rel_dir in SKILL_DIRS:
        (skill_path / rel_dir).mkdir(parents=True, exist_ok=True)

    class_name = to_class_name(name)
    with_analyzer = template in ANALYZER_TEMPLATES
    files: list[str] = []

    def write(rel_path: str, content: str) -> Path:
        path = skill_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        files.append(rel_path)
        return path

    write("SKILL.md", generate_skill_md(name, class_name))
    write_json(skill_path / "package.json", generate_package_json(name, with_analyzer))
    files.append("package.json")
    write_json(skill_path / "polyglot.json", generate_polyglot_json(name, class_name))
    files.append("polyglot.json")
    write("src/cli/index.js", generate_cli(name)).chmod(0o755)
    write("README.md", generate_readme(name, class_name))
    write("LICENSE", generate_license(name))
    write(".gitignore", generate_gitignore())
    write(".skill.yml", generate_skill_yml(name))
    write("bunfig.toml", generate_bunfig())
    if with_analyzer:
        write("src/analyzer/index.js", generate_analyzer(name))

    return CreateResult(
        skill_path=skill_path,
        skill_name=name,
        message=t("success_skill_created", name=name, path=skill_path),
        files=files,
        next_steps=[
            f"cd {skill_path}",
            "bun install",
            "bun run build",
            "Test your skill: ./dist/cli/index.js --help",
        ],
    )


def print_create_result(result: CreateResult, translate: Translator | None = None) -> None:
    t = translate or make_translator()
    print(colorize(f"✓ {result.message}", "success"))
    print(f"\n{t('next_steps')}")
    for step in result.next_steps:
        print(f"  {step}")


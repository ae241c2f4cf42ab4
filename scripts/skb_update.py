#!/usr/bin/env python3
"""
Skill Builder - Update an existing skill.

Patches polyglot.json (new locales) and package.json (dependencies, version)
in place. Nothing else in the skill is touched.

Used by `skill-builder update`:
    skill-builder update path/to/skill --add-language zh
    skill-builder update path/to/skill --add-dependency chalk@5.3.0
    skill-builder update path/to/skill --bump minor
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

from skb_translations import Translator, make_translator
from skb_validation_common import (
    ManifestError,
    SkillNotFoundError,
    colorize,
    read_json_object,
    write_json,
)

VERSION_PARTS = ("major", "minor", "patch")

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)")


@dataclass
class UpdateResult:
    """Outcome of update_skill."""

    path: Path
    updated: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass
class LanguagesResult:
    """Outcome of add_languages."""

    added: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass
class BumpResult:
    """Outcome of bump_version."""

    old_version: str
    new_version: str


def parse_dependency(spec: str) -> tuple[str, str]:
    """Split ``name@version`` into (name, version).

    Scoped packages keep their leading ``@`` (``@scope/pkg@1.2.0``); a
    missing version is ``latest``.
    """
    spec = spec.strip()
    name, sep, version = spec.rpartition("@")
    if not sep or not name:
        return spec, "latest"
    return name, version or "latest"


def add_languages(skill_path: Path | str, languages: list[str]) -> LanguagesResult:
    """Add empty translations for each locale to every polyglot.json key.

    A locale counts as added when at least one key lacked it.

    Raises:
        ManifestError: polyglot.json is missing or invalid
    """
    polyglot_path = Path(skill_path) / "polyglot.json"
    if not polyglot_path.is_file():
        raise ManifestError("polyglot.json not found")

    polyglot = read_json_object(polyglot_path)
    result = LanguagesResult()

    for lang in languages:
        is_new = False
        for key, entries in polyglot.items():
            if not isinstance(entries, dict):
                raise ManifestError(f"polyglot.json key {key!r} must map locales to strings")
            if lang not in entries:
                entries[lang] = ""
                is_new = True
        (result.added if is_new else result.skipped).append(lang)

    write_json(polyglot_path, polyglot)
    return result


def add_dependency(skill_path: Path | str, spec: str) -> tuple[str, str]:
    """Add or replace a dependency in package.json; returns (name, version).

    Raises:
        ManifestError: package.json is missing or invalid
    """
    package_path = Path(skill_path) / "package.json"
    if not package_path.is_file():
        raise ManifestError("package.json not found")

    package = read_json_object(package_path)
    name, version = parse_dependency(spec)

    dependencies = package.setdefault("dependencies", {})
    if not isinstance(dependencies, dict):
        raise ManifestError("package.json dependencies must be an object")
    dependencies[name] = version if version == "latest" else f"^{version}"

    write_json(package_path, package)
    return name, version


def bump_version(skill_path: Path | str, part: str = "patch") -> BumpResult:
    """Bump the package.json version by ``major``, ``minor`` or ``patch``.

    Pre-release and build suffixes are dropped.

    Raises:
        ValueError: unknown part
        ManifestError: package.json is missing, invalid, or has no semver version
    """
    if part not in VERSION_PARTS:
        raise ValueError(f"Unknown version part: {part} (expected one of {', '.join(VERSION_PARTS)})")

    package_path = Path(skill_path) / "package.json"
    if not package_path.is_file():
        raise ManifestError("package.json not found")

    package = read_json_object(package_path)
    old_version = str(package.get("version", ""))
    match = VERSION_PATTERN.match(old_version)
    if not match:
        raise ManifestError(f"package.json version is not semantic: {old_version!r}")

    major, minor, patch = (int(g) for g in match.groups())
    if part == "major":
        major, minor, patch = major + 1, 0, 0
    elif part == "minor":
        minor, patch = minor + 1, 0
    else:
        patch += 1

    new_version = f"{major}.{minor}.{patch}"
    package["version"] = new_version
    write_json(package_path, package)
    return BumpResult(old_version=old_version, new_version=new_version)


def update_skill(
    skill_path: Path | str,
    add_language: str | None = None,
    add_dependency_spec: str | None = None,
    bump: str | None = None,
    translate: Translator | None = None,
) -> UpdateResult:
    """Apply the requested updates; a failing update does not stop the others.

    Raises:
        SkillNotFoundError: skill_path is not a directory
    """
    t = translate or make_translator()
    path = Path(skill_path)
    if not path.is_dir():
        raise SkillNotFoundError(f"Skill not found: {skill_path}")

    result = UpdateResult(path=path)

    if add_language:
        try:
            languages = add_languages(path, [add_language])
        except ManifestError as e:
            result.errors.append(f"Failed to update polyglot.json: {e}")
        else:
            if languages.added:
                result.updated.append(f'Added language "{add_language}" to polyglot.json')

    if add_dependency_spec:
        try:
            name, version = add_dependency(path, add_dependency_spec)
        except ManifestError as e:
            result.errors.append(f"Failed to update package.json: {e}")
        else:
            result.updated.append(f'Added dependency "{name}@{version}" to package.json')

    if bump:
        try:
            bumped = bump_version(path, bump)
        except ManifestError as e:
            result.errors.append(f"Failed to bump version: {e}")
        else:
            result.updated.append(f"Bumped version {bumped.old_version} -> {bumped.new_version}")

    if not (add_language or add_dependency_spec or bump):
        result.message = t("no_updates")
    else:
        result.message = t("updated_items", count=len(result.updated))
    return result


def print_update_result(result: UpdateResult) -> None:
    for line in result.updated:
        print(colorize(f"  ✓ {line}", "success"))
    for line in result.errors:
        print(colorize(f"  ✗ {line}", "error", sys.stderr), file=sys.stderr)
    print(result.message)


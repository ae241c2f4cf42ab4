#!/usr/bin/env python3
"""Tests for skb_translations.py - message catalog and lookups."""

import json
from pathlib import Path

import pytest
from skb_translations import DEFAULT_MESSAGES, load_translations, make_translator, merge_translations, translate


class TestTranslate:
    """Lookup and placeholder substitution."""

    def test_default_locale(self) -> None:
        """The empty-string locale is used when no language is given."""
        assert translate(DEFAULT_MESSAGES, "status_passed") == "Passed"

    def test_requested_locale(self) -> None:
        assert translate(DEFAULT_MESSAGES, "status_passed", "zh") == "通过"

    def test_falls_back_to_default_then_key(self) -> None:
        """Unknown locales use the default; unknown keys return the key."""
        assert translate(DEFAULT_MESSAGES, "status_passed", "fr") == "Passed"
        assert translate(DEFAULT_MESSAGES, "no_such_key", "zh") == "no_such_key"

    def test_empty_translation_falls_back(self) -> None:
        """An empty translation counts as missing."""
        catalog = {"greeting": {"": "Hello", "zh": ""}}
        assert translate(catalog, "greeting", "zh") == "Hello"

    def test_placeholders(self) -> None:
        """Named placeholders are replaced literally."""
        text = translate(DEFAULT_MESSAGES, "error_missing_required", file="SKILL.md")
        assert text == "Missing required file: SKILL.md"

    def test_stray_braces_left_alone(self) -> None:
        """Braces that are not placeholders do not raise."""
        catalog = {"k": {"": "set {a} in {b} {"}}
        assert translate(catalog, "k", a=1) == "set 1 in {b} {"

    def test_every_message_has_default(self) -> None:
        """Each built-in key has a non-empty default entry."""
        for key, entries in DEFAULT_MESSAGES.items():
            assert entries.get(""), key


class TestLoadTranslations:
    """Overlay files in polyglot.json form."""

    def test_no_path_returns_builtin_copy(self) -> None:
        """The built-in catalog is returned as a copy."""
        translations = load_translations()
        translations["status_passed"][""] = "changed"
        assert DEFAULT_MESSAGES["status_passed"][""] == "Passed"

    def test_overlay_adds_locale(self, tmp_path: Path) -> None:
        """Overlay entries are merged per locale."""
        path = tmp_path / "polyglot.json"
        path.write_text(json.dumps({"status_passed": {"fr": "Réussi"}}), encoding="utf-8")
        translations = load_translations(path)
        assert translations["status_passed"]["fr"] == "Réussi"
        assert translations["status_passed"][""] == "Passed"

    def test_bad_overlay_is_ignored(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A malformed overlay warns on stderr and is skipped."""
        path = tmp_path / "polyglot.json"
        path.write_text("{broken", encoding="utf-8")
        assert load_translations(path) == DEFAULT_MESSAGES
        assert "Warning" in capsys.readouterr().err

    def test_overlay_beyond_decoder_limits_ignored(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An overlay the decoder cannot handle is skipped like a malformed one."""
        path = tmp_path / "polyglot.json"
        path.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")
        assert load_translations(path) == DEFAULT_MESSAGES
        assert "Warning" in capsys.readouterr().err

    def test_merge_skips_non_mappings(self) -> None:
        """Keys whose value is not a locale map are ignored."""
        merged = merge_translations({"a": {"": "x"}}, {"a": "oops", "b": {"": "y"}})
        assert merged == {"a": {"": "x"}, "b": {"": "y"}}


class TestMakeTranslator:
    """Bound translator callables."""

    def test_bound_language(self) -> None:
        t = make_translator(language="zh")
        assert t("label_path") == "路径"

    def test_custom_catalog(self) -> None:
        t = make_translator({"hi": {"": "Hi {name}"}})
        assert t("hi", name="Ada") == "Hi Ada"

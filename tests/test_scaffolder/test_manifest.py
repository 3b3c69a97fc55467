"""Tests for package.json construction (create_admin_app.scaffolder.manifest).

Covers:
- Base fields (name, version, private)
- Override fragments and their precedence
- JSON serialisation (aliases, indentation, trailing newline)
- write_manifest
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_admin_app.scaffolder.manifest import (
    JEST_FRAGMENT,
    MANIFEST_OVERRIDES,
    PackageManifest,
    build_manifest,
    write_manifest,
)

pytestmark = pytest.mark.unit


class TestBuildManifest:
    def test_base_fields(self):
        manifest = build_manifest("my-admin-app")
        assert manifest.name == "my-admin-app"
        assert manifest.version == "1.0.0"
        assert manifest.private is True

    def test_scripts_fragment_applied(self):
        manifest = build_manifest("my-admin-app")
        assert manifest.scripts["start"] == "epig dev"
        assert manifest.scripts["test"] == "jest"
        assert manifest.scripts["precommit"] == "lint-staged && npm run tsc"

    def test_precommit_fragment_applied(self):
        manifest = build_manifest("my-admin-app")
        assert manifest.lint_staged == {
            "src/**/*.tsx": ["tslint -c tslint.json"],
            "src/**/*.ts": ["tslint -c tslint.json"],
        }

    def test_jest_fragment_applied(self):
        manifest = build_manifest("my-admin-app")
        assert manifest.test_regex == JEST_FRAGMENT["testRegex"]
        assert manifest.module_file_extensions == ["ts", "tsx", "js", "jsx"]
        assert manifest.snapshot_serializers == ["enzyme-to-json/serializer"]

    def test_override_order(self):
        labels = [label for label, _ in MANIFEST_OVERRIDES]
        assert labels == ["scripts", "precommit", "jest"]

    def test_later_fragment_wins(self):
        overrides = [
            ("first", {"scripts": {"start": "a"}, "version": "2.0.0"}),
            ("second", {"scripts": {"start": "b"}}),
        ]
        manifest = build_manifest("x", overrides=overrides)
        assert manifest.scripts == {"start": "b"}
        assert manifest.version == "2.0.0"

    def test_fragment_can_override_base(self):
        manifest = build_manifest("x", overrides=[("private", {"private": False})])
        assert manifest.private is False

    def test_empty_overrides_leave_base(self):
        manifest = build_manifest("x", overrides=[])
        assert manifest.scripts == {}
        assert manifest.test_regex is None


class TestManifestSerialisation:
    def test_to_json_uses_npm_keys(self):
        data = json.loads(build_manifest("my-admin-app").to_json())
        assert data["name"] == "my-admin-app"
        assert "lint-staged" in data
        assert "testRegex" in data
        assert "moduleNameMapper" in data
        assert "lint_staged" not in data

    def test_to_json_format(self):
        text = build_manifest("my-admin-app").to_json()
        assert text.endswith("}\n")
        assert text.startswith('{\n  "name": "my-admin-app"')

    def test_to_json_omits_missing_test_regex(self):
        data = json.loads(PackageManifest(name="x").to_json())
        assert "testRegex" not in data

    def test_write_manifest(self, tmp_path: Path):
        path = write_manifest(build_manifest("my-admin-app"), tmp_path / "package.json")
        assert path == tmp_path / "package.json"
        assert json.loads(path.read_text(encoding="utf-8"))["name"] == "my-admin-app"

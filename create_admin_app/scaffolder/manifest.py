"""``package.json`` construction for generated projects.

The manifest starts from a small base (name, version, private flag) and has
three fragments applied on top of it. Fragments are applied in the order of
``MANIFEST_OVERRIDES``; a key set by a later fragment replaces the same key
from an earlier one.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SCRIPTS_FRAGMENT: dict[str, Any] = {
    "scripts": {
        "start": "epig dev",
        "build": "epig build",
        "build:analyze": "ANALYZE=true epig build",
        "precommit": "lint-staged && npm run tsc",
        "lint": "tslint -c tslint.json --project ./",
        "test": "jest",
        "tools": "epig-admin-tools",
        "tsc": "rm -rf tslib && tsc",
    },
}

PRECOMMIT_FRAGMENT: dict[str, Any] = {
    "lint-staged": {
        "src/**/*.tsx": ["tslint -c tslint.json"],
        "src/**/*.ts": ["tslint -c tslint.json"],
    },
}

JEST_FRAGMENT: dict[str, Any] = {
    "transform": {
        "^.+\\.tsx?$": "<rootDir>/node_modules/ts-jest/preprocessor.js",
        "^.+\\.jsx?$": "<rootDir>/node_modules/babel-jest",
    },
    "testRegex": "(/__tests__/.*|\\.(test|spec))\\.(ts|tsx|js)$",
    "moduleFileExtensions": ["ts", "tsx", "js", "jsx"],
    "moduleNameMapper": {"\\.(css|less)$": "identity-obj-proxy"},
    "moduleDirectories": ["node_modules"],
    "snapshotSerializers": ["enzyme-to-json/serializer"],
}

# Precedence: later entries win.
MANIFEST_OVERRIDES: list[tuple[str, dict[str, Any]]] = [
    ("scripts", SCRIPTS_FRAGMENT),
    ("precommit", PRECOMMIT_FRAGMENT),
    ("jest", JEST_FRAGMENT),
]


class PackageManifest(BaseModel):
    """Typed view of the generated ``package.json``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str = "1.0.0"
    private: bool = True
    scripts: dict[str, str] = Field(default_factory=dict)
    lint_staged: dict[str, list[str]] = Field(default_factory=dict, alias="lint-staged")
    transform: dict[str, str] = Field(default_factory=dict)
    test_regex: str | None = Field(default=None, alias="testRegex")
    module_file_extensions: list[str] = Field(
        default_factory=list, alias="moduleFileExtensions"
    )
    module_name_mapper: dict[str, str] = Field(
        default_factory=dict, alias="moduleNameMapper"
    )
    module_directories: list[str] = Field(default_factory=list, alias="moduleDirectories")
    snapshot_serializers: list[str] = Field(
        default_factory=list, alias="snapshotSerializers"
    )

    def to_json(self) -> str:
        """Serialise as 2-space indented JSON with a trailing newline."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def build_manifest(
    name: str,
    overrides: list[tuple[str, dict[str, Any]]] | None = None,
) -> PackageManifest:
    """Assemble the manifest for a project called *name*.

    Args:
        name: The package name.
        overrides: Ordered ``(label, fragment)`` pairs. Defaults to
            ``MANIFEST_OVERRIDES``.
    """
    data: dict[str, Any] = {"name": name, "version": "1.0.0", "private": True}
    for _label, fragment in overrides if overrides is not None else MANIFEST_OVERRIDES:
        data.update(fragment)
    return PackageManifest.model_validate(data)


def write_manifest(manifest: PackageManifest, path: Path) -> Path:
    path.write_text(manifest.to_json(), encoding="utf-8")
    return path

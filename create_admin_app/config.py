"""create-admin-app configuration.

Centralised, typed configuration for the scaffolder. Settings use Pydantic v2
models so they are validated at construction time and can be overridden from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "template"

DEFAULT_DEPENDENCIES: list[str] = [
    "react",
    "react-dom",
    "@babel/polyfill",
    "antd",
    "classnames",
    "@epig/admin-tools",
]

DEFAULT_DEV_DEPENDENCIES: list[str] = [
    "typescript",
    "@epig/af-build-dev",
    "@types/react",
    "@types/react-dom",
    "@types/redux-actions",
    "babel-jest",
    "enzyme",
    "enzyme-adapter-react-16",
    "enzyme-to-json",
    "husky",
    "jest@21",
    "lint-staged",
    "react-test-render",
    "ts-jest",
    "tslint",
    "tslint-eslint-rules",
    "tslint-language-service",
    "tslint-loader",
    "tslint-react",
]

# Local packages inside the template, linked into node_modules by npm.
DEFAULT_BUILTIN_DEPENDENCIES: list[str] = [
    "src/util",
    "src/models",
    "src/components",
]


class Config(BaseModel):
    """Global create-admin-app configuration.

    Holds the external binaries, the template location and the dependency
    lists installed into every generated project. Instances are created once
    by the CLI entry point and passed to the pipeline.
    """

    npm_command: str = Field(default="npm")
    git_command: str = Field(default="git")
    node_command: str = Field(default="node")
    min_node_version: int = Field(default=8, ge=1, description="Minimum Node major version")
    template_dir: Path = Field(default=_DEFAULT_TEMPLATE_DIR)

    dependencies: list[str] = Field(default_factory=lambda: list(DEFAULT_DEPENDENCIES))
    dev_dependencies: list[str] = Field(default_factory=lambda: list(DEFAULT_DEV_DEPENDENCIES))
    builtin_dependencies: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BUILTIN_DEPENDENCIES)
    )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def manifest_filename(self) -> str:
        return "package.json"

    def manifest_path(self, root: Path) -> Path:
        """Path to the generated ``package.json`` inside *root*."""
        return root / self.manifest_filename

    def entry_config_path(self, root: Path) -> Path:
        """Path to the entry config whose ``appName`` placeholder is rendered."""
        return root / "src" / "entry.config.ts"

    def containers_path(self, root: Path) -> Path:
        return root / "src" / "containers"

    # ------------------------------------------------------------------
    # Environment loading
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CREATE_ADMIN_APP_NPM, CREATE_ADMIN_APP_GIT, CREATE_ADMIN_APP_NODE,
            CREATE_ADMIN_APP_MIN_NODE_VERSION, CREATE_ADMIN_APP_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_ADMIN_APP_NPM"):
            kwargs["npm_command"] = os.environ["CREATE_ADMIN_APP_NPM"]
        if os.environ.get("CREATE_ADMIN_APP_GIT"):
            kwargs["git_command"] = os.environ["CREATE_ADMIN_APP_GIT"]
        if os.environ.get("CREATE_ADMIN_APP_NODE"):
            kwargs["node_command"] = os.environ["CREATE_ADMIN_APP_NODE"]
        if os.environ.get("CREATE_ADMIN_APP_MIN_NODE_VERSION"):
            kwargs["min_node_version"] = int(os.environ["CREATE_ADMIN_APP_MIN_NODE_VERSION"])
        if os.environ.get("CREATE_ADMIN_APP_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["CREATE_ADMIN_APP_TEMPLATE_DIR"])

        return cls(**kwargs)

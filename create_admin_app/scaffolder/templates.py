"""Template tree copying and placeholder rendering.

The template tree under ``create_admin_app/scaffolder/template/`` is copied
verbatim into the target directory. A few generated files carry EJS-style
``<%= name %>`` placeholders; ``TemplateRenderer`` fills them in with Jinja2
configured for those delimiters, so braces in TypeScript or JSON sources pass
through untouched.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined

# Top-level entries of the template tree. Rollback may remove any of these.
TEMPLATE_ENTRIES: list[str] = [
    "public",
    "server",
    "src",
    ".adminrc.js",
    ".epigrc.js",
    ".gitignore",
    ".gitlab-ci.yml",
    ".webpackrc.js",
    "docker-compose.yml",
    "Dockerfile",
    "pm2.json",
    "proxy.config.js",
    "README.md",
    "tsconfig.json",
    "tslint.json",
]

GITIGNORE_PATTERNS: list[str] = [
    "node_modules",
    "/dist",
    "/dll",
    ".DS_Store",
    "coverage",
    ".admin-tools",
    "tslib",
]


class TemplateRenderer:
    """Renders ``<%= variable %>`` placeholders inside generated files.

    Undefined variables raise instead of rendering as empty strings.
    """

    def __init__(self) -> None:
        self.env = Environment(
            variable_start_string="<%=",
            variable_end_string="%>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<%#",
            comment_end_string="#%>",
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        template = self.env.from_string(template_string)
        return template.render(**context)

    async def render_in_place(self, path: str | Path, context: dict[str, Any]) -> Path:
        """Render the file at *path* and write the result back to it.

        Raises:
            FileNotFoundError: If *path* does not exist.
        """
        target = Path(path)
        content = await asyncio.to_thread(target.read_text, encoding="utf-8")
        rendered = self.render_string(content, context)
        await asyncio.to_thread(target.write_text, rendered, encoding="utf-8")
        return target


async def copy_template(template_dir: str | Path, root: str | Path) -> Path:
    """Copy every file of *template_dir* (dotfiles included) into *root*.

    Existing files in *root* with the same relative path are overwritten.

    Raises:
        FileNotFoundError: If *template_dir* does not exist.
        shutil.Error: If one or more files could not be copied.
    """
    source = Path(template_dir)
    if not source.is_dir():
        raise FileNotFoundError(f"Template directory not found: {source}")
    await asyncio.to_thread(
        shutil.copytree,
        source,
        Path(root),
        dirs_exist_ok=True,
        ignore=shutil.ignore_patterns("__pycache__"),
    )
    return Path(root)


def write_gitignore(root: str | Path) -> Path:
    path = Path(root) / ".gitignore"
    path.write_text("\r\n".join(GITIGNORE_PATTERNS), encoding="utf-8", newline="")
    return path

"""Rollback of a partially scaffolded project.

Each pipeline stage is tagged with a ``Stage``. A failure in a stage removes
exactly the entries that stage (and every stage before it) may have created,
as listed in ``KNOWN_GENERATED_FILES``. Anything else in the target directory
is left alone, so files the user already had there survive a failed run.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from rich.markup import escape

from create_admin_app.scaffolder.templates import TEMPLATE_ENTRIES
from create_admin_app.utils import console, list_entries, remove_path

MANIFEST_FILENAME = "package.json"
DEPENDENCY_CACHE_DIR = "node_modules"


class Stage(str, Enum):
    """Pipeline stages that can trigger a rollback, in execution order."""

    WRITE_MANIFEST = "write_manifest"
    COPY_TEMPLATE = "copy_template"
    RENDER_ENTRY_CONFIG = "render_entry_config"
    INSTALL = "install"


KNOWN_GENERATED_FILES: dict[Stage, frozenset[str]] = {
    Stage.WRITE_MANIFEST: frozenset({MANIFEST_FILENAME}),
    Stage.COPY_TEMPLATE: frozenset({*TEMPLATE_ENTRIES, MANIFEST_FILENAME}),
    Stage.RENDER_ENTRY_CONFIG: frozenset({*TEMPLATE_ENTRIES, MANIFEST_FILENAME}),
    Stage.INSTALL: frozenset({*TEMPLATE_ENTRIES, MANIFEST_FILENAME, DEPENDENCY_CACHE_DIR}),
}


def known_generated_files(stage: Stage) -> frozenset[str]:
    """The entries rollback may delete after a failure in *stage*."""
    return KNOWN_GENERATED_FILES[stage]


def cleanup(root: Path, app_name: str, known_files: frozenset[str] | set[str]) -> bool:
    """Delete the generated entries of *root* named in *known_files*.

    When nothing else is left, *root* itself is removed too.

    Returns:
        ``True`` if *root* was removed.
    """
    root_removed = False
    if root.is_dir():
        for entry in list_entries(root):
            if entry in known_files:
                console.print(f"Deleting generated file... [cyan]{escape(entry)}[/cyan]")
                remove_path(root / entry)

        if not any(root.iterdir()):
            console.print(
                f"Deleting [cyan]{escape(app_name)}/[/cyan] from "
                f"[cyan]{escape(str(root.parent))}[/cyan]"
            )
            root.rmdir()
            root_removed = True

    console.print("Done.")
    return root_removed


def rollback(root: Path, app_name: str, stage: Stage) -> bool:
    """Run ``cleanup`` with the generated-file set of *stage*."""
    return cleanup(root, app_name, known_generated_files(stage))

"""Pre-flight check of the target directory.

A directory may be reused when everything already inside it is either
harmless metadata (VCS, editor, readme/licence, CI config) or log debris from
an earlier failed install. Anything else counts as a conflict and the
scaffolder refuses to touch the directory.
"""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from create_admin_app.utils import console, list_entries, remove_path

ALLOWED_PREEXISTING_FILES: frozenset[str] = frozenset({
    ".DS_Store",
    "Thumbs.db",
    ".git",
    ".gitignore",
    ".idea",
    "README.md",
    "LICENSE",
    "web.iml",
    ".hg",
    ".hgignore",
    ".hgcheck",
    ".npmignore",
    "mkdocs.yml",
    "docs",
    ".travis.yml",
    ".gitlab-ci.yml",
    ".gitattributes",
})

# Matches ``(npm-debug|yarn-error|yarn-debug).log*``.
ERROR_LOG_PREFIXES: tuple[str, ...] = (
    "npm-debug.log",
    "yarn-error.log",
    "yarn-debug.log",
)


def is_error_log(name: str) -> bool:
    return name.startswith(ERROR_LOG_PREFIXES)


def find_conflicts(root: Path) -> list[str]:
    """Entries of *root* that are neither allowed nor error-log leftovers."""
    return [
        name
        for name in list_entries(root)
        if name not in ALLOWED_PREEXISTING_FILES and not is_error_log(name)
    ]


def is_safe_to_create_project_in(root: Path, name: str) -> bool:
    """Decide whether the existing directory *root* can host a new project.

    *root* must already exist. On conflict the offending entries are listed
    and nothing is deleted, error logs included. Otherwise leftover error
    logs from a previous run are removed.
    """
    console.print()

    conflicts = find_conflicts(root)
    if conflicts:
        console.print(
            f"The directory [green]{escape(name)}[/green] contains files that could conflict:"
        )
        console.print()
        for entry in conflicts:
            console.print(f"  {escape(entry)}")
        console.print()
        console.print(
            "Either try using a new directory name, or remove the files listed above."
        )
        return False

    for entry in list_entries(root):
        if is_error_log(entry):
            remove_path(root / entry)
    return True

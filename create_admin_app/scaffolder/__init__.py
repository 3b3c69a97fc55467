"""create-admin-app scaffolder -- the building blocks of a generated project.

Quick usage::

    from create_admin_app.scaffolder import build_manifest, copy_template

    manifest = build_manifest("my-admin-app")
    await copy_template(config.template_dir, root)
"""

from create_admin_app.scaffolder.manifest import PackageManifest, build_manifest, write_manifest
from create_admin_app.scaffolder.rollback import Stage, cleanup, known_generated_files, rollback
from create_admin_app.scaffolder.safety import is_safe_to_create_project_in
from create_admin_app.scaffolder.templates import (
    TEMPLATE_ENTRIES,
    TemplateRenderer,
    copy_template,
    write_gitignore,
)

__all__ = [
    "PackageManifest",
    "Stage",
    "TEMPLATE_ENTRIES",
    "TemplateRenderer",
    "build_manifest",
    "cleanup",
    "copy_template",
    "is_safe_to_create_project_in",
    "known_generated_files",
    "rollback",
    "write_gitignore",
    "write_manifest",
]

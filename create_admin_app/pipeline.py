"""create-admin-app pipeline orchestrator.

Scaffolds a new admin application in four steps:

Step 1: CHECK    -- Node version, project name, target directory safety.
Step 2: GENERATE -- package.json, template tree, .gitignore, entry config.
Step 3: INSTALL  -- git init, runtime, dev and built-in dependencies.
Step 4: REPORT   -- next-step commands.

Any failure in steps 2 and 3 rolls back what the pipeline generated before
the error propagates. The target directory is always passed explicitly; the
process working directory is never changed.

Usage::

    python -m create_admin_app my-admin-app
"""

from __future__ import annotations

import argparse
import asyncio
import re
import sys
from pathlib import Path
from typing import NoReturn

from jinja2 import TemplateError
from rich.markup import escape

from create_admin_app import __version__
from create_admin_app.config import Config
from create_admin_app.naming import RESERVED_NAMES, ProjectNameError, check_app_name
from create_admin_app.scaffolder import (
    Stage,
    TemplateRenderer,
    build_manifest,
    copy_template,
    is_safe_to_create_project_in,
    rollback,
    write_gitignore,
    write_manifest,
)
from create_admin_app.utils import (
    CommandResult,
    console,
    ensure_dir,
    print_error,
    print_success,
    run_command,
)

PROGRAM_NAME = "create-admin-app"

_NODE_VERSION_RE = re.compile(r"v?(\d+)\.(\d+)\.(\d+)")

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PreflightError(Exception):
    """Raised when the environment cannot run the scaffolder."""


class UnsafeDirectoryError(Exception):
    """Raised when the target directory holds conflicting files."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"Directory contains conflicting files: {root}")


class ScaffoldError(Exception):
    """Raised when a pipeline stage fails. Rollback has already run."""

    def __init__(self, stage: Stage, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage.value}: {message}")


# ---------------------------------------------------------------------------
# Pre-flight
# ---------------------------------------------------------------------------


def parse_node_version(output: str) -> tuple[int, int, int] | None:
    """Parse ``node --version`` output such as ``v18.17.1``."""
    match = _NODE_VERSION_RE.search(output)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


async def check_node_version(config: Config) -> tuple[int, int, int]:
    """Make sure a recent enough Node.js is on ``PATH``.

    Raises:
        PreflightError: If Node is missing, unparseable, or too old.
    """
    result = await run_command([config.node_command, "--version"], capture=True)
    if not result.ok:
        raise PreflightError(
            f"Could not run `{config.node_command} --version`. "
            f"{PROGRAM_NAME} requires Node {config.min_node_version} or higher."
        )

    version = parse_node_version(result.stdout)
    if version is None:
        raise PreflightError(f"Unrecognised Node version: {result.stdout!r}")

    if version[0] < config.min_node_version:
        raise PreflightError(
            f"You are running Node {'.'.join(str(v) for v in version)}.\n"
            f"{PROGRAM_NAME} requires Node {config.min_node_version} or higher.\n"
            "Please update your version of Node."
        )
    return version


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """create-admin-app pipeline orchestrator.

    Attributes:
        config: Scaffolder configuration.
        cwd: Directory that relative project names are resolved against and
            that the success report suggests ``cd``-ing from.
        renderer: Placeholder renderer for generated files.
    """

    def __init__(self, config: Config, cwd: Path | None = None) -> None:
        self.config = config
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.renderer = TemplateRenderer()

    async def run(self, name: str) -> Path:
        """Scaffold the project *name* and return its root.

        Raises:
            ProjectNameError: The name is invalid or reserved. Nothing was
                written.
            UnsafeDirectoryError: The directory holds conflicting files.
                Nothing was deleted.
            ScaffoldError: A stage failed and its output was rolled back.
        """
        root = (self.cwd / name).resolve()
        app_name = root.name

        check_app_name(app_name)
        ensure_dir(root)
        if not is_safe_to_create_project_in(root, name):
            raise UnsafeDirectoryError(root)

        console.print(f"Creating a new epig admin app in [green]{escape(str(root))}[/green].")
        console.print()

        await self.write_package_json(root, app_name)
        await self.generate_files(root, app_name)
        await self.install(root, app_name)

        self.report_success(root, app_name)
        return root

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def write_package_json(self, root: Path, app_name: str) -> Path:
        manifest = build_manifest(app_name)
        try:
            return await asyncio.to_thread(
                write_manifest, manifest, self.config.manifest_path(root)
            )
        except OSError as exc:
            self._abort(root, app_name, Stage.WRITE_MANIFEST, "Write package.json has failed", exc)

    async def generate_files(self, root: Path, app_name: str) -> None:
        """Copy the template, add the derived files, render the entry config."""
        console.print("Copy files from template")
        try:
            await copy_template(self.config.template_dir, root)
            self.config.containers_path(root).mkdir(parents=True, exist_ok=True)
            write_gitignore(root)
        except OSError as exc:
            self._abort(root, app_name, Stage.COPY_TEMPLATE, "Copy files has failed", exc)

        console.print("Copy files complete")
        console.print()

        try:
            await self.renderer.render_in_place(
                self.config.entry_config_path(root), {"appName": app_name}
            )
        except (OSError, UnicodeError, TemplateError) as exc:
            self._abort(
                root,
                app_name,
                Stage.RENDER_ENTRY_CONFIG,
                "Generate entry.config.ts has failed",
                exc,
            )

    async def install(self, root: Path, app_name: str) -> None:
        """Initialise git, then install runtime, dev and built-in packages.

        git must be initialised first so that the commit hooks installed by
        husky find the repository.
        """
        console.print("Installing packages. This might take a couple of minutes.")

        commands = [
            [self.config.git_command, "init"],
            self._npm_install(self.config.dependencies, dev=False),
            self._npm_install(self.config.dev_dependencies, dev=True),
            self._npm_install(self.config.builtin_dependencies, dev=False),
        ]
        for command in commands:
            result = await run_command(command, cwd=root)
            if not result.ok:
                console.print()
                console.print("Aborting installation.")
                console.print(f"  [cyan]{escape(_describe_failure(result))}[/cyan] has failed.")
                console.print()
                self._abort(root, app_name, Stage.INSTALL, f"{result.command_line} has failed")

    def _npm_install(self, dependencies: list[str], dev: bool) -> list[str]:
        args = [self.config.npm_command, "install"]
        if dependencies:
            args.append("--save-dev" if dev else "--save")
            args.extend(dependencies)
        return args

    def _abort(
        self,
        root: Path,
        app_name: str,
        stage: Stage,
        message: str,
        exc: BaseException | None = None,
    ) -> NoReturn:
        if exc is not None:
            console.print()
            console.print(message)
            console.print(escape(str(exc)))
        rollback(root, app_name, stage)
        raise ScaffoldError(stage, message) from exc

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def report_success(self, root: Path, app_name: str) -> None:
        """Print where the app lives and how to start working on it."""
        cd_path = app_name if (self.cwd / app_name).resolve() == root.resolve() else str(root)
        command = self.config.npm_command

        console.print()
        print_success(f"Success! Created {escape(app_name)} at {escape(str(root))}")
        console.print("Inside that directory, you can run several commands:")
        console.print()
        console.print(f"[cyan]  {command} start[/cyan]")
        console.print("    Starts the development server.")
        console.print()
        console.print(f"[cyan]  {command} run build[/cyan]")
        console.print("    Bundles the app into static files for production.")
        console.print()
        console.print(f"[cyan]  {command} test[/cyan]")
        console.print("    Starts the test runner.")
        console.print()
        console.print("We suggest that you begin by typing:")
        console.print()
        console.print(f"[cyan]  cd[/cyan] {escape(cd_path)}")
        console.print(f"  [cyan]{command} start[/cyan]")
        console.print()
        console.print("Happy hacking!")


def _describe_failure(result: CommandResult) -> str:
    if result.signal is not None:
        return f"{result.command_line} (killed by {result.signal.name})"
    return result.command_line


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


class ArgumentParser(argparse.ArgumentParser):
    """``argparse`` parser whose usage errors exit 1 like every other failure."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def print_name_error(exc: ProjectNameError) -> None:
    if exc.reserved:
        print_error(
            f"We cannot create a project called [green]{escape(exc.name)}[/green] "
            "because a dependency with the same name exists."
        )
        print_error("Due to the way npm works, the following names are not allowed:")
        console.print()
        for name in RESERVED_NAMES:
            console.print(f"[cyan]  {name}[/cyan]")
        console.print()
        print_error("Please choose a different project name.")
        return

    print_error(
        f'Could not create a project called "{escape(exc.name)}" '
        "because of npm naming restrictions:"
    )
    for reason in exc.reasons:
        console.print(f"[red]  *  {escape(reason)}[/red]")


def _print_missing_name(parser: argparse.ArgumentParser) -> None:
    print_error("Please specify the app name:")
    console.print(f"  [cyan]{parser.prog}[/cyan] [green]<project-directory>[/green]")
    console.print()
    console.print("For example:")
    console.print(f"  [cyan]{parser.prog}[/cyan] [green]my-admin-app[/green]")
    console.print()
    console.print(f"Run [cyan]{parser.prog} --help[/cyan] to see all options.")


async def _run(name: str, config: Config) -> Path:
    await check_node_version(config)
    return await Pipeline(config).run(name)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-admin-app``."""
    parser = ArgumentParser(
        prog=PROGRAM_NAME,
        usage="%(prog)s <project-directory> [options]",
        description="Create a new epig admin application",
    )
    parser.add_argument(
        "project_directory",
        nargs="?",
        metavar="project-directory",
        help="Directory to create the app in; its name becomes the package name",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__,
    )

    args = parser.parse_args(argv)

    if args.project_directory is None:
        _print_missing_name(parser)
        sys.exit(1)

    config = Config.from_env()

    try:
        asyncio.run(_run(args.project_directory, config))
    except ProjectNameError as exc:
        print_name_error(exc)
        sys.exit(1)
    except PreflightError as exc:
        print_error(escape(str(exc)))
        sys.exit(1)
    except (UnsafeDirectoryError, ScaffoldError):
        sys.exit(1)
    except OSError as exc:
        print_error(escape(str(exc)))
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Shared utility functions for create-admin-app.

Provides async command execution, file-system helpers and Rich-based console
output used by every stage of the scaffolder.
"""

from __future__ import annotations

import asyncio
import shutil
import signal
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

console = Console(highlight=False)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


@dataclass
class CommandResult:
    """Outcome of one external process."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def signal(self) -> signal.Signals | None:
        """The signal that terminated the process, if any.

        asyncio reports a process killed by signal N as return code ``-N``.
        """
        if self.returncode >= 0:
            return None
        try:
            return signal.Signals(-self.returncode)
        except ValueError:
            return None

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    capture: bool = False,
    timeout: float | None = None,
) -> CommandResult:
    """Run an external binary asynchronously and wait for it to exit.

    Args:
        cmd: The argument vector; ``cmd[0]`` is looked up on ``PATH``.
        cwd: Working directory for the child process.
        capture: Whether to capture stdout/stderr. When ``False`` (the
            default) the child inherits the parent's streams so its output
            is shown as-is.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits indefinitely.

    Returns:
        A ``CommandResult``. A binary that cannot be launched is reported
        as return code 127 with the OS error in ``stderr``.
    """
    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
        )
    except OSError as exc:
        return CommandResult(command=list(cmd), returncode=127, stderr=str(exc))

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return CommandResult(
            command=list(cmd),
            returncode=-signal.SIGKILL,
            stderr=f"Command timed out after {timeout}s: {' '.join(cmd)}",
        )

    return CommandResult(
        command=list(cmd),
        returncode=process.returncode or 0,
        stdout=(stdout_bytes or b"").decode("utf-8", errors="replace").strip(),
        stderr=(stderr_bytes or b"").decode("utf-8", errors="replace").strip(),
    )


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def list_entries(path: Path) -> list[str]:
    """Names of the direct entries of *path*, sorted."""
    return sorted(entry.name for entry in path.iterdir())


def remove_path(path: Path) -> None:
    """Delete a file, symlink or directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")

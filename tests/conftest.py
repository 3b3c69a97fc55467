"""Shared pytest fixtures for the create-admin-app test suite.

Provides reusable fixtures for:
- Temporary working directories and target roots
- A test ``Config`` pointing at the packaged template
- Mock subprocess helpers (asyncio processes and ``run_command`` results)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_admin_app.config import Config
from create_admin_app.utils import CommandResult


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory the CLI is invoked from (the target's parent)."""
    ws = tmp_path / "workspace"
    ws.mkdir()
    yield ws


@pytest.fixture
def target_root(workspace: Path) -> Path:
    """An existing, empty target directory."""
    root = workspace / "my-admin-app"
    root.mkdir()
    yield root


@pytest.fixture
def populated_root(target_root: Path) -> Path:
    """A target directory that looks like a template copy plus node_modules."""
    for entry in ("src", "public", "node_modules"):
        (target_root / entry).mkdir()
        (target_root / entry / "index.ts").write_text("export {};\n", encoding="utf-8")
    for entry in ("package.json", "tsconfig.json", ".gitignore", "README.md"):
        (target_root / entry).write_text("{}\n", encoding="utf-8")
    yield target_root


@pytest.fixture
def config() -> Config:
    """Default configuration with the packaged template."""
    return Config()


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def fake_run_command():
    """Factory for ``run_command`` replacements.

    The returned ``AsyncMock`` records every call. ``fail_on`` names a
    command argument (``"init"``, ``"--save-dev"``, ``"src/util"``) whose
    invocation exits with ``returncode``; everything else succeeds.
    ``node --version`` answers with ``node_version``.

    Usage:
        def test_install(fake_run_command):
            runner = fake_run_command(fail_on="--save-dev")
            with patch("create_admin_app.pipeline.run_command", runner):
                ...
    """
    def factory(
        fail_on: str | None = None,
        returncode: int = 1,
        node_version: str = "v18.17.1",
        on_call: Callable[[list[str], Any], None] | None = None,
    ) -> AsyncMock:
        async def _run(cmd: list[str], cwd: Any = None, **kwargs: Any) -> CommandResult:
            if on_call is not None:
                on_call(cmd, cwd)
            if cmd[1:] == ["--version"]:
                return CommandResult(command=cmd, returncode=0, stdout=node_version)
            if fail_on is not None and fail_on in cmd[1:]:
                return CommandResult(command=cmd, returncode=returncode)
            return CommandResult(command=cmd, returncode=0)

        return AsyncMock(side_effect=_run)

    return factory

"""Project name validation.

A generated project is an npm package, so its name has to satisfy npm's
package naming rules. It also must not shadow one of the dependencies the
scaffolder installs into it.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from pydantic import BaseModel, Field

# Dependencies that would collide with the generated package's own name.
RESERVED_NAMES: list[str] = sorted(["react", "react-dom", "react-scripts"])

BLACKLISTED_NAMES: tuple[str, ...] = ("node_modules", "favicon.ico")

NODE_CORE_MODULES: frozenset[str] = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "dns", "domain", "events", "fs", "http",
    "http2", "https", "inspector", "module", "net", "os", "path", "perf_hooks",
    "process", "punycode", "querystring", "readline", "repl", "stream",
    "string_decoder", "sys", "timers", "tls", "trace_events", "tty", "url",
    "util", "v8", "vm", "worker_threads", "zlib",
})

MAX_NAME_LENGTH = 214

_SCOPED_PACKAGE_RE = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
_SPECIAL_CHARS_RE = re.compile(r"[~'!()*]")


class NameValidation(BaseModel):
    """Result of checking a name against npm's package naming rules."""

    valid_for_new_packages: bool
    valid_for_old_packages: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ProjectNameError(Exception):
    """Raised when a project name cannot be used."""

    def __init__(self, name: str, reasons: list[str], reserved: bool = False) -> None:
        self.name = name
        self.reasons = reasons
        self.reserved = reserved
        super().__init__(f"Invalid project name {name!r}: {'; '.join(reasons)}")


def _url_safe(value: str) -> bool:
    # Same character set encodeURIComponent leaves untouched.
    return quote(value, safe="!~*'()") == value


def validate_package_name(name: str) -> NameValidation:
    """Check *name* against npm's package naming rules.

    Errors make a name unusable for any package; warnings only rule it out
    for new packages (old registry entries may still carry such names).
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not name:
        errors.append("name length must be greater than zero")
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")

    lowered = name.lower()
    for blacklisted in BLACKLISTED_NAMES:
        if lowered == blacklisted:
            errors.append(f"{blacklisted} is a blacklisted name")
    if lowered in NODE_CORE_MODULES:
        warnings.append(f"{lowered} is a core module name")

    if len(name) > MAX_NAME_LENGTH:
        warnings.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if lowered != name:
        warnings.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS_RE.search(name.split("/")[-1]):
        warnings.append("name can no longer contain special characters (\"~'!()*\")")

    if not _url_safe(name):
        match = _SCOPED_PACKAGE_RE.match(name)
        scoped_ok = bool(
            match
            and match.group(1) is not None
            and _url_safe(match.group(1))
            and _url_safe(match.group(2))
        )
        if not scoped_ok:
            errors.append("name can only contain URL-friendly characters")

    return NameValidation(
        valid_for_new_packages=not errors and not warnings,
        valid_for_old_packages=not errors,
        errors=errors,
        warnings=warnings,
    )


def check_app_name(name: str) -> None:
    """Raise ``ProjectNameError`` unless *name* can be used for a new project.

    The reserved-name check is case-sensitive.
    """
    result = validate_package_name(name)
    if not result.valid_for_new_packages:
        raise ProjectNameError(name, result.errors + result.warnings)

    if name in RESERVED_NAMES:
        raise ProjectNameError(
            name,
            [f"a dependency with the same name exists: {name}"],
            reserved=True,
        )

"""Shared utility functions for scaffold-next-pro.

Provides async command execution with a structured result, small file-system
helpers, and Rich-based console reporting.  Every external process the tool
starts goes through :func:`run_command`; callers decide whether a non-zero
exit is fatal.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

console = Console()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CommandError(Exception):
    """Raised when an external command exits with a non-zero code."""

    def __init__(self, message: str, command: str = "", returncode: int = 1, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished external command."""

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)

    def check(self) -> "CommandResult":
        """Return ``self`` or raise :class:`CommandError` on a non-zero exit."""
        if not self.ok:
            detail = f"\n{self.stderr}" if self.stderr else ""
            raise CommandError(
                f"Command failed with exit code {self.returncode}: {self.command_line}{detail}",
                command=self.command_line,
                returncode=self.returncode,
                stderr=self.stderr,
            )
        return self


CommandRunner = Callable[..., Awaitable[CommandResult]]


async def run_command(
    cmd: Sequence[str],
    cwd: str | Path | None = None,
    capture: bool = False,
    timeout: float | None = None,
) -> CommandResult:
    """Run an external command and wait for it to exit.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        capture: Capture stdout/stderr instead of inheriting the parent's
            streams.  Inherited output goes straight to the user's terminal.
        timeout: Optional wall-clock limit in seconds.  ``None`` waits
            indefinitely.

    Returns:
        A :class:`CommandResult`.  A program that cannot be started is
        reported as exit code 127 with the OS error in ``stderr``; a timeout
        is reported as exit code -1.
    """
    argv = tuple(str(part) for part in cmd)

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
        )
    except OSError as exc:
        return CommandResult(command=argv, returncode=127, stderr=str(exc))

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return CommandResult(
            command=argv,
            returncode=-1,
            stderr=f"Command timed out after {timeout}s: {' '.join(argv)}",
        )

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return CommandResult(
        command=argv,
        returncode=process.returncode or 0,
        stdout=stdout_str,
        stderr=stderr_str,
    )


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_text(path: Path, content: str) -> Path:
    """Create parent directories and write *content* to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON object from *path*.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data


def dump_json(data: dict[str, Any]) -> str:
    """Serialise *data* the way npm and yarn write manifests (2 spaces, trailing newline)."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STEP_COLORS: dict[str, str] = {
    "create": "bright_cyan",
    "enhance": "bright_green",
    "install": "bright_yellow",
    "git": "bright_magenta",
}


def print_step(stage: str, title: str) -> None:
    """Print a full-width rule announcing a pipeline stage."""
    color = STEP_COLORS.get(stage, "white")
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")

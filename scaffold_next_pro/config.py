"""scaffold-next-pro configuration.

Typed models for a single scaffolding run.  ``RunConfig`` captures what the
user asked for, ``ScaffoldSettings`` holds the fixed external commands the
pipeline invokes, and ``PromptSession`` is the short-lived interactive context
used to fill in whatever the command line left out.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import IO

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.prompt import Confirm, Prompt


class Integration(str, Enum):
    """Optional third-party service wirings a generated project may include."""
    STRIPE = "stripe"
    SUPABASE = "supabase"
    AI = "ai"


# Order in which every generator emits per-integration content.
KNOWN_INTEGRATIONS: tuple[Integration, ...] = (
    Integration.SUPABASE,
    Integration.STRIPE,
    Integration.AI,
)

INTEGRATION_LABELS: dict[Integration, str] = {
    Integration.STRIPE: "Stripe (payments)",
    Integration.SUPABASE: "Supabase (database & auth)",
    Integration.AI: "AI (Vercel AI SDK / OpenAI)",
}

# Order of the interactive questions.
PROMPT_ORDER: tuple[Integration, ...] = (
    Integration.STRIPE,
    Integration.SUPABASE,
    Integration.AI,
)

PROJECT_NAME_PATTERN = re.compile(r"[a-z0-9-]+")


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


class RunConfig(BaseModel):
    """What to scaffold.  Immutable once collected.

    ``name`` is not pattern-checked: a name given on the command line
    is used as-is, only interactive input goes through
    :func:`validate_project_name`.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project directory and package name")
    integrations: tuple[str, ...] = Field(
        default=(), description="Requested integration identifiers, in request order"
    )
    minimal: bool = Field(default=False, description="Skip every optional integration")

    def has(self, integration: Integration | str) -> bool:
        """Return ``True`` if *integration* was requested."""
        value = integration.value if isinstance(integration, Integration) else integration
        return value in self.integrations

    @property
    def unknown_integrations(self) -> list[str]:
        """Requested names that match no known integration."""
        known = {i.value for i in Integration}
        return [name for name in self.integrations if name not in known]


class ScaffoldSettings(BaseModel):
    """Fixed external commands and constants used by the pipeline."""

    cwd: Path = Field(default_factory=Path.cwd)
    generator_command: list[str] = Field(
        default_factory=lambda: ["npx", "create-next-app@latest"]
    )
    generator_flags: list[str] = Field(
        default_factory=lambda: [
            "--typescript",
            "--tailwind",
            "--app",
            "--src-dir",
            "--import-alias",
            "@/*",
            "--use-yarn",
            "--yes",
            "--no-git",
        ]
    )
    package_manager: str = Field(default="yarn")
    hook_bootstrap_args: list[str] = Field(default_factory=lambda: ["husky", "init"])
    hook_marker_dir: str = Field(default=".husky")
    git_binary: str = Field(default="git")
    commit_message: str = Field(default="chore: initial commit from create-next-pro")

    def project_path(self, name: str) -> Path:
        """Absolute path of the project directory for *name*."""
        return (self.cwd / name).resolve()

    def generator_argv(self, name: str) -> list[str]:
        """Full argument list for the external project generator."""
        return [*self.generator_command, name, *self.generator_flags]


# ---------------------------------------------------------------------------
# Validation and parsing
# ---------------------------------------------------------------------------


def validate_project_name(value: str | None) -> str | None:
    """Return an error message for an invalid project name, or ``None``."""
    if not value or not value.strip():
        return "Project name is required"
    if not PROJECT_NAME_PATTERN.fullmatch(value):
        return "Project name must be lowercase and contain only letters, numbers, and hyphens"
    return None


def parse_integrations(raw: str) -> tuple[str, ...]:
    """Split a ``--with`` value into trimmed integration names.

    Unknown names are kept; no generator has a predicate that matches them.
    """
    return tuple(part.strip() for part in raw.split(",") if part.strip())


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


class PromptCancelled(Exception):
    """Raised when the user aborts an interactive prompt."""


class PromptSession:
    """Interactive prompt context for one run.

    Args:
        console: Console used for questions and validation messages.
        stream: Optional input stream; defaults to the terminal.
    """

    def __init__(self, console: Console | None = None, stream: IO[str] | None = None) -> None:
        self.console = console or Console()
        self.stream = stream

    def ask_project_name(self) -> str:
        """Ask until a valid project name is entered."""
        while True:
            try:
                value = Prompt.ask(
                    "What is your project named? [dim](my-app)[/dim]",
                    console=self.console,
                    stream=self.stream,
                )
            except (KeyboardInterrupt, EOFError) as exc:
                raise PromptCancelled() from exc
            error = validate_project_name(value)
            if error is None:
                return value
            self.console.print(f"[red]{error}[/red]")

    def ask_integrations(self) -> tuple[str, ...]:
        """Ask one yes/no question per known integration."""
        selected: list[str] = []
        for integration in PROMPT_ORDER:
            try:
                wanted = Confirm.ask(
                    f"Include {INTEGRATION_LABELS[integration]}?",
                    default=False,
                    console=self.console,
                    stream=self.stream,
                )
            except (KeyboardInterrupt, EOFError) as exc:
                raise PromptCancelled() from exc
            if wanted:
                selected.append(integration.value)
        return tuple(selected)


def collect_run_config(
    name: str | None,
    with_integrations: str | None,
    minimal: bool,
    session: PromptSession,
) -> RunConfig:
    """Build a ``RunConfig`` from command-line values, prompting for the rest.

    Integration precedence: ``--minimal`` over ``--with`` over the
    interactive selection.

    Raises:
        PromptCancelled: If the user aborts a prompt.
    """
    if not name:
        name = session.ask_project_name()

    if minimal:
        integrations: tuple[str, ...] = ()
    elif with_integrations:
        integrations = parse_integrations(with_integrations)
    else:
        integrations = session.ask_integrations()

    return RunConfig(name=name, integrations=integrations, minimal=minimal)

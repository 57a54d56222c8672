"""scaffold-next-pro pipeline orchestrator.

Runs the strictly sequential scaffolding stages:

create  -- Invoke ``create-next-app`` to produce the baseline project.
enhance -- Write templates and patch baseline files.
install -- Add dependencies and dev dependencies, bootstrap git hooks.
git     -- Initialise a repository and make the first commit.

Failures of ``create``, ``enhance`` and the two dependency installs are fatal
(exit code 1), as is any unexpected error.  Hook bootstrap and git failures
only produce warnings.  Ctrl-C during a stage exits cleanly.

Usage::

    python -m scaffold_next_pro my-app --with stripe,ai
    python -m scaffold_next_pro my-app --minimal
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path

from scaffold_next_pro.config import (
    PromptCancelled,
    PromptSession,
    RunConfig,
    ScaffoldSettings,
    collect_run_config,
)
from scaffold_next_pro.installer import DependencyInstaller
from scaffold_next_pro.scaffolder import ProjectEnhancer, TemplateRenderer
from scaffold_next_pro.ui import show_cancelled, show_intro, show_success
from scaffold_next_pro.utils import (
    CommandError,
    CommandResult,
    CommandRunner,
    console,
    print_error,
    print_step,
    print_success,
    print_warning,
    run_command,
)
from scaffold_next_pro.vcs import GitInitializer

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a stage fails irrecoverably."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(message)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class ScaffoldPipeline:
    """Drives one scaffolding run from baseline generation to the first commit.

    Attributes:
        settings: Fixed commands and constants for the run.
        runner: Coroutine used for every external command.
        warnings: Messages for the non-fatal failures seen during the run.
    """

    def __init__(
        self,
        settings: ScaffoldSettings | None = None,
        runner: CommandRunner = run_command,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or ScaffoldSettings()
        self.runner = runner
        self.renderer = renderer or TemplateRenderer()
        self.installer = DependencyInstaller(self.settings, runner)
        self.git = GitInitializer(self.settings, runner)
        self.warnings: list[str] = []

    async def run(self, config: RunConfig) -> Path:
        """Run every stage for *config* and return the project path.

        Raises:
            ScaffoldError: If a fatal stage fails.
        """
        project_path = self.settings.project_path(config.name)
        integrations = () if config.minimal else config.integrations

        await self._create(config.name)
        await self._enhance(project_path, integrations)
        await self._install(project_path, integrations)
        await self._init_git(project_path)

        return project_path

    # -- Stages ------------------------------------------------------------

    async def _create(self, name: str) -> None:
        print_step("create", "Creating your Next.js project")
        result = await self.runner(self.settings.generator_argv(name), cwd=self.settings.cwd)
        self._require(result, "create")
        print_success("Next.js app created")

    async def _enhance(self, project_path: Path, integrations: Sequence[str]) -> None:
        print_step("enhance", "Enhancing project with production configurations")
        enhancer = ProjectEnhancer(
            project_path,
            integrations,
            renderer=self.renderer,
            package_manager=self.settings.package_manager,
        )
        try:
            report = await enhancer.enhance()
        except (OSError, ValueError) as exc:
            raise ScaffoldError("enhance", str(exc)) from exc
        for patch in report.skipped_patches:
            self.warnings.append(f"{patch.path}: {patch.detail}")
        print_success(f"Project enhanced ({len(report.written)} files written)")

    async def _install(self, project_path: Path, integrations: Sequence[str]) -> None:
        print_step("install", "Installing dependencies")
        result = await self.installer.add_dependencies(project_path, integrations)
        self._require(result, "install")
        result = await self.installer.add_dev_dependencies(project_path, integrations)
        self._require(result, "install")

        hooks = await self.installer.bootstrap_hooks(project_path)
        if hooks is not None and not hooks.ok:
            self._warn("Warning: Husky initialization had issues, but hooks are already set up")
        print_success("Dependencies installed")

    async def _init_git(self, project_path: Path) -> None:
        print_step("git", "Initializing git repository")
        result = await self.git.initialize(project_path)
        if not result.ok:
            self._warn("Warning: Could not initialize git repository")
            return
        print_success("Git initialized")

    # -- Failure policy ----------------------------------------------------

    def _require(self, result: CommandResult, stage: str) -> None:
        try:
            result.check()
        except CommandError as exc:
            raise ScaffoldError(stage, str(exc)) from exc

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        print_warning(message)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scaffold-next-pro",
        description="Scaffold a production-ready Next.js 15 app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  scaffold-next-pro my-app\n"
            "  scaffold-next-pro my-app --with stripe,supabase,ai\n"
            "  scaffold-next-pro my-app --minimal\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Name of the project (prompted for if omitted)",
    )
    parser.add_argument(
        "--with",
        dest="with_integrations",
        metavar="INTEGRATIONS",
        default=None,
        help="Comma-separated list of integrations (stripe,supabase,ai)",
    )
    parser.add_argument(
        "--minimal",
        action="store_true",
        help="Minimal setup without optional integrations",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: ScaffoldSettings | None = None,
    runner: CommandRunner = run_command,
    session: PromptSession | None = None,
) -> int:
    """CLI entry point.  Returns the process exit code."""
    args = build_parser().parse_args(argv)

    show_intro()

    try:
        config = collect_run_config(
            args.project_name,
            args.with_integrations,
            args.minimal,
            session or PromptSession(console),
        )
    except PromptCancelled:
        show_cancelled()
        return 0

    for name in config.unknown_integrations:
        print_warning(f"Warning: unknown integration '{name}' ignored")

    pipeline = ScaffoldPipeline(settings, runner=runner)
    try:
        asyncio.run(pipeline.run(config))
    except KeyboardInterrupt:
        show_cancelled()
        return 0
    except Exception as exc:
        print_error(f"Error: {exc}")
        return 1

    show_success(config.name, pipeline.settings.package_manager)
    return 0

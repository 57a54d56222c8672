"""Package-manager invocations for the generated project.

Each method runs exactly one command and returns its :class:`CommandResult`
unchecked; whether a failure is fatal is decided by the pipeline.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from scaffold_next_pro.config import ScaffoldSettings
from scaffold_next_pro.scaffolder.manifest import dev_dependencies, runtime_dependencies
from scaffold_next_pro.utils import CommandResult, CommandRunner, run_command


class DependencyInstaller:
    """Adds the base and per-integration packages with the configured package manager."""

    def __init__(self, settings: ScaffoldSettings, runner: CommandRunner = run_command) -> None:
        self.settings = settings
        self.runner = runner

    def dependency_names(self, integrations: Iterable[str]) -> list[str]:
        return list(runtime_dependencies(integrations))

    def dev_dependency_names(self, integrations: Iterable[str]) -> list[str]:
        return list(dev_dependencies(integrations))

    async def add_dependencies(
        self, project_path: Path, integrations: Iterable[str]
    ) -> CommandResult:
        """``<pm> add <deps...>`` with output inherited by the terminal."""
        return await self.runner(
            [self.settings.package_manager, "add", *self.dependency_names(integrations)],
            cwd=project_path,
        )

    async def add_dev_dependencies(
        self, project_path: Path, integrations: Iterable[str]
    ) -> CommandResult:
        """``<pm> add -D <dev deps...>`` with output inherited by the terminal."""
        return await self.runner(
            [self.settings.package_manager, "add", "-D", *self.dev_dependency_names(integrations)],
            cwd=project_path,
        )

    async def bootstrap_hooks(self, project_path: Path) -> CommandResult | None:
        """Run the hook manager's init command unless its directory already exists.

        Returns ``None`` when the command was not needed.
        """
        if (project_path / self.settings.hook_marker_dir).exists():
            return None
        return await self.runner(
            [self.settings.package_manager, *self.settings.hook_bootstrap_args],
            cwd=project_path,
        )

"""Git repository initialisation for the generated project."""

from __future__ import annotations

from pathlib import Path

from scaffold_next_pro.config import ScaffoldSettings
from scaffold_next_pro.utils import CommandResult, CommandRunner, run_command


class GitInitializer:
    """Runs ``git init``, ``git add .`` and the initial commit, in that order."""

    def __init__(self, settings: ScaffoldSettings, runner: CommandRunner = run_command) -> None:
        self.settings = settings
        self.runner = runner

    def commands(self) -> list[list[str]]:
        git = self.settings.git_binary
        return [
            [git, "init"],
            [git, "add", "."],
            [git, "commit", "-m", self.settings.commit_message],
        ]

    async def initialize(self, project_path: Path) -> CommandResult:
        """Run the commands, stopping at the first failure.

        Returns:
            The result of the last command that ran: the failing one, or the
            commit on success.
        """
        result: CommandResult | None = None
        for cmd in self.commands():
            result = await self.runner(cmd, cwd=project_path, capture=True)
            if not result.ok:
                break
        assert result is not None
        return result

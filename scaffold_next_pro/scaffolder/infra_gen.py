"""Static infrastructure files: Docker, deployment, CI, git hooks and linters.

None of these depend on the selected integrations.  Each is rendered from a
template under ``templates/infra/`` and returned keyed by its path inside the
generated project.
"""

from __future__ import annotations

from typing import Any

from scaffold_next_pro.utils import dump_json

from .templates import TemplateOutput, TemplateRenderer


PRETTIER_CONFIG: dict[str, Any] = {
    "semi": True,
    "trailingComma": "es5",
    "singleQuote": False,
    "printWidth": 80,
    "tabWidth": 2,
    "useTabs": False,
}

CONVENTIONAL_COMMIT_TYPES: tuple[str, ...] = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "chore",
    "revert",
)

LOCKFILES: dict[str, str] = {
    "yarn": "yarn.lock",
    "npm": "package-lock.json",
    "pnpm": "pnpm-lock.yaml",
}

CI_JOBS: tuple[dict[str, str], ...] = (
    {"name": "lint", "script": "lint"},
    {"name": "type-check", "script": "type-check"},
    {"name": "build", "script": "build"},
)


class InfraGenerator:
    """Generates container, deployment, CI and repository-hygiene files."""

    # Template name -> output path
    _FILES: dict[str, str] = {
        "infra/Dockerfile.j2": "Dockerfile",
        "infra/dockerignore.j2": ".dockerignore",
        "infra/vercel.json.j2": "vercel.json",
        "infra/ci.yml.j2": ".github/workflows/ci.yml",
        "infra/pre-commit.j2": ".husky/pre-commit",
        "infra/commit-msg.j2": ".husky/commit-msg",
        "infra/lintstagedrc.json.j2": ".lintstagedrc.json",
        "infra/commitlint.config.js.j2": "commitlint.config.js",
        "infra/db.ts.j2": "src/lib/db.ts",
    }

    def __init__(
        self,
        renderer: TemplateRenderer,
        package_manager: str = "yarn",
        node_version: str = "20",
        port: int = 3000,
    ) -> None:
        self.renderer = renderer
        self.context: dict[str, Any] = {
            "package_manager": package_manager,
            "lockfile": LOCKFILES.get(package_manager, f"{package_manager}.lock"),
            "node_version": node_version,
            "port": port,
            "ci_jobs": CI_JOBS,
            "commit_types": CONVENTIONAL_COMMIT_TYPES,
        }

    def render(self) -> TemplateOutput:
        """Render every infrastructure file.

        Returns:
            Mapping of project-relative path to file content.
        """
        output: TemplateOutput = {
            output_path: self.renderer.render(template_name, self.context)
            for template_name, output_path in self._FILES.items()
        }
        output[".prettierrc"] = dump_json(PRETTIER_CONFIG)
        output["src/components/ui/.gitkeep"] = ""
        return output

    @staticmethod
    def executable_paths() -> tuple[str, ...]:
        """Generated files that must carry the executable bit."""
        return (".husky/pre-commit", ".husky/commit-msg")

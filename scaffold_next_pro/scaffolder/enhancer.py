"""Project enhancement orchestrator.

Takes the directory produced by the baseline generator and the selected
integrations, and layers the production configuration on top of it: the
patched manifest, environment files, container and CI assets, git hooks,
tRPC wiring, optional integration files and an example page.
"""

from __future__ import annotations

import asyncio
import json
import stat
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from scaffold_next_pro.utils import dump_json, load_json, print_warning, write_text

from .env_gen import EnvGenerator
from .infra_gen import InfraGenerator
from .integrations import IntegrationGenerator
from .manifest import generate_package_json
from .patcher import (
    ESLINT_CONFIG_PATH,
    NEXT_CONFIG_CANDIDATES,
    PatchResult,
    PatchStatus,
    patch_eslint_config,
    patch_layout,
    patch_next_config,
)
from .templates import TemplateOutput, TemplateRenderer


LAYOUT_PATH = "src/app/layout.tsx"
MANIFEST_PATH = "package.json"


@dataclass
class EnhanceReport:
    """What :meth:`ProjectEnhancer.enhance` wrote and patched."""

    written: list[str] = field(default_factory=list)
    patches: list[PatchResult] = field(default_factory=list)

    @property
    def skipped_patches(self) -> list[PatchResult]:
        return [
            p
            for p in self.patches
            if p.status in (PatchStatus.ANCHOR_MISSING, PatchStatus.FILE_MISSING)
        ]


class ProjectEnhancer:
    """Writes rendered templates into a baseline project.

    Every file write is a full overwrite at a fixed relative path.  The only
    in-place edits are the best-effort patches on ``next.config.*``,
    ``src/app/layout.tsx`` and ``.eslintrc.json``; a patch whose anchor is
    missing leaves the file as-is and is reported as a warning.
    """

    def __init__(
        self,
        project_path: str | Path,
        integrations: Iterable[str],
        renderer: TemplateRenderer | None = None,
        package_manager: str = "yarn",
    ) -> None:
        self.project_path = Path(project_path)
        self.integrations = tuple(integrations)
        self.renderer = renderer or TemplateRenderer()
        self.env_gen = EnvGenerator(self.renderer)
        self.infra_gen = InfraGenerator(self.renderer, package_manager=package_manager)
        self.integration_gen = IntegrationGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    def render_all(self) -> TemplateOutput:
        """Every generated file, keyed by project-relative path.  Pure."""
        output: TemplateOutput = {}
        output.update(self.env_gen.render(self.integrations))
        output.update(self.infra_gen.render())
        output.update(self.integration_gen.render(self.integrations))
        output.update(self.integration_gen.pages(self.integrations))
        return output

    async def enhance(self) -> EnhanceReport:
        """Apply every enhancement to the project directory.

        Raises:
            FileNotFoundError: If the baseline ``package.json`` is missing.
            OSError: If a file cannot be written.
        """
        report = EnhanceReport()

        # 1. Manifest
        await self._update_manifest()
        report.written.append(MANIFEST_PATH)

        # 2. Standalone output for the Docker image
        report.patches.append(await self._patch_next_config())

        # 3. Generated files
        files = self.render_all()
        for rel_path, content in files.items():
            await asyncio.to_thread(write_text, self.project_path / rel_path, content)
            report.written.append(rel_path)

        for rel_path in self.infra_gen.executable_paths():
            await asyncio.to_thread(_make_executable, self.project_path / rel_path)

        # 4. Provider injection into the root layout
        report.patches.append(await self._patch_layout())

        # 5. ESLint presets
        eslint_result = await self._patch_eslint()
        if eslint_result is not None:
            report.patches.append(eslint_result)

        for patch in report.skipped_patches:
            print_warning(f"Warning: could not patch {patch.path} ({patch.detail}); left unchanged")

        return report

    # -- Steps -------------------------------------------------------------

    async def _update_manifest(self) -> None:
        path = self.project_path / MANIFEST_PATH
        base = await asyncio.to_thread(load_json, path)
        enhanced = generate_package_json(base, self.integrations)
        await asyncio.to_thread(write_text, path, dump_json(enhanced))

    async def _patch_next_config(self) -> PatchResult:
        for name in NEXT_CONFIG_CANDIDATES:
            path = self.project_path / name
            if path.is_file():
                return await self._patch_text_file(name, patch_next_config)
        return PatchResult(
            NEXT_CONFIG_CANDIDATES[0],
            PatchStatus.FILE_MISSING,
            detail="no next.config file found",
        )

    async def _patch_layout(self) -> PatchResult:
        if not (self.project_path / LAYOUT_PATH).is_file():
            return PatchResult(LAYOUT_PATH, PatchStatus.FILE_MISSING, detail="file not found")
        return await self._patch_text_file(LAYOUT_PATH, patch_layout)

    async def _patch_text_file(
        self, rel_path: str, patch: Callable[[str, str], PatchResult]
    ) -> PatchResult:
        path = self.project_path / rel_path
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        result = patch(rel_path, text)
        if result.changed:
            await asyncio.to_thread(write_text, path, result.content)
        return result

    async def _patch_eslint(self) -> PatchResult | None:
        path = self.project_path / ESLINT_CONFIG_PATH
        if not path.is_file():
            return None
        try:
            config = await asyncio.to_thread(load_json, path)
        except (json.JSONDecodeError, ValueError) as exc:
            return PatchResult(ESLINT_CONFIG_PATH, PatchStatus.ANCHOR_MISSING, detail=str(exc))
        patched, status = patch_eslint_config(config)
        if status is PatchStatus.APPLIED:
            await asyncio.to_thread(write_text, path, dump_json(patched))
        return PatchResult(ESLINT_CONFIG_PATH, status, dump_json(patched))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_executable(path: Path) -> None:
    """Set the executable bit on a file."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

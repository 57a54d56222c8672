"""Shared pytest fixtures for the scaffold-next-pro test suite.

Provides reusable fixtures for:
- A baseline project tree shaped like ``create-next-app`` output
- A fake external-command runner that records calls and simulates failures
- A real template renderer
"""

from __future__ import annotations

import json
import textwrap
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from scaffold_next_pro.config import ScaffoldSettings
from scaffold_next_pro.scaffolder.templates import TemplateRenderer
from scaffold_next_pro.utils import CommandResult


# ---------------------------------------------------------------------------
# Baseline project
# ---------------------------------------------------------------------------

BASELINE_PACKAGE_JSON: dict[str, Any] = {
    "name": "my-app",
    "version": "0.1.0",
    "private": True,
    "scripts": {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
        "lint": "next lint",
    },
    "dependencies": {
        "next": "15.1.0",
        "react": "^19.0.0",
        "react-dom": "^19.0.0",
    },
    "devDependencies": {
        "typescript": "^5",
        "eslint": "^9",
    },
}

BASELINE_NEXT_CONFIG = textwrap.dedent("""\
    import type { NextConfig } from "next";

    const nextConfig: NextConfig = {
      /* config options here */
    };

    export default nextConfig;
    """)

BASELINE_LAYOUT = textwrap.dedent("""\
    import type { Metadata } from "next";
    import { Geist, Geist_Mono } from "next/font/google";
    import "./globals.css";

    const geistSans = Geist({
      variable: "--font-geist-sans",
      subsets: ["latin"],
    });

    const geistMono = Geist_Mono({
      variable: "--font-geist-mono",
      subsets: ["latin"],
    });

    export const metadata: Metadata = {
      title: "Create Next App",
      description: "Generated by create next app",
    };

    export default function RootLayout({
      children,
    }: Readonly<{
      children: React.ReactNode;
    }>) {
      return (
        <html lang="en">
          <body
            className={`${geistSans.variable} ${geistMono.variable} antialiased`}
          >
            {children}
          </body>
        </html>
      );
    }
    """)

BASELINE_ESLINT = {"extends": ["next/core-web-vitals", "next/typescript"]}


def write_baseline(root: Path, name: str = "my-app") -> Path:
    """Create a minimal tree resembling ``create-next-app`` output."""
    root.mkdir(parents=True, exist_ok=True)
    manifest = {**BASELINE_PACKAGE_JSON, "name": name}
    (root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    (root / "next.config.ts").write_text(BASELINE_NEXT_CONFIG, encoding="utf-8")
    (root / ".eslintrc.json").write_text(json.dumps(BASELINE_ESLINT, indent=2), encoding="utf-8")
    app_dir = root / "src" / "app"
    app_dir.mkdir(parents=True, exist_ok=True)
    (app_dir / "layout.tsx").write_text(BASELINE_LAYOUT, encoding="utf-8")
    (app_dir / "page.tsx").write_text("export default function Home() { return null; }\n", encoding="utf-8")
    return root


@pytest.fixture
def baseline_project(tmp_path: Path) -> Path:
    """A baseline project directory at ``<tmp>/my-app``."""
    return write_baseline(tmp_path / "my-app")


# ---------------------------------------------------------------------------
# Fake command runner
# ---------------------------------------------------------------------------


class FakeRunner:
    """Async stand-in for ``run_command``.

    Records every call.  ``failures`` maps a command prefix to the exit code
    that command should return.  The project generator command writes a
    baseline tree so the enhancer has something to work on.
    """

    def __init__(self, failures: dict[tuple[str, ...], int] | None = None) -> None:
        self.failures = failures or {}
        self.calls: list[list[str]] = []
        self.cwds: list[Path | None] = []

    async def __call__(
        self,
        cmd: Sequence[str],
        cwd: str | Path | None = None,
        capture: bool = False,
        timeout: float | None = None,
    ) -> CommandResult:
        argv = [str(part) for part in cmd]
        self.calls.append(argv)
        self.cwds.append(Path(cwd) if cwd else None)

        for prefix, code in self.failures.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return CommandResult(tuple(argv), code, stderr="simulated failure")

        if argv[:2] == ["npx", "create-next-app@latest"] and cwd is not None:
            write_baseline(Path(cwd) / argv[2], argv[2])

        return CommandResult(tuple(argv), 0)

    def called(self, *prefix: str) -> bool:
        return any(tuple(call[: len(prefix)]) == prefix for call in self.calls)


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    """The FakeRunner class; instantiate with the failures a test needs."""
    return FakeRunner


@pytest.fixture
def settings(tmp_path: Path) -> ScaffoldSettings:
    """Settings rooted at the test's temporary directory."""
    return ScaffoldSettings(cwd=tmp_path)


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def baseline_layout() -> str:
    return BASELINE_LAYOUT


@pytest.fixture
def baseline_next_config() -> str:
    return BASELINE_NEXT_CONFIG

"""Tests for container, CI, hook and linter file generation.

Covers:
- The full set of infrastructure paths
- Dockerfile stages and standalone output usage
- CI workflow structure (parsed with PyYAML)
- Husky hooks and lint-staged / commitlint configuration
"""

from __future__ import annotations

import json

import pytest
import yaml

from scaffold_next_pro.scaffolder.infra_gen import (
    CONVENTIONAL_COMMIT_TYPES,
    PRETTIER_CONFIG,
    InfraGenerator,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def infra(renderer) -> dict[str, str]:
    return InfraGenerator(renderer).render()


class TestInfraGenerator:
    def test_paths(self, infra):
        assert set(infra) == {
            "Dockerfile",
            ".dockerignore",
            "vercel.json",
            ".github/workflows/ci.yml",
            ".husky/pre-commit",
            ".husky/commit-msg",
            ".lintstagedrc.json",
            "commitlint.config.js",
            ".prettierrc",
            "src/lib/db.ts",
            "src/components/ui/.gitkeep",
        }

    def test_dockerfile(self, infra):
        dockerfile = infra["Dockerfile"]
        assert dockerfile.startswith("FROM node:20-alpine AS base\n")
        for stage in ("AS deps", "AS builder", "AS runner"):
            assert stage in dockerfile
        assert "/app/.next/standalone" in dockerfile
        assert "EXPOSE 3000" in dockerfile
        assert 'CMD ["node", "server.js"]' in dockerfile

    def test_dockerfile_settings(self, renderer):
        dockerfile = InfraGenerator(renderer, node_version="22", port=8080).render()["Dockerfile"]
        assert "FROM node:22-alpine" in dockerfile
        assert "EXPOSE 8080" in dockerfile
        assert "ENV PORT=8080" in dockerfile

    def test_package_manager_drives_commands(self, renderer):
        infra = InfraGenerator(renderer, package_manager="pnpm").render()
        dockerfile = infra["Dockerfile"]
        assert "COPY package.json pnpm-lock.yaml* ./" in dockerfile
        assert "RUN pnpm install --frozen-lockfile" in dockerfile
        assert "RUN pnpm build" in dockerfile
        assert "yarn" not in dockerfile

        vercel = json.loads(infra["vercel.json"])
        assert vercel["buildCommand"] == "pnpm build"
        assert vercel["installCommand"] == "pnpm install"

        workflow = yaml.safe_load(infra[".github/workflows/ci.yml"])
        for name, job in workflow["jobs"].items():
            assert job["steps"][1]["with"]["cache"] == "pnpm"
            assert job["steps"][-1]["run"] == f"pnpm {name}"

        assert infra[".husky/pre-commit"].strip() == "pnpm lint-staged"

    def test_dockerignore_excludes_env_and_modules(self, infra):
        entries = infra[".dockerignore"].splitlines()
        assert "node_modules" in entries
        assert ".env" in entries
        assert ".next" in entries

    def test_ci_workflow(self, infra):
        workflow = yaml.safe_load(infra[".github/workflows/ci.yml"])
        assert workflow["name"] == "CI"
        assert list(workflow["jobs"]) == ["lint", "type-check", "build"]
        for name, job in workflow["jobs"].items():
            assert job["runs-on"] == "ubuntu-latest"
            steps = job["steps"]
            assert steps[0]["uses"] == "actions/checkout@v4"
            assert steps[1]["with"]["node-version"] == "20"
            assert steps[-1]["run"] == f"yarn {name}"

    def test_ci_triggers(self, infra):
        workflow = yaml.safe_load(infra[".github/workflows/ci.yml"])
        # PyYAML reads the bare ``on`` key as boolean True.
        triggers = workflow[True]
        assert triggers["push"]["branches"] == ["main", "master"]
        assert triggers["pull_request"]["branches"] == ["main", "master"]

    def test_vercel_config(self, infra):
        config = json.loads(infra["vercel.json"])
        assert config["framework"] == "nextjs"
        assert config["buildCommand"] == "yarn build"

    def test_hooks(self, infra):
        assert infra[".husky/pre-commit"].strip() == "yarn lint-staged"
        assert infra[".husky/commit-msg"].strip() == "yarn commitlint --edit $1"

    def test_lint_staged(self, infra):
        config = json.loads(infra[".lintstagedrc.json"])
        assert config["*.{js,jsx,ts,tsx}"] == ["eslint --fix", "prettier --write"]

    def test_commitlint_types(self, infra):
        config = infra["commitlint.config.js"]
        assert '"@commitlint/config-conventional"' in config
        for commit_type in CONVENTIONAL_COMMIT_TYPES:
            assert f'        "{commit_type}",\n' in config

    def test_prettierrc(self, infra):
        assert json.loads(infra[".prettierrc"]) == PRETTIER_CONFIG

    def test_gitkeep_is_empty(self, infra):
        assert infra["src/components/ui/.gitkeep"] == ""

    def test_executable_paths(self):
        assert set(InfraGenerator.executable_paths()) == {".husky/pre-commit", ".husky/commit-msg"}

    def test_deterministic(self, renderer):
        assert InfraGenerator(renderer).render() == InfraGenerator(renderer).render()

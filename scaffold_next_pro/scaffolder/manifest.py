"""package.json enhancement.

Dependency tables shared by the manifest patcher and the dependency
installer, plus :func:`generate_package_json` which merges them into the
manifest written by the baseline generator.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from scaffold_next_pro.config import KNOWN_INTEGRATIONS, Integration


EXTRA_SCRIPTS: dict[str, str] = {
    "type-check": "tsc --noEmit",
    "lint:fix": "next lint --fix",
    "format": "prettier --write .",
    "format:check": "prettier --check .",
    "prepare": "husky install",
    "commit": "cz",
}

BASE_DEPENDENCIES: dict[str, str] = {
    "zod": "^3.23.8",
    "@tanstack/react-query": "^5.62.11",
    "@trpc/server": "^10.45.2",
    "@trpc/client": "^10.45.2",
    "@trpc/react-query": "^10.45.2",
    "@trpc/next": "^10.45.2",
    "superjson": "^2.2.2",
    "framer-motion": "^11.15.0",
}

BASE_DEV_DEPENDENCIES: dict[str, str] = {
    "@types/node": "^22.10.5",
    "prettier": "^3.4.2",
    "eslint-config-prettier": "^9.1.0",
    "husky": "^9.1.7",
    "lint-staged": "^15.2.11",
    "@commitlint/cli": "^19.6.0",
    "@commitlint/config-conventional": "^19.6.0",
    "commitizen": "^4.3.1",
    "cz-conventional-changelog": "^3.3.0",
}

INTEGRATION_DEPENDENCIES: dict[Integration, dict[str, str]] = {
    Integration.SUPABASE: {"@supabase/supabase-js": "^2.47.10"},
    Integration.STRIPE: {"stripe": "^17.4.0"},
    Integration.AI: {"ai": "^3.4.36", "openai": "^4.73.1"},
}

COMMITIZEN_ADAPTER = "cz-conventional-changelog"


def runtime_dependencies(integrations: Iterable[str]) -> dict[str, str]:
    """Base dependencies plus the entries owned by each selected integration."""
    selected = set(integrations)
    deps = dict(BASE_DEPENDENCIES)
    for integration in KNOWN_INTEGRATIONS:
        if integration.value in selected:
            deps.update(INTEGRATION_DEPENDENCIES[integration])
    return deps


def dev_dependencies(integrations: Iterable[str] = ()) -> dict[str, str]:
    """Dev dependencies.  No integration adds any today."""
    return dict(BASE_DEV_DEPENDENCIES)


def generate_package_json(
    base: dict[str, Any], integrations: Iterable[str]
) -> dict[str, Any]:
    """Return a new manifest with scripts, dependencies and commitizen config merged in.

    Keys already present in *base* are kept; the fixed entries override
    matching names.  A section that is missing or ``null`` counts as empty.
    *base* itself is not modified.
    """
    selected = list(integrations)
    return {
        **base,
        "scripts": {**(base.get("scripts") or {}), **EXTRA_SCRIPTS},
        "dependencies": {**(base.get("dependencies") or {}), **runtime_dependencies(selected)},
        "devDependencies": {
            **(base.get("devDependencies") or {}),
            **dev_dependencies(selected),
        },
        "config": {"commitizen": {"path": COMMITIZEN_ADAPTER}},
    }

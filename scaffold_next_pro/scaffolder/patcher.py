"""Best-effort edits to files produced by the baseline generator.

The baseline project is created by an external tool whose output changes
between releases, so every edit here searches for a tolerant anchor and
reports what happened instead of assuming the anchor exists.  A missing
anchor leaves the file untouched and is surfaced to the caller as
``PatchStatus.ANCHOR_MISSING``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


class PatchStatus(str, Enum):
    """Outcome of a single best-effort patch."""
    APPLIED = "applied"
    ALREADY_PRESENT = "already_present"
    ANCHOR_MISSING = "anchor_missing"
    FILE_MISSING = "file_missing"


@dataclass(frozen=True)
class PatchResult:
    """Result of patching one file.  ``content`` is the (possibly unchanged) text."""

    path: str
    status: PatchStatus
    content: str = ""
    detail: str = ""

    @property
    def changed(self) -> bool:
        return self.status is PatchStatus.APPLIED


# ---------------------------------------------------------------------------
# next.config
# ---------------------------------------------------------------------------

NEXT_CONFIG_CANDIDATES: tuple[str, ...] = (
    "next.config.ts",
    "next.config.mjs",
    "next.config.js",
)

STANDALONE_SETTING = "output: 'standalone'"

# Matches ``const nextConfig = {`` and ``const nextConfig: NextConfig = {``.
_NEXT_CONFIG_ANCHOR = re.compile(r"const\s+nextConfig\s*(?::\s*[\w.]+\s*)?=\s*\{")
_STANDALONE_PRESENT = re.compile(r"output\s*:\s*['\"]standalone['\"]")


def patch_next_config(path: str, text: str) -> PatchResult:
    """Enable standalone output, required by the Docker image."""
    if _STANDALONE_PRESENT.search(text):
        return PatchResult(path, PatchStatus.ALREADY_PRESENT, text)
    match = _NEXT_CONFIG_ANCHOR.search(text)
    if match is None:
        return PatchResult(
            path, PatchStatus.ANCHOR_MISSING, text, "no `const nextConfig = {` declaration"
        )
    patched = text[: match.end()] + f"\n  {STANDALONE_SETTING}," + text[match.end():]
    return PatchResult(path, PatchStatus.APPLIED, patched)


# ---------------------------------------------------------------------------
# Root layout
# ---------------------------------------------------------------------------

PROVIDER_NAME = "TRPCProvider"
PROVIDER_IMPORT = 'import { TRPCProvider } from "@/components/providers/trpc-provider";'

_METADATA_IMPORT = re.compile(
    r"^import\s+(?:type\s+)?\{\s*Metadata\s*\}\s+from\s+['\"]next['\"];?[ \t]*$",
    re.MULTILINE,
)
_BODY = re.compile(r"<body([^>]*)>(.*?)</body>", re.DOTALL)


def patch_layout(path: str, text: str) -> PatchResult:
    """Import the tRPC provider and wrap the ``<body>`` contents with it.

    Both anchors must be present; otherwise nothing is changed so the file
    never ends up with an import but no provider, or the reverse.
    """
    if PROVIDER_NAME in text:
        return PatchResult(path, PatchStatus.ALREADY_PRESENT, text)

    import_match = _METADATA_IMPORT.search(text)
    body_match = _BODY.search(text)
    missing = []
    if import_match is None:
        missing.append("`Metadata` import")
    if body_match is None:
        missing.append("<body> element")
    if missing:
        return PatchResult(
            path, PatchStatus.ANCHOR_MISSING, text, "no " + " or ".join(missing)
        )

    attrs, inner = body_match.group(1), body_match.group(2)
    wrapped = (
        f"<body{attrs}>\n"
        f"        <{PROVIDER_NAME}>{inner}\n"
        f"        </{PROVIDER_NAME}>\n"
        f"      </body>"
    )
    patched = text[: body_match.start()] + wrapped + text[body_match.end():]
    # The import sits above <body>, so its offsets are unaffected.
    patched = (
        patched[: import_match.end()] + "\n" + PROVIDER_IMPORT + patched[import_match.end():]
    )
    return PatchResult(path, PatchStatus.APPLIED, patched)


# ---------------------------------------------------------------------------
# ESLint
# ---------------------------------------------------------------------------

ESLINT_CONFIG_PATH = ".eslintrc.json"
ESLINT_EXTENDS: tuple[str, ...] = ("next/core-web-vitals", "prettier")


def patch_eslint_config(config: dict[str, Any]) -> tuple[dict[str, Any], PatchStatus]:
    """Add the Next.js and Prettier presets to ``extends``.

    Returns the new config and whether anything changed.  A string
    ``extends`` is normalised to a list.
    """
    existing = config.get("extends", [])
    if isinstance(existing, str):
        existing = [existing]
    missing = [preset for preset in ESLINT_EXTENDS if preset not in existing]
    if not missing:
        return config, PatchStatus.ALREADY_PRESENT
    return {**config, "extends": [*existing, *missing]}, PatchStatus.APPLIED

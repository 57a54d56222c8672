"""Jinja2 template rendering for project enhancement.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``scaffold_next_pro/scaffolder/templates/`` directory and renders them with a
context built from the run configuration.  Files whose content depends on the
selected integrations are assembled from an ordered list of
:class:`Fragment` entries so that output order never depends on the order in
which integrations were requested.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# Relative output path -> file content.
TemplateOutput = dict[str, str]


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Fragment:
    """A piece of a file, included only when its integration is selected.

    ``integration=None`` marks a fragment that is always included.
    """

    template: str
    integration: str | None = None

    def applies(self, integrations: Iterable[str]) -> bool:
        return self.integration is None or self.integration in set(integrations)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the generated project.

    Templates are rendered with ``StrictUndefined`` so that a missing context
    variable fails loudly instead of producing an empty string.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, template_path: str, context: dict[str, Any] | None = None) -> str:
        """Render a single template.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"infra/Dockerfile.j2"``).
            context: Variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**(context or {}))

    def compose(
        self,
        fragments: Sequence[Fragment],
        integrations: Iterable[str],
        context: dict[str, Any] | None = None,
    ) -> str:
        """Concatenate the fragments that apply to *integrations*, in list order."""
        selected = list(integrations)
        return "".join(
            self.render(fragment.template, context)
            for fragment in fragments
            if fragment.applies(selected)
        )

"""Per-integration source files for the generated project.

tRPC is part of the base stack and always rendered.  Supabase, Stripe and
AI each own a disjoint set of files, rendered only when selected.  The
example page is assembled from ordered fragments, one per integration.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from scaffold_next_pro.config import KNOWN_INTEGRATIONS, Integration

from .templates import Fragment, TemplateOutput, TemplateRenderer


TRPC_FILES: dict[str, str] = {
    "trpc/context.ts.j2": "src/server/trpc/context.ts",
    "trpc/trpc.ts.j2": "src/server/trpc/trpc.ts",
    "trpc/root.ts.j2": "src/server/trpc/root.ts",
    "trpc/route.ts.j2": "src/app/api/trpc/[trpc]/route.ts",
    "trpc/client.ts.j2": "src/lib/trpc.ts",
}

INTEGRATION_FILES: dict[Integration, dict[str, str]] = {
    Integration.SUPABASE: {
        "supabase/client.ts.j2": "src/lib/supabase.ts",
    },
    Integration.STRIPE: {
        "stripe/client.ts.j2": "src/lib/stripe.ts",
        "stripe/webhook.ts.j2": "src/app/api/webhooks/stripe/route.ts",
    },
    Integration.AI: {
        "ai/client.ts.j2": "src/lib/ai.ts",
        "ai/chat.ts.j2": "src/app/api/ai/chat/route.ts",
    },
}

PROVIDER_PATH = "src/components/providers/trpc-provider.tsx"
EXAMPLE_PAGE_PATH = "src/app/example/page.tsx"

EXAMPLE_PAGE_FRAGMENTS: tuple[Fragment, ...] = (
    Fragment("pages/example/head.tsx.j2"),
    Fragment("pages/example/supabase.tsx.j2", Integration.SUPABASE.value),
    Fragment("pages/example/stripe.tsx.j2", Integration.STRIPE.value),
    Fragment("pages/example/ai.tsx.j2", Integration.AI.value),
    Fragment("pages/example/tail.tsx.j2"),
)


class IntegrationGenerator:
    """Renders the tRPC base files and the optional integration files."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        trpc_endpoint: str = "/api/trpc",
        stripe_api_version: str = "2024-12-18.acacia",
        chat_model: str = "gpt-4",
    ) -> None:
        self.renderer = renderer
        self.context: dict[str, Any] = {
            "trpc_endpoint": trpc_endpoint,
            "stripe_api_version": stripe_api_version,
            "chat_model": chat_model,
        }

    def _render_files(self, files: dict[str, str]) -> TemplateOutput:
        return {
            output_path: self.renderer.render(template_name, self.context)
            for template_name, output_path in files.items()
        }

    def trpc(self) -> TemplateOutput:
        return self._render_files(TRPC_FILES)

    def integration(self, integration: Integration) -> TemplateOutput:
        """Files owned by a single integration."""
        return self._render_files(INTEGRATION_FILES[integration])

    def render(self, integrations: Iterable[str]) -> TemplateOutput:
        """tRPC files followed by the files of every selected integration."""
        selected = set(integrations)
        output = self.trpc()
        for integration in KNOWN_INTEGRATIONS:
            if integration.value in selected:
                output.update(self.integration(integration))
        return output

    def example_page(self, integrations: Iterable[str]) -> str:
        return self.renderer.compose(EXAMPLE_PAGE_FRAGMENTS, integrations, self.context)

    def pages(self, integrations: Iterable[str]) -> TemplateOutput:
        """The provider component and the example page."""
        return {
            PROVIDER_PATH: self.renderer.render("pages/trpc-provider.tsx.j2", self.context),
            EXAMPLE_PAGE_PATH: self.example_page(integrations),
        }

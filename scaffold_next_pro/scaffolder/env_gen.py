"""Environment variable files for the generated project.

A single declarative table of :class:`EnvVar` records, grouped per
integration, drives both generated artefacts:

* ``.env.example`` -- documented placeholder values, one commented block per group.
* ``src/env.mjs`` -- a zod schema validated at application start-up.

The same table also yields an equivalent pydantic model so the placeholder
file can be checked against the schema without a JavaScript runtime.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional

from pydantic import AnyUrl, BaseModel, StringConstraints, create_model

from scaffold_next_pro.config import Integration

from .templates import TemplateOutput, TemplateRenderer


# ---------------------------------------------------------------------------
# Declarative schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EnvVar:
    """One environment variable consumed by the generated project."""

    name: str
    kind: Literal["string", "url", "enum"] = "string"
    prefix: str | None = None
    optional: bool = False
    default: str | None = None
    choices: tuple[str, ...] = ()
    example: str | None = None
    note: str | None = None

    @property
    def in_example(self) -> bool:
        return self.example is not None

    @property
    def zod(self) -> str:
        """The zod expression validating this variable."""
        if self.kind == "enum":
            options = ", ".join(f'"{c}"' for c in self.choices)
            expr = f"z.enum([{options}])"
        elif self.kind == "url":
            expr = "z.string().url()"
        else:
            expr = "z.string()"
        if self.prefix:
            expr += f'.startsWith("{self.prefix}")'
        if self.default is not None:
            expr += f'.default("{self.default}")'
        elif self.optional:
            expr += ".optional()"
        return expr

    def pydantic_field(self) -> tuple[Any, Any]:
        """``(annotation, default)`` pair for :func:`pydantic.create_model`."""
        annotation: Any
        if self.kind == "enum":
            annotation = Literal[self.choices]  # type: ignore[valid-type]
        elif self.kind == "url":
            annotation = AnyUrl
        elif self.prefix:
            annotation = Annotated[str, StringConstraints(pattern=f"^{re.escape(self.prefix)}")]
        else:
            annotation = str

        if self.default is not None:
            return annotation, self.default
        if self.optional:
            return Optional[annotation], None
        return annotation, ...


@dataclass(frozen=True)
class EnvGroup:
    """A block of variables owned by one integration (``None`` for the base block)."""

    title: str
    integration: str | None
    variables: tuple[EnvVar, ...]
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def example_vars(self) -> list[EnvVar]:
        return [v for v in self.variables if v.in_example]


ENV_GROUPS: tuple[EnvGroup, ...] = (
    EnvGroup(
        title="Next.js",
        integration=None,
        variables=(
            EnvVar(
                "NODE_ENV",
                kind="enum",
                choices=("development", "test", "production"),
                default="development",
            ),
            EnvVar("NEXT_PUBLIC_APP_URL", kind="url", example="http://localhost:3000"),
        ),
    ),
    EnvGroup(
        title="Supabase",
        integration=Integration.SUPABASE.value,
        notes=(
            "Get these from your Supabase project settings: https://app.supabase.com/project/_/settings/api",
            "Example test credentials (replace with your actual values):",
        ),
        variables=(
            EnvVar(
                "NEXT_PUBLIC_SUPABASE_URL",
                kind="url",
                example="https://abcdefghijklmnop.supabase.co",
            ),
            EnvVar(
                "NEXT_PUBLIC_SUPABASE_ANON_KEY",
                example=(
                    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
                    "eyJpc3MiOiJzdXBhYmFzZSIsInJlZiI6ImFiY2RlZmdoaWprbG1ub3AiLCJyb2xlIjoiYW5vbiIsImlhdCI6MTY0MDE5OTIwMCwiZXhwIjoxOTU1Nzc1MjAwfQ."
                    "example_anon_key_replace_with_your_actual_key"
                ),
            ),
            EnvVar(
                "SUPABASE_SERVICE_ROLE_KEY",
                example=(
                    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
                    "eyJpc3MiOiJzdXBhYmFzZSIsInJlZiI6ImFiY2RlZmdoaWprbG1ub3AiLCJyb2xlIjoic2VydmljZV9yb2xlIiwiaWF0IjoxNjQwMTk5MjAwLCJleHAiOjE5NTU3NzUyMDB9."
                    "example_service_role_key_replace_with_your_actual_key"
                ),
            ),
        ),
    ),
    EnvGroup(
        title="Stripe",
        integration=Integration.STRIPE.value,
        notes=(
            "Get these from your Stripe Dashboard: https://dashboard.stripe.com/test/apikeys",
            "Test keys (safe to use in development):",
        ),
        variables=(
            EnvVar(
                "STRIPE_SECRET_KEY",
                prefix="sk_",
                example="sk_test_51AbCdEfGhIjKlMnOpQrStUvWxYz1234567890AbCdEfGhIjKlMnOpQrStUvWxYz1234567890",
            ),
            EnvVar(
                "NEXT_PUBLIC_STRIPE_PUBLISHABLE_KEY",
                prefix="pk_",
                example="pk_test_51AbCdEfGhIjKlMnOpQrStUvWxYz1234567890AbCdEfGhIjKlMnOpQrStUvWxYz1234567890",
            ),
            EnvVar(
                "STRIPE_WEBHOOK_SECRET",
                optional=True,
                example="whsec_test_1234567890abcdefghijklmnopqrstuvwxyz",
                note="Webhook secret (get from Stripe Dashboard > Developers > Webhooks)",
            ),
        ),
    ),
    EnvGroup(
        title="OpenAI",
        integration=Integration.AI.value,
        notes=(
            "Get your API key from: https://platform.openai.com/api-keys",
            "Example test key format (replace with your actual key):",
        ),
        variables=(
            EnvVar(
                "OPENAI_API_KEY",
                prefix="sk-",
                example="sk-test-1234567890abcdefghijklmnopqrstuvwxyz1234567890abcdefghijklmnopqrstuvwxyz",
            ),
        ),
    ),
)


def selected_groups(integrations: Iterable[str]) -> list[EnvGroup]:
    """Groups that apply to *integrations*, in table order."""
    selected = set(integrations)
    return [g for g in ENV_GROUPS if g.integration is None or g.integration in selected]


def selected_variables(integrations: Iterable[str]) -> list[EnvVar]:
    return [var for group in selected_groups(integrations) for var in group.variables]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class EnvGenerator:
    """Renders ``.env.example`` and ``src/env.mjs``."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def env_example(self, integrations: Iterable[str]) -> str:
        return self.renderer.render(
            "env/env.example.j2", {"groups": selected_groups(integrations)}
        )

    def env_schema(self, integrations: Iterable[str]) -> str:
        return self.renderer.render(
            "env/env.mjs.j2", {"variables": selected_variables(integrations)}
        )

    def render(self, integrations: Iterable[str]) -> TemplateOutput:
        selected = list(integrations)
        return {
            ".env.example": self.env_example(selected),
            "src/env.mjs": self.env_schema(selected),
        }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def build_env_model(integrations: Iterable[str]) -> type[BaseModel]:
    """Build a pydantic model equivalent to the generated zod schema."""
    fields = {var.name: var.pydantic_field() for var in selected_variables(integrations)}
    return create_model("ProjectEnv", **fields)


def validate_env(values: Mapping[str, str], integrations: Iterable[str]) -> BaseModel:
    """Validate *values* against the schema for *integrations*.

    Raises:
        pydantic.ValidationError: If a required variable is missing or malformed.
    """
    model = build_env_model(integrations)
    return model.model_validate(dict(values))


def parse_env_file(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines, ignoring blanks and ``#`` comments."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values

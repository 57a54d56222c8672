"""scaffold-next-pro -- scaffold a production-ready Next.js 15 app.

Runs ``create-next-app``, layers Docker, CI, git hooks, environment
validation and tRPC wiring on top of the result, optionally adds Stripe,
Supabase and AI integrations, installs the dependencies and makes the first
commit.
"""

__version__ = "0.1.0"

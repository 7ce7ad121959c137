"""FastAPI entrypoint for auto-discovery tools.

Some CLIs/buildpacks look specifically for `app = FastAPI(...)` in a well-known
file (e.g. `app.py`). The analytics API lives in `src.api`; this module keeps
auto-discovery happy while re-exporting it.
"""

from fastapi import FastAPI

# Placeholder for tools that statically scan for `FastAPI(...)`.
app = FastAPI()

from src.api import app as _analytics_app  # noqa: E402

app = _analytics_app

"""HTTP server support for autotyper.

Exposes the DSL-to-TypeScript generator over a small Starlette API.
"""

from autotyper.http.app import create_app
from autotyper.http.runner import run_http

__all__ = ["create_app", "run_http"]

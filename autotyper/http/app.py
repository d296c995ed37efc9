"""HTTP application endpoints for autotyper.

Routes:
- ``POST /dsl``: JSON ``{"dsl": ..., "options": {...}}`` -> JSON result
- ``GET /t?dsl=``: plain-text type declaration
- ``GET /all?dsl=&strict=true``: every artifact as plain text
- ``GET /``: usage notes
"""

import json
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from autotyper.codegen import (
    ConfigError,
    DSLError,
    GenerationOptions,
    build_output,
    render_all,
)
from autotyper.logging_config import get_logger

__all__ = ["create_app", "error_to_json"]

logger = get_logger(__name__)

# Defaults for POST /dsl; request options are merged over these.
DEFAULT_OPTIONS = GenerationOptions(
    optional_by_default=False,
    zod=True,
    interface=True,
    example=True,
    strict_zod=False,
)
TYPE_ONLY_OPTIONS = GenerationOptions(zod=False, interface=False, example=False)

USAGE = "\n".join(
    [
        "Try:",
        'POST /dsl  {"dsl":"User email:s password:s name:s isAdmin?:b createdAt:d tags:s[]"}',
        "GET  /t?dsl=User%20email:s%20password:s%20isAdmin?:b%20createdAt:d%20tags:s[]",
        "GET  /all?dsl=User%20email:s%20password:s%20isAdmin?:b%20createdAt:d%20tags:s[]",
        "GET  /all?dsl=...&strict=true   (Zod strict mode)",
        "",
        "Also supports your old format:",
        "type:user-email:s/password:s/name:s/isAdmin:b:o",
        "",
        "Notes:",
        "- prop? optional, prop! required",
        "- Names are sanitized into valid TS identifiers",
    ]
)


def error_to_json(err: Exception) -> dict[str, Any]:
    """Serialize an error for a 400 response body."""
    if isinstance(err, DSLError):
        return err.to_dict()
    return {"error": str(err)}


def _error_text(err: Exception) -> str:
    payload = error_to_json(err)
    text = f"Error: {payload['error']}\n"
    if payload.get("hint"):
        text += f"Hint: {payload['hint']}\n"
    return text


async def generate(request: Request) -> JSONResponse:
    """Build every artifact for the posted DSL.

    Returns:
        JSON ``GenerationResult`` or a 400 with the error fields.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.info("Rejected request with invalid JSON body")
        return JSONResponse({"error": "Request body must be valid JSON"}, status_code=400)

    if not isinstance(body, dict):
        return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)

    dsl = body.get("dsl") or ""
    if not isinstance(dsl, str):
        return JSONResponse({"error": "'dsl' must be a string"}, status_code=400)

    try:
        options = DEFAULT_OPTIONS.merged(body.get("options"))
        result = build_output(dsl, options)
    except (DSLError, ConfigError) as e:
        logger.info("POST /dsl failed: %s", e)
        return JSONResponse(error_to_json(e), status_code=400)

    return JSONResponse(result.to_dict())


async def type_text(request: Request) -> PlainTextResponse:
    """Return the type declaration for ``?dsl=`` as plain text."""
    dsl = request.query_params.get("dsl", "")
    try:
        result = build_output(dsl, TYPE_ONLY_OPTIONS)
    except DSLError as e:
        logger.info("GET /t failed: %s", e)
        return PlainTextResponse(_error_text(e), status_code=400)

    return PlainTextResponse(result.type_text)


async def all_text(request: Request) -> PlainTextResponse:
    """Return every artifact for ``?dsl=`` as plain text.

    ``strict=true`` adds ``.strict()`` to the Zod schema.
    """
    dsl = request.query_params.get("dsl", "")
    strict = request.query_params.get("strict") == "true"
    try:
        result = build_output(dsl, DEFAULT_OPTIONS.merged({"strict_zod": strict}))
    except DSLError as e:
        logger.info("GET /all failed: %s", e)
        return PlainTextResponse(_error_text(e), status_code=400)

    return PlainTextResponse(render_all(result))


async def index(request: Request) -> PlainTextResponse:
    """Usage notes."""
    return PlainTextResponse(USAGE)


def create_app() -> Starlette:
    """Create and configure the HTTP application.

    Returns:
        Configured Starlette application with permissive CORS.
    """
    return Starlette(
        routes=[
            Route("/", index, methods=["GET"]),
            Route("/dsl", generate, methods=["POST"]),
            Route("/t", type_text, methods=["GET"]),
            Route("/all", all_text, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["Content-Type"],
            ),
        ],
    )

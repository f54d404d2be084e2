from __future__ import annotations

import os
from typing import Any, Mapping

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from mathpaste.config import NormalizerSettings
from mathpaste.pipeline import normalize_document


class NormalizeRequest(BaseModel):
    content: str = Field(..., description="Raw text pasted into the editor")
    expandShorthand: bool = Field(
        True, description="Expand integral/root/vector/angle shorthand"
    )
    synthesizeTables: bool = Field(
        True, description="Turn comma-separated runs into Markdown tables"
    )


class NormalizeResponse(BaseModel):
    content: str
    changed: bool
    tables: int
    expandedLines: int


settings = NormalizerSettings.from_env()

app = FastAPI(title="mathpaste", version="0.1.0")

# ---------------------------------------------------------------------------
# CORS
#
# The editor front end calls this service directly from the browser.
#
# - MATHPASTE_CORS_ALLOW_ORIGINS="https://app.example.com,https://staging.example.com"
# - MATHPASTE_CORS_ALLOW_ORIGIN_REGEX="https://.*\\.example\\.com"
#
# Without either, any localhost port is allowed.
# ---------------------------------------------------------------------------

_LOCALHOST_ORIGIN_REGEX = r"https?://(localhost|127\.0\.0\.1):\d+"


def cors_options(environ: Mapping[str, str] = os.environ) -> dict[str, Any]:
    """Origin settings for ``CORSMiddleware``: an explicit list wins over a regex."""
    origins = [
        o.strip()
        for o in environ.get("MATHPASTE_CORS_ALLOW_ORIGINS", "").split(",")
        if o.strip()
    ]
    if origins:
        return {"allow_origins": origins}
    regex = environ.get("MATHPASTE_CORS_ALLOW_ORIGIN_REGEX", "").strip()
    return {"allow_origins": [], "allow_origin_regex": regex or _LOCALHOST_ORIGIN_REGEX}


app.add_middleware(
    CORSMiddleware,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    **cors_options(),
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


# Plain `def`: the pipeline is CPU-bound and runs in the worker threadpool.
@app.post("/normalize", response_model=NormalizeResponse)
def normalize(req: NormalizeRequest) -> NormalizeResponse:
    if len(req.content) > settings.max_content_chars:
        raise HTTPException(
            status_code=413,
            detail=(
                f"Content is {len(req.content)} characters; "
                f"the limit is {settings.max_content_chars}."
            ),
        )

    request_settings = settings.model_copy(
        update={
            "expand_shorthand": req.expandShorthand,
            "synthesize_tables": req.synthesizeTables,
        }
    )
    result = normalize_document(req.content, request_settings)
    return NormalizeResponse(**result.to_dict())

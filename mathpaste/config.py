from __future__ import annotations

import os

from pydantic import BaseModel, Field

ENV_PREFIX = "MATHPASTE_"


class NormalizerSettings(BaseModel):
    expand_shorthand: bool = Field(
        True, description="Expand integral/root/vector/angle shorthand into LaTeX"
    )
    synthesize_tables: bool = Field(
        True, description="Turn comma-separated runs into Markdown tables"
    )
    column_tolerance: int = Field(
        1, ge=0, description="Allowed column-count deviation inside one table"
    )
    max_content_chars: int = Field(
        200_000, gt=0, description="Largest document the HTTP service accepts"
    )

    @classmethod
    def from_env(cls) -> "NormalizerSettings":
        """Build settings from MATHPASTE_* environment variables.

        Unset or empty variables keep their defaults; malformed values raise
        pydantic.ValidationError.
        """

        values = {}
        for name in cls.model_fields:
            raw = (os.getenv(ENV_PREFIX + name.upper()) or "").strip()
            if raw:
                values[name] = raw
        return cls.model_validate(values)

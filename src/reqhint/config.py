from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from reqhint.scoring.similarity import ACCEPTANCE_THRESHOLD


class EngineConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # minimum similarity (inclusive) for a handler to be suggested
    threshold: float = Field(default=ACCEPTANCE_THRESHOLD, ge=0.0, le=1.0)

    # None -> every accepted candidate is listed
    max_suggestions: Optional[int] = Field(default=None, ge=1)

"""Reclassification result types."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class ReclassifyStats(BaseModel):
    """Outcome of one keyword reclassification run."""

    model_config = ConfigDict(frozen=True)

    reclassified: Annotated[int, Field(ge=0, description="Topics changed")] = 0
    total: Annotated[int, Field(ge=0, description="Articles examined")] = 0
    errors: Annotated[int, Field(ge=0, description="Failed topic updates")] = 0

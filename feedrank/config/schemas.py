"""Configuration schemas for pipelines and selectors."""

from typing import Annotated

from pydantic import Field

from feedrank.data_model import StrictBaseModel


class PipelineConfig(StrictBaseModel):
    """Batch ranking pipeline bounds.

    Attributes:
        recent_window_hours: Lookback for recent-mode ranking.
        recent_limit: Maximum articles read in recent mode.
        page_size: Page size when paging through the full corpus.
        write_chunk_size: Score updates issued per sequential chunk.
    """

    recent_window_hours: Annotated[int, Field(ge=1, le=24 * 30)] = 24
    recent_limit: Annotated[int, Field(ge=1, le=10_000)] = 500
    page_size: Annotated[int, Field(ge=1, le=10_000)] = 500
    write_chunk_size: Annotated[int, Field(ge=1, le=1_000)] = 50


class DiversityConfig(StrictBaseModel):
    """Top-stories diversity defaults.

    Attributes:
        count: Number of stories to select.
        max_per_publication: Cap on stories from one publication.
        max_per_topic: Cap on stories from one topic.
        hours_back: Lookback window for candidates.
        pool_multiplier: Candidate pool size as a multiple of count.
    """

    count: Annotated[int, Field(ge=1, le=100)] = 5
    max_per_publication: Annotated[int, Field(ge=1)] = 2
    max_per_topic: Annotated[int, Field(ge=1)] = 2
    hours_back: Annotated[int, Field(ge=1, le=24 * 30)] = 24
    pool_multiplier: Annotated[int, Field(ge=1, le=20)] = 5


class ReclassifyConfig(StrictBaseModel):
    """Keyword reclassification bounds.

    Attributes:
        limit: Maximum recent articles examined.
        min_content_chars: Articles with shorter content are skipped.
    """

    limit: Annotated[int, Field(ge=1, le=10_000)] = 200
    min_content_chars: Annotated[int, Field(ge=0)] = 50


class FeedConfig(StrictBaseModel):
    """Root configuration for feedrank.yaml.

    Attributes:
        version: Schema version.
        pipeline: Batch ranking bounds.
        diversity: Top-stories defaults.
        reclassify: Keyword reclassification bounds.
        vip_publications: Publications flagged as VIP.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    diversity: DiversityConfig = Field(default_factory=DiversityConfig)
    reclassify: ReclassifyConfig = Field(default_factory=ReclassifyConfig)
    vip_publications: list[str] = Field(default_factory=list)

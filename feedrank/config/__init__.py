"""Configuration schemas and YAML loading."""

from feedrank.config.loader import ConfigValidationError, load_feed_config
from feedrank.config.schemas import (
    DiversityConfig,
    FeedConfig,
    PipelineConfig,
    ReclassifyConfig,
)


__all__ = [
    "ConfigValidationError",
    "DiversityConfig",
    "FeedConfig",
    "PipelineConfig",
    "ReclassifyConfig",
    "load_feed_config",
]

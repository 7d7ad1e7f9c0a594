"""YAML configuration loading with validation."""

import hashlib
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from feedrank.config.schemas import FeedConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


def _format_errors(exc: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "location": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


def load_feed_config(path: Path | None) -> FeedConfig:
    """Load and validate a feed configuration file.

    A missing path yields the defaults.

    Args:
        path: Path to feedrank.yaml, or None.

    Returns:
        Validated configuration.

    Raises:
        FileNotFoundError: If the path does not exist.
        ConfigValidationError: If the YAML is malformed or fails validation.
    """
    if path is None:
        return FeedConfig()

    content_bytes = path.read_bytes()
    log = logger.bind(
        component="config",
        file_path=str(path),
        checksum=hashlib.sha256(content_bytes).hexdigest()[:12],
    )

    try:
        parsed = yaml.safe_load(content_bytes.decode("utf-8")) or {}
    except yaml.YAMLError as e:
        log.warning("config_parse_failed", error=str(e))
        raise ConfigValidationError(
            [{"location": "", "message": str(e), "type": "yaml_error"}], str(path)
        ) from e

    try:
        config = FeedConfig.model_validate(parsed)
    except ValidationError as e:
        errors = _format_errors(e)
        log.warning("config_validation_failed", error_count=len(errors))
        raise ConfigValidationError(errors, str(path)) from e

    log.info("config_loaded", vip_publications=len(config.vip_publications))
    return config

"""
lore_engine/config.py -- Tunable settings for name-conflict checking.

Settings live in an optional JSON object on disk (``settings.json`` in the
user data directory by default).  Any key left out keeps its default, so
an empty or missing file reproduces the stock behaviour:

    - names shorter than 2 characters are not checked
    - names of up to 6 normalized characters tolerate edit distance 2,
      longer names tolerate 3
    - substring overlap needs at least 4 characters on both sides
    - at most 5 conflicts are reported
    - exact duplicates block submission

Usage::

    from lore_engine.config import load_settings

    settings = load_settings()                 # default location
    settings = load_settings("my-settings.json")
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from lore_engine.paths import get_settings_path
from lore_engine.utils import safe_read_json

logger = logging.getLogger(__name__)


class ConflictSettings(BaseModel):
    """Thresholds and policy for the conflict detector and submission flow."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_name_length: int = Field(default=2, ge=0)
    short_name_length: int = Field(default=6, ge=0)
    short_name_threshold: int = Field(default=2, ge=0)
    long_name_threshold: int = Field(default=3, ge=0)
    overlap_min_length: int = Field(default=4, ge=1)
    max_results: int = Field(default=5, ge=1)
    block_on_error: bool = True

    @model_validator(mode="after")
    def _thresholds_ordered(self) -> "ConflictSettings":
        if self.short_name_threshold > self.long_name_threshold:
            raise ValueError(
                "short_name_threshold must not exceed long_name_threshold"
            )
        return self

    def threshold_for(self, normalized_length: int) -> int:
        """Return the maximum accepted edit distance for a name of this length."""
        if normalized_length <= self.short_name_length:
            return self.short_name_threshold
        return self.long_name_threshold


DEFAULT_SETTINGS = ConflictSettings()


def _humanize_settings_error(exc: ValidationError, source: str) -> str:
    """Turn a pydantic error into one readable line per bad key."""
    lines = [f"Invalid settings in {source}:"]
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "(root)"
        if err.get("type") == "extra_forbidden":
            lines.append(f"  - '{loc}' is not a recognised setting.")
        else:
            lines.append(f"  - '{loc}': {err.get('msg', 'invalid value')}")
    return "\n".join(lines)


def load_settings(path: str | Path | None = None) -> ConflictSettings:
    """Load settings from *path*, falling back to defaults.

    A missing or unparsable file yields the defaults (logged at debug
    level).  A file that parses but holds bad values raises ``ValueError``
    with a readable message, since silently ignoring a typo would change
    the checker's behaviour without anyone noticing.
    """
    source = str(path) if path is not None else get_settings_path()
    data = safe_read_json(source)
    if data is None:
        logger.debug("No settings at %s, using defaults", source)
        return DEFAULT_SETTINGS
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {source} must contain a JSON object.")

    try:
        settings = ConflictSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(_humanize_settings_error(exc, source)) from exc

    logger.debug("Loaded settings from %s: %s", source, settings.model_dump())
    return settings

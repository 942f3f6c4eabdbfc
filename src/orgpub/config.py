"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from orgpub.core.models import RenderOptions


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "ORGPUB_"


class Settings(BaseModel):
    app_name:         str  = "orgpub"
    sanitize:         bool = Field(default=True, description="Pass rendered HTML through the sanitizer")
    code_highlight:   bool = Field(default=True, description="Highlight source blocks with Pygments")
    toc_depth:        int  = Field(default=3, ge=1, le=6, description="Deepest heading level listed in the TOC")
    words_per_minute: int  = Field(default=200, ge=1, description="Reading speed used for reading time")
    excerpt_length:   int  = Field(default=160, ge=1, description="Max characters in a derived excerpt")
    component_map:    dict[str, str] = Field(default_factory=dict, description="Shortcode name -> component import path")
    verbose:          bool = Field(default=False, description="Enable debug logging")

    def render_options(self) -> RenderOptions:
        """Return the subset of settings consumed by the HTML renderer."""
        return RenderOptions(
            sanitize=self.sanitize,
            code_highlight=self.code_highlight,
            toc_depth=self.toc_depth,
            component_map=dict(self.component_map),
        )


# Mapping-valued fields cannot come from a single env string.
_ENV_FIELDS = [name for name in Settings.model_fields if name != "component_map"]


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then ORGPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in _ENV_FIELDS:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

"""
Global Configuration and Safe Defaults.

Module-level constants hold the defaults; an optional YAML file
(`.sitegraph/config.yaml`) can override them per project. The loaded
configuration is a pydantic model so a bad value fails early with a
ConfigError instead of surfacing mid-build.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".sitegraph/config.yaml")

# --- Build Limits ---
# Image nodes emitted per page; extra images are ignored
MAX_IMAGES_PER_PAGE = 5

# Cap on 'related' cross-link edges touching any one page
MAX_RELATED_EDGES_PER_PAGE = 6

# --- Exploration ---
MIN_DEPTH = 1
MAX_DEPTH = 10
DEFAULT_DEPTH = 2
DEFAULT_MODE = "hide-outside"

# --- Visual Scale ---
BASE_NODE_SIZE = 48.0
BASE_FONT_SIZE = 14.0
SCALE_RATIO = 0.75
MIN_NODE_SIZE = 14.0
MIN_FONT_SIZE = 7.0
BACKGROUND_NODE_SIZE = 8.0
BACKGROUND_FONT_SIZE = 5.0
DIM_OPACITY = 0.12


class BuildSettings(BaseModel):
    max_images_per_page: int = Field(default=MAX_IMAGES_PER_PAGE, ge=0)
    max_related_edges_per_page: int = Field(default=MAX_RELATED_EDGES_PER_PAGE, ge=0)
    cross_link: bool = True

    model_config = ConfigDict(extra="forbid")


class ExploreSettings(BaseModel):
    default_depth: int = Field(default=DEFAULT_DEPTH, ge=MIN_DEPTH, le=MAX_DEPTH)
    default_mode: str = Field(default=DEFAULT_MODE, pattern=r"^(hide|dim)-outside$")

    model_config = ConfigDict(extra="forbid")


class StyleSettings(BaseModel):
    """Geometric decay of node size with distance from the root."""
    base_node_size: float = Field(default=BASE_NODE_SIZE, gt=0)
    base_font_size: float = Field(default=BASE_FONT_SIZE, gt=0)
    ratio: float = Field(default=SCALE_RATIO, gt=0, le=1)
    min_node_size: float = Field(default=MIN_NODE_SIZE, ge=0)
    min_font_size: float = Field(default=MIN_FONT_SIZE, ge=0)
    background_node_size: float = Field(default=BACKGROUND_NODE_SIZE, ge=0)
    background_font_size: float = Field(default=BACKGROUND_FONT_SIZE, ge=0)
    dim_opacity: float = Field(default=DIM_OPACITY, ge=0, le=1)

    model_config = ConfigDict(extra="forbid")

    def node_size(self, depth: int) -> float:
        return max(self.min_node_size, self.base_node_size * self.ratio ** depth)

    def font_size(self, depth: int) -> float:
        return max(self.min_font_size, self.base_font_size * self.ratio ** depth)


class SiteGraphConfig(BaseModel):
    build: BuildSettings = Field(default_factory=BuildSettings)
    explore: ExploreSettings = Field(default_factory=ExploreSettings)
    style: StyleSettings = Field(default_factory=StyleSettings)

    model_config = ConfigDict(extra="ignore")


def load_config(path: Path | None = None) -> SiteGraphConfig:
    """
    Load configuration from YAML.

    With no explicit path, `.sitegraph/config.yaml` is used when present and
    defaults otherwise. An explicit path must exist.

    Raises:
        ConfigError: unreadable file, bad YAML, or invalid values.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return SiteGraphConfig()
    path = Path(path)

    if not path.exists():
        raise ConfigError(str(path), "file not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(str(path), "top level must be a mapping")

    try:
        config = SiteGraphConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(path), str(e)) from e

    logger.debug(f"Loaded config from {path}")
    return config

"""Settings for scene compilation, loaded and overridden with OmegaConf.

Example YAML::

    compiler:
      supports_unbounded_revolute: false
    field_dimensions:
      ball_radius: 0.1
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class CompilerSettings:
    supports_unbounded_revolute: bool = True
    orthonormal_tolerance: float = 1e-5
    strict_inertia: bool = True
    min_mass: float = 1e-9
    # Pass-1 worker threads; 1 compiles links inline.
    max_workers: int = 1


@dataclass
class FieldDimensions:
    """Soccer field measurements in meters."""
    ball_radius: float = 0.05
    length: float = 9.0
    width: float = 6.0
    border_strip_width: float = 0.7


@dataclass
class EnvironmentSettings:
    ground_height: float = -1.0
    ground_half_thickness: float = 0.01
    ball_spawn_height: float = 4.0
    ball_restitution: float = 0.7
    gravity: List[float] = field(default_factory=lambda: [0.0, 0.0, -9.81])


@dataclass
class SceneConfig:
    compiler: CompilerSettings = field(default_factory=CompilerSettings)
    field_dimensions: FieldDimensions = field(default_factory=FieldDimensions)
    environment: EnvironmentSettings = field(default_factory=EnvironmentSettings)


def load_config(path: Optional[Union[str, Path]] = None,
                overrides: Optional[Dict[str, Any]] = None) -> SceneConfig:
    """Merge a YAML file and a dict of overrides over the default settings.

    Args:
        path: Optional YAML file with a subset of SceneConfig keys.
        overrides: Optional nested dict applied after the file.

    Returns:
        SceneConfig: Fully populated settings.

    Raises:
        ConfigError: If the file is missing, a key is unknown or a value has
            the wrong type.
    """
    configs = [OmegaConf.structured(SceneConfig)]
    try:
        if path is not None:
            configs.append(OmegaConf.load(path))
        if overrides:
            configs.append(OmegaConf.create(overrides))
        merged = OmegaConf.merge(*configs)
    except (OmegaConfBaseException, OSError) as e:
        raise ConfigError(f"Could not load scene config: {e}") from e

    if path is not None:
        logger.info("Loaded scene config from %s", path)
    return OmegaConf.to_object(merged)

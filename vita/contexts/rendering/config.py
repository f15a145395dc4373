"""
Export configuration loading.

The packaged export_config.yaml holds every key; VITA_EXPORT_CONFIG (or an
explicit path) and in-code overrides are merged on top of it.
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

from vita.contexts.rendering.exceptions import RenderError

load_dotenv()
DEFAULT_EXPORT_CONFIG_PATH = Path(__file__).parent / "export_config.yaml"
EXPORT_CONFIG_PATH = os.getenv("VITA_EXPORT_CONFIG")


def load_export_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> DictConfig:
    """
    Load export settings.

    Args:
        config_path: YAML merged over the defaults (defaults to VITA_EXPORT_CONFIG)
        overrides: Nested mapping merged last, e.g. {"raster": {"scale": 3}}

    Returns:
        Merged OmegaConf config (attribute access: config.raster.scale)

    Raises:
        RenderError: If an override file is missing or not valid YAML
    """
    if config_path is None and EXPORT_CONFIG_PATH:
        config_path = Path(EXPORT_CONFIG_PATH)

    layers = [OmegaConf.load(DEFAULT_EXPORT_CONFIG_PATH)]
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise RenderError(f"Export config not found: {config_path}", stage="config")
        try:
            layers.append(OmegaConf.load(config_path))
        except Exception as e:
            raise RenderError(f"Could not read export config {config_path}", stage="config", original_error=e) from e
    if overrides:
        layers.append(OmegaConf.create(dict(overrides)))

    return OmegaConf.merge(*layers)

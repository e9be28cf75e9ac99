"""Loading monopub.yaml."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from monopub.config.schema import MonopubConfig
from monopub.errors import ConfigurationError

CONFIG_FILENAME = "monopub.yaml"


def load_config(root: Path) -> MonopubConfig:
    """Load the workspace configuration.

    Args:
        root: Workspace root directory.

    Returns:
        Parsed configuration, or defaults if monopub.yaml does not exist.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation.
    """
    path = root / CONFIG_FILENAME
    if not path.is_file():
        return MonopubConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", path=path) from e

    if data is None:
        return MonopubConfig()
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a mapping", path=path)

    try:
        return MonopubConfig.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {errors}", path=path) from e

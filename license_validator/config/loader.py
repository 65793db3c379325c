"""Discovery and loading of the license policy configuration file."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from license_validator.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_validator.exceptions import ConfigurationError
from license_validator.models.config import ValidatorConfig
from license_validator.models.policy import Policy


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the policy file in start_dir (default: cwd), if any.

    `.license-validator.yaml` takes precedence over `.license-validator.yml`.
    """
    directory = start_dir or Path.cwd()
    candidates = (directory / name for name in DEFAULT_CONFIG_NAMES)
    return next((path for path in candidates if path.exists()), None)


def _read_yaml(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e


def load_config_file(path: Path) -> ValidatorConfig:
    """Load and validate a policy configuration file.

    An empty file, or one holding only comments, yields the defaults.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated ValidatorConfig instance.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            is not a mapping, or holds unknown keys or wrong types.
    """
    data = _read_yaml(path)
    if data is None:
        return get_default_config()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        return ValidatorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {_format_validation_errors(e)}"
        ) from e


def _format_validation_errors(error: ValidationError) -> str:
    """Join pydantic errors as `field: message` pairs."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )


def load_config(
    config_path: str | None = None, search_dir: Path | None = None
) -> ValidatorConfig:
    """Load the explicit config file, else a discovered one, else defaults.

    Args:
        config_path: Path given with --config. Must exist and be valid.
        search_dir: Directory searched when config_path is not given.

    Returns:
        ValidatorConfig with loaded or default values.

    Raises:
        ConfigurationError: If the chosen file is invalid.
    """
    path = Path(config_path) if config_path is not None else find_config_file(search_dir)
    if path is None:
        return get_default_config()
    return load_config_file(path)


def build_policy(config: ValidatorConfig) -> Policy:
    """Build the run policy from a loaded configuration.

    Raises:
        ConfigurationError: If a license or dependency pattern is not
            a valid regular expression.
    """
    try:
        return config.to_policy()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid license policy: {_format_validation_errors(e)}"
        ) from e

"""Configuration management module."""

import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import asdict, dataclass
from loguru import logger


@dataclass
class CurveConfig:
    """Library-wide defaults for curves and affine variables.

    Attributes:
        safe: Safety mode used when a constructor gets ``safe=None``.
            Checked mode validates time domain and dimensions and fails fast,
            unchecked mode skips those checks.
        approx_precision: Default precision of approximate equality
        approx_order: Default highest derivative order compared by
            sampled approximate equality
        approx_step: Sampling step [time units] of the sampled comparison
    """
    safe: bool = True
    approx_precision: float = 1e-12
    approx_order: int = 5
    approx_step: float = 0.01

    # Internal: loaded from
    config_path: Optional[str] = None


class ConfigValidationError(ValueError):
    """Raised when configuration validation fails."""
    pass


_default_config = CurveConfig()


def validate_config(config: CurveConfig) -> None:
    """Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []

    if not isinstance(config.safe, bool):
        errors.append(f"safe must be a boolean, got {config.safe!r}")
    if config.approx_precision <= 0:
        errors.append(f"approx_precision must be positive, got {config.approx_precision}")
    if config.approx_order < 0:
        errors.append(f"approx_order must be non-negative, got {config.approx_order}")
    if config.approx_step <= 0:
        errors.append(f"approx_step must be positive, got {config.approx_step}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigValidationError(error_msg)


def get_default_config() -> CurveConfig:
    """Return the process-wide default configuration."""
    return _default_config


def set_default_config(config: CurveConfig) -> CurveConfig:
    """Replace the process-wide default configuration.

    Args:
        config: New defaults, validated before being installed

    Returns:
        The previous default configuration
    """
    global _default_config
    validate_config(config)
    previous = _default_config
    _default_config = config
    if not config.safe:
        logger.warning("Curve safety checks disabled by default (unchecked mode)")
    return previous


def resolve_safe(safe: Optional[bool]) -> bool:
    """Return ``safe`` or the configured default when it is None."""
    if safe is None:
        return _default_config.safe
    return bool(safe)


def load_config(config_path: str) -> CurveConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Loaded configuration
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {config_path}: {e}") from e

    if config_dict is None:
        raise ValueError(f"YAML file {config_path} is empty or contains no valid content")

    try:
        config = CurveConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration structure in {config_path}: {e}") from e

    config.config_path = str(config_path)

    try:
        validate_config(config)
    except ConfigValidationError:
        logger.error(f"Configuration validation failed for {config_path}")
        raise

    if not config.safe:
        logger.warning(f"Configuration {config_path} disables curve safety checks")
    logger.info(f"Configuration loaded and validated from {config_path}")

    return config


def save_config(config: CurveConfig, config_path: str):
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        config_path: Path to save YAML file
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = asdict(config)
    config_dict.pop('config_path')

    with open(config_path, 'w') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)

    logger.info(f"Configuration saved to {config_path}")

"""Chain configuration models and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError


class CrinkleConfig(BaseModel):
    """Parameters for building a fold chain."""

    levels: int = Field(
        default=8, ge=0, description="Top resolution level (strips hold 2**levels + 1 samples)"
    )
    smoothing: bool = Field(
        default=True, description="Re-average crease samples after each update"
    )
    length: float = Field(
        default=1.0,
        gt=0.0,
        allow_inf_nan=False,
        description="Side of the update square at the top level",
    )
    start: float = Field(
        default=0.0, allow_inf_nan=False, description="Initial height of seeded strips"
    )
    mean: float = Field(
        default=0.0, allow_inf_nan=False, description="Mean height of level 0 samples"
    )
    fractal_dim: float = Field(
        default=0.65,
        allow_inf_nan=False,
        description="Fractal dimension exponent for displacement amplitudes",
    )
    seed: int | None = Field(default=None, description="Noise seed (None = fresh entropy)")


def validate_config(**params) -> CrinkleConfig:
    """Build a ``CrinkleConfig``, reporting bad values as ``ConfigurationError``."""
    try:
        return CrinkleConfig(**params)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def load_config(config_path: Path) -> CrinkleConfig:
    """Load configuration from a TOML file.

    Keys may sit at the top level or under a ``[chain]`` table.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed CrinkleConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        ConfigurationError: If a value is out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    data = data.get("chain", data)
    try:
        return CrinkleConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"{config_path}: {exc}") from exc

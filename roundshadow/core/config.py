"""
Configuration management for roundshadow.

Provides the parameter dataclasses passed to the pipeline, explicit
validation of command-line strings, and JSON configuration files.
"""

import json
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any

from roundshadow.core.errors import ConfigError
from roundshadow.postprocess.operations import FADE_EXPONENT, SOFTEN_POWER


DEFAULT_RADIUS = 8
DEFAULT_OFFSET = (-20, -20)
DEFAULT_ALPHA = 150
DEFAULT_SPREAD = 26
DEFAULT_BLUR_RADIUS = 5

# Upper bound on the blur radius accepted by the shadow synthesizer
MAX_BLUR_RADIUS = 1024


@dataclass
class ShadowParams:
    """Drop shadow parameters."""
    offset_x: int = DEFAULT_OFFSET[0]
    offset_y: int = DEFAULT_OFFSET[1]
    spread: int = DEFAULT_SPREAD
    blur_radius: int = DEFAULT_BLUR_RADIUS
    alpha: int = DEFAULT_ALPHA  # 0-255

    # Shadow finishing
    edge_fade: bool = False
    fade_exponent: float = FADE_EXPONENT
    soften_power: float | None = SOFTEN_POWER

    @property
    def offset(self) -> tuple[int, int]:
        return (self.offset_x, self.offset_y)


@dataclass
class PipelineConfig:
    """
    Main configuration container.

    Example:
        config = PipelineConfig.load("shadow.json")
        config.radius = 12
        result = run_pipeline(image, config)
    """
    radius: int = DEFAULT_RADIUS
    shadow: ShadowParams = field(default_factory=ShadowParams)
    verbose: bool = False

    @classmethod
    def load(cls, path: str | Path) -> "PipelineConfig":
        """Load configuration from a JSON file."""
        return load_config(path)

    def save(self, path: str | Path) -> None:
        """Save configuration to a JSON file."""
        save_config(self, path)

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return {
            "radius": self.radius,
            "shadow": asdict(self.shadow),
        }


def parse_int_flag(
    flag: str,
    value: Any,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    """
    Parse an integer option value.

    Args:
        flag: Option name used in the error message
        value: Raw value (string from the command line or JSON value)
        minimum: Smallest accepted value, or None
        maximum: Largest accepted value, or None

    Raises:
        ConfigError: If the value is not an integer or is out of range
    """
    if isinstance(value, bool):
        raise ConfigError(flag, value, "expected an integer")
    if isinstance(value, int):
        parsed = value
    else:
        try:
            parsed = int(str(value).strip())
        except ValueError:
            raise ConfigError(flag, value, "expected an integer") from None

    if minimum is not None and parsed < minimum:
        raise ConfigError(flag, value, f"must be >= {minimum}")
    if maximum is not None and parsed > maximum:
        raise ConfigError(flag, value, f"must be <= {maximum}")
    return parsed


def parse_float_flag(flag: str, value: Any, minimum: float | None = None) -> float:
    """Parse a float option value, raising ConfigError on bad input."""
    if isinstance(value, bool):
        raise ConfigError(flag, value, "expected a number")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ConfigError(flag, value, "expected a number") from None
    if minimum is not None and parsed < minimum:
        raise ConfigError(flag, value, f"must be >= {minimum}")
    return parsed


def parse_offset(flag: str, value: Any) -> tuple[int, int]:
    """
    Parse a shadow offset given as "x,y".

    Example:
        >>> parse_offset("--offset", "-20,15")
        (-20, 15)

    Raises:
        ConfigError: If the value is not two comma-separated integers
    """
    if isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        parts = str(value).split(',')
    if len(parts) != 2:
        raise ConfigError(flag, value, "expected two integers in the form x,y")
    x = parse_int_flag(flag, parts[0])
    y = parse_int_flag(flag, parts[1])
    return (x, y)


def _parse_bool(flag: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(flag, value, "expected true or false")
    return value


def _parse_shadow(data: dict, prefix: str = "shadow") -> ShadowParams:
    """Build ShadowParams from a dictionary, validating every field."""
    known = {f.name for f in fields(ShadowParams)}
    unknown = set(data) - known
    if unknown:
        name = sorted(unknown)[0]
        raise ConfigError(f"{prefix}.{name}", data[name], "unknown option")

    defaults = ShadowParams()
    soften = data.get("soften_power", defaults.soften_power)
    return ShadowParams(
        offset_x=parse_int_flag(f"{prefix}.offset_x", data.get("offset_x", defaults.offset_x)),
        offset_y=parse_int_flag(f"{prefix}.offset_y", data.get("offset_y", defaults.offset_y)),
        spread=parse_int_flag(f"{prefix}.spread", data.get("spread", defaults.spread), minimum=0),
        blur_radius=parse_int_flag(
            f"{prefix}.blur_radius",
            data.get("blur_radius", defaults.blur_radius),
            minimum=0,
            maximum=MAX_BLUR_RADIUS,
        ),
        alpha=parse_int_flag(f"{prefix}.alpha", data.get("alpha", defaults.alpha),
                             minimum=0, maximum=255),
        edge_fade=_parse_bool(f"{prefix}.edge_fade", data.get("edge_fade", defaults.edge_fade)),
        fade_exponent=parse_float_flag(
            f"{prefix}.fade_exponent", data.get("fade_exponent", defaults.fade_exponent), minimum=0.0
        ),
        soften_power=None if soften is None else parse_float_flag(
            f"{prefix}.soften_power", soften, minimum=0.0
        ),
    )


def config_from_dict(data: dict) -> PipelineConfig:
    """
    Build a PipelineConfig from a dictionary such as a parsed JSON file.

    Raises:
        ConfigError: If any value is invalid
    """
    if not isinstance(data, dict):
        raise ConfigError("config", data, "expected a JSON object")
    unknown = set(data) - {"radius", "shadow", "verbose"}
    if unknown:
        name = sorted(unknown)[0]
        raise ConfigError(name, data[name], "unknown option")

    radius = parse_int_flag("radius", data.get("radius", DEFAULT_RADIUS), minimum=0)
    shadow_data = data.get("shadow", {})
    if not isinstance(shadow_data, dict):
        raise ConfigError("shadow", shadow_data, "expected a JSON object")

    return PipelineConfig(
        radius=radius,
        shadow=_parse_shadow(shadow_data),
        verbose=_parse_bool("verbose", data.get("verbose", False)),
    )


def load_config(path: str | Path) -> PipelineConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed PipelineConfig object

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the JSON is invalid or holds bad values
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError("--config", str(path), f"invalid JSON: {e}") from e

    return config_from_dict(data)


def save_config(config: PipelineConfig, path: str | Path) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config: Configuration object to save
        path: Output path for the JSON file
    """
    path = Path(path)
    with open(path, "w") as f:
        json.dump(config.to_dict(), f, indent=2)


def config_from_args(args) -> PipelineConfig:
    """
    Build the pipeline configuration from parsed command-line arguments.

    Values come from the JSON file given with --config when present, then
    any option given explicitly on the command line overrides them. Options
    left as None fall back to the defaults.

    Raises:
        ConfigError: Naming the offending flag when a value is invalid
    """
    config_path = getattr(args, "config", None)
    config = load_config(config_path) if config_path else PipelineConfig()

    if getattr(args, "radius", None) is not None:
        config.radius = parse_int_flag("--radius", args.radius, minimum=0)
    if getattr(args, "offset", None) is not None:
        config.shadow.offset_x, config.shadow.offset_y = parse_offset("--offset", args.offset)
    if getattr(args, "alpha", None) is not None:
        config.shadow.alpha = parse_int_flag("--alpha", args.alpha, minimum=0, maximum=255)
    if getattr(args, "spread", None) is not None:
        config.shadow.spread = parse_int_flag("--spread", args.spread, minimum=0)
    if getattr(args, "edge_fade", False):
        config.shadow.edge_fade = True
    if getattr(args, "verbose", False):
        config.verbose = True

    return config

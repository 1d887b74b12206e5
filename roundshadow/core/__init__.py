"""
Core module - Configuration, errors, rasters and image I/O.
"""

from roundshadow.core.errors import (
    RoundShadowError,
    InvalidDimensions,
    UnsupportedRadius,
    BlurParameterOutOfRange,
    ConfigError,
    InputError,
    DecodeError,
    EncodeError,
)
from roundshadow.core.raster import (
    MAX_DIMENSION,
    validate_raster,
    raster_size,
    new_raster,
    to_rgba,
)
from roundshadow.core.config import (
    PipelineConfig,
    ShadowParams,
    load_config,
    save_config,
    config_from_args,
    parse_offset,
)
from roundshadow.core.image_io import (
    guess_format,
    read_input,
    decode_image,
    encode_png,
    write_output,
    load_image,
    save_png,
)

__all__ = [
    "RoundShadowError",
    "InvalidDimensions",
    "UnsupportedRadius",
    "BlurParameterOutOfRange",
    "ConfigError",
    "InputError",
    "DecodeError",
    "EncodeError",
    "MAX_DIMENSION",
    "validate_raster",
    "raster_size",
    "new_raster",
    "to_rgba",
    "PipelineConfig",
    "ShadowParams",
    "load_config",
    "save_config",
    "config_from_args",
    "parse_offset",
    "guess_format",
    "read_input",
    "decode_image",
    "encode_png",
    "write_output",
    "load_image",
    "save_png",
]

"""
Image I/O utilities for roundshadow.

Reads input bytes from a file or standard input, decodes any format
OpenCV understands into an RGBA raster, and encodes results as 8-bit
RGBA PNG for a file or standard output.
"""

import sys
from pathlib import Path
from typing import BinaryIO

import cv2
import numpy as np

from roundshadow.core.errors import DecodeError, EncodeError, InputError
from roundshadow.core.raster import to_rgba, validate_raster


# Magic byte signatures for format detection
_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "png"),
    (b"\xff\xd8\xff", "jpeg"),
    (b"GIF87a", "gif"),
    (b"GIF89a", "gif"),
    (b"BM", "bmp"),
    (b"II*\x00", "tiff"),
    (b"MM\x00*", "tiff"),
]


def guess_format(data: bytes) -> str | None:
    """
    Guess an image format from its leading bytes.

    Returns:
        Lowercase format name ('png', 'jpeg', 'gif', 'bmp', 'tiff', 'webp')
        or None if the signature is not recognised
    """
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    for signature, name in _SIGNATURES:
        if data.startswith(signature):
            return name
    return None


def read_input(path: str | Path | None = None, stream: BinaryIO | None = None) -> bytes:
    """
    Read raw input bytes.

    Args:
        path: Input file, or None to read from ``stream``
        stream: Binary stream to read when no path is given (default: stdin)

    Raises:
        FileNotFoundError: If ``path`` does not exist
        InputError: If no data could be read
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        data = path.read_bytes()
        if not data:
            raise InputError(f"Input file is empty: {path}")
        return data

    if stream is None:
        stream = sys.stdin.buffer
    try:
        data = stream.read()
    except OSError as e:
        raise InputError(f"Error reading from stdin: {e}") from e
    if not data:
        raise InputError(
            "No input data received. Make sure you're piping an image to this program."
        )
    return data


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode image bytes into an RGBA raster.

    The format is detected from the data itself. Multi-frame formats yield
    their first frame.

    Raises:
        DecodeError: If the data is not a decodable image
    """
    if not data:
        raise DecodeError("Cannot decode empty input")

    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
    if image is None:
        fmt = guess_format(data)
        if fmt is None:
            raise DecodeError("Unsupported or unrecognised image format")
        raise DecodeError(f"Failed to decode {fmt} image")

    # OpenCV stores color channels as BGR(A)
    if image.ndim == 3 and image.shape[2] == 3:
        image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    elif image.ndim == 3 and image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)

    try:
        return to_rgba(image)
    except ValueError as e:
        raise DecodeError(f"Unsupported image layout: {e}") from e


def encode_png(raster: np.ndarray) -> bytes:
    """
    Encode an RGBA raster as an 8-bit RGBA PNG.

    Raises:
        EncodeError: If OpenCV fails to encode the raster
    """
    validate_raster(raster, "output")
    bgra = cv2.cvtColor(raster, cv2.COLOR_RGBA2BGRA)
    ok, encoded = cv2.imencode(".png", bgra)
    if not ok:
        raise EncodeError("Failed to encode PNG data")
    return encoded.tobytes()


def write_output(data: bytes, path: str | Path | None = None,
                 stream: BinaryIO | None = None) -> None:
    """
    Write encoded bytes to a file or binary stream.

    Args:
        data: Encoded image bytes
        path: Output file, or None to write to ``stream``
        stream: Binary stream used when no path is given (default: stdout)
    """
    if path is not None:
        Path(path).write_bytes(data)
        return

    if stream is None:
        stream = sys.stdout.buffer
    stream.write(data)
    stream.flush()


def load_image(path: str | Path) -> np.ndarray:
    """Read and decode an image file into an RGBA raster."""
    return decode_image(read_input(path))


def save_png(path: str | Path, raster: np.ndarray) -> None:
    """Encode an RGBA raster as PNG and write it to ``path``."""
    write_output(encode_png(raster), path)

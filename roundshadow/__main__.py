"""
roundshadow Command Line Interface

Usage:
    roundshadow [-i INPUT] [-o OUTPUT] [options]

Reads an image (any format OpenCV can decode) from a file or standard
input, rounds its corners, adds a drop shadow and writes a PNG to a file
or standard output.

Examples:
    roundshadow -i screenshot.png -o framed.png
    roundshadow -r 12 -e 10,10 -a 100 < input.jpg > output.png
    roundshadow -i input.png -o output.png --offset=-8,-8
    roundshadow -i input.png -o output.png -c shadow.json --edge-fade
"""

import sys
import argparse

from roundshadow import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='roundshadow',
        description='Image Rounder and Shadow Adder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        '-V', '--version',
        action='version',
        version=f'roundshadow {__version__}',
    )
    parser.add_argument(
        '-i', '--input',
        help='Input image file (default: read from stdin)',
    )
    parser.add_argument(
        '-o', '--output',
        help='Output image file (default: write to stdout)',
    )
    # Numeric options are kept as strings and validated by roundshadow.core.config
    parser.add_argument(
        '-r', '--radius',
        default=None,
        help='Corner radius for rounding (default: 8)',
    )
    parser.add_argument(
        '-e', '--offset',
        default=None,
        metavar='X,Y',
        help='Shadow offset in format x,y (default: -20,-20). Attach negative '
             'values to the flag: --offset=-20,-20 or -e-20,-20',
    )
    parser.add_argument(
        '-a', '--alpha',
        default=None,
        help='Shadow alpha 0-255 (default: 150)',
    )
    parser.add_argument(
        '-s', '--spread',
        default=None,
        help='Shadow spread distance (default: 26)',
    )
    parser.add_argument(
        '-c', '--config',
        default=None,
        help='JSON configuration file; command-line options override it',
    )
    parser.add_argument(
        '--save-config',
        default=None,
        metavar='PATH',
        help='Write the effective configuration to a JSON file',
    )
    parser.add_argument(
        '--edge-fade',
        action='store_true',
        help='Fade the shadow towards the edge of its padding',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output',
    )
    return parser


def debug(message: str, verbose: bool) -> None:
    """Print a debug line to stderr when verbose output is on."""
    if verbose:
        print(f"Debug: {message}", file=sys.stderr)


def run(args) -> int:
    """Run the pipeline for parsed arguments."""
    from roundshadow.core.config import config_from_args
    from roundshadow.core.image_io import (
        decode_image,
        encode_png,
        guess_format,
        read_input,
        write_output,
    )
    from roundshadow.pipeline import run_pipeline

    config = config_from_args(args)
    verbose = config.verbose

    if args.save_config:
        config.save(args.save_config)
        debug(f"Configuration written to {args.save_config}", verbose)

    data = read_input(args.input)
    debug(f"Input data size: {len(data)} bytes", verbose)
    debug(f"Guessed image format: {guess_format(data) or 'unknown'}", verbose)

    image = decode_image(data)
    debug(f"Image successfully decoded: {image.shape[1]}x{image.shape[0]}", verbose)

    result = run_pipeline(image, config)
    layout = result.layout
    debug(
        f"Canvas {layout.canvas_width}x{layout.canvas_height}, "
        f"shadow at {layout.shadow_origin}, source at {layout.source_origin}",
        verbose,
    )

    write_output(encode_png(result.image), args.output)
    if args.output:
        print(
            f"Image with rounded corners and drop shadow saved as: {args.output}",
            file=sys.stderr,
        )
    return 0


def main(argv=None):
    """Main CLI entry point."""
    from roundshadow.core.errors import RoundShadowError

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return run(args)
    except (RoundShadowError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

"""pixstat — Colour standard deviation and homogeneity of an image.

Usage: uv run pixstat <image> [options]

Loads the image with Pillow (converted to 8-bit RGB), computes the mean
colour and the population standard deviation of every pixel from it, and
prints:

  Standard deviation: { R: <r>, G: <g>, B: <b> }
  <homogeneity>% homogeneity

Homogeneity is (1 - average channel stddev) * 100, so a flat image scores
100 and noisier images score lower.

Exit status is 1 when the image argument is missing, the image cannot be
loaded, it has zero area, or --strict finds non-finite statistics.
"""

import argparse
import sys

from pixstat.core.errors import PixstatError
from pixstat.core.image import load_image
from pixstat.core.pixel_statistics import DEFAULT_ENGINE, ENGINES, check_finite, compute, homogeneity
from pixstat.core.report import format_json, format_text
from pixstat.core.types import Report

USAGE_ERROR = 'No path to image given, please use as: pixstat <image>'


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  pixstat photo.png\n'
        '  pixstat photo.png --json\n'
        '  pixstat photo.png --engine pixel --strict\n'
    )
    parser = argparse.ArgumentParser(
        prog='pixstat',
        description='Colour standard deviation and homogeneity of an image.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Optional here so a missing path exits 1 with our message, not argparse's exit 2
    parser.add_argument('image', nargs='?', help='Path to the image (any format Pillow can open)')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    parser.add_argument(
        '-e',
        '--engine',
        choices=sorted(ENGINES),
        default=DEFAULT_ENGINE,
        help=f'Statistics engine (default: {DEFAULT_ENGINE}). Both give identical results.',
    )
    parser.add_argument(
        '-s',
        '--strict',
        action='store_true',
        help='Exit 1 if any mean/stddev channel is NaN or infinite',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Print progress to stderr')
    return parser


def _run(args: argparse.Namespace) -> Report:
    buffer = load_image(args.image)
    if args.verbose:
        print(f'pixstat: loaded {args.image} ({buffer.width}×{buffer.height})', file=sys.stderr)

    stats = compute(buffer, engine=args.engine)
    if args.strict:
        check_finite(stats)
    if args.verbose:
        print(f'pixstat: mean {stats.mean} ({args.engine} engine)', file=sys.stderr)

    return Report(
        image_path=args.image,
        image_width=buffer.width,
        image_height=buffer.height,
        stats=stats,
        homogeneity=homogeneity(stats.stddev),
    )


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.image:
        print(USAGE_ERROR, file=sys.stderr)
        sys.exit(1)

    try:
        report = _run(args)
    except PixstatError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()

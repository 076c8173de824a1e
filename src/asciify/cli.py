import argparse
import sys
from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from asciify.charsets import RAMPS, SOLID
from asciify.compositor import compose
from asciify.config import DEFAULT_FONT_SIZE, DEFAULT_SAMPLE_SCALE, ConversionConfig
from asciify.converter import image_to_grid
from asciify.errors import AsciifyError
from asciify.fonts import load_font
from asciify.terminal import print_grid

# Formats Pillow can't write with an alpha channel
_NO_ALPHA_FORMATS = {".jpg", ".jpeg", ".bmp", ".ppm", ".pgm", ".pbm"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asciify", description="Convert an image to ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-o", "--output", default=None, help="Write an image of the ASCII art here instead of printing it"
    )
    parser.add_argument(
        "-s",
        "--sample-scale",
        type=int,
        default=DEFAULT_SAMPLE_SCALE,
        help=f"Width N of each sampled block of pixels (default: {DEFAULT_SAMPLE_SCALE}). "
        "Blocks are NxN for image output and Nx2N for terminal output.",
    )
    ramp = parser.add_mutually_exclusive_group()
    ramp.add_argument("-m", "--map", default=None, help="Characters to map samples to, darkest first")
    ramp.add_argument("-r", "--ramp", choices=sorted(RAMPS), default=None, help="Use a named character ramp")
    ramp.add_argument("--solid", action="store_true", help="Draw every sample as a solid block")
    parser.add_argument(
        "-f",
        "--font-size",
        type=int,
        default=DEFAULT_FONT_SIZE,
        help=f"Pixel size of each character in the output image (default: {DEFAULT_FONT_SIZE})",
    )
    parser.add_argument("--font", default=None, help="TrueType font for image output (default: system monospace)")
    parser.add_argument(
        "-c", "--colour", type=int, nargs=3, metavar=("R", "G", "B"), default=None, help="Draw everything in one colour"
    )
    parser.add_argument(
        "-b",
        "--background",
        type=int,
        nargs="+",
        metavar="C",
        default=None,
        help="Background R G B [A] for image output (default: transparent)",
    )
    parser.add_argument("--no-colour", action="store_true", help="Print plain text without colour escapes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def _ramp_from_args(args) -> str:
    if args.solid:
        return SOLID
    if args.ramp is not None:
        return RAMPS[args.ramp]
    if args.map is not None:
        return args.map
    return RAMPS["default"]


def output_path(output: str | Path, image_path: Path) -> Path:
    """Give the output the input image's extension when it has none of its own."""
    output = Path(output)
    if not output.suffix:
        output = output.with_suffix(image_path.suffix)
    return output


def save_image(image: Image.Image, path: Path) -> None:
    if path.suffix.lower() in _NO_ALPHA_FORMATS:
        image = image.convert("RGB")
    image.save(path)


def run(args) -> None:
    config = ConversionConfig(
        sample_scale=args.sample_scale,
        ramp=_ramp_from_args(args),
        font_size=args.font_size,
        font_path=args.font,
        background=args.background,
        colour=args.colour,
        monochrome=args.no_colour,
    )
    image_path = Path(args.image)
    raster = args.output is not None

    logger.info("Converting {} to ASCII", image_path)
    grid = image_to_grid(image_path, config.block_for(raster), config.character_ramp, strict=True)
    logger.info("Built {}x{} grid", grid.width, grid.height)

    if not raster:
        print_grid(grid, colour=config.colour, monochrome=config.monochrome)
        return

    font = load_font(config.font_size, config.font_path)
    composite = compose(grid, font, config.font_size, background=config.background, colour=config.colour)
    if composite.failures:
        logger.warning("{} cells could not be drawn with this font", len(composite.failures))
    path = output_path(args.output, image_path)
    save_image(composite.image, path)
    logger.success("Saved ASCII image to {}", path)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    if not Path(args.image).exists():
        print(f"File not found: {args.image}", file=sys.stderr)
        sys.exit(1)

    try:
        run(args)
    except AsciifyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except UnidentifiedImageError:
        print(f"Not a readable image: {args.image}", file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

"""Command-line entry point that generates a dungeon and prints it."""

import argparse
import logging
import sys

from pydantic import ValidationError

from core.types import TileKind
from dungeon.generation import GenerationError, GenerationParams, MapGenerator

GLYPHS: dict[TileKind, str] = {
    TileKind.STONE: "#",
    TileKind.ROOM: ".",
    TileKind.CORRIDOR: ",",
    TileKind.DOOR: "+",
}


def render_ascii(generator: MapGenerator) -> str:
    """Render the current grid, one glyph per cell and one line per row."""
    return "\n".join(
        "".join(GLYPHS[generator.tile_at(x, y)] for x in range(generator.width))
        for y in range(generator.height)
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rooms-and-mazes dungeon generator")
    parser.add_argument("--width", type=int, default=61, help="Map width in cells")
    parser.add_argument("--height", type=int, default=41, help="Map height in cells")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument(
        "--room-attempts", type=int, default=200, help="Room placement attempt budget"
    )
    parser.add_argument("--log-level", default="INFO", help="Log level")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Log unjoinable regions instead of failing",
    )
    parser.add_argument("--no-map", action="store_true", help="Do not print the finished map")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    logger = logging.getLogger(__name__)

    try:
        params = GenerationParams(
            width=args.width,
            height=args.height,
            seed=args.seed,
            max_room_attempts=args.room_attempts,
            strict_connectivity=not args.lenient,
        )
    except ValidationError as e:
        parser.error(str(e))

    generator = MapGenerator(params)
    try:
        generator.run_to_completion()
    except GenerationError as e:
        logger.error(f"Generation failed: {e}", exc_info=True)
        sys.exit(1)

    logger.info(f"Statistics: {generator.stats.to_dict()}")
    if not args.no_map:
        print(render_ascii(generator))


if __name__ == "__main__":
    main()

"""
Group finding tool for images.

Finds groups of same-colour pixels, or unpacks a texture atlas into sprites,
and writes the groups to a JSON file.

Usage:
    python tools/find_groups.py --image atlas.png --mode atlas --out sprites.json
"""

import argparse
import logging
import sys
import time
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from groups_finder.explain import describe_groups
from groups_finder.feature_flags import build_options
from groups_finder.finder import DEFAULT_IMAGE_OPACITY_THRESHOLD
from groups_finder.io_utils import save_groups
from groups_finder.objects import collect_groups
from groups_finder.texture import TextureGrid, rgba_to_hex

LIMIT_EXCEEDED_EXIT_CODE = 2

logger = logging.getLogger("groups_finder.tools.find_groups")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find groups of pixels in an image")
    parser.add_argument("--image", required=True, help="Path to the input image")
    parser.add_argument("--mode", choices=["colors", "atlas"], default="colors",
                        help="Group by colour, or by transparency only (texture atlas)")
    parser.add_argument("--opacity_threshold", type=int, default=DEFAULT_IMAGE_OPACITY_THRESHOLD,
                        help="Pixels with lower alpha are treated as holes")
    parser.add_argument("--no_positions", action="store_true", help="Do not store member positions")
    parser.add_argument("--orthogonal", action="store_true", help="Ignore diagonal neighbours")
    parser.add_argument("--limit", type=int, help="Maximum number of groups before failing")
    parser.add_argument("--mark_rejected", action="store_true",
                        help="Cells rejected by a group never seed their own group")
    parser.add_argument("--equivalence", choices=["seed", "chain"], help="Equivalence policy")
    parser.add_argument("--out", default="groups.json", help="Output JSON path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s: %(message)s")

    overrides = {}
    if args.no_positions:
        overrides["STORE_POSITIONS"] = False
    if args.orthogonal:
        overrides["WALK_DIAGONALLY"] = False
    if args.limit is not None:
        overrides["LIMIT_RESULTS_COUNT"] = args.limit
    if args.mark_rejected:
        overrides["MARK_REJECTED"] = True
    if args.equivalence:
        overrides["EQUIVALENCE"] = args.equivalence
    options = build_options(overrides)

    process_value = None if args.mode == "atlas" else rgba_to_hex
    grid = TextureGrid(args.image, args.opacity_threshold, process_value=process_value)
    logger.info(f"Loaded {args.image} ({grid.width}x{grid.height})")

    start_time = time.time()
    outcome = collect_groups(grid, options)
    elapsed = time.time() - start_time

    save_groups(outcome.groups, args.out)
    print(describe_groups(outcome.groups, limit_exceeded=outcome.limit_exceeded))
    print(f"Search time: {elapsed:.2f} seconds")
    print(f"Output saved to: {args.out}")

    if outcome.limit_exceeded:
        logger.warning(f"More than {options.limit_results_count} groups found, output is partial")
        return LIMIT_EXCEEDED_EXIT_CODE
    return 0


if __name__ == "__main__":
    sys.exit(main())

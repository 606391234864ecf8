"""
BoosterGen Arg Parser to determine what actions to take
"""

import argparse
import logging

from .generator import OutputShape

LOGGER = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """
    Parse command line arguments from user to determine how to spawn up
    BoosterGen and complete the request.
    :return: Namespace of requests
    """
    parser = argparse.ArgumentParser("boostergen")

    request_group = parser.add_mutually_exclusive_group(required=True)
    request_group.add_argument(
        "--release",
        "-r",
        type=lambda s: s.lower(),
        metavar="CODE",
        help="Release to open, using Scryfall set code notation.",
    )
    request_group.add_argument(
        "--land-packs",
        action="store_true",
        help="Build land packs from high resolution basic lands of any release.",
    )
    request_group.add_argument(
        "--decklist",
        "-d",
        metavar="FILE",
        help="JSON decklist file of named card groups to lay out as packs.",
    )
    request_group.add_argument(
        "--list-releases",
        action="store_true",
        help="List every release that can be opened as booster packs.",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=OutputShape,
        choices=list(OutputShape),
        default=OutputShape.BOOSTER_PACK,
        metavar="SHAPE",
        help=f"Output shape for --release: {', '.join(shape.value for shape in OutputShape)}.",
    )
    parser.add_argument(
        "--count",
        "-n",
        type=int,
        help="Packs in a box, or number of prerelease kits.",
    )
    parser.add_argument(
        "--booster-count",
        type=int,
        help="Boosters in each prerelease kit.",
    )
    parser.add_argument(
        "--no-promo",
        action="store_true",
        help="Leave the promo card out of prerelease kits.",
    )
    parser.add_argument(
        "--no-lands",
        action="store_true",
        help="Leave land packs out of prerelease kits.",
    )
    parser.add_argument(
        "--no-extended-art",
        action="store_true",
        help="Never substitute extended-art printings.",
    )
    parser.add_argument(
        "--no-basic-lands",
        action="store_true",
        help="Leave the basic land slot empty.",
    )
    parser.add_argument(
        "--no-tokens",
        action="store_true",
        help="Leave tokens out of packs and decklists.",
    )
    parser.add_argument(
        "--no-autofix",
        action="store_true",
        help="Do not loosen decklist identifiers that match nothing.",
    )
    parser.add_argument(
        "--special",
        nargs="*",
        metavar="OPTION",
        default=[],
        help="Release specific options, such as godzilla or c20partners.",
    )
    parser.add_argument(
        "--card-list",
        action="store_true",
        help="Output a plain text card list instead of pack JSON.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the random source for reproducible output.",
    )
    parser.add_argument(
        "--pretty",
        "-p",
        action="store_true",
        help="When dumping JSON, prettify the contents instead of minifying them.",
    )
    parser.add_argument(
        "--output-file",
        metavar="NAME",
        help="Write the result to this file inside the output directory instead of stdout.",
    )

    parsed_args = parser.parse_args()

    if parsed_args.booster_count is not None and parsed_args.booster_count < 1:
        parser.error("--booster-count must be at least 1")

    return parsed_args

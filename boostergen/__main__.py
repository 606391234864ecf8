"""
BoosterGen Main Executor
"""

import argparse
import json
import logging
import pathlib
import random
import sys
import traceback
from typing import Any

import urllib3.exceptions

from boostergen import constants
from boostergen.utils import init_logger

urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

init_logger()
LOGGER: logging.Logger = logging.getLogger(__name__)


def write_result(result: Any, output_file: str, pretty: bool) -> None:
    """
    Dump a result to stdout or to a file in the output directory
    :param result: JSON serialisable result, or an already rendered document
    :param output_file: File name (empty for stdout)
    :param pretty: Indent JSON output
    """
    if isinstance(result, str):
        contents = result
    else:
        contents = json.dumps(result, indent=4 if pretty else None, sort_keys=pretty)

    if not output_file:
        sys.stdout.write(contents + "\n")
        return

    constants.OUTPUT_PATH.mkdir(parents=True, exist_ok=True)
    output_path = constants.OUTPUT_PATH.joinpath(output_file)
    with output_path.open("w", encoding="utf-8") as file:
        file.write(contents)
    LOGGER.info(f"Wrote {output_path}")


def dispatcher(args: argparse.Namespace) -> Any:
    """
    BoosterGen Dispatcher
    """
    from boostergen.booster.options import GenerationOptions
    from boostergen.decklist import build_deck, load_card_groups
    from boostergen.generator import generate
    from boostergen.providers import ScryfallProvider

    source = ScryfallProvider()

    if args.list_releases:
        return [release.to_json() for release in source.get_booster_releases()]

    if args.decklist:
        groups = load_card_groups(pathlib.Path(args.decklist).expanduser())
        return build_deck(
            groups,
            source,
            include_tokens=not args.no_tokens,
            autofix=not args.no_autofix,
        ).to_json()

    options = GenerationOptions.build(
        include_extended_art=not args.no_extended_art,
        include_basic_lands=not args.no_basic_lands,
        include_tokens=not args.no_tokens,
        special_options=args.special,
    )
    return generate(
        None if args.land_packs else args.release,
        args.output,
        source,
        options,
        count=args.count,
        card_list=args.card_list,
        prerelease_booster_count=args.booster_count,
        prerelease_include_promo=not args.no_promo,
        prerelease_include_lands=not args.no_lands,
        rng=random.Random(args.seed),
    )


def main() -> None:
    """
    BoosterGen safe main call
    """
    from boostergen.arg_parser import parse_args
    from boostergen.config import BoostergenConfig
    from boostergen.errors import PackError
    from boostergen.generator import OutputShape

    args = parse_args()
    if args.land_packs:
        args.output = OutputShape.LAND_PACKS

    LOGGER.info(f"Starting BoosterGen {BoostergenConfig().boostergen_version}")

    try:
        write_result(dispatcher(args), args.output_file or "", args.pretty)
    except PackError as error:
        LOGGER.error(f"Unable to generate ({error.code}): {error}")
        sys.exit(1)
    except Exception as error:
        LOGGER.fatal(f"Exception caught: {error} {traceback.format_exc()}")
        sys.exit(2)


if __name__ == "__main__":
    main()

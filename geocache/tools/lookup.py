"""Reverse geocode a single point from the command line.

Usage:
    python -m geocache.tools.lookup 40.7128 -74.0060
    python -m geocache.tools.lookup 48.8566 2.3522 --lang fr
    python -m geocache.tools.lookup 35.6762 139.6503 --cache-file /tmp/geocache.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from geocache.domain.entities.place import ReverseGeocodeResult
from geocache.infrastructure.api.dependencies import build_reverse_geocode_uc

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def lookup(
    latitude: float, longitude: float, language: str | None, cache_file: str | None
) -> ReverseGeocodeResult | None:
    uc = build_reverse_geocode_uc(cache_file=cache_file)
    try:
        return await uc.reverse_geocode(latitude, longitude, language)
    finally:
        await uc.aclose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Reverse geocode a latitude/longitude pair")
    parser.add_argument("lat", type=float, help="Latitude in decimal degrees")
    parser.add_argument("lon", type=float, help="Longitude in decimal degrees")
    parser.add_argument(
        "--lang", type=str, default=None,
        help="Language tag (default: GEOCODER_LANGUAGE or 'en')",
    )
    parser.add_argument(
        "--cache-file", type=str, default=None,
        help="Cache file path (default: GEOCODE_CACHE_FILE)",
    )
    args = parser.parse_args(argv)

    result = asyncio.run(lookup(args.lat, args.lon, args.lang, args.cache_file))
    if result is None:
        logger.error("Invalid coordinates: %s, %s", args.lat, args.lon)
        sys.exit(1)

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()

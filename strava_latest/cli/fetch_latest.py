"""Fetch the latest Strava activity with a photo and write the widget payload.

Usage:
    strava-fetch-latest [--output PATH] [--rotation-file PATH]

The command exits non-zero only when configuration is missing or the payload
cannot be written. Upstream failures are recorded as an error payload so the
site build that consumes it keeps going.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from ..application.latest_activity import Clock, utc_now
from ..models import ErrorPayload, ResultPayload
from ..platform.config import FatalConfigError, Settings, load_settings
from ..platform.wiring import build_publish_use_case, create_http_client
from ..publishing import PayloadWriteError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Write the latest Strava activity payload for the site widget"
    )
    parser.add_argument("--output", help="Payload path (defaults to OUTPUT_PATH)")
    parser.add_argument(
        "--rotation-file",
        help="Where a rotated refresh token is recorded (defaults to ROTATION_PATH)",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")
    return parser.parse_args(argv)


async def run(settings: Settings, clock: Clock = utc_now) -> ResultPayload:
    async with create_http_client(settings) as http_client:
        publish = build_publish_use_case(
            http_client=http_client, settings=settings, clock=clock
        )
        return await publish()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.output:
        overrides["output_path"] = args.output
    if args.rotation_file:
        overrides["rotation_path"] = args.rotation_file

    try:
        settings = load_settings(**overrides)
    except FatalConfigError as exc:
        logger.error("%s", exc)
        return 1

    try:
        payload = asyncio.run(run(settings))
    except PayloadWriteError as exc:
        logger.error("%s", exc)
        return 1

    if isinstance(payload, ErrorPayload):
        logger.warning("Wrote error payload: %s", payload.error)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    raise SystemExit(main())

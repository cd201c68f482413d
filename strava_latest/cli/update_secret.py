"""Push a rotated Strava refresh token into a GitHub Actions secret.

Usage:
    strava-update-secret [SECRET_NAME]

Requires GITHUB_REPOSITORY (``owner/repo``) and GITHUB_TOKEN. Does nothing
when no rotated token has been recorded.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from ..github import GitHubSecretError, GitHubSecretsClient
from ..platform.config import FatalConfigError, GitHubSettings, load_github_settings
from ..platform.wiring import USER_AGENT
from ..publishing import RotationStore

logger = logging.getLogger(__name__)

DEFAULT_SECRET_NAME = "STRAVA_REFRESH_TOKEN"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Store a rotated Strava refresh token as a repository secret"
    )
    parser.add_argument("secret_name", nargs="?", default=DEFAULT_SECRET_NAME)
    parser.add_argument(
        "--rotation-file",
        help="Rotated token file (defaults to ROTATION_PATH)",
    )
    parser.add_argument(
        "--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR"), default="INFO"
    )
    return parser.parse_args(argv)


async def push_secret(settings: GitHubSettings, name: str, value: str) -> None:
    async with httpx.AsyncClient(headers={"User-Agent": USER_AGENT}) as http_client:
        client = GitHubSecretsClient(
            http_client,
            repository=settings.github_repository,
            token=settings.github_token,
            api_url=settings.github_api_url,
        )
        await client.put_secret(name, value)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.rotation_file:
        overrides["rotation_path"] = args.rotation_file

    try:
        settings = load_github_settings(**overrides)
    except FatalConfigError as exc:
        logger.error("Missing GITHUB_REPOSITORY or GITHUB_TOKEN: %s", exc)
        return 1

    value = RotationStore(settings.rotation_path).load()
    if value is None:
        logger.info("No rotated refresh token file found; skipping secret update.")
        return 0

    try:
        asyncio.run(push_secret(settings, args.secret_name, value))
    except GitHubSecretError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    raise SystemExit(main())

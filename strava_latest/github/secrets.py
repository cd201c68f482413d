"""Client for GitHub Actions repository secrets."""

from __future__ import annotations

import logging
from base64 import b64encode

import httpx
from nacl import encoding, public
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class GitHubSecretError(RuntimeError):
    """Raised when GitHub rejects a secrets API request."""


class RepositoryPublicKey(BaseModel):
    key_id: str
    key: str


def encrypt_secret(public_key: str, value: str) -> str:
    """Seal ``value`` for the repository's base64 encoded public key."""

    key = public.PublicKey(public_key.encode("utf-8"), encoding.Base64Encoder())
    sealed = public.SealedBox(key).encrypt(value.encode("utf-8"))
    return b64encode(sealed).decode("utf-8")


class GitHubSecretsClient:
    """Upsert encrypted Actions secrets for a single repository."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        repository: str,
        token: str,
        api_url: str = "https://api.github.com",
    ) -> None:
        self._http_client = http_client
        self._base_url = f"{api_url.rstrip('/')}/repos/{repository}/actions/secrets"
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def get_public_key(self) -> RepositoryPublicKey:
        response = await self._request("GET", f"{self._base_url}/public-key")
        if response.status_code != 200:
            raise GitHubSecretError(f"Failed to get public key: {response.text}")
        try:
            return RepositoryPublicKey.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise GitHubSecretError(f"Unexpected public key response: {response.text}") from exc

    async def put_secret(self, name: str, value: str) -> None:
        """Encrypt ``value`` and create or update the secret ``name``."""
        public_key = await self.get_public_key()
        body = {
            "encrypted_value": encrypt_secret(public_key.key, value),
            "key_id": public_key.key_id,
        }
        response = await self._request("PUT", f"{self._base_url}/{name}", json=body)
        if response.status_code not in (201, 204):
            raise GitHubSecretError(f"Failed to update secret: {response.text}")
        logger.info("Updated %s in repo secrets", name)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._http_client.request(
                method, url, headers=self._headers, **kwargs
            )
        except httpx.HTTPError as exc:
            raise GitHubSecretError(f"{method} {url} failed: {exc}") from exc


__all__ = [
    "GitHubSecretError",
    "GitHubSecretsClient",
    "RepositoryPublicKey",
    "encrypt_secret",
]

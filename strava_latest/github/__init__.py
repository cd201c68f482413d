"""GitHub integration used to persist rotated Strava refresh tokens."""

from .secrets import (
    GitHubSecretError,
    GitHubSecretsClient,
    RepositoryPublicKey,
    encrypt_secret,
)

__all__ = [
    "GitHubSecretError",
    "GitHubSecretsClient",
    "RepositoryPublicKey",
    "encrypt_secret",
]

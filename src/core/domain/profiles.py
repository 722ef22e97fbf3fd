"""Deployment profiles for the Araria API.

Two variants of the API are deployed: one authenticates with the
`x-araria-key` header at the origin root, the other with a bearer token
under the `/araria/` prefix. A client is bound to exactly one of them.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_BASE_URL = "https://prod-api.araria.com.br"


class DeploymentProfile(str, Enum):
    """Authentication scheme and path prefix used by a client."""

    ARARIA = "araria"
    BEARER = "bearer"

    @classmethod
    def default(cls) -> "DeploymentProfile":
        return cls.ARARIA

    @property
    def path_prefix(self) -> str:
        return "araria/" if self is DeploymentProfile.BEARER else ""

    def auth_headers(self, api_key: str) -> dict[str, str]:
        """Return the header carrying `api_key` for this profile."""

        if self is DeploymentProfile.BEARER:
            return {"Authorization": f"Bearer {api_key}"}
        return {"x-araria-key": api_key}

    def label(self) -> str:
        if self is DeploymentProfile.BEARER:
            return "Authorization: Bearer (/araria/ prefix)"
        return "x-araria-key (root paths)"

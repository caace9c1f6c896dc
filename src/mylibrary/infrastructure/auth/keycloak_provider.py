"""Keycloak token introspection for library sign-in."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenIdentity:
    """Who an active bearer token belongs to."""

    subject: str
    username: str


def identity_from_claims(claims: dict) -> TokenIdentity | None:
    """Build an identity from introspection claims.

    Inactive tokens and tokens without ``preferred_username`` yield None,
    since library accounts are looked up by username.
    """
    if not claims.get("active"):
        return None
    username = claims.get("preferred_username")
    if not username:
        return None
    return TokenIdentity(subject=claims.get("sub", ""), username=username)


class KeycloakProvider:
    """Asks Keycloak whether a bearer token is active and whose it is."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._client = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def identify(self, token: str) -> TokenIdentity | None:
        try:
            claims = self._client.introspect(token)
        except KeycloakError as e:
            logger.info("Token introspection failed: %s", e)
            return None
        return identity_from_claims(claims)

"""Identity provider client."""

import requests
import structlog
from pydantic import ValidationError

from s1ocn.application.dto.identity import TokenResponse
from s1ocn.domain.entities import AccessToken
from s1ocn.domain.errors import AuthenticationError
from s1ocn.domain.ports import TokenProviderPort
from s1ocn.infrastructure.config.settings import Settings

logger = structlog.get_logger()


class KeycloakTokenProvider(TokenProviderPort):
    """Password grant against the data space Keycloak realm."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        """Initialize token provider."""
        self.settings = settings
        self.session = session or requests.Session()

    def get_token(self, username: str, password: str) -> AccessToken:
        """Exchange credentials for an access token."""
        data = {
            "grant_type": "password",
            "username": username,
            "password": password,
            "client_id": self.settings.client_id,
        }
        logger.info("requesting_access_token", token_url=self.settings.token_url, username=username)
        try:
            response = self.session.post(
                self.settings.token_url,
                data=data,
                timeout=self.settings.request_timeout_seconds,
            )
        except requests.RequestException as e:
            raise AuthenticationError(f"Token request failed: {e}") from e

        if not response.ok:
            logger.error("access_token_rejected", status_code=response.status_code)
            raise AuthenticationError(
                f"Token request rejected with status {response.status_code}: {response.text}"
            )

        try:
            return TokenResponse.model_validate(response.json()).to_access_token()
        except (ValueError, ValidationError) as e:
            raise AuthenticationError(f"Token response could not be parsed: {e}") from e

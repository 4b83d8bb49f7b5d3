"""Identity DTOs."""

from pydantic import BaseModel, ConfigDict

from s1ocn.domain.entities import AccessToken


class TokenResponse(BaseModel):
    """Token response from the identity provider."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str | None = None

    def to_access_token(self) -> AccessToken:
        """Convert to domain token."""
        return AccessToken(access_token=self.access_token, refresh_token=self.refresh_token)

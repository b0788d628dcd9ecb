"""Token models for the vendor token endpoint."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TokenPair(BaseModel):
    """Bearer access token and its refresh token."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("access_token", "accessToken"),
        description="Short-lived bearer token (JWT)",
    )
    refresh_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("refresh_token", "refreshToken"),
        description="Longer-lived renewal token",
    )

"""OAuth models for LinkedIn authentication data"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ClientCredentialsTokenResponse(BaseModel):
    """Response of the token endpoint for the client credentials grant"""

    access_token: str = Field(..., min_length=1)
    expires_in: int | None = None

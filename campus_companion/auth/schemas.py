"""
Auth-specific Pydantic schemas.

Claims are the identity attributes recovered from a verified bearer token.
"""

from pydantic import BaseModel, Field


class Claims(BaseModel):
    """Verified identity of the caller."""

    sub: str = Field(..., description="Subject (user) identifier")
    email: str | None = Field(None, description="User's email address")
    role: str | None = Field(None, description="Role claim, e.g. 'authenticated'")

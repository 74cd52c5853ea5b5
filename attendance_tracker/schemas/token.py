"""
Pydantic schemas for authentication and tokens
"""

from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Login response"""
    message: str = "Login successful!"
    token: str
    token_type: str = "bearer"

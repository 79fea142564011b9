"""
Core package initializer.

Token helpers shared by the API dependencies, tooling and tests.
"""

from .security import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
    get_token_subject,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "create_access_token",
    "decode_token",
    "get_token_subject",
]

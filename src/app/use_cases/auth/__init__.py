"""
Authentication Use Cases

Token issuance, verification and refresh.
"""

from .issue_tokens_use_case import IssueTokensUseCase
from .verify_access_token_use_case import VerifyAccessTokenUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .dtos import DeviceInfo, IssueContext, Principal, TokenPair

__all__ = [
    # Use Cases
    "IssueTokensUseCase",
    "VerifyAccessTokenUseCase",
    "RefreshTokenUseCase",
    # DTOs - Commands
    "DeviceInfo",
    "IssueContext",
    # DTOs - Responses
    "TokenPair",
    "Principal",
]

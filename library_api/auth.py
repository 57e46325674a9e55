"""
API key authentication for the FastAPI API.
"""

import secrets
from typing import Optional

import structlog
from fastapi import HTTPException, Request, status

from library_api.config import APIConfig

logger = structlog.get_logger(__name__)

API_KEY_SCHEME = "ApiKey"


def _mask(api_key: str) -> str:
    return api_key[:4] + "..." if api_key else ""


def check_api_key(api_key: Optional[str], api_config: APIConfig) -> bool:
    """
    Compare a presented key against the configured shared secret.

    Args:
        api_key: Key taken from the request, if any
        api_config: Active configuration

    Returns:
        True if the key matches, False otherwise
    """
    if not api_config.api_key:
        logger.warning("API key required but none is configured")
        return False

    if not api_key:
        return False

    return secrets.compare_digest(api_key.encode(), api_config.api_key.encode())


async def verify_api_key(request: Request) -> Optional[str]:
    """
    Verify the API key header when the application requires one.

    Args:
        request: Incoming request

    Returns:
        The accepted API key, or None when authentication is disabled

    Raises:
        HTTPException: If the API key is missing or invalid
    """
    api_config: APIConfig = request.app.state.config
    if not api_config.require_api_key:
        return None

    api_key = request.headers.get(api_config.api_key_header)

    if not check_api_key(api_key, api_config):
        logger.warning(
            "Invalid API key attempted",
            api_key=_mask(api_key),
            path=request.url.path
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": API_KEY_SCHEME},
        )

    return api_key

"""Security utilities and helpers."""

import secrets
from typing import Optional
import keyring

from .logger import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "swipe-triage"
CLIENT_SECRET_KEY = "google_client_secret"


def generate_session_id(length: int = 32) -> str:
    """Generate an opaque, unguessable session identifier."""
    return secrets.token_urlsafe(length)


def store_secret(name: str, value: str) -> bool:
    """Securely store a secret using keyring."""
    try:
        keyring.set_password(SERVICE_NAME, name, value)
        logger.info(f"Stored secret {name}")
        return True
    except Exception as e:
        logger.error(f"Failed to store secret {name}: {e}")
        return False


def retrieve_secret(name: str) -> Optional[str]:
    """Retrieve a secret from secure storage."""
    try:
        value = keyring.get_password(SERVICE_NAME, name)
        if value:
            logger.debug(f"Retrieved secret {name}")
        return value
    except Exception as e:
        logger.error(f"Failed to retrieve secret {name}: {e}")
        return None


def delete_secret(name: str) -> bool:
    """Delete a secret from secure storage."""
    try:
        keyring.delete_password(SERVICE_NAME, name)
        logger.info(f"Deleted secret {name}")
        return True
    except Exception as e:
        logger.error(f"Failed to delete secret {name}: {e}")
        return False

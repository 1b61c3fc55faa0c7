"""Caller authorization by e-mail domain."""
import logging
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_AUTHORIZED_DOMAINS = ('stage-design.co.il', 'stagedesign.co.il')


class UnauthorizedError(Exception):
    """Raised when the caller may not access the calendar data."""

    def __init__(self, message: str = 'UNAUTHORIZED: User is not permitted to access this resource.'):
        super().__init__(message)


def extract_caller_email(event: Dict[str, Any]) -> Optional[str]:
    """
    Read the caller's e-mail from API Gateway authorizer claims.

    Supports REST API (``authorizer.claims``) and HTTP API
    (``authorizer.jwt.claims``) events.

    Args:
        event: API Gateway proxy event

    Returns:
        Lower-cased e-mail address, or None for unauthenticated callers
    """
    authorizer = (event or {}).get('requestContext', {}).get('authorizer') or {}
    claims = authorizer.get('claims') or authorizer.get('jwt', {}).get('claims') or {}
    email = claims.get('email') or authorizer.get('email')
    if not email:
        return None
    return str(email).strip().lower()


def parse_domains(value: Optional[str]) -> tuple:
    """Parse a comma-separated domain allow-list."""
    if not value:
        return DEFAULT_AUTHORIZED_DOMAINS
    domains = tuple(domain.strip().lower() for domain in value.split(',') if domain.strip())
    if not domains:
        logger.warning(f"No domains in allow-list \"{value}\", using defaults")
        return DEFAULT_AUTHORIZED_DOMAINS
    return domains


def is_authorized(email: Optional[str], domains: Iterable[str] = DEFAULT_AUTHORIZED_DOMAINS) -> bool:
    """
    Check the caller's e-mail domain against the allow-list.

    Args:
        email: Caller e-mail, or None if unauthenticated
        domains: Allowed e-mail domains

    Returns:
        True if the e-mail ends with "@<domain>" for an allowed domain
    """
    if not email:
        return False
    email = email.strip().lower()
    return any(email.endswith('@' + domain.lower()) for domain in domains)


def require_authorized(email: Optional[str], domains: Iterable[str] = DEFAULT_AUTHORIZED_DOMAINS) -> str:
    """
    Ensure the caller is authorized.

    Raises:
        UnauthorizedError: If the caller is unauthenticated or not allowed
    """
    if not is_authorized(email, domains):
        logger.warning(f"Authorization failed for caller: {email or 'unauthenticated'}")
        raise UnauthorizedError()
    return email

"""
Authentication Module for Coffee Club
=====================================

HTTP Basic authentication for the staff (/admin) endpoints. Buyers never
authenticate here; only recipe configuration is protected.

Security Features:
------------------
- **Timing Attack Prevention**: `secrets.compare_digest()` compares
  credentials in constant time.

- **Shared Realm**: Every admin endpoint uses the same realm so browsers
  reuse cached credentials.

- **Fail Closed**: If ADMIN_PASSWORD is not configured, admin endpoints
  return 503 Service Unavailable instead of allowing access.

Configuration:
--------------
Environment variables (see config.py):
- ADMIN_USERNAME: Username for admin access (default: "admin")
- ADMIN_PASSWORD: Password for admin access (required, no default)

Usage:
------
    from coffee_club.auth import verify_admin_credentials

    @router.put("/admin/products/{product_id}/recipe")
    def save_recipe(
        product_id: int,
        admin: str = Depends(verify_admin_credentials),
        db: Session = Depends(get_db),
    ):
        ...
"""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from . import config


security = HTTPBasic(realm="Coffee Club Admin")


def verify_admin_credentials(
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    Verify HTTP Basic Auth credentials for admin endpoints.

    Returns:
        str: The authenticated username

    Raises:
        HTTPException (503): If ADMIN_PASSWORD is not set
        HTTPException (401): If credentials are invalid; includes the
                            WWW-Authenticate header so browsers prompt
    """
    if not config.ADMIN_PASSWORD:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin authentication not configured. Set ADMIN_PASSWORD environment variable.",
        )

    username_correct = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        config.ADMIN_USERNAME.encode("utf-8"),
    )
    password_correct = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        config.ADMIN_PASSWORD.encode("utf-8"),
    )

    if not (username_correct and password_correct):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username

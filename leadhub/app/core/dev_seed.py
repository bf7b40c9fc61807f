import logging
import os

from sqlalchemy import func
from sqlalchemy.orm import Session

from leadhub.app.core.security import get_password_hash
from leadhub.app.core.settings import get_settings
from leadhub.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_ADMIN = "admin@leadhub.example.com"


def ensure_admin(db: Session, email: str, password: str, full_name: str | None = None) -> User:
    """
    Create an admin account, or promote an existing user to admin.
    The password is only set when the account is created.
    """
    email = email.strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()
    if user is None:
        user = User(
            email=email,
            full_name=full_name,
            hashed_password=get_password_hash(password),
            is_active=True,
        )
        db.add(user)
        logger.info("Created admin %s", email)
    elif not user.is_admin:
        logger.info("Promoted %s to admin", email)
    user.role = "admin"
    user.is_admin = True
    user.is_email_verified = True
    db.commit()
    db.refresh(user)
    return user


def ensure_bootstrap_admin(db: Session) -> None:
    """Ensure the admin named by ADMIN_EMAIL / ADMIN_PASSWORD exists, in any environment."""
    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        return
    ensure_admin(db, settings.admin_email, settings.admin_password)


def ensure_default_dev_admin(db: Session) -> None:
    """
    Create a default admin for local development if it does not exist.
    Skips execution under pytest and outside the development environment.
    """
    if os.getenv("PYTEST_CURRENT_TEST") or get_settings().environment != "development":
        return

    existing = db.query(User).filter(User.email == DEFAULT_DEV_ADMIN).first()
    if existing:
        return
    ensure_admin(db, DEFAULT_DEV_ADMIN, DEFAULT_DEV_PASSWORD, full_name="Development Admin")

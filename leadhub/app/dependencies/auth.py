"""Authentication dependencies for retrieving the current user and acting admin."""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from leadhub.app.core.security import decode_access_token
from leadhub.app.db.session import get_db
from leadhub.app.models.user import User

ADMIN_CAPABILITIES = frozenset({"leads", "organizations"})


@dataclass(frozen=True)
class Actor:
    """An authenticated admin as seen by the services: an id plus granted capabilities."""

    id: int
    capabilities: frozenset


def get_current_user(db: Session = Depends(get_db), authorization: str | None = Header(default=None)) -> User:
    # Expect Authorization: Bearer <token>
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    token = authorization.split(" ", 1)[1]
    try:
        # Decode and validate JWT to retrieve subject
        payload = decode_access_token(token)
    except ValueError:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user_id = payload.get("sub")
    try:
        user_id_int = int(user_id)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = db.query(User).filter(User.id == user_id_int).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def resolve_actor(user: User) -> Actor | None:
    if user.is_admin or user.role == "admin":
        return Actor(id=user.id, capabilities=ADMIN_CAPABILITIES)
    return None


def require_capability(*capabilities: str):
    """Dependency factory: the current user must be an admin holding every capability."""

    def dependency(current_user: User = Depends(get_current_user)) -> Actor:
        actor = resolve_actor(current_user)
        if actor is None or not set(capabilities) <= actor.capabilities:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
        return actor

    return dependency

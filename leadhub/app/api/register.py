"""Handles user registration for LeadHub."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from leadhub.app.core.security import get_password_hash
from leadhub.app.db.session import get_db
from leadhub.app.models.user import User
from leadhub.app.schemas.user import UserCreate, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    email = str(user_in.email).lower()
    existing = db.query(User).filter(func.lower(User.email) == email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")
    user = User(
        email=email,
        full_name=user_in.full_name,
        hashed_password=get_password_hash(user_in.password),  # Hash password before storing
        role="b2c_user",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from budget_tracker.core.config import settings
from budget_tracker.core.security import (
    create_access_token,
    get_current_user,
    get_password_hash,
    verify_password,
)
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.user import UserCreate, UserLogin, UserPublic

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    logger.info(f"Registration attempt for: {user.email}")
    if crud.get_user_by_email(db, user.email):
        logger.info(f"User already exists: {user.email}")
        raise HTTPException(status_code=400, detail="User already exists")

    created = crud.create_user(
        db,
        name=user.name,
        email=user.email,
        password_hash=get_password_hash(user.password),
    )
    logger.info(f"User created successfully: {created.id}")
    return created


@router.post("/login")
def login(login_data: UserLogin, response: Response, db: Session = Depends(get_db)):
    logger.info(f"Login attempt for email: {login_data.email}")
    user = crud.get_user_by_email(db, login_data.email)
    if not user or not verify_password(login_data.password, user.password_hash):
        logger.warning(f"Invalid credentials for: {login_data.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": user.id})
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=access_token,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    logger.info(f"Login successful for user: {login_data.email}")

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UserPublic.model_validate(user).model_dump(mode="json"),
    }


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return None


@router.get("/me", response_model=UserPublic)
def get_me(user: User = Depends(get_current_user)):
    return user

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from budget_tracker.models._base import ORMModel


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserPublic(ORMModel):
    id: str
    name: str
    email: EmailStr
    created_at: datetime

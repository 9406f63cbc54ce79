from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_tracker.core.config import settings
from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.alert import DigestList

router = APIRouter()


@router.get("/", response_model=DigestList)
def list_digests(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"digests": crud.list_weekly_digests(db, user.id, limit or settings.DIGEST_DEFAULT_LIMIT)}

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.alert import AlertList, AlertMarkRead, AlertUpdated

router = APIRouter()


@router.get("/", response_model=AlertList)
def list_alerts(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"alerts": crud.list_budget_alerts(db, user.id)}


@router.patch("/", response_model=AlertUpdated)
def mark_alert_read(data: AlertMarkRead, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not data.alert_id:
        raise HTTPException(status_code=400, detail="Alert ID is required")

    alert = crud.mark_alert_read(db, user.id, data.alert_id)
    if not alert:
        raise HTTPException(status_code=404, detail="Alert not found")
    return {"alert": alert}

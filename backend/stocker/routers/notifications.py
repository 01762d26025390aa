from typing import List

from fastapi import APIRouter, HTTPException

from stocker.deps import CurrentEmail
from stocker.schemas import Toast
from stocker.services.notification_service import bus

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[Toast])
async def list_notifications(email: str = CurrentEmail):
    return bus.toasts


@router.delete("/{toast_id}", response_model=Toast)
async def dismiss_notification(toast_id: str, email: str = CurrentEmail):
    """Close the toast and drop it from the list; returns it as closed."""
    closed = bus.dismiss(toast_id)
    if not closed:
        raise HTTPException(status_code=404, detail="Notification not found")
    bus.remove(toast_id)
    return closed[0]

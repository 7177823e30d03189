"""Alert routes: report a blocking car, move an alert along, view history."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import get_alert_lifecycle, get_alert_store, get_directory
from app.models.alert import Alert, AlertStatus
from app.models.user import User
from app.schemas.alert import (
    AlertStatusRequest,
    AlertStatusResponse,
    AlertSubmitRequest,
    AlertSubmitResponse,
    HistoryItem,
    HistoryResponse,
    OwnerInfo,
)
from app.services.alert_lifecycle import AlertLifecycle
from app.services.alert_store import AlertStore
from app.services.plate_directory import PlateDirectory

router = APIRouter(tags=["alerts"])


@router.post("/alert", response_model=AlertSubmitResponse)
async def submit_alert(
    body: AlertSubmitRequest,
    lifecycle: AlertLifecycle = Depends(get_alert_lifecycle),
):
    """Report a plate as blocking the sender and notify its owner."""
    outcome = await lifecycle.submit_alert(
        plate=body.plate,
        sender_id=body.sender_id,
        sender_email=body.sender_email,
        manual_correction=body.manual_correction,
        confidence=body.confidence,
    )
    owner = outcome.owner
    return AlertSubmitResponse(
        alert_id=str(outcome.alert.id),
        already_blocking=outcome.already_blocking,
        owner=OwnerInfo(name=owner.name, email=owner.email, phone=owner.phone),
    )


@router.post("/alert-status", response_model=AlertStatusResponse)
async def update_alert_status(
    body: AlertStatusRequest,
    lifecycle: AlertLifecycle = Depends(get_alert_lifecycle),
):
    """Move an alert to leaving_soon, leaving_now or resolved."""
    alert = await lifecycle.update_status(
        alert_id=body.alert_id,
        target_status=body.status,
        acting_user_id=body.user_id,
    )
    return AlertStatusResponse(status=AlertStatus(alert.status).value)


def _history_item(alert: Alert, kind: str, users: dict[uuid.UUID, User]) -> HistoryItem:
    item = HistoryItem(
        id=str(alert.id),
        detected_plate=alert.detected_plate,
        created_at=alert.created_at,
        updated_at=alert.updated_at,
        status=AlertStatus(alert.status).value,
        type=kind,
        manual_correction=alert.manual_correction,
    )
    if kind == "received":
        sender = users.get(alert.sender_id) if alert.sender_id else None
        if sender is not None:
            item.sender_name = sender.name
            item.sender_phone = sender.phone
    else:
        receiver = users.get(alert.receiver_id)
        if receiver is not None:
            item.receiver_name = receiver.name
            item.receiver_phone = receiver.phone
    return item


@router.get("/history", response_model=HistoryResponse)
async def alert_history(
    user_id: uuid.UUID | None = Query(None, alias="userId"),
    email: str | None = Query(None, max_length=320),
    directory: PlateDirectory = Depends(get_directory),
    store: AlertStore = Depends(get_alert_store),
):
    """Sent and received alerts for a user, newest first."""
    if user_id is None and not email:
        raise HTTPException(status_code=400, detail="User ID or email required")

    user = await directory.get(user_id) if user_id is not None else None
    if user is None and email:
        user = await directory.lookup_by_contact(email=email)
    if user is None:
        return HistoryResponse(alerts=[])

    sent, received = await store.list_for_user(user.id)

    counterpart_ids = {a.receiver_id for a in sent} | {a.sender_id for a in received if a.sender_id}
    users = await directory.get_many(counterpart_ids)

    items = [_history_item(a, "received", users) for a in received]
    items += [_history_item(a, "sent", users) for a in sent]
    items.sort(key=lambda i: i.created_at, reverse=True)
    return HistoryResponse(alerts=items)

"""Alert schemas."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AlertSubmitRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plate: str = Field(..., min_length=1, max_length=32)
    manual_correction: bool = Field(False, alias="manualCorrection")
    confidence: float | None = Field(None, ge=0, le=1)
    sender_email: str | None = Field(None, alias="senderEmail", max_length=320)
    sender_id: uuid.UUID | None = Field(None, alias="senderId")


class OwnerInfo(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class AlertSubmitResponse(BaseModel):
    success: bool = True
    alert_id: str = Field(serialization_alias="alertId")
    already_blocking: bool = Field(False, serialization_alias="alreadyBlocking")
    owner: OwnerInfo


class AlertStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    alert_id: uuid.UUID = Field(..., alias="alertId")
    status: str = Field(..., min_length=1, max_length=32)
    user_id: uuid.UUID = Field(..., alias="userId")


class AlertStatusResponse(BaseModel):
    success: bool = True
    status: str


class HistoryItem(BaseModel):
    id: str
    detected_plate: str
    created_at: datetime
    updated_at: datetime
    status: str
    type: Literal["sent", "received"]
    manual_correction: bool = False
    sender_name: str | None = None
    sender_phone: str | None = None
    receiver_name: str | None = None
    receiver_phone: str | None = None


class HistoryResponse(BaseModel):
    alerts: list[HistoryItem]

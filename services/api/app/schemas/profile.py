"""Profile, login and push subscription schemas."""

import uuid
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class ProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID | None = None
    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=320)
    phone: str | None = Field(None, max_length=32)
    car_plate: str | None = Field(None, alias="carPlate", max_length=32)

    @model_validator(mode="after")
    def require_identity(self) -> "ProfileRequest":
        if self.id is None and not self.email and not self.phone:
            raise ValueError("Email or phone is required")
        return self


class UserResponse(BaseModel):
    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    car_plate: str | None = Field(None, serialization_alias="carPlate")
    has_push_subscription: bool = Field(False, serialization_alias="hasPushSubscription")


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserResponse


class LoginRequest(BaseModel):
    phone: str = Field(..., min_length=1, max_length=32)


class LoginResponse(BaseModel):
    found: bool
    user: UserResponse | None = None
    message: str | None = None


class PushSubscriptionRequest(BaseModel):
    user_id: uuid.UUID = Field(..., validation_alias=AliasChoices("userId", "visitorId", "user_id"))
    push_subscription: dict[str, Any] = Field(
        ..., validation_alias=AliasChoices("pushSubscription", "push_subscription")
    )


class PushSubscriptionResponse(BaseModel):
    success: bool = True
    stored: bool


class VapidKeyResponse(BaseModel):
    vapid_public_key: str = Field(serialization_alias="vapidPublicKey")

"""Web push bootstrap: VAPID public key and subscription storage."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.dependencies import get_profile_service
from app.schemas.profile import PushSubscriptionRequest, PushSubscriptionResponse, VapidKeyResponse
from app.services.profile_service import ProfileService

router = APIRouter(tags=["push"])


@router.get("/vapid-key", response_model=VapidKeyResponse)
async def vapid_key(settings: Settings = Depends(get_settings)):
    body = VapidKeyResponse(vapid_public_key=settings.vapid_public_key)
    return JSONResponse(
        content=body.model_dump(by_alias=True),
        headers={"Cache-Control": "no-store"},
    )


@router.post("/push-subscription", response_model=PushSubscriptionResponse)
async def save_push_subscription(
    body: PushSubscriptionRequest,
    profiles: ProfileService = Depends(get_profile_service),
):
    stored = await profiles.save_push_subscription(body.user_id, body.push_subscription)
    return PushSubscriptionResponse(stored=stored)

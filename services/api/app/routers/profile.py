"""Profile routes: save a profile, look a user up by phone."""

from fastapi import APIRouter, Depends

from app.dependencies import get_directory, get_profile_service
from app.models.user import User
from app.schemas.profile import LoginRequest, LoginResponse, ProfileRequest, ProfileResponse, UserResponse
from app.services.plate_directory import PlateDirectory
from app.services.profile_service import ProfileService

router = APIRouter(tags=["profile"])


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        phone=user.phone,
        car_plate=user.car_plate,
        has_push_subscription=bool(user.push_subscription),
    )


@router.post("/profile", response_model=ProfileResponse)
async def save_profile(
    body: ProfileRequest,
    profiles: ProfileService = Depends(get_profile_service),
):
    """Create or update a user; email, phone and plate must be unique."""
    user = await profiles.save_profile(
        user_id=body.id,
        name=body.name,
        email=body.email,
        phone=body.phone,
        car_plate=body.car_plate,
    )
    return ProfileResponse(user=user_response(user))


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    directory: PlateDirectory = Depends(get_directory),
):
    user = await directory.lookup_by_contact(phone=body.phone)
    if user is None:
        return LoginResponse(found=False, message="Phone number not registered")
    return LoginResponse(found=True, user=user_response(user))

import secrets

from fastapi import APIRouter, Depends, Request

from ..config import Settings
from ..core.errors import InvalidInput, Unauthorized
from .schemas import VerifyPasswordRequest, VerifyPasswordResponse

router = APIRouter(prefix="/api/v1", tags=["auth"])


def app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _matches(candidate: str, secret: str | None) -> bool:
    return bool(secret) and secrets.compare_digest(candidate.encode(), secret.encode())


@router.post("/verifyPassword", response_model=VerifyPasswordResponse)
def verify_password(payload: VerifyPasswordRequest, settings: Settings = Depends(app_settings)):
    if not payload.password:
        raise InvalidInput("Password is required")

    if _matches(payload.password, settings.password) or _matches(payload.password, settings.token):
        return VerifyPasswordResponse(message="Password is correct", token=settings.token)
    raise Unauthorized()

"""Account registration, login and email verification endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from src.greenmarket.api.http.deps import get_service_timeout, get_user_service
from src.greenmarket.api.http.errors import http_error_for
from src.greenmarket.api.http.schemas import UserLoginRequest, UserRegisterRequest
from src.greenmarket.api.utils.bounded_call import bounded_call
from src.greenmarket.core.errors import ErrorKind, MarketError
from src.greenmarket.core.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", status_code=201)
async def register(
    payload: UserRegisterRequest,
    user_service: UserService = Depends(get_user_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    try:
        user = await bounded_call(
            timeout,
            user_service.register,
            payload.full_name,
            payload.email,
            payload.password,
        )
    except MarketError as exc:
        raise http_error_for(exc, default=400) from exc

    return {
        "message": "Registration successful. Please check your email to verify your account.",
        "user": user.summary(),
    }


@router.post("/login")
async def login(
    payload: UserLoginRequest,
    user_service: UserService = Depends(get_user_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    try:
        token, user = await bounded_call(
            timeout, user_service.login, payload.email, payload.password
        )
    except MarketError as exc:
        raise http_error_for(exc, default=401) from exc

    return {"message": "Login successful", "token": token, "user": user.summary()}


@router.get("/email-verification/{code}")
async def verify_email(
    code: str,
    user_service: UserService = Depends(get_user_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, str]:
    try:
        await bounded_call(timeout, user_service.verify_email, code)
    except MarketError as exc:
        raise http_error_for(exc, {ErrorKind.AUTHENTICATION: 401}) from exc

    return {"message": "Successfully verified email"}

"""
Auth API 라우터

POST /api/auth/signup           - 회원가입 (201)
POST /api/auth/login            - 로그인
POST /api/auth/forgot-password  - 재설정 링크 요청
POST /api/auth/reset-password   - 비밀번호 재설정
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from core.errors import AuthFailure, ConflictError, ValidationError
from web.dependencies import get_app_settings, get_db, get_mailer
from web.models.requests import (
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SignupRequest,
)
from web.models.responses import LoginResponse, MessageResponse
from web.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup", status_code=201, response_model=MessageResponse)
async def signup(
    request: SignupRequest,
    db=Depends(get_db),
) -> MessageResponse:
    """회원가입"""
    service = AuthService(db)

    try:
        await service.signup(
            name=request.name,
            email=request.email,
            password=request.password,
        )
    except (ValidationError, ConflictError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MessageResponse(message="Signup successful")


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db=Depends(get_db),
) -> LoginResponse:
    """로그인

    사용자 없음과 비밀번호 불일치는 같은 401 응답.
    """
    service = AuthService(db)

    try:
        user = await service.login(request.email, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthFailure as e:
        raise HTTPException(status_code=401, detail=str(e))

    return LoginResponse(email=user.email, isPremium=user.is_premium)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    db=Depends(get_db),
    mailer=Depends(get_mailer),
    settings=Depends(get_app_settings),
) -> MessageResponse:
    """재설정 링크 요청

    이메일 존재 여부와 무관하게 같은 응답.
    """
    service = AuthService(db, mailer=mailer, base_url=settings.web_base_url)

    try:
        message = await service.forgot_password(request.email)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    db=Depends(get_db),
) -> MessageResponse:
    """비밀번호 재설정"""
    service = AuthService(db)

    try:
        await service.reset_password(request.token, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MessageResponse(message="Password reset successful")

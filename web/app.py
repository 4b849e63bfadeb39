"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config.loader import get_settings
from core.constants import Defaults
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import (
    auth,
    expenses,
    health,
    leaderboard,
    premium,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
    from core.storage.password_reset_store import PasswordResetStore
    from web.dependencies import (
        get_export_dispatcher,
        get_mailer,
        get_payment_gateway,
        set_export_dispatcher,
        set_mailer,
        set_object_store,
        set_payment_gateway,
    )

    settings = get_settings()

    # 시작 시 - DB 스키마 자동 초기화 + 만료 재설정 토큰 정리
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)
        await PasswordResetStore(db).purge_expired()

    # 외부 연동은 테스트 등에서 미리 설정된 경우 그대로 사용
    if get_export_dispatcher() is None:
        store, dispatcher = _init_export(settings)
        if dispatcher:
            set_object_store(store)
            set_export_dispatcher(dispatcher)
            logger.info("Web: 내보내기(S3) 초기화 완료")

    owned_mailer = None
    if get_mailer() is None:
        owned_mailer = _init_mailer(settings)
        if owned_mailer:
            set_mailer(owned_mailer)

    owned_gateway = None
    if get_payment_gateway() is None:
        owned_gateway = _init_payment_gateway(settings)
        if owned_gateway:
            set_payment_gateway(owned_gateway)

    yield

    # 종료 시 - 진행 중인 내보내기 완료 대기 후 리소스 정리
    dispatcher = get_export_dispatcher()
    if dispatcher:
        await dispatcher.drain()
        logger.info(
            f"Web: 내보내기 종료 (성공 {dispatcher.success_count}, 실패 {dispatcher.failure_count})"
        )

    if owned_mailer:
        try:
            await owned_mailer.close()
        except Exception as e:
            logger.warning(f"Web: Mailer 종료 실패: {e}")
    if owned_gateway:
        try:
            await owned_gateway.close()
        except Exception as e:
            logger.warning(f"Web: 결제 게이트웨이 종료 실패: {e}")


def _init_export(settings):
    """S3 저장소 + 내보내기 디스패처 생성

    Returns:
        (S3ObjectStore | None, ExportDispatcher | None)
    """
    from adapters.s3.object_store import S3ObjectStore
    from core.export import ExportDispatcher, ExportProjector

    aws = settings.aws
    if aws is None:
        logger.info("Web: aws 설정 없음, 내보내기/다운로드 기능 비활성화")
        return None, None

    try:
        store = S3ObjectStore(
            bucket=aws.bucket,
            region=aws.region,
            access_key_id=aws.access_key_id,
            secret_access_key=aws.secret_access_key,
        )
    except Exception as e:
        logger.warning(f"Web: S3 클라이언트 생성 실패: {e}")
        return None, None

    projector = ExportProjector(settings.db_path, store)
    return store, ExportDispatcher(projector)


def _init_mailer(settings):
    """Mailjet 발송기 생성 (설정 없으면 None)"""
    from adapters.mailjet.mailer import MailjetMailer

    mailjet = settings.mailjet
    if mailjet is None:
        logger.info("Web: mailjet 설정 없음, 재설정 메일 발송 비활성화")
        return None

    return MailjetMailer(
        api_key=mailjet.api_key,
        api_secret=mailjet.api_secret,
        from_email=mailjet.from_email,
        from_name=mailjet.from_name,
    )


def _init_payment_gateway(settings):
    """Razorpay 게이트웨이 생성 (설정 없으면 None)"""
    from adapters.razorpay.gateway import RazorpayGateway

    razorpay = settings.razorpay
    if razorpay is None:
        logger.info("Web: razorpay 설정 없음, 결제 주문 기능 비활성화")
        return None

    return RazorpayGateway(
        key_id=razorpay.key_id,
        key_secret=razorpay.key_secret,
    )


app = FastAPI(
    title=f"{Defaults.APP_NAME} API",
    description="개인 지출 관리 API",
    version=Defaults.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# 예외 핸들러
# =========================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """요청 검증 실패 → 400"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(loc) for loc in first.get("loc", ()) if loc != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"

    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTPException → {success: false, message}"""
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = exc.detail

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """예상하지 못한 예외 → 500 (오류 상세는 development 모드에서만)"""
    logger.exception(
        f"Unhandled error: {exc}",
        extra={"path": request.url.path},
    )

    content = {"success": False, "message": "Something went wrong!"}
    if get_settings().is_development:
        content["error"] = str(exc)

    return JSONResponse(status_code=500, content=content)


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(expenses.router)
app.include_router(premium.router)
app.include_router(leaderboard.router)

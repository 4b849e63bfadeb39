"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IMailer, IObjectStore, IPaymentGateway
from core.config.loader import Settings, get_settings
from core.export.dispatcher import ExportDispatcher


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """요청 단위 DB 연결 반환

    요청마다 별도 연결을 사용하므로 동시 요청의 트랜잭션이 섞이지 않음.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path) as db:
        yield db


# =========================================================================
# 외부 연동 (앱 시작 시 설정)
# =========================================================================

# lifespan에서 secrets.yaml 기준으로 설정되는 전역 인스턴스
# None이면 해당 기능 비활성화
_object_store: IObjectStore | None = None
_export_dispatcher: ExportDispatcher | None = None
_mailer: IMailer | None = None
_payment_gateway: IPaymentGateway | None = None


def set_object_store(store: IObjectStore | None) -> None:
    """내보내기 저장소 설정"""
    global _object_store
    _object_store = store


def get_object_store() -> IObjectStore | None:
    """내보내기 저장소 반환 (None이면 비활성화)"""
    return _object_store


def set_export_dispatcher(dispatcher: ExportDispatcher | None) -> None:
    """내보내기 디스패처 설정"""
    global _export_dispatcher
    _export_dispatcher = dispatcher


def get_export_dispatcher() -> ExportDispatcher | None:
    """내보내기 디스패처 반환 (None이면 내보내기 생략)"""
    return _export_dispatcher


def set_mailer(mailer: IMailer | None) -> None:
    """메일 발송기 설정"""
    global _mailer
    _mailer = mailer


def get_mailer() -> IMailer | None:
    """메일 발송기 반환"""
    return _mailer


def set_payment_gateway(gateway: IPaymentGateway | None) -> None:
    """결제 게이트웨이 설정"""
    global _payment_gateway
    _payment_gateway = gateway


def get_payment_gateway() -> IPaymentGateway | None:
    """결제 게이트웨이 반환"""
    return _payment_gateway


def is_export_available() -> bool:
    """내보내기/다운로드 기능 사용 가능 여부"""
    return _object_store is not None

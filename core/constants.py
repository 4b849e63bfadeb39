"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → spendwise/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    APP_NAME: str = "Spendwise"
    VERSION: str = "1.0.0"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 5000
    WEB_BASE_URL: str = "http://localhost:5000"

    LOG_LEVEL: str = "INFO"

    # 지출 1건 상한
    MAX_EXPENSE_AMOUNT: Decimal = Decimal("999999999999.99")

    LEADERBOARD_LIMIT: int = 100
    RESET_TOKEN_TTL_SEC: int = 3600  # 1시간

    BCRYPT_ROUNDS: int = 10


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "spendwise_prod.db"
    DEV_DB: Path = DATA_DIR / "spendwise_dev.db"


class ExportFormat:
    """지출 내보내기 파일 형식 (고정값)"""

    HEADER: str = "created_at | description | category | amount"
    SEPARATOR: str = " | "
    KEY_PREFIX: str = "expenses-"
    KEY_SUFFIX: str = ".txt"
    CONTENT_TYPE: str = "text/plain"


class PremiumPlan:
    """프리미엄 요금제 (paise 단위)"""

    AMOUNT: int = 50000
    CURRENCY: str = "INR"
    RECEIPT_PREFIX: str = "receipt_"


class MailjetEndpoints:
    """Mailjet API 엔드포인트

    공식 문서: https://dev.mailjet.com/email/reference/send-emails/
    """

    SEND_URL: str = "https://api.mailjet.com/v3.1/send"


class RazorpayEndpoints:
    """Razorpay API 엔드포인트

    공식 문서: https://razorpay.com/docs/api/orders/
    """

    BASE_URL: str = "https://api.razorpay.com/v1"
    ORDERS_PATH: str = "/orders"

"""
설정 로더

secrets.yaml 로드 및 외부 연동 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths
from core.types import AppMode


@dataclass(frozen=True)
class AwsConfig:
    """S3 내보내기 설정"""

    bucket: str
    region: str
    access_key_id: str | None = None
    secret_access_key: str | None = None


@dataclass(frozen=True)
class MailjetConfig:
    """Mailjet 메일 발송 설정"""

    api_key: str
    api_secret: str
    from_email: str
    from_name: str = Defaults.APP_NAME


@dataclass(frozen=True)
class RazorpayConfig:
    """Razorpay 결제 설정"""

    key_id: str
    key_secret: str


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지.
    aws/mailjet/razorpay가 None이면 해당 기능 비활성화.
    """

    mode: AppMode
    db_path: Path | None = None
    web_base_url: str = Defaults.WEB_BASE_URL
    aws: AwsConfig | None = None
    mailjet: MailjetConfig | None = None
    razorpay: RazorpayConfig | None = None


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def _require(section: dict[str, Any], name: str, key: str) -> str:
    value = section.get(key)
    if not value:
        raise SecretsLoadError(f"secrets.yaml의 {name} 섹션에 '{key}'가 없습니다")
    return str(value)


def _load_aws(data: dict[str, Any]) -> AwsConfig | None:
    section = data.get("aws")
    if not section:
        return None

    return AwsConfig(
        bucket=_require(section, "aws", "bucket"),
        region=_require(section, "aws", "region"),
        access_key_id=section.get("access_key_id") or None,
        secret_access_key=section.get("secret_access_key") or None,
    )


def _load_mailjet(data: dict[str, Any]) -> MailjetConfig | None:
    section = data.get("mailjet")
    if not section:
        return None

    return MailjetConfig(
        api_key=_require(section, "mailjet", "api_key"),
        api_secret=_require(section, "mailjet", "api_secret"),
        from_email=_require(section, "mailjet", "from_email"),
        from_name=section.get("from_name") or Defaults.APP_NAME,
    )


def _load_razorpay(data: dict[str, Any]) -> RazorpayConfig | None:
    section = data.get("razorpay")
    if not section:
        return None

    return RazorpayConfig(
        key_id=_require(section, "razorpay", "key_id"),
        key_secret=_require(section, "razorpay", "key_secret"),
    )


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    # mode 검증
    mode_str = data.get("mode")
    if mode_str is None:
        raise SecretsLoadError("secrets.yaml에 'mode' 필드가 없습니다")

    try:
        mode = AppMode(mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in AppMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    database = data.get("database") or {}
    db_path = Path(database["path"]) if database.get("path") else None

    web_config = data.get("web") or {}
    web_base_url = web_config.get("base_url") or Defaults.WEB_BASE_URL

    return Secrets(
        mode=mode,
        db_path=db_path,
        web_base_url=web_base_url.rstrip("/"),
        aws=_load_aws(data),
        mailjet=_load_mailjet(data),
        razorpay=_load_razorpay(data),
    )


def get_db_path(secrets: Secrets) -> Path:
    """DB 경로 반환

    database.path가 지정되면 우선, 아니면 모드별 기본 경로.

    Args:
        secrets: Secrets 인스턴스

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if secrets.db_path is not None:
        return secrets.db_path
    if secrets.mode == AppMode.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            self._secrets = load_secrets(secrets_path)

    @property
    def mode(self) -> AppMode:
        """현재 실행 모드"""
        assert self._secrets is not None
        return self._secrets.mode

    @property
    def is_development(self) -> bool:
        """개발 모드 여부 (에러 상세 노출 판단)"""
        return self.mode == AppMode.DEVELOPMENT

    @property
    def db_path(self) -> Path:
        """DB 경로"""
        assert self._secrets is not None
        return get_db_path(self._secrets)

    @property
    def web_base_url(self) -> str:
        """비밀번호 재설정 링크 기준 URL"""
        assert self._secrets is not None
        return self._secrets.web_base_url

    @property
    def aws(self) -> AwsConfig | None:
        """S3 설정 (없으면 내보내기 비활성화)"""
        assert self._secrets is not None
        return self._secrets.aws

    @property
    def mailjet(self) -> MailjetConfig | None:
        """Mailjet 설정 (없으면 메일 발송 생략)"""
        assert self._secrets is not None
        return self._secrets.mailjet

    @property
    def razorpay(self) -> RazorpayConfig | None:
        """Razorpay 설정 (없으면 결제 비활성화)"""
        assert self._secrets is not None
        return self._secrets.razorpay

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)

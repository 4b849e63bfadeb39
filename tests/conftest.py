"""
pytest 공통 fixture 정의

임시 디렉토리, secrets.yaml, 스키마가 초기화된 SQLite DB, 사용자 생성 헬퍼.
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings
from core.domain.models import User
from core.storage.user_store import UserStore


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings():
    """테스트 간 Settings 싱글턴 격리"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성 (development, 외부 연동 없음)"""
    db_path = (temp_dir / "spendwise_test.db").as_posix()
    secrets_content = f"""# 테스트용 secrets.yaml
mode: development

database:
  path: "{db_path}"

web:
  base_url: "http://testserver/"
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_production(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성 (production, 모든 연동 포함)"""
    secrets_content = """mode: production

aws:
  bucket: "spendwise-test-bucket"
  region: "ap-south-1"
  access_key_id: "AKIATEST"
  secret_access_key: "secret"

mailjet:
  api_key: "mj_key"
  api_secret: "mj_secret"
  from_email: "no-reply@spendwise.test"

razorpay:
  key_id: "rzp_test_key"
  key_secret: "rzp_test_secret"
"""
    secrets_path = temp_dir / "secrets_prod.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 secrets.yaml 파일 생성"""
    secrets_content = """mode: testnet
"""
    secrets_path = temp_dir / "secrets_invalid.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """테스트 DB 경로"""
    return tmp_path / "spendwise_test.db"


@pytest_asyncio.fixture
async def db(db_path: Path) -> SQLiteAdapter:
    """스키마가 초기화된 DB 연결"""
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


@pytest.fixture
def make_user(db: SQLiteAdapter):
    """사용자 생성 후 커밋하는 헬퍼 반환"""

    async def _make_user(
        email: str = "a@x.com",
        name: str = "Alice",
        password_hash: str = "not-a-real-hash",
    ) -> User:
        user = await UserStore(db).create(
            email=email,
            name=name,
            password_hash=password_hash,
        )
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def fast_bcrypt():
    """테스트 속도를 위해 bcrypt cost 최소화"""
    from core import security

    original = security.hash_password

    async def _hash(password: str, rounds: int = 4) -> str:
        return await original(password, rounds=4)

    with patch("web.services.auth_service.hash_password", _hash):
        yield

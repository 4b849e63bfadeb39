"""Web API 통합 테스트

httpx AsyncClient + ASGITransport로 라우터, 예외 핸들러, 의존성 연결 확인.
"""

import logging
from decimal import Decimal
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.mock.mailer import MockMailer
from adapters.mock.object_store import MockObjectStore
from adapters.mock.payment_gateway import MockPaymentGateway
from core.config.loader import get_settings
from core.export.dispatcher import ExportDispatcher
from core.export.projector import ExportProjector
from core.storage.user_store import UserStore
from web import dependencies
from web.app import app

pytestmark = pytest.mark.usefixtures("fast_bcrypt")


@pytest.fixture
def settings(temp_secrets_file: Path):
    return get_settings(temp_secrets_file)


@pytest.fixture
def object_store() -> MockObjectStore:
    return MockObjectStore()


@pytest.fixture
def mailer() -> MockMailer:
    return MockMailer()


@pytest_asyncio.fixture
async def client(settings, object_store, mailer):
    """스키마 초기화 + Mock 연동이 설정된 테스트 클라이언트"""
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)

    dispatcher = ExportDispatcher(ExportProjector(settings.db_path, object_store))
    dependencies.set_object_store(object_store)
    dependencies.set_export_dispatcher(dispatcher)
    dependencies.set_mailer(mailer)
    dependencies.set_payment_gateway(MockPaymentGateway(key_id="rzp_test_key"))

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    await dispatcher.drain()
    dependencies.set_object_store(None)
    dependencies.set_export_dispatcher(None)
    dependencies.set_mailer(None)
    dependencies.set_payment_gateway(None)


async def _signup(client: httpx.AsyncClient, email: str = "a@x.com", name: str = "Alice") -> None:
    response = await client.post(
        "/api/auth/signup",
        json={"name": name, "email": email, "password": "pw"},
    )
    assert response.status_code == 201


async def _add(client: httpx.AsyncClient, amount: str, email: str = "a@x.com", **extra) -> httpx.Response:
    body = {"amount": amount, "description": "Lunch", "category": "Food", "email": email}
    body.update(extra)
    return await client.post("/api/expenses", json=body)


class TestHealth:
    """헬스 체크"""

    @pytest.mark.asyncio
    async def test_health(self, client: httpx.AsyncClient) -> None:
        """상태/모드/버전"""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "mode": "development", "version": "1.0.0"}


class TestErrorHandlers:
    """공통 예외 응답 형식"""

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: httpx.AsyncClient) -> None:
        """없는 경로"""
        response = await client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}

    @pytest.mark.asyncio
    async def test_validation_error_is_400(self, client: httpx.AsyncClient) -> None:
        """요청 검증 실패는 400"""
        response = await _add(client, "-5")

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_amount_above_limit_is_400(
        self, client: httpx.AsyncClient, object_store: MockObjectStore
    ) -> None:
        """상한 초과 금액은 저장 전에 400"""
        await _signup(client)

        response = await _add(client, "1e27")

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert object_store.objects == {}
        totals = await client.get("/api/leaderboard")
        assert Decimal(totals.json()[0]["total_expenses"]) == Decimal("0")

    @pytest.mark.asyncio
    async def test_unexpected_error_shows_detail_in_development(
        self, client: httpx.AsyncClient, monkeypatch
    ) -> None:
        """예상치 못한 예외는 500, development 모드에서만 상세 노출"""
        from web.services.leaderboard_service import LeaderboardService

        async def boom(self, limit=100):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(LeaderboardService, "get_leaderboard", boom)

        response = await client.get("/api/leaderboard")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Something went wrong!",
            "error": "kaboom",
        }


class TestAuthRoutes:
    """Auth API"""

    @pytest.mark.asyncio
    async def test_signup_and_login(self, client: httpx.AsyncClient) -> None:
        """가입 후 로그인"""
        await _signup(client)

        response = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Login successful",
            "email": "a@x.com",
            "isPremium": False,
        }

    @pytest.mark.asyncio
    async def test_signup_duplicate(self, client: httpx.AsyncClient) -> None:
        """중복 가입"""
        await _signup(client)

        response = await client.post(
            "/api/auth/signup",
            json={"name": "B", "email": "a@x.com", "password": "pw"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already exists"

    @pytest.mark.asyncio
    async def test_signup_missing_fields(self, client: httpx.AsyncClient) -> None:
        """필수 값 누락"""
        response = await client.post("/api/auth/signup", json={"email": "a@x.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    @pytest.mark.asyncio
    async def test_login_failure(self, client: httpx.AsyncClient) -> None:
        """로그인 실패는 401"""
        await _signup(client)

        wrong = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "x"})
        unknown = await client.post("/api/auth/login", json={"email": "n@x.com", "password": "pw"})

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()

    @pytest.mark.asyncio
    async def test_forgot_and_reset(self, client: httpx.AsyncClient, mailer: MockMailer) -> None:
        """재설정 링크 요청 후 재설정"""
        await _signup(client)

        unknown = await client.post("/api/auth/forgot-password", json={"email": "n@x.com"})
        known = await client.post("/api/auth/forgot-password", json={"email": "a@x.com"})

        assert unknown.status_code == known.status_code == 200
        assert unknown.json() == known.json()
        assert len(mailer.messages) == 1
        assert "http://testserver/reset-password/" in mailer.last_message.body

        token = mailer.last_message.body.rsplit("/", 1)[1]
        reset = await client.post(
            "/api/auth/reset-password",
            json={"token": token, "password": "new-pw"},
        )
        assert reset.status_code == 200

        reused = await client.post(
            "/api/auth/reset-password",
            json={"token": token, "password": "other"},
        )
        assert reused.status_code == 400
        assert reused.json()["message"] == "Invalid or expired token"

        login = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "new-pw"})
        assert login.status_code == 200


class TestExpenseRoutes:
    """Expense API"""

    @pytest.mark.asyncio
    async def test_scenario(self, client: httpx.AsyncClient, object_store: MockObjectStore) -> None:
        """25.50 추가 → 10 추가 → 첫 지출 삭제 → 다운로드"""
        await _signup(client)

        first = await _add(client, "25.50")
        assert first.status_code == 201
        body = first.json()
        assert body["message"] == "Expense added successfully"
        assert Decimal(body["expense"]["amount"]) == Decimal("25.50")

        second = await _add(client, "10", description="Bus", category="Travel")
        assert second.status_code == 201

        board = await client.get("/api/leaderboard")
        assert Decimal(board.json()[0]["total_expenses"]) == Decimal("35.50")

        deleted = await client.delete(f"/api/expenses/{body['expense']['id']}")
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Expense deleted successfully"

        board = await client.get("/api/leaderboard")
        assert Decimal(board.json()[0]["total_expenses"]) == Decimal("10.00")

        await dependencies.get_export_dispatcher().drain()

        download = await client.get("/api/expenses/download", params={"email": "a@x.com"})
        assert download.status_code == 200
        assert download.headers["content-type"].startswith("text/plain")
        assert download.headers["content-disposition"] == (
            'attachment; filename="expenses-a@x.com.txt"'
        )
        lines = download.text.split("\n")
        assert lines[0] == "created_at | description | category | amount"
        assert len(lines) == 2
        assert lines[1].endswith(" | Bus | Travel | 10.00")

    @pytest.mark.asyncio
    async def test_owner_email_alias(self, client: httpx.AsyncClient) -> None:
        """ownerEmail 필드명도 허용"""
        await _signup(client)

        response = await client.post(
            "/api/expenses",
            json={"amount": 3, "description": "Tea", "category": "Food", "ownerEmail": "a@x.com"},
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_add_unknown_owner(self, client: httpx.AsyncClient) -> None:
        """없는 사용자"""
        response = await _add(client, "5", email="nobody@x.com")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "User not found"}

    @pytest.mark.asyncio
    async def test_add_succeeds_when_export_store_down(
        self, client: httpx.AsyncClient, object_store: MockObjectStore
    ) -> None:
        """저장소 장애에도 추가 성공"""
        await _signup(client)
        object_store.should_fail = True

        response = await _add(client, "5")

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_delete_unknown(self, client: httpx.AsyncClient) -> None:
        """없는 지출 삭제"""
        response = await client.delete("/api/expenses/exp-missing")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_and_windows(self, client: httpx.AsyncClient) -> None:
        """전체/기간 조회"""
        await _signup(client)
        await _add(client, "1")
        await _add(client, "2")

        listed = await client.get("/api/expenses", params={"email": "a@x.com"})
        assert listed.status_code == 200
        assert len(listed.json()) == 2

        for path in ("daily", "weekly", "monthly", "yearly"):
            response = await client.get(f"/api/expenses/{path}", params={"email": "a@x.com"})
            assert response.status_code == 200
            assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_list_requires_email(self, client: httpx.AsyncClient) -> None:
        """email 누락은 400"""
        response = await client.get("/api/expenses")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_download_errors(self, client: httpx.AsyncClient) -> None:
        """다운로드: email 누락 400, 파일 없음 404"""
        missing_email = await client.get("/api/expenses/download")
        assert missing_email.status_code == 400

        no_file = await client.get("/api/expenses/download", params={"email": "a@x.com"})
        assert no_file.status_code == 404
        assert no_file.json()["message"] == "No file found"

    @pytest.mark.asyncio
    async def test_download_without_store(self, client: httpx.AsyncClient) -> None:
        """저장소 미설정 시 503"""
        dependencies.set_object_store(None)

        response = await client.get("/api/expenses/download", params={"email": "a@x.com"})

        assert response.status_code == 503


class TestPremiumRoutes:
    """Premium API"""

    @pytest.mark.asyncio
    async def test_order(self, client: httpx.AsyncClient) -> None:
        """주문 생성"""
        response = await client.post("/api/premium/order")

        assert response.status_code == 200
        assert response.json() == {
            "orderId": "order_mock0001",
            "amount": 50000,
            "currency": "INR",
            "keyId": "rzp_test_key",
        }

    @pytest.mark.asyncio
    async def test_order_gateway_failure(self, client: httpx.AsyncClient) -> None:
        """게이트웨이 실패는 500"""
        dependencies.set_payment_gateway(MockPaymentGateway(should_fail=True))

        response = await client.post("/api/premium/order")

        assert response.status_code == 500
        assert response.json()["message"] == "Error creating order"

    @pytest.mark.asyncio
    async def test_order_without_gateway(self, client: httpx.AsyncClient) -> None:
        """게이트웨이 미설정 시 503"""
        dependencies.set_payment_gateway(None)

        response = await client.post("/api/premium/order")

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_update_and_status(self, client: httpx.AsyncClient) -> None:
        """프리미엄 전환 및 조회"""
        await _signup(client)

        update = await client.post("/api/premium/update", json={"email": "a@x.com"})
        assert update.status_code == 200

        again = await client.post("/api/premium/update", json={"email": "a@x.com"})
        assert again.status_code == 404
        assert again.json()["message"] == "User not found or already premium"

        status = await client.get("/api/premium/status", params={"email": "a@x.com"})
        assert status.json() == {"isPremium": True}

        missing = await client.get("/api/premium/status")
        assert missing.status_code == 400


class TestLeaderboardRoute:
    """Leaderboard API"""

    @pytest.mark.asyncio
    async def test_ordering(self, client: httpx.AsyncClient) -> None:
        """합계 내림차순"""
        for name, email, amount in (
            ("Five", "five@x.com", "5"),
            ("Fifty", "fifty@x.com", "50"),
            ("Twenty", "twenty@x.com", "20"),
        ):
            await _signup(client, email=email, name=name)
            await _add(client, amount, email=email)

        response = await client.get("/api/leaderboard")

        assert [row["name"] for row in response.json()] == ["Fifty", "Twenty", "Five"]


class TestLifespan:
    """앱 시작/종료 시 연동 구성"""

    @pytest.fixture(autouse=True)
    def clear_dependencies(self):
        yield
        dependencies.set_object_store(None)
        dependencies.set_export_dispatcher(None)
        dependencies.set_mailer(None)
        dependencies.set_payment_gateway(None)

    @pytest.mark.asyncio
    async def test_without_integrations(self, settings) -> None:
        """설정 없는 연동은 비활성화"""
        async with app.router.lifespan_context(app):
            assert dependencies.get_object_store() is None
            assert dependencies.get_export_dispatcher() is None
            assert dependencies.get_mailer() is None
            assert dependencies.get_payment_gateway() is None

        async with SQLiteAdapter(settings.db_path) as db:
            row = await db.fetchone(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='expenses'"
            )
            assert row is not None

    @pytest.mark.asyncio
    async def test_shutdown_drains_and_logs_export_stats(
        self, settings, caplog
    ) -> None:
        """종료 시 내보내기 대기 후 성공/실패 수 기록"""
        object_store = MockObjectStore(delay=0.05)
        dispatcher = ExportDispatcher(ExportProjector(settings.db_path, object_store))
        dependencies.set_object_store(object_store)
        dependencies.set_export_dispatcher(dispatcher)

        with caplog.at_level(logging.INFO, logger="web.app"):
            async with app.router.lifespan_context(app):
                async with SQLiteAdapter(settings.db_path) as db:
                    user = await UserStore(db).create(
                        email="a@x.com", name="Alice", password_hash="hash"
                    )
                    await db.commit()
                dispatcher.dispatch(user)
                assert dispatcher.pending_count == 1

        assert dispatcher.pending_count == 0
        assert object_store.put_count == 1
        assert "내보내기 종료 (성공 1, 실패 0)" in caplog.text

    @pytest.mark.asyncio
    async def test_with_integrations(self, temp_dir: Path) -> None:
        """aws/mailjet/razorpay 설정 시 실제 어댑터 구성"""
        from adapters.mailjet.mailer import MailjetMailer
        from adapters.razorpay.gateway import RazorpayGateway
        from adapters.s3.object_store import S3ObjectStore

        secrets_path = temp_dir / "secrets_full.yaml"
        secrets_path.write_text(
            f"""mode: production
database:
  path: "{(temp_dir / 'full.db').as_posix()}"
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
""",
            encoding="utf-8",
        )
        get_settings(secrets_path)

        async with app.router.lifespan_context(app):
            assert isinstance(dependencies.get_object_store(), S3ObjectStore)
            assert isinstance(dependencies.get_export_dispatcher(), ExportDispatcher)
            assert isinstance(dependencies.get_mailer(), MailjetMailer)
            assert isinstance(dependencies.get_payment_gateway(), RazorpayGateway)
            assert dependencies.is_export_available() is True

"""
Mailjet Mailer 테스트

httpx를 모킹하여 실제 네트워크 호출 없이 테스트.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from adapters.mailjet.mailer import MailjetMailer
from core.constants import MailjetEndpoints


class TestMailjetMailerInit:
    """MailjetMailer 초기화 테스트"""

    def test_init_defaults(self) -> None:
        """기본값 초기화"""
        mailer = MailjetMailer(api_key="k", api_secret="s", from_email="f@x.com")

        assert mailer.from_name == "Spendwise"
        assert mailer.timeout == 10.0

    def test_init_without_credentials_raises(self) -> None:
        """인증 정보 없으면 에러"""
        with pytest.raises(ValueError, match="api_key, api_secret은 필수입니다"):
            MailjetMailer(api_key="", api_secret="s", from_email="f@x.com")


class TestMailjetMailerSend:
    """MailjetMailer.send() 테스트"""

    @pytest.fixture
    def mailer(self) -> MailjetMailer:
        """Mailer 픽스처"""
        return MailjetMailer(
            api_key="k",
            api_secret="s",
            from_email="no-reply@spendwise.test",
            from_name="Spendwise",
        )

    @pytest.mark.asyncio
    async def test_send_success(self, mailer: MailjetMailer) -> None:
        """발송 성공"""
        mock_response = MagicMock()
        mock_response.status_code = 200

        with patch.object(mailer, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.post.return_value = mock_response
            mock_get_client.return_value = mock_client

            result = await mailer.send("a@x.com", "Password Reset", "Reset your password: link")

            assert result is True

            call_args = mock_client.post.call_args
            assert call_args.args[0] == MailjetEndpoints.SEND_URL

            message = call_args.kwargs["json"]["Messages"][0]
            assert message["From"] == {"Email": "no-reply@spendwise.test", "Name": "Spendwise"}
            assert message["To"] == [{"Email": "a@x.com"}]
            assert message["Subject"] == "Password Reset"
            assert message["TextPart"] == "Reset your password: link"

    @pytest.mark.asyncio
    async def test_send_api_error(self, mailer: MailjetMailer) -> None:
        """API 에러 응답"""
        mock_response = MagicMock()
        mock_response.status_code = 401
        mock_response.text = "Unauthorized"

        with patch.object(mailer, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.post.return_value = mock_response
            mock_get_client.return_value = mock_client

            assert await mailer.send("a@x.com", "s", "b") is False

    @pytest.mark.asyncio
    async def test_send_timeout(self, mailer: MailjetMailer) -> None:
        """타임아웃"""
        with patch.object(mailer, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.post.side_effect = httpx.TimeoutException("Timeout")
            mock_get_client.return_value = mock_client

            assert await mailer.send("a@x.com", "s", "b") is False

    @pytest.mark.asyncio
    async def test_send_http_error(self, mailer: MailjetMailer) -> None:
        """HTTP 에러"""
        with patch.object(mailer, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.post.side_effect = httpx.ConnectError("refused")
            mock_get_client.return_value = mock_client

            assert await mailer.send("a@x.com", "s", "b") is False


class TestMailjetMailerClose:
    """MailjetMailer.close() 테스트"""

    @pytest.mark.asyncio
    async def test_close_without_client(self) -> None:
        """클라이언트 없이 종료"""
        mailer = MailjetMailer(api_key="k", api_secret="s", from_email="f@x.com")

        await mailer.close()

        assert mailer._client is None

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self) -> None:
        """컨텍스트 매니저 종료 시 클라이언트 정리"""
        async with MailjetMailer(api_key="k", api_secret="s", from_email="f@x.com") as mailer:
            client = await mailer._get_client()
            assert client.is_closed is False

        assert mailer._client is None

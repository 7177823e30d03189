"""Unit tests for EmailService."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.errors import NotificationError
from app.services.email_service import EmailService


@pytest.fixture
def email_service():
    return EmailService(api_key="re_test", sender="CarBlock <alerts@carblock.app>")


def _patched_client(mock_client):
    patcher = patch("app.services.email_service.httpx.AsyncClient")
    mock_cls = patcher.start()
    mock_cls.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return patcher


class TestEmailServiceSend:
    @pytest.mark.asyncio
    async def test_successful_send(self, email_service):
        mock_client = AsyncMock()
        mock_client.post.return_value = MagicMock(status_code=200)
        patcher = _patched_client(mock_client)
        try:
            await email_service.send(to="o@x.com", subject="Hello", html="<p>hi</p>")
        finally:
            patcher.stop()

        call_args = mock_client.post.call_args
        assert call_args[0][0] == "https://api.resend.com/emails"
        assert call_args[1]["headers"] == {"Authorization": "Bearer re_test"}
        payload = call_args[1]["json"]
        assert payload["to"] == ["o@x.com"]
        assert payload["from"] == "CarBlock <alerts@carblock.app>"
        assert payload["subject"] == "Hello"

    @pytest.mark.asyncio
    async def test_error_status_raises(self, email_service):
        mock_client = AsyncMock()
        mock_client.post.return_value = MagicMock(status_code=422, text="invalid to")
        patcher = _patched_client(mock_client)
        try:
            with pytest.raises(NotificationError, match="422"):
                await email_service.send(to="bad", subject="Hello", html="<p>hi</p>")
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_timeout_raises(self, email_service):
        mock_client = AsyncMock()
        mock_client.post.side_effect = httpx.TimeoutException("timed out")
        patcher = _patched_client(mock_client)
        try:
            with pytest.raises(NotificationError, match="timed out"):
                await email_service.send(to="o@x.com", subject="Hello", html="<p>hi</p>")
        finally:
            patcher.stop()

    @pytest.mark.asyncio
    async def test_connection_error_raises(self, email_service):
        mock_client = AsyncMock()
        mock_client.post.side_effect = httpx.ConnectError("refused")
        patcher = _patched_client(mock_client)
        try:
            with pytest.raises(NotificationError):
                await email_service.send(to="o@x.com", subject="Hello", html="<p>hi</p>")
        finally:
            patcher.stop()

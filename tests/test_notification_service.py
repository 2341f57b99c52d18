import asyncio
from unittest.mock import patch

import httpx

from tests.fakes import PLAYER_STEAM_ID, fund, login
from zvcapi.services.notification_service import (
    COLOR_GOLD,
    COLOR_MAGENTA,
    NotificationService,
    chicken_cross_win_payload,
    slot_win_payload,
)

WEBHOOK_URL = "https://discord.test/api/webhooks/1/abc"


class _RecordingClient:
    """httpx.AsyncClient 대체 (요청 기록 + 지정된 응답/예외)"""

    calls = []
    error = None
    status_code = 204

    def __init__(self, *args, **kwargs):
        self.kwargs = kwargs

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def post(self, url, json=None):
        _RecordingClient.calls.append((url, json))
        if _RecordingClient.error is not None:
            raise _RecordingClient.error
        return httpx.Response(_RecordingClient.status_code, request=httpx.Request("POST", url))


def recording_client(error=None, status_code=204):
    _RecordingClient.calls = []
    _RecordingClient.error = error
    _RecordingClient.status_code = status_code
    return patch("zvcapi.services.notification_service.httpx.AsyncClient", _RecordingClient)


class TestNotificationService:
    """당첨 알림 서비스 테스트"""

    def test_skipped_without_webhook(self, settings):
        service = NotificationService(settings)

        with recording_client():
            sent = asyncio.run(service.dispatch({"content": "hi"}))

        assert sent is False
        assert _RecordingClient.calls == []

    def test_successful_delivery(self, settings):
        settings.GAMBLING_WINS_WEBHOOK_URL = WEBHOOK_URL
        service = NotificationService(settings)
        payload = slot_win_payload("p@steam", 50, ["🍒", "🍒", "🍒"], "JACKPOT", 2500)

        with recording_client():
            sent = asyncio.run(service.dispatch(payload))

        assert sent is True
        assert _RecordingClient.calls == [(WEBHOOK_URL, payload)]

    def test_transport_failure_is_swallowed(self, settings):
        settings.GAMBLING_WINS_WEBHOOK_URL = WEBHOOK_URL
        service = NotificationService(settings)

        with recording_client(error=httpx.ConnectError("connection refused")):
            sent = asyncio.run(service.dispatch({"content": "hi"}))

        assert sent is False

    def test_timeout_is_swallowed(self, settings):
        settings.GAMBLING_WINS_WEBHOOK_URL = WEBHOOK_URL
        service = NotificationService(settings)

        with recording_client(error=httpx.ReadTimeout("slow")):
            sent = asyncio.run(service.dispatch({"content": "hi"}))

        assert sent is False

    def test_error_status_is_swallowed(self, settings):
        settings.GAMBLING_WINS_WEBHOOK_URL = WEBHOOK_URL
        service = NotificationService(settings)

        with recording_client(status_code=500):
            sent = asyncio.run(service.dispatch({"content": "hi"}))

        assert sent is False


class TestWinPayloads:
    """Discord embed payload 테스트"""

    def test_chicken_cross_colour_by_multiplier(self):
        gold = chicken_cross_win_payload("p@steam", 50, 100, 9)["embeds"][0]
        magenta = chicken_cross_win_payload("p@steam", 50, 500, 30)["embeds"][0]

        assert gold["color"] == COLOR_GOLD
        assert magenta["color"] == COLOR_MAGENTA
        assert {field["name"] for field in gold["fields"]} == {
            "Player", "Bet", "Payout", "Steps", "Multiplier"
        }

    def test_slot_embed_fields(self):
        embed = slot_win_payload("p@steam", 50, ["🍋", "🍋", "🍋"], "TRIPLE", 500)["embeds"][0]

        assert embed["color"] == COLOR_GOLD
        assert embed["timestamp"]
        assert {"name": "Result", "value": "🍋 🍋 🍋", "inline": True} in embed["fields"]


class TestNotificationDoesNotAffectSettlement:
    """알림 실패와 무관하게 정산/응답은 성공"""

    def test_jackpot_route_succeeds_when_webhook_fails(
        self, client, db_session, fake_redis, rng, notification_service
    ):
        # Given: 잭팟(🍒🍒🍒), 알림 최소 배팅 이상, webhook은 실패
        notification_service.webhook_url = WEBHOOK_URL
        rng.ints = [10]
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, f"{PLAYER_STEAM_ID}@steam", 100)

        # When
        with recording_client(error=httpx.ConnectError("discord down")):
            response = client.post("/api/v1/slotmachine", json={"bet": 50}, headers=headers)

        # Then
        assert response.status_code == 200
        data = response.json()
        assert data["tier"] == "JACKPOT"
        assert data["payout"] == 2500
        assert data["newBalance"] == 2550
        assert len(_RecordingClient.calls) == 1

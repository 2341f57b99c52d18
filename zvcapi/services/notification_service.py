"""
큰 당첨 알림 (Discord webhook)

정산이 끝난 뒤 BackgroundTasks로 실행됩니다. 어떤 실패도 호출자에게 전파하지 않으며
정산을 되돌리거나 다시 보내지 않습니다.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

import httpx

from zvcapi.config import Settings
import logging

logger = logging.getLogger(__name__)

COLOR_GREEN = 0x00FF00
COLOR_GOLD = 0xFFD700
COLOR_MAGENTA = 0xFF00FF


def _field(name: str, value: Any, inline: bool = True) -> Dict[str, Any]:
    return {"name": name, "value": str(value), "inline": inline}


def _embed_payload(title: str, color: int, fields: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "embeds": [
            {
                "title": title,
                "color": color,
                "fields": fields,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        ]
    }


def slot_win_payload(player: str, bet: int, reels: List[str], tier: str, payout: int) -> Dict[str, Any]:
    return _embed_payload(
        "🎰 Slot Machine Win!",
        COLOR_MAGENTA if tier == "JACKPOT" else COLOR_GOLD,
        [
            _field("Player", player),
            _field("Bet", f"{bet} ZVC"),
            _field("Result", " ".join(reels)),
            _field("Payout", f"{payout} ZVC"),
        ],
    )


def roulette_win_payload(player: str, bet: int, spin_result: int, payout: int) -> Dict[str, Any]:
    return _embed_payload(
        "🎡 Roulette Win!",
        COLOR_GREEN,
        [
            _field("Player", player),
            _field("Bet", f"{bet} ZVC"),
            _field("Result", spin_result),
            _field("Payout", f"{payout} ZVC"),
        ],
    )


def lucky_wheel_win_payload(player: str, bet: int, multiplier: float, payout: int) -> Dict[str, Any]:
    return _embed_payload(
        "🎡 Lucky Wheel MEGA WIN!",
        COLOR_MAGENTA,
        [
            _field("Player", player),
            _field("Bet", f"{bet} ZVC"),
            _field("Multiplier", f"{multiplier}x"),
            _field("Payout", f"{payout} ZVC"),
        ],
    )


def chicken_cross_win_payload(player: str, stake: int, payout: int, step: int) -> Dict[str, Any]:
    return _embed_payload(
        "🐔 Chicken Cross Win!",
        COLOR_MAGENTA if payout >= stake * 10 else COLOR_GOLD,
        [
            _field("Player", player),
            _field("Bet", f"{stake} ZVC"),
            _field("Payout", f"{payout} ZVC"),
            _field("Steps", step),
            _field("Multiplier", f"~{payout / stake:.1f}x"),
        ],
    )


class NotificationService:
    def __init__(self, settings: Settings):
        self.webhook_url = settings.GAMBLING_WINS_WEBHOOK_URL
        self.timeout = settings.NOTIFICATION_TIMEOUT_SECONDS

    async def dispatch(self, payload: Dict[str, Any]) -> bool:
        """webhook 전송 (fire-and-forget, 예외를 던지지 않음)"""
        if not self.webhook_url:
            logger.debug("Win webhook not configured, notification skipped")
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
            return True
        except httpx.TimeoutException:
            logger.error("Win notification timed out")
        except Exception as e:
            logger.error(f"Win notification failed: {e}")
        return False

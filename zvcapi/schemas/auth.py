from enum import Enum
from typing import Optional

from pydantic import BaseModel


class SessionStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


class SessionValidation(BaseModel):
    status: SessionStatus
    player_id: Optional[str] = None


class CurrentPlayer(BaseModel):
    """인증된 요청의 호출자"""

    player_id: str
    is_admin: bool = False

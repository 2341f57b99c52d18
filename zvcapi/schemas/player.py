from typing import Optional

from zvcapi.schemas.common import ApiSchema


class PlayerAccountSchema(ApiSchema):
    id: str
    discord_id: Optional[str] = None
    username: str = ""
    balance: int
    is_active: bool = True

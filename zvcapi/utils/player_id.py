STEAM_SUFFIX = "@steam"


def normalize_player_id(raw: str) -> str:
    """steamId 또는 '<steamId>@steam'을 '<steamId>@steam' 형태로 통일"""
    value = raw.strip()
    if value.endswith(STEAM_SUFFIX):
        return value
    return f"{value}{STEAM_SUFFIX}"

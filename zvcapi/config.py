from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from urllib.parse import quote_plus


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="zvcapi/.env",
        env_file_encoding="utf-8",
        extra="allow",
    )
    # Application
    APP_NAME: str = "ZVC Wager API"
    API_PREFIX: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_HOST: str = ""
    POSTGRES_PORT: int = 5432
    POSTGRES_USERNAME: str = ""
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DATABASE: str = ""
    POSTGRES_SCHEMA: str = "zvc"

    # 전체 URL을 직접 지정하면 POSTGRES_* 조합보다 우선
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    @property
    def database_url(self) -> str:
        """Construct database URL from individual components"""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # URL encode the password to handle special characters
        encoded_password = quote_plus(self.POSTGRES_PASSWORD)
        return f"postgresql+psycopg2://{self.POSTGRES_USERNAME}:{encoded_password}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DATABASE}"

    # Redis (세션 저장소 + reduced luck 플래그)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    SESSION_KEY_PREFIX: str = "session:"
    REDUCED_LUCK_KEY_PREFIX: str = "reduced_luck:"

    # Admin
    ADMIN_PLAYER_IDS: List[str] = []

    # Notification
    GAMBLING_WINS_WEBHOOK_URL: str = ""
    NOTIFICATION_TIMEOUT_SECONDS: float = 10.0

    # Slot machine
    SLOT_MIN_BET: int = 10
    SLOT_MAX_BET: int = 500
    SLOT_NOTIFY_MIN_BET: int = 50

    # Roulette
    ROULETTE_MIN_BET: int = 1
    ROULETTE_MAX_BET: int = 500
    ROULETTE_ZERO_PROBABILITY: float = 0.10  # 0번에 할당되는 확률 질량
    ROULETTE_NOTIFY_MIN_BET: int = 50

    # Lucky wheel
    LUCKYWHEEL_MIN_BET: int = 1
    LUCKYWHEEL_MAX_BET: int = 500
    LUCKYWHEEL_NOTIFY_MIN_BET: int = 100

    # Chicken cross
    CHICKENCROSS_MIN_BET: int = 10
    CHICKENCROSS_MAX_BET: int = 5000
    CHICKENCROSS_NOTIFY_MIN_BET: int = 50

    # Coinflip
    COINFLIP_MIN_BET: int = 1
    COINFLIP_MAX_BET: int = 10000
    COINFLIP_FEE_PERCENT: int = 0


settings = Settings()

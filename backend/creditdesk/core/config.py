from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "creditdesk"
    version: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    APP_DOMAIN: str = "example.com"
    APP_DATABASE_DSN: str = "sqlite:////tmp/creditdesk.db"

    # Upper bound for waiting on the store (lock waits, pool checkout)
    DB_TIMEOUT_SECONDS: float = 5.0

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Free plan granted at provisioning
    FREE_PLAN_NAME: str = "Free Plan"
    FREE_PLAN_MONTHLY_CREDITS: int = 2
    DEFAULT_DISPLAY_NAME: str = "Anonymous"
    DEFAULT_CURRENCY: str = "usd"

    # Dashboard treats a daily plan as this many days of allowance per period
    DAILY_PLAN_PERIOD_DAYS: int = 30

    @property
    def is_sqlite(self) -> bool:
        return self.APP_DATABASE_DSN.startswith("sqlite")


settings = Settings()

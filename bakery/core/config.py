"""
Bakery Pre-Order Service — Configuration
All settings are read from environment variables (or .env file).
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    SERVICE_NAME: str = "bakery-preorder"
    SERVICE_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # ── Redis (session state) ─────────────────────────────────
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ""

    @property
    def redis_url(self) -> str:
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # ── Session ───────────────────────────────────────────────
    SESSION_COOKIE_NAME: str = "bakery_session"
    SESSION_HEADER_NAME: str = "X-Session-Id"
    SESSION_TTL_SECONDS: int = 7200
    SUBMISSION_LOCK_SECONDS: int = 60

    # ── Bakery ────────────────────────────────────────────────
    BAKERY_NAME: str = "Jilicious Treats"
    BAKERY_EMAIL: str = "myjilicioustreats@gmail.com"
    BAKERY_TIMEZONE: str = "America/Los_Angeles"
    PICKUP_HORIZON_DAYS: int = 14
    ORDER_DEADLINE_WEEKDAY: int = 2       # Monday=0 … Wednesday=2
    ORDER_DEADLINE_HOUR: int = 18

    # ── EmailJS ───────────────────────────────────────────────
    EMAILJS_API_URL: str = "https://api.emailjs.com/api/v1.0/email/send"
    EMAILJS_SERVICE_ID: str = ""
    EMAILJS_PUBLIC_KEY: str = ""
    EMAILJS_PRIVATE_KEY: str = ""
    EMAILJS_ORDER_TEMPLATE_ID: str = "template_order"
    EMAILJS_REMINDER_TEMPLATE_ID: str = "template_reminder"
    EMAILJS_BULK_ORDER_TEMPLATE_ID: str = "template_bulk_order"
    EMAILJS_CONTACT_TEMPLATE_ID: str = "template_contact"

    # ── Twilio ────────────────────────────────────────────────
    TWILIO_API_URL: str = "https://api.twilio.com/2010-04-01"
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_PHONE_NUMBER: str = ""
    TWILIO_MESSAGING_SERVICE_SID: str = ""

    # ── Outbound HTTP ─────────────────────────────────────────
    HTTP_TIMEOUT_SECONDS: float = 5.0

    # ── Observability ─────────────────────────────────────────
    METRICS_ENABLED: bool = True
    HEALTH_CHECK_TIMEOUT: float = 5.0


@lru_cache()
def get_settings() -> Settings:
    return Settings()

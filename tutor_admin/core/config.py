from decimal import Decimal
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Console configuration loaded from environment variables."""

    api_url: str = Field("http://localhost:8000/exec", alias="ADMIN_API_URL")
    session_file: Path = Field(Path.home() / ".tutor_admin" / "session", alias="ADMIN_SESSION_FILE")

    reward_per_referral: Decimal = Field(Decimal("200"), alias="REWARD_PER_REFERRAL")
    phone_country_code: str = Field("234", alias="PHONE_COUNTRY_CODE")
    # Used in message templates when the Config sheet has no appURL.
    default_app_url: str = Field("trysabi.netlify.app", alias="DEFAULT_APP_URL")
    currency_symbol: str = Field("₦", alias="CURRENCY_SYMBOL")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


settings = Settings()

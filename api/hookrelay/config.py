from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "HookRelay"
    debug: bool = False
    log_level: str = "INFO"

    # Discord
    discord_webhook_url: str = ""

    # Twilio
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""
    user_tw_phone_number: str = ""
    twilio_api_base: str = "https://api.twilio.com"

    # Outbound HTTP timeout (seconds)
    http_timeout: float = 10

    # Largest accepted inbound body (bytes)
    max_body_size: int = 1024 * 1024

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("discord_webhook_url", "twilio_api_base")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not value:
            return value
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https"):
            raise ValueError("must use http or https protocol")
        if not parsed.netloc:
            raise ValueError("is not a valid URL")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @property
    def discord_configured(self) -> bool:
        return bool(self.discord_webhook_url)

    @property
    def sms_configured(self) -> bool:
        return all(
            (
                self.twilio_account_sid,
                self.twilio_auth_token,
                self.twilio_phone_number,
                self.user_tw_phone_number,
            )
        )


settings = Settings()

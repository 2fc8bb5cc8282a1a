from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    MAIL_API_URL: Optional[str] = None   # unset -> delivery disabled (logged only)
    MAIL_API_KEY: Optional[str] = None
    MAIL_FROM: str = "no-reply@backoffice.local"
    MAIL_TIMEOUT_SECONDS: float = 10.0
    MAIL_RETRY_ATTEMPTS: int = 3

    class Config:
        env_file = ".env"
        extra = "ignore"

mail_settings = Settings()

from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "dev"                # "dev" / "staging" / "prod"
    SERVICE_NAME: str = "backoffice"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    AUTO_CREATE_TABLES: bool = False  # dev convenience, migrations own the schema elsewhere

    class Config:
        env_file = ".env"
        extra = "ignore"

app_config = Settings()

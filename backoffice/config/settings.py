from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    DATABASE_URL: str = "sqlite+aiosqlite:///./backoffice.db"
    DB_ECHO: bool = False
    JWT_SECRET: str = "change-me-access-secret"
    JWT_REFRESH_SECRET: str = "change-me-refresh-secret"
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    PASS_HASH_SCHEME: str = "bcrypt"
    BCRYPT_ROUNDS: int = 10
    CODE_EXPIRE_MINUTES: int = 15

    class Config:
        env_file = ".env"
        extra = "ignore"

config_settings = Settings()

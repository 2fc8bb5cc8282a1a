from backoffice.config.settings import config_settings
from backoffice.common.logging_setup import get_logger

logger = get_logger("backoffice.auth")

ACCESS_TOKEN_EXPIRE_MINUTES = int(config_settings.ACCESS_TOKEN_EXPIRE_MINUTES)
REFRESH_TOKEN_EXPIRE_DAYS = int(config_settings.REFRESH_TOKEN_EXPIRE_DAYS)
CODE_EXPIRE_MINUTES = int(config_settings.CODE_EXPIRE_MINUTES)

MIN_PASSWORD_LENGTH = 8
USERNAME_BASE_LENGTH = 11

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH = "Invalid or expired refresh token"

import re
from backoffice.common.logging_setup import get_logger

logger = get_logger("backoffice.stores")

STORE_URL_RE = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$")
STORE_URL_MIN_LENGTH = 3
STORE_URL_MAX_LENGTH = 63
DEFAULT_CURRENCY = "USD"

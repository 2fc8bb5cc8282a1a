from backoffice.common.logging_setup import get_logger

logger = get_logger("backoffice.common")

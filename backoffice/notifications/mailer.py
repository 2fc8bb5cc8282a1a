import httpx

from backoffice.common.custom_exceptions import UpstreamError
from backoffice.common.logging_setup import get_logger
from backoffice.common.retries import retry_async
from backoffice.config.mail_config import mail_settings

logger = get_logger("backoffice.notifications")


@retry_async(attempts=mail_settings.MAIL_RETRY_ATTEMPTS)
async def _post_message(payload: dict) -> None:
    headers = {}
    if mail_settings.MAIL_API_KEY:
        headers["Authorization"] = f"Bearer {mail_settings.MAIL_API_KEY}"
    async with httpx.AsyncClient(timeout=mail_settings.MAIL_TIMEOUT_SECONDS) as client:
        resp = await client.post(mail_settings.MAIL_API_URL, json=payload, headers=headers)
        resp.raise_for_status()


async def send_email(to: str, subject: str, html: str) -> bool:
    """Deliver one transactional email. Returns False when delivery is disabled."""
    if not mail_settings.MAIL_API_URL:
        logger.info("mail.delivery_disabled", extra={"to": to, "subject": subject})
        return False

    payload = {"from": mail_settings.MAIL_FROM, "to": [to], "subject": subject, "html": html}
    try:
        await _post_message(payload)
    except httpx.HTTPError as e:
        logger.error("mail.delivery_failed", extra={"to": to, "subject": subject, "error": str(e)})
        raise UpstreamError("Failed to send email")

    logger.info("mail.sent", extra={"to": to, "subject": subject})
    return True

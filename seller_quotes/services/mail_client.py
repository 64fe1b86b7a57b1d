import aiohttp
from seller_quotes.core.config import settings
from seller_quotes.core.errors import DownstreamError
from seller_quotes.core.logger import get_logger

logger = get_logger(__name__)


class MailClient:
    """Sends templated mail through the mail service."""

    def __init__(self, url: str = None, account: str = None):
        self.url = url or settings.MAIL_SERVICE_URL
        self.account = account or settings.ACCOUNT

    async def send_mail(self, json_data: dict, template_name: str) -> None:
        request_payload = {
            "templateName": template_name,
            "jsonData": json_data,
        }
        recipient = json_data.get("message", {}).get("to")
        logger.info(f"Sending mail template={template_name} to={recipient}")

        timeout = aiohttp.ClientTimeout(total=settings.REQUEST_TIMEOUT)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(
                self.url,
                params={"an": self.account},
                headers={"VtexIdclientAutCookie": settings.APP_TOKEN},
                json=request_payload,
            ) as response:
                if response.status >= 400:
                    text = await response.text()
                    raise DownstreamError("mail-service", response.status, text)

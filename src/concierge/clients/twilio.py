import httpx
from litestar.types.protocols import Logger

from concierge.clients.base import SmsSender


class TwilioSender(SmsSender):
    """Sends SMS through the Twilio Messages REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        account_sid: str,
        auth_token: str,
        from_number: str,
        logger: Logger,
    ):
        self.client = client
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self.logger = logger

    @staticmethod
    def create_httpx_client(api_url: str = "https://api.twilio.com") -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=api_url, timeout=30.0)

    @property
    def name(self) -> str:
        return "twilio"

    async def send(self, to: str, body: str) -> None:
        response = await self.client.post(
            f"/2010-04-01/Accounts/{self._account_sid}/Messages.json",
            auth=(self._account_sid, self._auth_token),
            data={
                "From": self._from_number,
                "To": to,
                "Body": body,
            },
        )
        response.raise_for_status()
        sid = response.json().get("sid", "unknown")
        self.logger.info(f"SMS message submitted to Twilio (sid: {sid})")

    async def aclose(self) -> None:
        await self.client.aclose()

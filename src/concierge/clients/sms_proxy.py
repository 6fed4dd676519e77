import httpx
import asyncio
import uuid
from litestar.types.protocols import Logger

from concierge.clients.base import SmsSender


def create_sms_proxy_client(url: str) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=url,
        timeout=5.0,
    )


class SmsProxySender(SmsSender):
    """Sends SMS through an sms-proxy instance."""

    def __init__(self, client: httpx.AsyncClient, logger: Logger):
        self.client = client
        self.logger = logger

    @property
    def name(self) -> str:
        return "sms_proxy"

    async def send(self, to: str, body: str) -> None:
        msg_id = str(uuid.uuid4())
        response = await self.client.post(
            "/send",
            json={
                "message": body,
                "phone_numbers": [to],
            },
        )
        response.raise_for_status()
        self.logger.info(f"SMS message submitted to sms-proxy (id: {msg_id})")

    async def aclose(self) -> None:
        await self.client.aclose()


async def register_and_maintain(
    client: httpx.AsyncClient,
    client_id: str,
    webhook_url: str,
    ring: str,
    logger: Logger,
    on_received: bool = False,
    on_delivered: bool = False,
    interval: float = 5.0,
) -> None:
    """Register with sms-proxy and keep the registration alive until cancelled."""
    registration = {
        "id": client_id,
        "webhook_url": webhook_url,
        "ring": ring,
        "sms_received": on_received,
        "sms_delivered": on_delivered,
        "sms_sent": False,
        "sms_failed": False,
    }

    try:
        while True:
            try:
                response = await client.post("/register", json=registration)
                response.raise_for_status()
                logger.debug(f"Registered with sms-proxy as {client_id}")
            except httpx.HTTPError as e:
                logger.error(f"Failed to register with sms-proxy: {e}")

            # sms-proxy expires clients after 60s
            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info(f"Stopping sms-proxy registration for {client_id}")
        raise

from litestar.types.protocols import Logger

from concierge.clients.base import SmsSender


class ConsoleSender(SmsSender):
    """Logs outgoing SMS instead of sending them. Used for local development."""

    def __init__(self, logger: Logger):
        self.logger = logger
        self.sent: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "console"

    async def send(self, to: str, body: str) -> None:
        self.sent.append((to, body))
        self.logger.info(f"[SMS] to {to}: {body}")

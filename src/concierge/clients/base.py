from abc import ABC, abstractmethod


class SmsSender(ABC):
    """Delivers a text message to a phone number."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Transport name for logging."""
        pass

    @abstractmethod
    async def send(self, to: str, body: str) -> None:
        """Send body to the given number. Raises on failure."""
        pass

    async def aclose(self) -> None:
        pass

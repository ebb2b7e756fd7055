from abc import ABC, abstractmethod


class NotificationProvider(ABC):
    """An outbound delivery channel. Implementations report failure, they never raise it."""

    @abstractmethod
    async def send(self, destination: str, subject: str, message: str, **kwargs) -> bool:
        """Deliver ``message`` to ``destination``; True once the channel accepted it."""

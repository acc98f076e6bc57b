from abc import ABC, abstractmethod


class IReservationNotifier(ABC):
    """Port for delivering a rendered message to an external channel"""

    channel: str = 'unknown'

    @abstractmethod
    async def notify(self, *, message: str) -> None:
        """
        Deliver `message`.

        Raises:
            NotifierError: when the channel reports non-success or cannot be reached
        """
        pass

from abc import ABC, abstractmethod


class BookingNotifierPort(ABC):
    @abstractmethod
    def send(self, text: str) -> None:
        """Deliver a message. Raises NotificationDeliveryFailed on failure."""
        raise NotImplementedError

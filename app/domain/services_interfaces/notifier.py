from abc import ABC, abstractmethod


class NotifierInterface(ABC):
    @abstractmethod
    async def notify(self, user_id: str, title: str, message: str) -> None:
        """
        Delivers a notification to a user.

        :param user_id: Recipient
        :param title: Short title, e.g. "Join request accepted"
        :param message: Notification body
        """
        pass

from abc import ABC, abstractmethod

from libs.result import Result


class Mailer(ABC):
    """Delivers a plain-text message with an HTML alternative"""

    @abstractmethod
    async def send(self, to: str, subject: str, text: str, html: str) -> Result[None]:
        """Returns Error(MAIL_DELIVERY_ERROR) on any transport failure"""
        pass

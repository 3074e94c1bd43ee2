"""
Mailer adapters.

SmtpMailer delivers through an SMTP relay; ConsoleMailer logs the message
instead and is meant for local development.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.mailer import Mailer

logger = logging.getLogger(__name__)


class SmtpMailer(Mailer):
    """
    Sends multipart (text + HTML) mail over SMTP.

    smtplib is blocking, so delivery runs in a worker thread and the whole
    exchange is bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: str = "",
        use_ssl: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email or username
        self.from_name = from_name
        self.use_ssl = use_ssl
        self.timeout = timeout

    def build_message(self, to: str, subject: str, text: str, html: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.from_name, self.from_email))
        msg["To"] = to
        msg["Subject"] = subject
        # Clients render the last alternative they support
        msg.attach(MIMEText(text, "plain", "utf-8"))
        msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    def _deliver(self, msg: MIMEMultipart, to: str) -> None:
        if self.use_ssl:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if not self.use_ssl:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.from_email, [to], msg.as_string())

    async def send(self, to: str, subject: str, text: str, html: str) -> Result[None]:
        msg = self.build_message(to, subject, text, html)
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._deliver, msg, to), timeout=self.timeout
            )
        except (smtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to send email to {to}: {e!r}")
            return Return.err(Error("MAIL_DELIVERY_ERROR", "Unable to send email"))

        logger.info(f"Email sent to {to}")
        return Return.ok(None)


class ConsoleMailer(Mailer):
    """Logs outgoing mail instead of delivering it (development only)"""

    async def send(self, to: str, subject: str, text: str, html: str) -> Result[None]:
        logger.info(f"=== EMAIL (console) ===\nTo: {to}\nSubject: {subject}\n\n{text}")
        return Return.ok(None)

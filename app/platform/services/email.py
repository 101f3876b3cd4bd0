import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path
from typing import Optional

import requests
from fastapi import Request
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.platform.config import Settings
from app.platform.logger import get_logger

logger = get_logger("email_service")

template_dir = Path(__file__).resolve().parents[2] / "features" / "waitlist" / "template"

env = Environment(
    loader=FileSystemLoader(str(template_dir)),
    autoescape=select_autoescape(["html"]),
)


class EmailDeliveryError(Exception):
    """Raised when no transport managed to deliver a message."""


class Mailer:
    """
    Outbound mail transport built once from settings.

    Uses the HTTP relay when one is configured and falls back to direct SMTP.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def relay_enabled(self) -> bool:
        return bool(self.settings.EMAIL_RELAY_URL and self.settings.EMAIL_RELAY_API_KEY)

    def send(self, to_email: str, subject: str, text: str, html: Optional[str] = None) -> None:
        if self.relay_enabled:
            try:
                self.send_via_relay(to_email, subject, text, html)
                return
            except EmailDeliveryError as e:
                logger.error(f"Email relay failed: {str(e)}")
                logger.info("Attempting direct SMTP as fallback...")
        else:
            logger.debug("Email relay not configured, using direct SMTP")

        self.send_via_smtp(to_email, subject, text, html)

    def send_via_relay(self, to_email: str, subject: str, text: str, html: Optional[str] = None):
        """Send email via HTTP relay service"""
        payload = {
            "to_email": to_email,
            "subject": subject,
            "body": html or text,
            "text": text,
            "from_address": self.settings.sender_address,
        }

        headers = {
            "X-API-Key": self.settings.EMAIL_RELAY_API_KEY,
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.settings.EMAIL_RELAY_URL,
                json=payload,
                headers=headers,
                timeout=self.settings.EMAIL_RELAY_TIMEOUT,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise EmailDeliveryError("Email relay service timeout") from e
        except requests.exceptions.RequestException as e:
            if e.response is not None:
                logger.error(f"Relay response {e.response.status_code}: {e.response.text}")
            raise EmailDeliveryError(f"Email relay service error: {str(e)}") from e

        logger.info(f"Email sent via relay to {to_email}")

    def build_message(
        self, to_email: str, subject: str, text: str, html: Optional[str] = None
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.settings.MAIL_FROM_NAME, self.settings.sender_address))
        msg["To"] = to_email

        # Clients render the last part they understand, so HTML goes last
        msg.attach(MIMEText(text, "plain", "utf-8"))
        if html:
            msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    def send_via_smtp(self, to_email: str, subject: str, text: str, html: Optional[str] = None):
        """Send email via SMTP; SSL on port 465, optional STARTTLS otherwise"""
        settings = self.settings
        msg = self.build_message(to_email, subject, text, html)

        try:
            if settings.MAIL_PORT == 465:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(settings.MAIL_HOST, settings.MAIL_PORT, context=context) as server:
                    self._deliver(server, to_email, msg)
            else:
                with smtplib.SMTP(settings.MAIL_HOST, settings.MAIL_PORT) as server:
                    server.ehlo()
                    if str(settings.MAIL_ENCRYPTION).upper() in ["TLS", "TRUE"]:
                        server.starttls(context=ssl.create_default_context())
                        server.ehlo()
                    self._deliver(server, to_email, msg)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(f"SMTP delivery to {to_email} failed: {str(e)}") from e

        logger.info(f"Email sent via SMTP to {to_email}")

    def _deliver(self, server: smtplib.SMTP, to_email: str, msg: MIMEMultipart) -> None:
        if self.settings.MAIL_USERNAME and self.settings.MAIL_PASSWORD:
            server.login(self.settings.MAIL_USERNAME, self.settings.MAIL_PASSWORD)
        server.sendmail(self.settings.sender_address, to_email, msg.as_string())


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from app.platform.logger import get_logger
from app.platform.services.email import Mailer, env

logger = get_logger("waitlist_emailer")

WELCOME_SUBJECT = "Welcome to the Legacy | Lasting Loves Waitlist"
GENERIC_GREETING = "there"


@dataclass(frozen=True)
class WelcomeEmail:
    to_email: str
    subject: str
    text: str
    html: str


def render_welcome_email(to_email: str, name: Optional[str], year: Optional[int] = None) -> WelcomeEmail:
    """Build the welcome message. Pure apart from defaulting ``year`` to the current year."""
    greeting_name = name or GENERIC_GREETING
    year = year or datetime.now(timezone.utc).year

    text = (
        f"Hi {greeting_name},\n\n"
        "Thank you for joining the Lasting Loves waitlist. "
        "We'll let you know as soon as we're ready to launch!\n\n"
        "Best,\nThe Lasting Loves Team"
    )
    html = env.get_template("welcome_email.html").render(name=greeting_name, year=year)

    return WelcomeEmail(to_email=to_email, subject=WELCOME_SUBJECT, text=text, html=html)


def send_welcome_email(mailer: Mailer, to_email: str, name: Optional[str]) -> None:
    """Render and dispatch the welcome email. Failures are logged, never raised."""
    try:
        message = render_welcome_email(to_email, name)
        mailer.send(message.to_email, message.subject, message.text, message.html)
    except Exception as e:
        logger.error(f"Email sending failed: {e}")

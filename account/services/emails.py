import logging

import resend
from django.conf import settings

logger = logging.getLogger(__name__)


class EmailService:
    """
    Transactional emails sent through Resend.
    Delivery failures are logged and never raised to the caller.
    """

    @classmethod
    def send(cls, to, subject, html):
        api_key = settings.RESEND_API_KEY
        if not api_key:
            logger.info(f"Resend: no API key configured, skipping '{subject}' for {to}")
            return False

        resend.api_key = api_key
        try:
            resend.Emails.send({
                "from": settings.DEFAULT_FROM_EMAIL,
                "to": to,
                "subject": subject,
                "html": html,
            })
        except Exception as e:
            logger.warning(f"Resend: Sending email failed for {to}: {e}")
            return False

        logger.info(f"Resend: Email sent to {to} successfully!")
        return True

    @classmethod
    def send_welcome(cls, user):
        return cls.send(
            to=user.email,
            subject="Welcome to TaxBuddy!",
            html=f"""
                <p>Hello {user.first_name or 'there'},</p>
                <p>Welcome to TaxBuddy! Your account has been successfully created.</p>
                <p>Next, tell us whether you are an individual or a small business
                so we can estimate your tax correctly.</p>
                <p>Best regards,<br/>TaxBuddy Team</p>
            """
        )

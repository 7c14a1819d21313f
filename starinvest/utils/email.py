# starinvest/utils/email.py

import logging
import time
from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from starinvest.config import (
    SENDGRID_API_KEY,
    SENDER_EMAIL,
    EMAIL_TIMEOUT_SECONDS,
    EMAIL_MAX_ATTEMPTS,
    VERIFICATION_TOKEN_TTL_HOURS,
)

logger = logging.getLogger("uvicorn.error")

VERIFICATION_SUBJECT = "Confirm Your Email - Star Investments"


class EmailSender:
    """Sends HTML mail through SendGrid.

    ``send`` reports delivery as a bool and never raises, so callers decide
    whether a failed send matters.
    """

    def __init__(self, api_key=SENDGRID_API_KEY, sender=SENDER_EMAIL,
                 timeout=EMAIL_TIMEOUT_SECONDS, max_attempts=EMAIL_MAX_ATTEMPTS, backoff=0.5):
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff = backoff

    def _client(self):
        sg = SendGridAPIClient(self.api_key)
        # python_http_client passes this through to urlopen
        sg.client.timeout = self.timeout
        return sg

    def send(self, to_email: str, subject: str, html: str) -> bool:
        if not self.api_key or not self.sender:
            logger.error("SENDGRID_API_KEY and SENDER_EMAIL must be set to send email")
            return False

        message = Mail(
            from_email=self.sender,
            to_emails=to_email,
            subject=subject,
            html_content=html,
        )
        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self._client().send(message)
                logger.info(f"Email sent to {to_email}, status code: {response.status_code}")
                return True
            except HTTPError as e:
                logger.warning(f"Email to {to_email} rejected with {e.status_code} (attempt {attempt}/{self.max_attempts}): {e}")
                # 4xx other than rate limiting will not succeed on a retry
                if 400 <= e.status_code < 500 and e.status_code != 429:
                    break
            except Exception as e:
                logger.warning(f"Email to {to_email} failed (attempt {attempt}/{self.max_attempts}): {e}")

            # Exponential backoff between retries: 0.5s, 1s, 2s...
            if attempt < self.max_attempts:
                time.sleep((2 ** (attempt - 1)) * self.backoff)
        logger.error(f"Giving up on email to {to_email}")
        return False


def build_verification_email(verification_url: str) -> str:
    return f"""
<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background: #667eea; color: white; padding: 30px; text-align: center; }}
    .button {{ display: inline-block; padding: 15px 30px; background: #764ba2; color: white; text-decoration: none; border-radius: 5px; }}
    .footer {{ text-align: center; margin-top: 20px; color: #666; font-size: 12px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>Star Investments</h1></div>
    <h2>Confirm Your Email Address</h2>
    <p>Thank you for registering with Star Investments!</p>
    <p>Please click the button below to verify your email address and activate your account:</p>
    <p><a href="{verification_url}" class="button">Verify Email Address</a></p>
    <p>Or copy and paste this link into your browser:</p>
    <p style="word-break: break-all;">{verification_url}</p>
    <p><strong>Note:</strong> This verification link will expire in {VERIFICATION_TOKEN_TTL_HOURS} hours.</p>
    <p>If you did not create an account with Star Investments, please ignore this email.</p>
    <div class="footer"><p>This is an automated email, please do not reply.</p></div>
  </div>
</body>
</html>
"""

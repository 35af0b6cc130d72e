"""
Email Service using Resend

Handles application lifecycle emails (status updates and refunds).
"""

import asyncio
import logging
from decimal import Decimal
from html import escape

import resend

from migration_api.core.config import settings

logger = logging.getLogger(__name__)

# Initialize Resend with API key
resend.api_key = settings.resend_api_key

EMAIL_FROM = settings.email_from
FRONTEND_URL = settings.frontend_url

_STYLES = """
            body { font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }
            .container { max-width: 600px; margin: 0 auto; padding: 40px 20px; }
            .header { color: #1a365d; margin-bottom: 24px; }
            .status-box { background-color: #f0f9ff; border: 1px solid #bae6fd; padding: 16px; border-radius: 8px; margin: 16px 0; }
            .status-box p { margin: 0; }
            .button { display: inline-block; background-color: #1a365d; color: white; padding: 14px 28px; text-decoration: none; border-radius: 8px; margin: 24px 0; }
            .footer { margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }
"""


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Returns:
        True if email was sent successfully
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": EMAIL_FROM,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Run sync Resend call in thread pool to avoid blocking event loop
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


async def send_application_status_update(
    to_email: str,
    recipient_name: str,
    application_id: int,
    program_name: str,
    title: str,
    message: str,
    portal: str = "member",
) -> bool:
    """Send an application status change email."""
    safe_recipient_name = escape(recipient_name)
    safe_program_name = escape(program_name)
    safe_title = escape(title)
    safe_message = escape(message)

    application_url = f"{FRONTEND_URL}/{portal}/applications/{application_id}"
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{_STYLES}</style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">{safe_title}</h1>

            <p>Hello {safe_recipient_name},</p>

            <p>There is an update on the application for <strong>{safe_program_name}</strong>.</p>

            <div class="status-box">
                <p>{safe_message}</p>
            </div>

            <a href="{application_url}" class="button">View Application</a>

            <div class="footer">
                <p>Best regards,</p>
                <p>The College Migration Team</p>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject=f"{safe_title} - {safe_program_name}",
        html_content=html_content,
    )


async def send_refund_notification(
    to_email: str,
    recipient_name: str,
    application_id: int,
    program_name: str,
    amount: Decimal,
) -> bool:
    """Send notification that an application fee was refunded to the wallet."""
    safe_recipient_name = escape(recipient_name)
    safe_program_name = escape(program_name)

    wallet_url = f"{FRONTEND_URL}/member/wallet"
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{_STYLES}</style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">Application Fee Refunded</h1>

            <p>Hello {safe_recipient_name},</p>

            <p>The application fee for <strong>{safe_program_name}</strong> (application #{application_id}) has been refunded.</p>

            <div class="status-box">
                <p><strong>Amount credited to your wallet:</strong> {amount:.2f}</p>
            </div>

            <a href="{wallet_url}" class="button">View Wallet</a>

            <div class="footer">
                <p>Best regards,</p>
                <p>The College Migration Team</p>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject=f"Refund processed for {safe_program_name}",
        html_content=html_content,
    )

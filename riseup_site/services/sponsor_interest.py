"""Sponsor interest form — validation, reCAPTCHA check, notification emails.

Submissions are not stored. A valid submission sends a confirmation to the
prospect and a notification to the league admin; email failures are logged
and never fail the submission.
"""

import html
import logging
import re

import requests

from riseup_site import config

logger = logging.getLogger(__name__)

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"

_EMAIL_RE = re.compile(r"^[^@\s]{1,64}@[^@\s]+\.[^@\s]+$")
_MAX_FIELD_LEN = 200

FIELDS = ("name", "email", "phone", "company_name")

SUCCESS_MESSAGE = (
    "Thank you for your interest! We'll be in touch within 2-3 business days "
    "to discuss partnership opportunities."
)


def validate_sponsor_interest(form: dict) -> tuple[dict, dict[str, str]]:
    """Normalize the submitted fields. Returns (data, errors by field)."""
    data = {f: (form.get(f) or "").strip()[:_MAX_FIELD_LEN] for f in FIELDS}
    errors = {}

    if len(data["name"]) < 2:
        errors["name"] = "Name must be at least 2 characters"
    if not _EMAIL_RE.match(data["email"]):
        errors["email"] = "Please enter a valid email"
    if len(re.sub(r"\D", "", data["phone"])) < 10:
        errors["phone"] = "Phone number must be at least 10 digits"
    if len(data["company_name"]) < 2:
        errors["company_name"] = "Company name must be at least 2 characters"

    return data, errors


def verify_recaptcha(token: str) -> bool:
    """Check a reCAPTCHA v3 token. Passes when no secret is configured."""
    if not config.RECAPTCHA_SECRET_KEY:
        logger.warning("reCAPTCHA secret key not configured, skipping verification")
        return True

    try:
        resp = requests.post(
            RECAPTCHA_VERIFY_URL,
            data={"secret": config.RECAPTCHA_SECRET_KEY, "response": token},
            timeout=10,
        )
        result = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("reCAPTCHA verification failed: %s", e)
        return False

    return bool(result.get("success")) and result.get("score", 0) >= config.RECAPTCHA_MIN_SCORE


def _send_email_sync(to: str, subject: str, html_body: str, reply_to: str = "") -> str:
    """Send one email via Resend. Returns the Resend message id."""
    import resend

    if not resend.api_key:
        resend.api_key = config.RESEND_API_KEY

    params = {
        "from": f"{config.RESEND_FROM_NAME} <{config.RESEND_FROM_EMAIL}>",
        "to": [to],
        "subject": subject,
        "html": html_body,
    }
    if reply_to:
        params["reply_to"] = reply_to

    result = resend.Emails.send(params)
    return result.get("id", "")


def _send_quietly(label: str, to: str, subject: str, html_body: str, reply_to: str = "") -> str:
    if not config.RESEND_API_KEY:
        logger.warning("Resend not configured, skipping %s", label)
        return ""
    try:
        return _send_email_sync(to, subject, html_body, reply_to=reply_to)
    except Exception:
        logger.exception("Failed to send %s to %s", label, to)
        return ""


def _confirmation_html(data: dict) -> str:
    return (
        "<h2>Thank you for your interest in partnering with RiseUp Youth Football!</h2>"
        f"<p>Hi {html.escape(data['name'])},</p>"
        "<p>We've received your partnership inquiry for "
        f"<strong>{html.escape(data['company_name'])}</strong>.</p>"
        "<p>A member of our team will reach out within 2-3 business days to discuss "
        "partnership opportunities and answer any questions you may have.</p>"
        "<p>Best regards,<br>RiseUp Youth Football</p>"
    )


def _notification_html(data: dict) -> str:
    email = html.escape(data["email"])
    return (
        "<h2>New Partnership Interest Submission</h2>"
        f"<p><strong>Company:</strong> {html.escape(data['company_name'])}</p>"
        f"<p><strong>Contact Name:</strong> {html.escape(data['name'])}</p>"
        f'<p><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>'
        f"<p><strong>Phone:</strong> {html.escape(data['phone'])}</p>"
        "<p><em>Follow up with this potential partner to discuss available packages.</em></p>"
    )


def submit_sponsor_interest(form: dict) -> dict:
    """Validate, verify and send. Returns {success, message, errors, data}."""
    data, errors = validate_sponsor_interest(form)
    if errors:
        return {"success": False, "message": "Please fix the errors below",
                "errors": errors, "data": data}

    token = (form.get("recaptcha_token") or "").strip()
    if token and not verify_recaptcha(token):
        return {"success": False, "message": "reCAPTCHA verification failed. Please try again.",
                "errors": {}, "data": data}

    _send_quietly(
        "prospect confirmation", data["email"],
        "Partner Interest Received - RiseUp Youth Football",
        _confirmation_html(data),
    )
    _send_quietly(
        "admin notification", config.ADMIN_EMAIL,
        f"New Partner Interest: {data['company_name']}",
        _notification_html(data),
        reply_to=data["email"],
    )

    logger.info("Sponsor interest from %s (%s)", data["company_name"], data["email"])
    return {"success": True, "message": SUCCESS_MESSAGE, "errors": {}, "data": {}}

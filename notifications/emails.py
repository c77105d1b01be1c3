from html import escape

from django.conf import settings
from django.core.mail import EmailMultiAlternatives


def _product_name() -> str:
    return getattr(settings, "PRODUCT_NAME", "Capital Bridge Nepal")


def _wrap_html(inner: str) -> str:
    product_name = _product_name()
    support_email = settings.SERVER_EMAIL
    return f"""
<!doctype html>
<html>
  <body style="margin:0;padding:0;background:#f6f7fb;font-family:Arial,sans-serif;">
    <div style="max-width:560px;margin:0 auto;padding:24px;">
      <div style="background:#ffffff;border-radius:14px;padding:24px;border:1px solid #e8e9ee;color:#374151;font-size:14px;line-height:1.5;">
        {inner}
        <hr style="border:none;border-top:1px solid #e5e7eb;margin:18px 0;" />
        <p style="margin:0;color:#6b7280;font-size:12px;">
          Need help? Contact <a href="mailto:{support_email}" style="color:#2563eb;text-decoration:none;">{support_email}</a>
        </p>
      </div>
      <p style="text-align:center;color:#9ca3af;font-size:11px;margin:14px 0 0 0;">
        © {product_name}. All rights reserved.
      </p>
    </div>
  </body>
</html>
"""


def _send(subject: str, to: str, text_body: str, html_body: str) -> int:
    msg = EmailMultiAlternatives(subject, text_body, settings.DEFAULT_FROM_EMAIL, [to])
    msg.attach_alternative(html_body, "text/html")
    # returns number of accepted recipients (usually 1)
    return msg.send(fail_silently=False)


def registration_url(token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/register?token={token}"


def send_onboarding_approval_email(email: str, business_name: str, token: str) -> int:
    product_name = _product_name()
    url = registration_url(token)
    hours = settings.ONBOARDING_TOKEN_EXPIRATION_HOURS

    text_body = f"""Congratulations {business_name}!

Your onboarding request has been approved.
Please complete your registration by opening the link below:

{url}

Note: This link will expire in {hours} hours.

Best regards,
{product_name} Team
"""
    html_body = _wrap_html(f"""
        <h2 style="margin:0 0 12px 0;color:#111827;font-size:20px;">Congratulations {escape(business_name)}!</h2>
        <p>Your onboarding request has been approved.</p>
        <p>Please complete your registration by clicking the link below:</p>
        <p><a href="{url}" style="background-color:#4CAF50;color:white;padding:10px 20px;text-decoration:none;border-radius:5px;display:inline-block;">Complete Registration</a></p>
        <p>Or copy and paste this URL in your browser:</p>
        <p><code>{url}</code></p>
        <p><strong>Note:</strong> This link will expire in {hours} hours.</p>
        <p>Best regards,<br>{product_name} Team</p>
    """)
    return _send(f"Business Onboarding Approved - {product_name}", email, text_body, html_body)


def send_onboarding_rejection_email(email: str, business_name: str, reason: str) -> int:
    product_name = _product_name()
    text_body = f"""Dear {business_name},

Thank you for your interest in {product_name}.
Unfortunately, we cannot approve your onboarding request at this time.

Reason: {reason}

If you have questions, please contact our support team.

Best regards,
{product_name} Team
"""
    html_body = _wrap_html(f"""
        <h2 style="margin:0 0 12px 0;color:#111827;font-size:20px;">Dear {escape(business_name)},</h2>
        <p>Thank you for your interest in {product_name}.</p>
        <p>Unfortunately, we cannot approve your onboarding request at this time.</p>
        <p><strong>Reason:</strong> {escape(reason)}</p>
        <p>If you have questions, please contact our support team.</p>
        <p>Best regards,<br>{product_name} Team</p>
    """)
    return _send(f"Business Onboarding Update - {product_name}", email, text_body, html_body)


def send_interest_notification_email(
    business_email: str,
    business_name: str,
    investor_name: str,
    investor_email: str,
    investor_phone: str,
    message: str | None = None,
) -> int:
    product_name = _product_name()
    dashboard_url = f"{settings.FRONTEND_URL.rstrip('/')}/business/dashboard"

    text_body = f"""New Investment Interest for {business_name}

You have received a new investment inquiry from an interested investor.

Investor Details:
Name: {investor_name}
Email: {investor_email}
Phone: {investor_phone}
{f"Message: {message}" if message else ""}

Next Steps:
1. Review the investor's information
2. Contact them directly using the details provided
3. View all your inquiries in your business dashboard

Best regards,
{product_name} Team
"""
    cell = 'style="padding:10px;border:1px solid #ddd;"'
    message_row = (
        f"<tr><td {cell}><strong>Message:</strong></td><td {cell}>{escape(message)}</td></tr>"
        if message else ""
    )
    html_body = _wrap_html(f"""
        <h2 style="margin:0 0 12px 0;color:#111827;font-size:20px;">New Investment Interest for {escape(business_name)}</h2>
        <p>You have received a new investment inquiry from an interested investor.</p>
        <h3>Investor Details:</h3>
        <table style="border-collapse:collapse;width:100%;max-width:500px;">
          <tr><td {cell}><strong>Name:</strong></td><td {cell}>{escape(investor_name)}</td></tr>
          <tr><td {cell}><strong>Email:</strong></td><td {cell}>{escape(investor_email)}</td></tr>
          <tr><td {cell}><strong>Phone:</strong></td><td {cell}>{escape(investor_phone)}</td></tr>
          {message_row}
        </table>
        <p style="margin-top:20px;"><strong>Next Steps:</strong></p>
        <ol>
          <li>Review the investor's information</li>
          <li>Contact them directly using the details provided</li>
          <li>View all your inquiries in your <a href="{dashboard_url}">business dashboard</a></li>
        </ol>
        <p>Best regards,<br>{product_name} Team</p>
    """)
    return _send(f"New Investment Interest - {investor_name}", business_email, text_body, html_body)


def send_interest_confirmation_email(investor_email: str, investor_name: str, business_name: str) -> int:
    product_name = _product_name()
    text_body = f"""Thank you for your interest, {investor_name}!

Your investment interest in {business_name} has been successfully submitted.

What happens next?
1. The business will receive your contact details
2. They will review your inquiry
3. You can expect to hear from them within 3-5 business days

Please keep an eye on your email and phone for communication from {business_name}.

Note: {product_name} is a platform that connects businesses with investors.
We do not participate in or influence investment decisions.
Please conduct your own due diligence before making any investment commitments.

Best regards,
{product_name} Team
"""
    html_body = _wrap_html(f"""
        <h2 style="margin:0 0 12px 0;color:#111827;font-size:20px;">Thank you for your interest, {escape(investor_name)}!</h2>
        <p>Your investment interest in <strong>{escape(business_name)}</strong> has been successfully submitted.</p>
        <p><strong>What happens next?</strong></p>
        <ol>
          <li>The business will receive your contact details</li>
          <li>They will review your inquiry</li>
          <li>You can expect to hear from them within 3-5 business days</li>
        </ol>
        <p>Please keep an eye on your email and phone for communication from {escape(business_name)}.</p>
        <p style="margin-top:30px;padding:15px;background-color:#f9f9f9;border-left:4px solid #4CAF50;">
          <strong>Note:</strong> {product_name} is a platform that connects businesses with investors.
          We do not participate in or influence investment decisions.
          Please conduct your own due diligence before making any investment commitments.
        </p>
        <p>Best regards,<br>{product_name} Team</p>
    """)
    return _send(f"Interest Submitted - {business_name}", investor_email, text_body, html_body)

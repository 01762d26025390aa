"""HTML/plain-text bodies for the transactional emails.

Templates are plain ``str.format`` strings with inline styles only, so the
markup never contains literal braces.
"""
from datetime import datetime, timezone
from html import escape

BRAND = "Stocker"

_LAYOUT = """\
<html>
  <body style="background-color:#f6f9fc;font-family:-apple-system,'Segoe UI',Roboto,sans-serif;padding:20px 0;">
    <div style="max-width:600px;margin:0 auto;">
      <div style="background:#2d5fe6;padding:40px 20px;text-align:center;border-radius:8px 8px 0 0;">
        <span style="color:#ffffff;font-size:32px;font-weight:700;">{brand}</span>
      </div>
      <div style="background-color:#ffffff;padding:30px;border-radius:0 0 8px 8px;">
        {content}
      </div>
      <p style="color:#8898aa;font-size:12px;text-align:center;margin:20px 0 0;">
        &copy;{year} {brand} Technologies<br />All rights reserved.
      </p>
    </div>
  </body>
</html>
"""

_OTP_CONTENT = """\
<h1 style="color:#2e61e7;font-size:28px;text-align:center;">Verify Your Email</h1>
<p style="font-size:16px;color:#525f7f;text-align:center;">
  Hi there! Please use the following verification code to confirm your email address:
</p>
<div style="border:1px solid #e0e6ed;border-radius:8px;padding:20px;text-align:center;margin:0 auto 30px;">
  <span style="font-size:32px;font-weight:700;color:#2e61e7;letter-spacing:4px;">{otp}</span>
</div>
<p style="color:#525f7f;font-size:14px;text-align:center;">
  This code will expire in {minutes} minutes. If you didn't request this email, please ignore it.
</p>
"""

_OTP_TEXT = (
    "Your {brand} verification code for {email} is {otp}.\n"
    "This code will expire in {minutes} minutes. "
    "If you didn't request this email, please ignore it."
)

_FEATURES = [
    ("Secure Authentication", "OTP-based secure login system to protect your account and data"),
    ("Stock Analysis", "Advanced analytics and insights to make informed decisions"),
    ("Profit Tracking", "Track, manage, and optimize your profit with ease"),
    ("Data Management", "Organize and manage your inventory data efficiently and securely"),
]

_WELCOME_CONTENT = """\
<h1 style="color:#2e61e7;font-size:28px;text-align:center;">Welcome to {brand}!</h1>
<p style="font-size:16px;color:#525f7f;text-align:center;">
  Hi {email}! We're excited to have you join the {brand} community.
  You now have access to a comprehensive stock management platform.
</p>
{features}
<div style="text-align:center;margin:0 0 30px;">
  <a href="{dashboard_url}" style="background-color:#2e61e7;border-radius:8px;color:#ffffff;padding:12px 30px;text-decoration:none;">Get Started Now</a>
</div>
"""

_FEATURE_ITEM = """\
<div style="margin:0 0 20px;text-align:center;">
  <p style="font-size:16px;font-weight:600;color:#2e61e7;margin:0 0 8px;">{title}</p>
  <p style="font-size:14px;color:#525f7f;margin:0;">{description}</p>
</div>
"""

OTP_SUBJECT = "Your Verification Code"
WELCOME_SUBJECT = "Welcome to Dashboard App!"


def _wrap(content: str) -> str:
    return _LAYOUT.format(brand=BRAND, content=content, year=datetime.now(timezone.utc).year)


def render_otp_email(*, otp: str, email: str, minutes: int = 10) -> tuple[str, str, str]:
    """Return (subject, html, text) for the verification-code email."""
    html = _wrap(_OTP_CONTENT.format(otp=escape(otp), minutes=minutes))
    text = _OTP_TEXT.format(brand=BRAND, email=email, otp=otp, minutes=minutes)
    return OTP_SUBJECT, html, text


def render_welcome_email(*, email: str, dashboard_url: str) -> tuple[str, str, str]:
    """Return (subject, html, text) for the post-verification welcome email."""
    features = "".join(
        _FEATURE_ITEM.format(title=escape(title), description=escape(desc))
        for title, desc in _FEATURES
    )
    html = _wrap(
        _WELCOME_CONTENT.format(
            brand=BRAND,
            email=escape(email),
            features=features,
            dashboard_url=escape(dashboard_url, quote=True),
        )
    )
    text = (
        f"Welcome to {BRAND}, {email}!\n"
        + "\n".join(f"- {title}: {desc}" for title, desc in _FEATURES)
        + f"\nGet started: {dashboard_url}"
    )
    return WELCOME_SUBJECT, html, text

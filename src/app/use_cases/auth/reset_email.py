"""
Password reset email bodies (plain text and HTML alternative).
"""

from html import escape

SUBJECT = "Reset Your Password"


def build_reset_url(base_url: str, token: str) -> str:
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}token={token}"


def render_text(reset_url: str, otp: str, valid_minutes: int) -> str:
    return (
        "Hi,\n\n"
        "To reset your password, you can use one of the following methods:\n\n"
        f"1. OTP Code: {otp} (valid for {valid_minutes} minutes)\n"
        f"2. Reset Link: {reset_url}\n\n"
        "If you did not request this, please ignore this email.\n"
    )


def render_html(reset_url: str, otp: str, valid_minutes: int) -> str:
    url = escape(reset_url, quote=True)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>{SUBJECT}</title>
</head>
<body style="font-family: Arial, sans-serif; color: #333;">
  <h2>Password Reset Request</h2>
  <p>Hi,</p>
  <p>To reset your password, use one of the following options.
     <strong>This request is valid for {valid_minutes} minutes.</strong></p>
  <ul>
    <li><strong>OTP Code:</strong> <span style="font-size: 18px; font-weight: bold;">{escape(otp)}</span></li>
    <li><strong>Reset Link:</strong> <a href="{url}">Click here to reset your password</a></li>
  </ul>
  <p>If you did not request this, ignore this email.</p>
</body>
</html>
"""

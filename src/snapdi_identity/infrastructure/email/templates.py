"""Plain-text and HTML bodies for account emails."""

_HTML_WRAPPER = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background-color: #f9fafb; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; padding: 40px; box-shadow: 0 1px 3px rgba(0,0,0,0.1);">
{content}
        <div style="margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
            <p style="color: #9ca3af; font-size: 13px; margin: 0;">The Snapdi team</p>
        </div>
    </div>
</body>
</html>
"""

_BUTTON = (
    '<p style="margin: 30px 0; text-align: center;">'
    '<a href="{link}" style="display: inline-block; padding: 14px 28px; '
    "background-color: #db2777; color: #ffffff !important; text-decoration: none; "
    'border-radius: 6px; font-weight: 600; font-size: 16px;">{label}</a></p>'
)

VERIFICATION_SUBJECT = "Verify your email address - Snapdi"

VERIFICATION_TEXT = """Hello {name},

Thanks for signing up for Snapdi. Please confirm your email address
by opening the link below (valid for {hours} hours):
{link}

If you didn't create an account, you can safely ignore this email.

-- Snapdi
"""

VERIFICATION_HTML = _HTML_WRAPPER.replace(
    "{content}",
    """        <h2 style="color: #111827; margin-top: 0;">Welcome to Snapdi, {name}!</h2>
        <p style="color: #374151; line-height: 1.6;">Please confirm your email address to activate your account.</p>
        """
    + _BUTTON.replace("{label}", "Verify Email")
    + """
        <p style="color: #6b7280; font-size: 14px;">This link expires in {hours} hours.</p>
        <p style="word-break: break-all; color: #db2777; font-size: 14px;">{link}</p>""",
)

WELCOME_SUBJECT = "Welcome to Snapdi"

WELCOME_TEXT = """Hello {name},

Your email address is confirmed and your Snapdi account is ready.
Find a photographer, book a session and share your story.

-- Snapdi
"""

WELCOME_HTML = _HTML_WRAPPER.replace(
    "{content}",
    """        <h2 style="color: #111827; margin-top: 0;">You're all set, {name}!</h2>
        <p style="color: #374151; line-height: 1.6;">Your email address is confirmed and your Snapdi account is ready.</p>
        <p style="color: #374151; line-height: 1.6;">Find a photographer, book a session and share your story.</p>""",
)

PASSWORD_RESET_SUBJECT = "Password Reset Request - Snapdi"

PASSWORD_RESET_TEXT = """Hello {name},

You requested a password reset for your Snapdi account.

Open the link below to choose a new password (valid for {hours} hour(s)):
{link}

If you didn't request this, you can safely ignore this email.

-- Snapdi
"""

PASSWORD_RESET_HTML = _HTML_WRAPPER.replace(
    "{content}",
    """        <h2 style="color: #111827; margin-top: 0;">Password Reset Request</h2>
        <p style="color: #374151; line-height: 1.6;">Hello {name}, you requested a password reset for your Snapdi account.</p>
        """
    + _BUTTON.replace("{label}", "Reset Password")
    + """
        <p style="color: #6b7280; font-size: 14px;">This link is valid for {hours} hour(s).</p>
        <p style="word-break: break-all; color: #db2777; font-size: 14px;">{link}</p>""",
)

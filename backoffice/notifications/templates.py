def verification_email(name: str, code: str, expires_minutes: int) -> tuple[str, str]:
    subject = "Verify your email address"
    html = (
        f"<p>Hi {name},</p>"
        f"<p>Your verification code is <strong>{code}</strong>.</p>"
        f"<p>It expires in {expires_minutes} minutes.</p>"
    )
    return subject, html


def password_reset_email(name: str, code: str, expires_minutes: int) -> tuple[str, str]:
    subject = "Reset your password"
    html = (
        f"<p>Hi {name},</p>"
        f"<p>Use <strong>{code}</strong> to reset your password. "
        f"The code expires in {expires_minutes} minutes.</p>"
        "<p>If you did not request this, you can ignore this email.</p>"
    )
    return subject, html


def welcome_customer_email(first_name: str, store_name: str) -> tuple[str, str]:
    subject = f"Welcome to {store_name}"
    html = f"<p>Hi {first_name},</p><p>Thanks for joining {store_name}. We are glad to have you.</p>"
    return subject, html

import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def as_bool(value) -> bool:
    """YAML booleans pass through; quoted strings such as "false" or "0" are parsed"""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = as_bool(data.get("CORS_ALLOW_CREDENTIALS", True))
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Session tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    TOKEN_EXPIRATION_MS = int(data.get("TOKEN_EXPIRATION_MS", 10 * 60 * 1000))

    # Password reset
    RESET_TOKEN_SECRET = data.get(
        "RESET_TOKEN_SECRET", "dev-reset-secret-change-in-production"
    )
    RESET_TOKEN_EXPIRATION_MS = int(
        data.get("RESET_TOKEN_EXPIRATION_MS", 10 * 60 * 1000)
    )
    RESET_PASSWORD_URL = data.get(
        "RESET_PASSWORD_URL", "http://localhost:3000/page/email-reset-password"
    )
    RESET_MAX_ATTEMPTS = int(data.get("RESET_MAX_ATTEMPTS", 5))  # 0 disables

    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Mail delivery
    MAIL_BACKEND = data.get("MAIL_BACKEND", "console")  # "smtp" or "console"
    SMTP_HOST = data.get("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(data.get("SMTP_PORT", 465))
    SMTP_USE_SSL = as_bool(data.get("SMTP_USE_SSL", True))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_FROM_EMAIL = data.get("SMTP_FROM_EMAIL", "")
    SMTP_FROM_NAME = data.get("SMTP_FROM_NAME", "Auth Service")
    MAIL_TIMEOUT_SECONDS = float(data.get("MAIL_TIMEOUT_SECONDS", 10))

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

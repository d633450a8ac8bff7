import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _list_env(name: str, default: str):
    raw = os.getenv(name) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


# All settings are read from the environment (or a local .env file)
class Config:
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")  # Change this in production!
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = _int_env("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7)  # 7 days
    BCRYPT_ROUNDS = _int_env("BCRYPT_ROUNDS", 12)

    DATABASE_PATH = os.getenv("DATABASE_PATH", "social.sqlite3")

    CORS_ORIGINS = _list_env("CORS_ORIGINS", "*")
    ENABLE_HSTS = os.getenv("ENABLE_HSTS", "false").lower() in ("1", "true", "yes")
    # Only honour X-Forwarded-For when the app sits behind a proxy that sets it
    TRUST_PROXY = os.getenv("TRUST_PROXY", "false").lower() in ("1", "true", "yes")
    MAX_BODY_BYTES = _int_env("MAX_BODY_BYTES", 10 * 1024 * 1024)  # 10MB

    RATE_LIMIT_MAX = _int_env("RATE_LIMIT_MAX", 100)
    RATE_LIMIT_WINDOW_SECONDS = _int_env("RATE_LIMIT_WINDOW_SECONDS", 15 * 60)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT = _int_env("PORT", 3000)

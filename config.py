import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./iam.db")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    REDIS_TIMEOUT_SECONDS = float(data.get("REDIS_TIMEOUT_SECONDS", 5))
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRATION_SECONDS = int(data.get("JWT_EXPIRATION_SECONDS", 72 * 3600))
    JWT_ISSUER = data.get("JWT_ISSUER", "iam_service")
    # AES-256 needs exactly 32 bytes
    ENCRYPTION_KEY = data.get("ENCRYPTION_KEY", "dev-encryption-key-32-bytes-long")

    COOKIE_DOMAIN = data.get("COOKIE_DOMAIN", None)
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", True))
    COOKIE_HTTP_ONLY = bool(data.get("COOKIE_HTTP_ONLY", True))
    COOKIE_SAME_SITE = data.get("COOKIE_SAME_SITE", "Strict")

    EVENT_WORKERS = int(data.get("EVENT_WORKERS", 2))
    EVENT_QUEUE_SIZE = int(data.get("EVENT_QUEUE_SIZE", 1000))

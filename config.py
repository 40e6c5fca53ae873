import os
import yaml

from todo_service.adapter.services.token_cleanup_worker import (
    DEVELOPMENT_INTERVAL_SECONDS,
    PRODUCTION_INTERVAL_SECONDS,
)

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
    STORAGE_BACKEND = data.get("STORAGE_BACKEND", "file")
    DATA_DIR = data.get("DATA_DIR", os.path.join(ROOT_PATH, "data"))
    SEED_DEMO_USER = bool(data.get("SEED_DEMO_USER", False))
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "console")
    SMTP_HOST = data.get("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_FROM_EMAIL = data.get("SMTP_FROM_EMAIL", "noreply@todoapp.com")
    CLEANUP_INTERVAL_SECONDS = int(
        data.get(
            "CLEANUP_INTERVAL_SECONDS",
            PRODUCTION_INTERVAL_SECONDS
            if ENVIRONMENT == "production"
            else DEVELOPMENT_INTERVAL_SECONDS,
        )
    )

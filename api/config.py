"""
Environment-aware configuration.
Everything here is read once at startup: the document path, the signing secret
and the token lifetimes never change while the process runs.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    # The JSON document holding chirps, users and refresh tokens
    DB_PATH = os.getenv("DB_PATH", "database.json")
    # Session token (JWT) signing
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me-0123456789abcdef")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chirpy")
    JWT_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("JWT_TOKEN_EXPIRES_SECONDS", "360")))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))
    # Shared key for the payment provider's webhook
    POLKA_KEY = os.getenv("POLKA_KEY", "")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
    POLKA_KEY = "test-polka-key"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test).
    """
    if name:
        name = name.lower()
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig

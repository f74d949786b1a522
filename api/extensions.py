"""
Per-app core objects. create_app() builds one FileStorage and the repositories
over it; blueprints reach them through these accessors, never through module globals.
"""
from flask import current_app

from api.config import BaseConfig
from models.file_storage import FileStorage
from models.repositories import ChirpRepository, TokenRepository, UserRepository
from services.auth_service import AuthService

PREFIX = "chirpy."


def init_core(app):
    storage = FileStorage(app.config["DB_PATH"])
    storage.reload()

    users = UserRepository(storage)
    tokens = TokenRepository(storage)
    app.extensions[PREFIX + "storage"] = storage
    app.extensions[PREFIX + "chirps"] = ChirpRepository(storage)
    app.extensions[PREFIX + "users"] = users
    app.extensions[PREFIX + "tokens"] = tokens
    app.extensions[PREFIX + "auth"] = AuthService(
        users,
        tokens,
        secret=app.config["JWT_SECRET"],
        issuer=app.config.get("JWT_ISSUER", BaseConfig.JWT_ISSUER),
        session_ttl=app.config.get("JWT_TOKEN_EXPIRES", BaseConfig.JWT_TOKEN_EXPIRES),
        refresh_ttl=app.config.get("REFRESH_TOKEN_EXPIRES", BaseConfig.REFRESH_TOKEN_EXPIRES),
    )


def chirp_repo() -> ChirpRepository:
    return current_app.extensions[PREFIX + "chirps"]


def user_repo() -> UserRepository:
    return current_app.extensions[PREFIX + "users"]


def auth_service() -> AuthService:
    return current_app.extensions[PREFIX + "auth"]

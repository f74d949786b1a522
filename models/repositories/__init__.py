from models.repositories.chirps import ChirpRepository
from models.repositories.tokens import TokenRepository
from models.repositories.users import UserRepository

__all__ = ["ChirpRepository", "TokenRepository", "UserRepository"]

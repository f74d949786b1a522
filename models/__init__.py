from models.chirp import Chirp
from models.document import Document
from models.refresh_token import RefreshToken
from models.user import User

__all__ = ["Chirp", "Document", "RefreshToken", "User"]

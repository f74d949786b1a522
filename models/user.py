from models.base_model import BaseModel


class User(BaseModel):
    __fields__ = ("id", "email", "password_hash", "is_upgraded")

    id: int = None
    email: str = None
    password_hash: str = None
    is_upgraded: bool = False

from models.base_model import BaseModel


class Chirp(BaseModel):
    __fields__ = ("id", "body", "author_id")

    id: int = None
    body: str = ""
    author_id: int = None

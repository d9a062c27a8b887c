import uuid, datetime as dt
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from .base import db, Model


def gen_uuid() -> str:
    return str(uuid.uuid4())


class User(Model, UserMixin):
    __tablename__ = "users"

    user_id = db.Column(db.String, primary_key=True, default=gen_uuid)
    email = db.Column(db.String, unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(120), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    profile_pic = db.Column(db.Text, nullable=False, default="")
    created_at = db.Column(db.DateTime, nullable=False, default=dt.datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def get_id(self):
        return self.user_id

    def to_public(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "profile_pic": self.profile_pic or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

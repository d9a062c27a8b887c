import datetime as dt

from .base import db, Model
from .users import gen_uuid


class Message(Model):
    __tablename__ = "messages"

    message_id = db.Column(db.String, primary_key=True, default=gen_uuid)
    sender_id = db.Column(db.String, db.ForeignKey("users.user_id"), nullable=False, index=True)
    receiver_id = db.Column(db.String, db.ForeignKey("users.user_id"), nullable=False, index=True)
    text = db.Column(db.Text)
    image = db.Column(db.Text)  # data URL or hosted URL
    created_at = db.Column(db.DateTime, nullable=False, default=dt.datetime.utcnow, index=True)

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "sender_id": self.sender_id,
            "receiver_id": self.receiver_id,
            "text": self.text,
            "image": self.image,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

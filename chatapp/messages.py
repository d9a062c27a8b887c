"""Messaging API: sidebar contacts, conversation history and send."""
from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify
from flask_login import login_required, current_user
from sqlalchemy import and_, or_

from .models import db, User, Message
from .realtime import notify_new_message
from .schemas import SendMessageSchema, request_payload

messages_bp = Blueprint("messages_bp", __name__)


@messages_bp.get("/users")
@login_required
def users_for_sidebar():
    me = current_user.get_id()
    users = (
        User.query.filter(User.user_id != me)
        .order_by(User.full_name.asc())
        .all()
    )
    return jsonify([u.to_public() for u in users]), 200


@messages_bp.get("/<user_id>")
@login_required
def get_messages(user_id: str):
    me = current_user.get_id()
    rows = (
        Message.query.filter(
            or_(
                and_(Message.sender_id == me, Message.receiver_id == user_id),
                and_(Message.sender_id == user_id, Message.receiver_id == me),
            )
        )
        .order_by(Message.created_at.asc())
        .all()
    )
    return jsonify([m.to_dict() for m in rows]), 200


@messages_bp.post("/send/<user_id>")
@login_required
def send_message(user_id: str):
    payload = SendMessageSchema.model_validate(request_payload())

    if db.session.get(User, user_id) is None:
        abort(404, description="User not found")

    msg = Message(
        sender_id=current_user.get_id(),
        receiver_id=user_id,
        text=payload.text,
        image=payload.image,
    )
    db.session.add(msg)
    db.session.commit()

    out = msg.to_dict()
    delivered = notify_new_message(out)
    if delivered:
        current_app.logger.debug("newMessage %s delivered to %d socket(s)", msg.message_id, delivered)
    return jsonify(out), 201

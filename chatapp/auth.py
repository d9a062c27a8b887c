from flask import Blueprint, jsonify
from flask_login import LoginManager, login_user, logout_user, login_required, current_user

from .models import db, User
from .schemas import SignupSchema, LoginSchema, ProfileUpdateSchema, request_payload

auth_bp = Blueprint("auth_bp", __name__)
login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):  # called by Flask-Login using session cookie
    return db.session.get(User, user_id)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify(error="Unauthorized - No valid session"), 401


@auth_bp.route("/signup", methods=["POST"])
def signup():
    data = SignupSchema.model_validate(request_payload())

    if User.query.filter_by(email=data.email).first():
        return jsonify(error="Email already exists"), 400

    u = User(email=data.email, full_name=data.full_name)
    u.set_password(data.password)
    db.session.add(u)
    db.session.commit()
    login_user(u, remember=True)
    return jsonify(u.to_public()), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = LoginSchema.model_validate(request_payload())

    u = User.query.filter_by(email=data.email).first()
    if not u or not u.check_password(data.password):
        return jsonify(error="Invalid credentials"), 400

    login_user(u, remember=True)
    return jsonify(u.to_public()), 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    logout_user()
    return jsonify(message="Logged out successfully"), 200


@auth_bp.route("/check", methods=["GET"])
@login_required
def check():
    return jsonify(current_user.to_public()), 200


@auth_bp.route("/update-profile", methods=["PUT"])
@login_required
def update_profile():
    data = ProfileUpdateSchema.model_validate(request_payload())
    u = current_user

    if data.profile_pic is not None:
        u.profile_pic = data.profile_pic
    if data.full_name is not None:
        u.full_name = data.full_name
    db.session.commit()

    return jsonify(u.to_public()), 200

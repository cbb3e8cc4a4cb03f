# expense_backend/auth.py
import hmac
import logging
import uuid

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, decode_token, get_jwt, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from .errors import ConfigurationError, InvalidTokenError, MissingTokenError, json_body
from .models import Identity, User

logger = logging.getLogger("expense-backend.auth")

auth_bp = Blueprint("auth", __name__)


class SessionManager:
    """Issues and verifies stateless bearer tokens.

    Tokens are JWTs signed with ``JWT_SECRET_KEY``; ``sub`` holds the user id
    and the ``email`` claim the address given at signup. Both operations need
    an active Flask app context (the JWT settings live on the app).
    """

    def __init__(self, store):
        self.store = store

    def issue(self, email):
        """Register a fresh identity and return ``(token, user_id)``.

        The signing secret is checked first and the identity is written to the
        store before anything is signed, so a failed registration raises
        StoreError and no token exists.
        """
        if not (current_app.config.get("JWT_SECRET_KEY") or current_app.config.get("SECRET_KEY")):
            raise ConfigurationError("Token signing is not configured")

        user = User(id=str(uuid.uuid4()), email=email)
        self.store.insert_user(user.id, user.email)
        token = create_access_token(identity=user.id, additional_claims={"email": user.email})
        return token, user.id

    def verify(self, token):
        if not token:
            raise MissingTokenError()
        try:
            claims = decode_token(token)
        except ExpiredSignatureError as e:
            raise InvalidTokenError("Token expired") from e
        except (JWTExtendedException, PyJWTError) as e:
            raise InvalidTokenError() from e
        return Identity(id=claims["sub"], email=claims.get("email"))


def current_identity():
    """Identity of the request already authenticated by @jwt_required()."""
    return Identity(id=get_jwt_identity(), email=get_jwt().get("email"))


def is_elevated_request():
    """True when the request carries the configured admin key."""
    expected = current_app.config.get("ADMIN_API_KEY")
    supplied = request.headers.get("X-Admin-Key")
    if not expected or not supplied:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8"))


def register_jwt_callbacks(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": MissingTokenError.message}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"error": InvalidTokenError.message}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token expired"}), 401


# ---------------- Routes ----------------
@auth_bp.route("/signup", methods=["POST"])
def signup():
    email = json_body().get("email")

    sessions = current_app.extensions["session_manager"]
    token, user_id = sessions.issue(email)
    logger.info(f"New user signed up: {user_id}")
    return jsonify({"token": token, "userId": user_id})

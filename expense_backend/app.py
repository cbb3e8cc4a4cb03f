# expense_backend/app.py

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager

from .auth import SessionManager, auth_bp, register_jwt_callbacks
from .categorizer import CATEGORIES, GeminiClassifier
from .config import Config, cors_origins, token_lifetime
from .db import SupabaseStore
from .errors import register_error_handlers
from .expenses import expenses_bp
from .workflow import ExpenseWorkflow

logger = logging.getLogger("expense-backend")


def configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------- Flask App Factory ----------------
def create_app(config_overrides=None, store=None, classifier=None):
    """Build the app; ``store`` and ``classifier`` default to the hosted services."""
    app = Flask(__name__)

    # Configuration
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = token_lifetime(app.config["TOKEN_EXPIRES_HOURS"])
    configure_logging(app.config["LOG_LEVEL"])

    jwt = JWTManager(app)
    register_jwt_callbacks(jwt)

    # CORS
    CORS(app, resources={r"/*": {"origins": cors_origins(app.config["CORS_ORIGINS"])}})

    # Collaborators
    if store is None:
        store = SupabaseStore(app.config["SUPABASE_URL"], app.config["SUPABASE_SERVICE_ROLE_KEY"])
    if classifier is None:
        classifier = GeminiClassifier(app.config["GOOGLE_API_KEY"], app.config["GEMINI_MODEL"])
    app.extensions["session_manager"] = SessionManager(store)
    app.extensions["expense_workflow"] = ExpenseWorkflow(
        store,
        classifier,
        currency=app.config["EXPENSE_CURRENCY"],
        currency_symbol=app.config["EXPENSE_CURRENCY_SYMBOL"],
    )

    # Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(expenses_bp)
    register_error_handlers(app)

    # ---------------- System Endpoints ----------------
    @app.route('/')
    def root():
        return "Expense backend running", 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route('/test')
    def test_route():
        return "Backend Working Perfectly ✔", 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"})

    @app.route('/categories')
    def categories():
        return jsonify({"categories": list(CATEGORIES)})

    logger.info("Expense backend initialized")
    return app


def main():
    app = create_app()
    app.run(host='0.0.0.0', port=app.config["PORT"], debug=False)


# ---------------- Run ----------------
if __name__ == '__main__':
    main()

"""
Main Flask Application
Online Learning Readiness Survey API
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from config.settings import settings as default_settings
from services.database import MemoryQuotaStore, MongoQuotaStore
from services.mail_service import create_mail_transport
from api.survey import survey_bp
from api.survey.usecases import build_dispatcher

logger = logging.getLogger(__name__)


def create_quota_store(settings):
    """Quota store selected by QUOTA_BACKEND"""
    if settings.QUOTA_BACKEND == "memory":
        logger.warning("Using in-memory quota store, the count is lost on restart")
        return MemoryQuotaStore()
    return MongoQuotaStore(
        settings.QUOTA_COLLECTION,
        settings.QUOTA_DOCUMENT_ID,
        max_retries=settings.QUOTA_MAX_RETRIES
    )


def create_app(settings=None, quota_store=None, mail_transport=None, clock=None) -> Flask:
    settings = settings or default_settings
    settings.validate()

    # ============== APP INITIALIZATION ==============
    app = Flask(__name__)
    CORS(app, origins=settings.CORS_ORIGINS)

    store = quota_store if quota_store is not None else create_quota_store(settings)
    transport = mail_transport if mail_transport is not None else create_mail_transport(settings)
    dispatcher_kwargs = {"clock": clock} if clock else {}
    app.extensions["survey_dispatcher"] = build_dispatcher(settings, store, transport, **dispatcher_kwargs)

    # ============== REGISTER BLUEPRINTS ==============
    app.register_blueprint(survey_bp, url_prefix='/api/v1/survey')

    # ============== ROUTES ==============
    @app.route('/', methods=['GET'])
    def home():
        """API information"""
        return jsonify({
            "message": settings.APP_NAME,
            "version": settings.VERSION,
            "features": [
                "Online Learning Self-Assessment scoring",
                "Professor and student email notifications",
                f"Daily email limit ({settings.QUOTA_DAILY_LIMIT}/day)"
            ]
        })

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"status": "healthy"})

    # ============== ERROR HANDLERS ==============
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Endpoint not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            "error": "Method not allowed",
            "message": "Please check the HTTP method (GET/POST) for this endpoint"
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500

    return app


# ============== APPLICATION STARTUP ==============
if __name__ == '__main__':
    logging.basicConfig(
        level=default_settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    if default_settings.is_development():
        default_settings.log_config_summary()

    app = create_app()

    logger.info(f"Server starting on http://{default_settings.HOST}:{default_settings.PORT}")
    app.run(debug=default_settings.DEBUG, host=default_settings.HOST, port=default_settings.PORT)

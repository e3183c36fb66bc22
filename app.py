import logging

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config
from routes.mask_router import mask_bp
from routes.page_router import page_bp
from routes.remove_router import remove_bp
from routes.signed_router import signed_bp


def configure_logging(level):
    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger().setLevel(str(level).upper())


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)
    app.config["MAX_CONTENT_LENGTH"] = int(app.config["MAX_UPLOAD_MB"]) * 1024 * 1024

    configure_logging(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={
            r"/api/*": {
                "origins": app.config["CORS_ORIGINS"]
            }
        }
    )

    app.register_blueprint(page_bp)
    app.register_blueprint(remove_bp)
    app.register_blueprint(mask_bp)
    app.register_blueprint(signed_bp)

    @app.errorhandler(413)
    def too_large(e):
        return jsonify({"error": "Image too large"}), 413

    @app.route("/health")
    def health():
        return jsonify({
            "status": "ok",
            "backend": app.config["REMOVAL_BACKEND"]
        })

    app.logger.info("removal backend = %s", app.config["REMOVAL_BACKEND"])
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(port=app.config["PORT"], host=app.config["HOST"])

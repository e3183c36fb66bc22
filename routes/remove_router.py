import logging

from flask import Blueprint, current_app, jsonify, request

from services.removal_service import BACKENDS, remove_watermark
from utils.errors import InvalidImageError
from utils.images import has_allowed_extension, read_image

logger = logging.getLogger(__name__)

remove_bp = Blueprint("remove", __name__, url_prefix="/api/remove-watermark")


@remove_bp.route("", methods=["POST"])
def remove():
    image = request.files.get("image")
    if image is None or image.filename == "":
        return jsonify({"error": "No image provided"}), 400

    backend = request.form.get("backend") or current_app.config["REMOVAL_BACKEND"]
    if backend not in BACKENDS:
        return jsonify({"error": f"Unknown backend: {backend}"}), 400

    if not has_allowed_extension(image.filename):
        return jsonify({"error": "Please upload a valid image file"}), 400

    image_bytes = image.read()
    try:
        read_image(image_bytes)
    except InvalidImageError:
        return jsonify({"error": "Please upload a valid image file"}), 400

    mask = request.files.get("mask")
    mask_bytes = mask.read() if mask is not None else None

    try:
        output = remove_watermark(image_bytes, mask_bytes or None, backend, current_app.config)
    except InvalidImageError as e:
        logger.info("rejected mask: %s", e)
        return jsonify({"error": "Invalid mask image"}), 400
    except Exception:
        logger.exception("Error processing image with backend %s", backend)
        return jsonify({"error": "Failed to process image"}), 500

    return jsonify({
        "image": output,
        "backend": backend
    }), 200

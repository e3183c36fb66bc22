from io import BytesIO

from flask import Blueprint, jsonify, request, send_file

from utils.errors import InvalidImageError
from utils.images import DEFAULT_BRUSH, center_mask, png_bytes, stroke_mask

mask_bp = Blueprint("mask", __name__, url_prefix="/api/mask")

MAX_SIDE = 8192


def _dimension(value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    if number <= 0 or number > MAX_SIDE:
        return None
    return number


def _png_response(img):
    return send_file(
        BytesIO(png_bytes(img)),
        mimetype="image/png",
        download_name="mask.png",
    )


@mask_bp.route("", methods=["POST"])
def draw_mask():
    """
    브라우저 캔버스에서 그린 stroke 좌표로 마스크 PNG 생성
    body: {"width", "height", "strokes": [[[x, y], ...], ...], "brush_size"}
    """
    data = request.get_json(silent=True) or {}

    width = _dimension(data.get("width"))
    height = _dimension(data.get("height"))
    if width is None or height is None:
        return jsonify({"error": "width and height must be positive integers"}), 400

    strokes = data.get("strokes") or []
    if not isinstance(strokes, list):
        return jsonify({"error": "strokes must be a list"}), 400

    try:
        brush = int(data.get("brush_size", DEFAULT_BRUSH))
        mask = stroke_mask(width, height, strokes, brush)
    except (TypeError, ValueError, InvalidImageError) as e:
        return jsonify({"error": str(e)}), 400

    return _png_response(mask)


@mask_bp.route("/default", methods=["GET"])
def default_mask():
    width = _dimension(request.args.get("width"))
    height = _dimension(request.args.get("height"))
    if width is None or height is None:
        return jsonify({"error": "width and height must be positive integers"}), 400

    return _png_response(center_mask(width, height))

from flask import Blueprint, current_app, jsonify, request

from utils import s3

signed_bp = Blueprint("signed", __name__, url_prefix="/api/signed-url")


@signed_bp.route("", methods=["POST"])
def get_signed_url():
    data = request.get_json(silent=True) or {}
    url = data.get("url")

    if not url:
        return jsonify({"error": "url is required"}), 400

    # URL에서 key 추출
    # 예: https://bucket.s3.amazonaws.com/uploads/xxx.png → uploads/xxx.png
    try:
        key = s3.extract_s3_key(url)
    except ValueError:
        return jsonify({"error": "Invalid S3 URL format"}), 400

    config = current_app.config
    bucket = config.get("S3_BUCKET")
    if not bucket:
        return jsonify({"error": "S3_BUCKET is not set"}), 500

    try:
        client = s3.get_client(config.get("AWS_REGION"))
        signed_url = s3.create_presigned(client, bucket, key, config.get("SIGNED_URL_EXPIRES"))
        return jsonify({"signed_url": signed_url})

    except Exception as e:
        return jsonify({"error": str(e)}), 500

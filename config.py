import os
from dotenv import load_dotenv

load_dotenv()


def _list(value):
    return [v.strip() for v in (value or "").split(",") if v.strip()]


class Config:
    # 기본 백엔드: inpaint | enhance | upload | simulate
    REMOVAL_BACKEND = os.environ.get("REMOVAL_BACKEND", "inpaint")

    # Replicate
    REPLICATE_API_TOKEN = os.environ.get("REPLICATE_API_TOKEN")
    INPAINT_MODEL = os.environ.get(
        "INPAINT_MODEL", "stability-ai/stable-diffusion-inpainting:db21e45e8b"
    )
    INPAINT_PROMPT = os.environ.get(
        "INPAINT_PROMPT", "remove watermark, realistic background"
    )
    INPAINT_STEPS = int(os.environ.get("INPAINT_STEPS", "30"))
    INPAINT_GUIDANCE = float(os.environ.get("INPAINT_GUIDANCE", "7.5"))

    # Cloudinary
    CLOUDINARY_URL = os.environ.get("CLOUDINARY_URL")
    CLOUDINARY_CLOUD_NAME = os.environ.get("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.environ.get("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.environ.get("CLOUDINARY_API_SECRET")
    ENHANCE_FOLDER = os.environ.get("ENHANCE_FOLDER", "unmark")

    # S3
    S3_BUCKET = os.environ.get("S3_BUCKET")
    AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
    S3_PREFIX = os.environ.get("S3_PREFIX", "uploads")
    RESULT_PREFIX = os.environ.get("RESULT_PREFIX", "output")
    PERSIST_RESULTS = os.environ.get("PERSIST_RESULTS", "false").lower() in ("1", "true", "yes")
    SIGNED_URL_EXPIRES = int(os.environ.get("SIGNED_URL_EXPIRES", "3600"))

    SIMULATE_DELAY = float(os.environ.get("SIMULATE_DELAY", "2.0"))

    MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", "10"))

    CORS_ORIGINS = _list(
        os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174")
    )
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "5001"))

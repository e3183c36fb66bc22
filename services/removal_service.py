import logging

import requests

from services.enhance_service import enhance_image
from services.inpaint_service import inpaint_image
from services.simulate_service import simulate_removal
from services.upload_service import upload_image
from utils import s3
from utils.errors import RemovalError, UnmarkError

logger = logging.getLogger(__name__)

BACKENDS = {
    "inpaint": inpaint_image,
    "enhance": enhance_image,
    "upload": upload_image,
    "simulate": simulate_removal,
}

# 외부 서비스 결과 URL은 만료되므로 S3로 옮길 대상
HOSTED_BACKENDS = {"inpaint", "enhance"}


class UnknownBackendError(UnmarkError):
    pass


def download_result(url, timeout=60):
    res = requests.get(url, timeout=timeout)
    res.raise_for_status()
    content_type = res.headers.get("Content-Type", "image/png").split(";", 1)[0]
    return res.content, content_type


def persist_result(url, config):
    """Copy a hosted result into our bucket and return a presigned link."""
    bucket = config.get("S3_BUCKET")
    if not bucket:
        raise RemovalError("PERSIST_RESULTS needs S3_BUCKET")

    data, content_type = download_result(url)
    ext = content_type.rsplit("/", 1)[-1] if content_type.startswith("image/") else "png"
    if ext == "jpeg":
        ext = "jpg"
    key = s3.make_key(config.get("RESULT_PREFIX") or "output", ext)

    client = s3.get_client(config.get("AWS_REGION"))
    s3.upload_bytes(client, bucket, key, data, content_type)
    logger.info("persisted result %s -> %s", url, key)
    return s3.create_presigned(client, bucket, key, config.get("SIGNED_URL_EXPIRES") or 3600)


def remove_watermark(image_bytes: bytes, mask_bytes, backend: str, config) -> str:
    try:
        handler = BACKENDS[backend]
    except KeyError:
        raise UnknownBackendError(f"Unknown backend: {backend}") from None

    output = handler(image_bytes, mask_bytes, config)

    if config.get("PERSIST_RESULTS") and backend in HOSTED_BACKENDS:
        output = persist_result(output, config)
    return output

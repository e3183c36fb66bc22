import logging

from utils import s3
from utils.errors import RemovalError
from utils.images import guess_mime

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def upload_image(image_bytes: bytes, mask_bytes, config) -> str:
    """Store the image as-is and return a presigned link to it."""
    bucket = config.get("S3_BUCKET")
    if not bucket:
        raise RemovalError("S3_BUCKET is not set")

    region = config.get("AWS_REGION")
    mime = guess_mime(image_bytes)
    key = s3.make_key(config.get("S3_PREFIX") or "uploads", EXTENSIONS.get(mime, "png"))

    client = s3.get_client(region)
    s3.upload_bytes(client, bucket, key, image_bytes, mime)
    logger.info("stored upload at %s", s3.object_url(bucket, region, key))

    return s3.create_presigned(client, bucket, key, config.get("SIGNED_URL_EXPIRES") or 3600)

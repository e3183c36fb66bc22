import logging

import replicate

from utils.errors import RemovalError
from utils.images import (
    center_mask,
    guess_mime,
    image_size,
    normalize_mask,
    png_bytes,
    to_data_url,
)

logger = logging.getLogger(__name__)


def build_mask(image_bytes, mask_bytes):
    width, height = image_size(image_bytes)
    if mask_bytes:
        mask = normalize_mask(mask_bytes, (width, height))
    else:
        # 마스크 없으면 가운데 영역 사용
        mask = center_mask(width, height)
    return png_bytes(mask)


def output_url(output) -> str:
    """Replicate returns a list of outputs, one output, or file objects."""
    if isinstance(output, (list, tuple)):
        if not output:
            raise RemovalError("inpainting model returned no output")
        output = output[0]
    if output is None:
        raise RemovalError("inpainting model returned no output")

    url = getattr(output, "url", output)
    url = str(url)
    if not url:
        raise RemovalError("inpainting model returned an empty url")
    return url


def inpaint_image(image_bytes: bytes, mask_bytes, config) -> str:
    token = config.get("REPLICATE_API_TOKEN")
    if not token:
        raise RemovalError("REPLICATE_API_TOKEN is not set")

    mask_png = build_mask(image_bytes, mask_bytes)

    inputs = {
        "image": to_data_url(image_bytes, guess_mime(image_bytes)),
        "mask": to_data_url(mask_png),
        "prompt": config.get("INPAINT_PROMPT"),
        "num_inference_steps": config.get("INPAINT_STEPS"),
        "guidance_scale": config.get("INPAINT_GUIDANCE"),
    }

    model = config.get("INPAINT_MODEL")
    logger.info("running inpainting model %s", model)

    client = replicate.Client(api_token=token)
    output = client.run(model, input=inputs)
    return output_url(output)

import logging
import time

from utils.images import guess_mime, to_data_url

logger = logging.getLogger(__name__)


def simulate_removal(image_bytes: bytes, mask_bytes, config) -> str:
    """Pretend to process: wait, then hand the original image back."""
    delay = float(config.get("SIMULATE_DELAY") or 0)
    mime = guess_mime(image_bytes)
    logger.info("simulating removal (%.1fs delay)", delay)
    if delay > 0:
        time.sleep(delay)
    return to_data_url(image_bytes, mime)

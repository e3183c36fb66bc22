import base64
import io

from PIL import Image, ImageDraw, UnidentifiedImageError

from utils.errors import InvalidImageError

ALLOWED_FORMATS = {"JPEG", "PNG", "WEBP"}
ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".webp"}

DEFAULT_SIZE = (512, 512)
DEFAULT_BRUSH = 30

# 기본 마스크: 가운데 60% 영역
CENTER_RATIO = 0.6
CENTER_OFFSET = 0.2


def read_image(data: bytes) -> Image.Image:
    if not data:
        raise InvalidImageError("empty image")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageError(f"cannot decode image: {e}") from e
    except Image.DecompressionBombError as e:
        raise InvalidImageError(f"image too large to decode: {e}") from e

    if img.format not in ALLOWED_FORMATS:
        raise InvalidImageError(f"unsupported image format: {img.format}")
    return img


def image_size(data: bytes):
    img = read_image(data)
    width, height = img.size
    return width or DEFAULT_SIZE[0], height or DEFAULT_SIZE[1]


def guess_mime(data: bytes) -> str:
    img = read_image(data)
    return Image.MIME.get(img.format, "image/png")


def has_allowed_extension(filename: str) -> bool:
    if not filename or "." not in filename:
        return False
    ext = "." + filename.rsplit(".", 1)[1].lower()
    return ext in ALLOWED_EXTENSIONS


def to_data_url(data: bytes, mime: str = "image/png") -> str:
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime};base64,{encoded}"


def png_bytes(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def center_mask(width: int, height: int) -> Image.Image:
    """Default mask when the user did not paint one.

    Black RGB canvas with a white rectangle covering the middle 60% of
    each dimension.
    """
    mask = Image.new("RGB", (width, height), (0, 0, 0))
    box_w = int(width * CENTER_RATIO)
    box_h = int(height * CENTER_RATIO)
    if box_w == 0 or box_h == 0:
        return mask

    left = int(width * CENTER_OFFSET)
    top = int(height * CENTER_OFFSET)
    box = Image.new("RGB", (box_w, box_h), (255, 255, 255))
    mask.paste(box, (left, top))
    return mask


def _point(raw):
    try:
        x, y = raw
        return float(x), float(y)
    except (TypeError, ValueError) as e:
        raise InvalidImageError(f"invalid stroke point: {raw!r}") from e


def stroke_mask(width: int, height: int, strokes, brush_size: int = DEFAULT_BRUSH) -> Image.Image:
    """Render freehand strokes as white round-capped lines on black.

    ``strokes`` is a list of strokes, each a list of ``[x, y]`` points in
    canvas pixels. A stroke with a single point paints one dot.
    """
    if brush_size <= 0:
        raise InvalidImageError("brush_size must be positive")

    mask = Image.new("RGB", (width, height), (0, 0, 0))
    draw = ImageDraw.Draw(mask)
    radius = brush_size / 2

    for stroke in strokes or []:
        points = [_point(p) for p in stroke]
        if len(points) > 1:
            draw.line(points, fill=(255, 255, 255), width=brush_size, joint="curve")
        # round caps / joins
        for x, y in points:
            draw.ellipse(
                (x - radius, y - radius, x + radius, y + radius),
                fill=(255, 255, 255),
            )
    return mask


def normalize_mask(mask_bytes: bytes, size) -> Image.Image:
    """Turn a client mask into a black/white RGB image of ``size``.

    A canvas export keeps strokes in the alpha channel, so alpha wins
    when it carries anything other than full opacity. Otherwise every
    non-black pixel is part of the mask.
    """
    mask = read_image(mask_bytes)

    signal = None
    if mask.mode in ("RGBA", "LA") or (mask.mode == "P" and "transparency" in mask.info):
        alpha = mask.convert("RGBA").getchannel("A")
        if alpha.getextrema() != (255, 255):
            signal = alpha
    if signal is None:
        signal = mask.convert("L")

    binary = signal.point(lambda p: 255 if p > 0 else 0)
    if binary.size != tuple(size):
        binary = binary.resize(tuple(size), Image.NEAREST)
    return binary.convert("RGB")

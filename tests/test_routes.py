import io
import logging

from PIL import Image

from app import create_app
from services import removal_service
from utils import s3
from utils.images import png_bytes


def _post_image(client, data, **fields):
    form = dict(fields)
    if data is not None:
        form["image"] = (io.BytesIO(data), "photo.png")
    return client.post("/api/remove-watermark", data=form, content_type="multipart/form-data")


def test_remove_requires_image(client):
    res = _post_image(client, None)
    assert res.status_code == 400
    assert res.get_json() == {"error": "No image provided"}


def test_remove_rejects_non_image(client):
    res = _post_image(client, b"not an image")
    assert res.status_code == 400
    assert res.get_json() == {"error": "Please upload a valid image file"}


def test_remove_rejects_unknown_backend(client, make_image):
    res = _post_image(client, make_image(), backend="magic")
    assert res.status_code == 400
    assert res.get_json() == {"error": "Unknown backend: magic"}


def test_remove_with_default_backend(client, make_image):
    image = make_image()
    res = _post_image(client, image)

    assert res.status_code == 200
    body = res.get_json()
    assert body["backend"] == "simulate"
    assert body["image"].startswith("data:image/png;base64,")


def test_remove_passes_mask_to_backend(client, monkeypatch, make_image):
    seen = {}

    def fake_inpaint(image_bytes, mask_bytes, config):
        seen["image"] = image_bytes
        seen["mask"] = mask_bytes
        seen["model"] = config["INPAINT_MODEL"]
        return "https://replicate.delivery/out.png"

    monkeypatch.setitem(removal_service.BACKENDS, "inpaint", fake_inpaint)
    image = make_image()
    mask = png_bytes(Image.new("RGB", (64, 48)))

    res = client.post(
        "/api/remove-watermark",
        data={
            "image": (io.BytesIO(image), "photo.png"),
            "mask": (io.BytesIO(mask), "mask.png"),
            "backend": "inpaint",
        },
        content_type="multipart/form-data",
    )

    assert res.status_code == 200
    assert res.get_json() == {"image": "https://replicate.delivery/out.png", "backend": "inpaint"}
    assert seen["image"] == image
    assert seen["mask"] == mask


def test_remove_rejects_bad_mask(client, make_image):
    res = client.post(
        "/api/remove-watermark",
        data={
            "image": (io.BytesIO(make_image()), "photo.png"),
            "mask": (io.BytesIO(b"garbage"), "mask.png"),
            "backend": "inpaint",
        },
        content_type="multipart/form-data",
    )
    assert res.status_code == 400
    assert res.get_json() == {"error": "Invalid mask image"}


def test_remove_backend_failure_is_500(client, monkeypatch, make_image):
    def boom(image_bytes, mask_bytes, config):
        raise RuntimeError("replicate is down")

    monkeypatch.setitem(removal_service.BACKENDS, "enhance", boom)

    res = _post_image(client, make_image(), backend="enhance")

    assert res.status_code == 500
    assert res.get_json() == {"error": "Failed to process image"}


def test_remove_too_large(app, make_image):
    app.config["MAX_CONTENT_LENGTH"] = 100
    res = _post_image(app.test_client(), make_image(size=(256, 256)))
    assert res.status_code == 413
    assert res.get_json() == {"error": "Image too large"}


def test_draw_mask(client):
    res = client.post("/api/mask", json={
        "width": 40,
        "height": 30,
        "strokes": [[[20, 15]]],
        "brush_size": 10,
    })

    assert res.status_code == 200
    assert res.mimetype == "image/png"
    mask = Image.open(io.BytesIO(res.data))
    assert mask.size == (40, 30)
    assert mask.getpixel((20, 15)) == (255, 255, 255)
    assert mask.getpixel((0, 0)) == (0, 0, 0)


def test_draw_mask_validation(client):
    assert client.post("/api/mask", json={"width": 0, "height": 10}).status_code == 400
    assert client.post("/api/mask", json={"height": 10}).status_code == 400
    assert client.post("/api/mask", json={"width": 10, "height": 10, "strokes": "x"}).status_code == 400
    res = client.post("/api/mask", json={"width": 10, "height": 10, "strokes": [[["a", "b"]]]})
    assert res.status_code == 400


def test_default_mask(client):
    res = client.get("/api/mask/default?width=100&height=50")
    assert res.status_code == 200
    mask = Image.open(io.BytesIO(res.data))
    assert mask.size == (100, 50)
    assert mask.getpixel((50, 25)) == (255, 255, 255)
    assert mask.getpixel((5, 5)) == (0, 0, 0)

    assert client.get("/api/mask/default?width=abc&height=50").status_code == 400


class FakeS3:
    def generate_presigned_url(self, ClientMethod, Params, ExpiresIn):
        return f"https://signed.example/{Params['Bucket']}/{Params['Key']}?e={ExpiresIn}"


def test_signed_url(client, monkeypatch):
    monkeypatch.setattr(s3.boto3, "client", lambda *args, **kwargs: FakeS3())

    res = client.post("/api/signed-url", json={
        "url": "https://unmark-test.s3.us-east-1.amazonaws.com/uploads/a.png"
    })

    assert res.status_code == 200
    assert res.get_json() == {"signed_url": "https://signed.example/unmark-test/uploads/a.png?e=3600"}


def test_signed_url_errors(client, app, monkeypatch):
    assert client.post("/api/signed-url", json={}).status_code == 400

    res = client.post("/api/signed-url", json={"url": "https://example.com/a.png"})
    assert res.status_code == 400
    assert res.get_json() == {"error": "Invalid S3 URL format"}

    class Broken:
        def generate_presigned_url(self, **kwargs):
            raise RuntimeError("no credentials")

    monkeypatch.setattr(s3.boto3, "client", lambda *args, **kwargs: Broken())
    res = client.post("/api/signed-url", json={"url": "https://b.s3.amazonaws.com/k.png"})
    assert res.status_code == 500
    assert res.get_json() == {"error": "no credentials"}

    app.config["S3_BUCKET"] = None
    res = client.post("/api/signed-url", json={"url": "https://b.s3.amazonaws.com/k.png"})
    assert res.status_code == 500


def test_pages(client):
    home = client.get("/")
    assert home.status_code == 200
    assert b"AI Watermark Remover" in home.data
    assert b'value="simulate" selected' in home.data

    pricing = client.get("/pricing")
    assert pricing.status_code == 200
    assert b"Pricing Plans" in pricing.data
    assert b"Unlimited" in pricing.data
    assert b"Get Started" in pricing.data


def test_pricing_json_and_health(client):
    tiers = client.get("/api/pricing").get_json()["tiers"]
    assert [t["name"] for t in tiers] == ["Free", "Pro", "Unlimited"]
    assert tiers[1]["price"] == "$5"

    assert client.get("/health").get_json() == {"status": "ok", "backend": "simulate"}


def test_remove_rejects_disallowed_extension(client, make_image):
    res = client.post(
        "/api/remove-watermark",
        data={"image": (io.BytesIO(make_image()), "photo.gif")},
        content_type="multipart/form-data",
    )
    assert res.status_code == 400
    assert res.get_json() == {"error": "Please upload a valid image file"}


def test_remove_rejects_decompression_bomb(client, monkeypatch, make_image):
    image = make_image(size=(64, 48))
    # anything over 2x this many pixels is refused by Pillow
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    res = _post_image(client, image)

    assert res.status_code == 400
    assert res.get_json() == {"error": "Please upload a valid image file"}


def test_remove_uses_first_image_field(client, monkeypatch, make_image):
    seen = []
    monkeypatch.setitem(
        removal_service.BACKENDS, "simulate",
        lambda image_bytes, mask_bytes, config: seen.append(image_bytes) or "ok",
    )
    first = make_image(color=(1, 2, 3))
    second = make_image(color=(4, 5, 6))

    res = client.post(
        "/api/remove-watermark",
        data={"image": [(io.BytesIO(first), "a.png"), (io.BytesIO(second), "b.png")]},
        content_type="multipart/form-data",
    )

    assert res.status_code == 200
    assert seen == [first]


def test_cors_only_for_configured_origins():
    app = create_app({"TESTING": True, "CORS_ORIGINS": ["http://allowed.test"]})
    client = app.test_client()

    allowed = client.get("/api/pricing", headers={"Origin": "http://allowed.test"})
    assert allowed.headers.get("Access-Control-Allow-Origin") == "http://allowed.test"

    denied = client.get("/api/pricing", headers={"Origin": "http://evil.test"})
    assert "Access-Control-Allow-Origin" not in denied.headers


def test_lowercase_log_level():
    root = logging.getLogger()
    previous = root.level
    try:
        create_app({"TESTING": True, "LOG_LEVEL": "debug"})
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)

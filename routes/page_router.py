from flask import Blueprint, current_app, jsonify, render_template

from services.removal_service import BACKENDS
from utils.pricing import FEATURED_TIER, PRICING_TIERS

page_bp = Blueprint("page", __name__)


@page_bp.route("/")
def home():
    return render_template(
        "index.html",
        backend=current_app.config["REMOVAL_BACKEND"],
        backends=sorted(BACKENDS),
    )


@page_bp.route("/pricing")
def pricing():
    return render_template("pricing.html", tiers=PRICING_TIERS, featured=FEATURED_TIER)


@page_bp.get("/api/pricing")
def pricing_json():
    return jsonify({"tiers": PRICING_TIERS})

# routes_business.py
"""The business profile: a single document, used as the invoice letterhead."""

import logging

from lalitha.core.schemas import BUSINESS_PROFILE
from lalitha.core.security import session_required
from lalitha.core.storage import get_storage
from lalitha.api.dashboard import bp
from lalitha.api.envelope import guarded, json_body, ok

log = logging.getLogger("lalitha.api")

COLLECTION = "business_profile"


@bp.route("/api/business")
@guarded("Failed to fetch business profile")
def api_business():
    profile = get_storage().get_singleton(COLLECTION)
    return ok(BUSINESS_PROFILE.to_wire(profile) if profile else None)


@bp.route("/api/business", methods=["PUT"])
@guarded("Failed to update business profile")
@session_required
def api_business_update():
    """Replace the whole profile. Creates it on first save."""
    values = BUSINESS_PROFILE.from_wire(json_body())
    profile = get_storage().put_singleton(COLLECTION, values)
    log.info("Business profile saved: %s", profile.get("business_name", ""))
    return ok(BUSINESS_PROFILE.to_wire(profile))

# routes_upload.py
"""Product image upload. Everything is validated before the image host is contacted."""

import logging

from flask import request

from lalitha.core.errors import ApiError, BadRequest
from lalitha.core.security import rate_limit, session_required
from lalitha.integrations import image_host
from lalitha.api.dashboard import bp
from lalitha.api.envelope import guarded, ok

log = logging.getLogger("lalitha.api")


@bp.route("/api/upload", methods=["POST"])
@rate_limit("upload")
@guarded("Failed to upload file")
@session_required
def api_upload():
    """Multipart field `file` → {"url": "https://..."}."""
    f = request.files.get("file")
    if f is None or not f.filename:
        raise BadRequest("No file provided")
    if not (f.mimetype or "").startswith("image/"):
        raise BadRequest("File must be an image")
    data = f.read(image_host.MAX_UPLOAD_BYTES + 1)
    if len(data) > image_host.MAX_UPLOAD_BYTES:
        raise BadRequest("File size must be less than 10MB")
    if not image_host.is_configured():
        raise ApiError("Cloudinary is not configured", 500)

    try:
        url = image_host.upload_image(data, f.filename, f.mimetype)
    except image_host.UploadError as e:
        raise ApiError(str(e), 502)
    return ok({"url": url})

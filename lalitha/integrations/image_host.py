"""
image_host.py — Cloudinary Image Upload Adapter

Product photos go to Cloudinary through the official SDK and land under the
`lalitha_garments` folder; the caller gets the HTTPS URL back.

The SDK is configured per call from the secrets registry, so credentials set
or rotated in the environment are picked up without a restart.

Dependencies: cloudinary
Env vars: CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET
"""

import re
import time
import base64
import logging

import cloudinary
import cloudinary.uploader
import cloudinary.exceptions

from lalitha.core.secrets import get_key

log = logging.getLogger("lalitha.image_host")

FOLDER = "lalitha_garments"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
TIMEOUT = 30


class UploadError(Exception):
    """The image host refused or failed the upload."""


def _credentials() -> dict:
    return {
        "cloud_name": get_key("cloudinary_cloud_name"),
        "api_key": get_key("cloudinary_api_key"),
        "api_secret": get_key("cloudinary_api_secret"),
    }


def is_configured() -> bool:
    """Check if all three Cloudinary credentials are set."""
    return all(_credentials().values())


def sanitize_filename(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9.-]", "_", name or "") or "upload"


def public_id_for(filename: str, now_ms: int = None) -> str:
    """lalitha_garments/<epoch ms>_<sanitized name>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{FOLDER}/{now_ms}_{sanitize_filename(filename)}"


def data_uri(data: bytes, content_type: str) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def upload_image(data: bytes, filename: str, content_type: str) -> str:
    """Upload one image and return its secure_url.

    Raises UploadError when the SDK reports a failure or the answer has no URL.
    """
    cloudinary.config(secure=True, **_credentials())
    try:
        result = cloudinary.uploader.upload(
            data_uri(data, content_type),
            public_id=public_id_for(filename),
            resource_type="image",
            overwrite=False,
            invalidate=True,
            timeout=TIMEOUT,
        )
    except cloudinary.exceptions.Error as e:
        log.error("Cloudinary upload failed: %s", e)
        raise UploadError(str(e) or "Failed to upload file") from e

    url = (result or {}).get("secure_url")
    if not url:
        raise UploadError("Upload response did not include a URL")
    log.info("Uploaded %s → %s (%d bytes)", filename, url, len(data))
    return url

"""multipart/form-data bodies for the WordPress media endpoint."""

import secrets
from urllib.parse import unquote, urlparse

BOUNDARY_PREFIX = "----WebKitFormBoundary"
FALLBACK_FILENAME = "upload"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
    "mp4": "video/mp4",
    "mp3": "audio/mpeg",
    "zip": "application/zip",
}


def guess_content_type(filename: str) -> str:
    """Content type from the file extension, octet-stream when unknown."""
    if "." not in filename:
        return DEFAULT_CONTENT_TYPE
    ext = filename.rsplit(".", 1)[-1].lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


def filename_from_url(url: str) -> str:
    """Last non-empty path segment of a URL, or the generic fallback."""
    try:
        path = urlparse(url).path or ""
    except ValueError:
        return FALLBACK_FILENAME
    segments = [s for s in path.split("/") if s]
    return unquote(segments[-1]) if segments else FALLBACK_FILENAME


def new_boundary() -> str:
    return BOUNDARY_PREFIX + secrets.token_hex(8)


def build_multipart_body(data: bytes, filename: str, content_type: str | None = None) -> tuple[bytes, str]:
    """Build a single-part body with the file under the field name "file".

    Returns (body, boundary). The boundary is regenerated until it does not
    appear inside the payload.
    """
    content_type = content_type or guess_content_type(filename)
    boundary = new_boundary()
    while boundary.encode() in data:
        boundary = new_boundary()

    safe_name = filename.replace('"', "%22").replace("\r", "").replace("\n", "")
    head = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="file"; filename="{safe_name}"\r\n'
        f"Content-Type: {content_type}\r\n\r\n"
    ).encode()
    tail = f"\r\n--{boundary}--\r\n".encode()
    return head + data + tail, boundary

"""Container detection from a request's declared Content-Type."""

from transcoder.config import DEFAULT_VIDEO_FORMAT, VIDEO_MIME_FRAGMENTS


def detect_video_format(content_type: str | None) -> str:
    """Return the container extension for a Content-Type header value.

    Unknown or missing types fall back to mp4; the engine reports the real
    problem if the payload is something else.
    """
    if not content_type:
        return DEFAULT_VIDEO_FORMAT
    lowered = content_type.lower()
    for fragment, ext in VIDEO_MIME_FRAGMENTS:
        if fragment in lowered:
            return ext
    return DEFAULT_VIDEO_FORMAT


def matches_content_type(content_type: str | None, accepted: tuple[str, ...]) -> bool:
    """True if the media type (parameters ignored) is one of ``accepted``."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in accepted

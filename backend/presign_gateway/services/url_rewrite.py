import logging
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)


def rewrite_public_base(url: str, public_base: str | None) -> str:
    """Swap the scheme and host of ``url`` for those of ``public_base``.

    Path, query and fragment are kept as-is. Used when ``mc`` reaches MinIO
    through an internal hostname that clients cannot resolve. Any parse
    problem leaves ``url`` untouched.
    """
    base = (public_base or "").strip()
    if not base:
        return url

    try:
        parsed = urlsplit(url)
        public = urlsplit(base)
    except ValueError:
        logger.warning("Could not parse URL for public base rewrite; returning it unchanged")
        return url

    if not public.scheme or not public.netloc:
        logger.warning("PUBLIC_MINIO_BASE_URL %r has no scheme or host; rewrite skipped", base)
        return url

    return urlunsplit(
        (public.scheme, public.netloc, parsed.path, parsed.query, parsed.fragment)
    )

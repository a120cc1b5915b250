"""Recover the generated link from ``mc share download`` output.

``mc`` prints a block such as::

    URL: myminio/bucket/reports/q1.pdf
    Expire: 15 minutes 0 seconds
    Share: https://minio.internal:9000/bucket/reports/q1.pdf?X-Amz-Algorithm=...

Older client builds print the link on its own, which is why a pattern scan
is kept as an alternate strategy.
"""

import re
from typing import Protocol

from presign_gateway.core.config import ShareOutputMode
from presign_gateway.core.errors import NoShareLineError, NoURLFoundError, OutputParseError

SHARE_PREFIX = "Share:"
URL_PATTERN = re.compile(r"https?://[^\s\"']+")


class ShareOutputParser(Protocol):
    def extract(self, output: str) -> str: ...


class ShareLineParser:
    def extract(self, output: str) -> str:
        for line in output.split("\n"):
            line = line.strip()
            if line.startswith(SHARE_PREFIX):
                url = line.removeprefix(SHARE_PREFIX).strip()
                if not url:
                    raise NoShareLineError("Share line present but empty")
                return url
        raise NoShareLineError()


class UrlPatternParser:
    def extract(self, output: str) -> str:
        match = URL_PATTERN.search(output)
        if match is None:
            raise NoURLFoundError()
        return match.group(0)


class FallbackParser:
    """Try ``primary`` first; use ``fallback`` only when the primary finds nothing."""

    def __init__(self, primary: ShareOutputParser, fallback: ShareOutputParser) -> None:
        self.primary = primary
        self.fallback = fallback

    def extract(self, output: str) -> str:
        try:
            return self.primary.extract(output)
        except OutputParseError as primary_error:
            try:
                return self.fallback.extract(output)
            except OutputParseError:
                raise primary_error from None


def get_share_output_parser(mode: ShareOutputMode) -> ShareOutputParser:
    if mode == "url_pattern":
        return UrlPatternParser()
    if mode == "share_line_with_fallback":
        return FallbackParser(ShareLineParser(), UrlPatternParser())
    return ShareLineParser()

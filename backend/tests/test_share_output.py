import pytest

from presign_gateway.core.errors import NoShareLineError, NoURLFoundError
from presign_gateway.services.share_output import (
    FallbackParser,
    ShareLineParser,
    UrlPatternParser,
    get_share_output_parser,
)

MC_OUTPUT = """URL: myminio/reports/q1.pdf
Expire: 7 days 0 hours 0 minutes 0 seconds
Share: https://x.example/obj?sig=abc
"""


def test_share_line_extracts_url():
    assert ShareLineParser().extract(MC_OUTPUT) == "https://x.example/obj?sig=abc"


def test_share_line_tolerates_indentation_and_crlf():
    output = "URL: a/b\r\n   Share:   https://x.example/obj?sig=abc  \r\n"
    assert ShareLineParser().extract(output) == "https://x.example/obj?sig=abc"


def test_share_line_missing():
    with pytest.raises(NoShareLineError):
        ShareLineParser().extract("URL: a/b\nExpire: 15 minutes\n")


def test_share_line_empty_remainder():
    with pytest.raises(NoShareLineError) as exc_info:
        ShareLineParser().extract("Share:   \nShare: https://x.example/late")
    assert exc_info.value.message == "Share line present but empty"


def test_url_pattern_picks_first_url():
    output = 'Link "https://a.example/one?x=1" and http://b.example/two'
    assert UrlPatternParser().extract(output) == "https://a.example/one?x=1"


def test_url_pattern_no_match():
    with pytest.raises(NoURLFoundError):
        UrlPatternParser().extract("ftp://nope.example/file")


def test_fallback_uses_pattern_only_when_share_line_missing():
    parser = FallbackParser(ShareLineParser(), UrlPatternParser())
    assert parser.extract(MC_OUTPUT) == "https://x.example/obj?sig=abc"
    assert parser.extract("https://c.example/three\n") == "https://c.example/three"


def test_fallback_reports_primary_error():
    parser = FallbackParser(ShareLineParser(), UrlPatternParser())
    with pytest.raises(NoShareLineError):
        parser.extract("nothing useful here")


@pytest.mark.parametrize(
    ("mode", "parser_type"),
    [
        ("share_line", ShareLineParser),
        ("url_pattern", UrlPatternParser),
        ("share_line_with_fallback", FallbackParser),
    ],
)
def test_get_share_output_parser(mode, parser_type):
    assert isinstance(get_share_output_parser(mode), parser_type)

import pytest

from presign_gateway.services.url_rewrite import rewrite_public_base

SIGNED = "http://internal:9000/bucket/key?X=1"


def test_rewrite_swaps_scheme_and_host():
    assert rewrite_public_base(SIGNED, "https://public.example") == "https://public.example/bucket/key?X=1"


@pytest.mark.parametrize("base", [None, "", "   "])
def test_rewrite_is_noop_without_base(base):
    assert rewrite_public_base(SIGNED, base) == SIGNED


def test_rewrite_keeps_path_query_and_fragment_verbatim():
    url = "http://minio:9000/b/dir%20name/f.pdf?X-Amz-Credential=a%2Fb&X-Amz-Signature=ff#part"
    assert (
        rewrite_public_base(url, "https://files.example.com:8443/ignored/path")
        == "https://files.example.com:8443/b/dir%20name/f.pdf?X-Amz-Credential=a%2Fb&X-Amz-Signature=ff#part"
    )


@pytest.mark.parametrize("base", ["files.example.com", "https://"])
def test_rewrite_skips_base_without_scheme_or_host(base):
    assert rewrite_public_base(SIGNED, base) == SIGNED


def test_rewrite_returns_original_when_url_does_not_parse():
    broken = "http://[::1/bucket/key"
    assert rewrite_public_base(broken, "https://public.example") == broken

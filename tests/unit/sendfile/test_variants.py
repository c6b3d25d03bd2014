import pytest

from accelsend.sendfile.variants import SendfileVariant


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("X-Sendfile", SendfileVariant.X_SENDFILE),
        ("X-Lighttpd-Send-File", SendfileVariant.X_LIGHTTPD_SEND_FILE),
        ("X-Accel-Redirect", SendfileVariant.X_ACCEL_REDIRECT),
        ("x-sendfile", None),
        ("X-Accel-Mapping", None),
        ("", None),
        (None, None),
    ],
)
def test_from_header(value, expected):
    assert SendfileVariant.from_header(value) is expected


def test_only_accel_redirect_needs_mapping():
    assert SendfileVariant.X_ACCEL_REDIRECT.needs_mapping
    assert not SendfileVariant.X_SENDFILE.needs_mapping
    assert not SendfileVariant.X_LIGHTTPD_SEND_FILE.needs_mapping

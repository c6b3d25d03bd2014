"""Offload mechanisms understood by front-end proxies."""

from enum import Enum


SENDFILE_TYPE_HEADER = "X-Sendfile-Type"
ACCEL_MAPPING_HEADER = "X-Accel-Mapping"


class SendfileVariant(str, Enum):
    """Response header used to hand a file over to the proxy.

    The enum value is both the accepted ``X-Sendfile-Type`` request header
    value and the response header name.
    """

    X_SENDFILE = "X-Sendfile"
    X_LIGHTTPD_SEND_FILE = "X-Lighttpd-Send-File"
    X_ACCEL_REDIRECT = "X-Accel-Redirect"

    @property
    def needs_mapping(self) -> bool:
        """Whether the file path must be translated into the proxy's namespace."""
        return self is SendfileVariant.X_ACCEL_REDIRECT

    @classmethod
    def from_header(cls, value: str | None) -> "SendfileVariant | None":
        """Look up a variant by its exact (case-sensitive) header value."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

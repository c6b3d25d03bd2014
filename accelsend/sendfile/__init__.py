"""Offloading of file responses to X-Sendfile / X-Accel-Redirect proxies."""

from .bodies import ByteStream, FileBacked, classify_body
from .interceptor import SendfileInterceptor, offload_response
from .mappings import (
    AccelMapping,
    AccelMappings,
    parse_mapping_entry,
    parse_mapping_header,
)
from .variants import ACCEL_MAPPING_HEADER, SENDFILE_TYPE_HEADER, SendfileVariant


__all__ = [
    "ACCEL_MAPPING_HEADER",
    "AccelMapping",
    "AccelMappings",
    "ByteStream",
    "FileBacked",
    "SENDFILE_TYPE_HEADER",
    "SendfileInterceptor",
    "SendfileVariant",
    "classify_body",
    "offload_response",
    "parse_mapping_entry",
    "parse_mapping_header",
]

"""Response interceptor that offloads file bodies to the front-end proxy."""

from collections.abc import Awaitable, Callable, Iterable, Mapping

from starlette.requests import Request
from starlette.responses import Response

from accelsend.core.errors import ConfigurationError
from accelsend.core.logging import get_logger

from .bodies import FileBacked, classify_body
from .mappings import AccelMapping, AccelMappings, parse_mapping_header
from .variants import ACCEL_MAPPING_HEADER, SENDFILE_TYPE_HEADER, SendfileVariant


logger = get_logger(__name__)

RequestHandler = Callable[[Request], Awaitable[Response]]
MappingsLike = AccelMappings | Mapping[str, str] | Iterable[tuple[str, str] | AccelMapping]


class SendfileInterceptor:
    """Wrap a request handler and replace file bodies with a sendfile header.

    When the handler returns a ``FileResponse`` and the request names a
    supported mechanism in ``X-Sendfile-Type``, the response body is dropped
    and the proxy is told which file to deliver instead:

    * ``X-Sendfile`` / ``X-Lighttpd-Send-File`` carry the absolute file path.
    * ``X-Accel-Redirect`` carries the path rewritten through the mapping
      table. The ``X-Accel-Mapping`` request header, when it holds at least
      one valid entry, replaces the table for that request.

    Every other response is returned untouched. The interceptor keeps no
    per-request state and can serve concurrent requests.
    """

    def __init__(
        self,
        handler: RequestHandler,
        variation: SendfileVariant | str | None = None,
        mappings: MappingsLike = (),
    ):
        """Initialize the interceptor.

        Args:
            handler: Inner request handler
            variation: Variant used when the request has no X-Sendfile-Type header
            mappings: Ordered internal=>external prefix table for X-Accel-Redirect

        Raises:
            ConfigurationError: If ``variation`` or a mapping entry is invalid
        """
        self.handler = handler
        self.variation = _coerce_variation(variation)
        self.mappings = AccelMappings.from_pairs(mappings)

    async def __call__(self, request: Request) -> Response:
        response = await self.handler(request)

        body = classify_body(response)
        if not isinstance(body, FileBacked):
            return response

        variant = self.select_variant(request)
        if variant is None:
            return response

        if variant.needs_mapping:
            location = self.map_accel_path(request, body.path)
            if location is None:
                logger.warning(
                    "accel_mapping_missing",
                    path=body.path,
                    message=(
                        f"No accel mapping matched {body.path}; send an "
                        f"{ACCEL_MAPPING_HEADER} header or configure sendfile "
                        "mappings"
                    ),
                )
                return response
        else:
            location = body.path

        return offload_response(response, variant, location)

    def select_variant(self, request: Request) -> SendfileVariant | None:
        """Pick the offload variant for ``request``.

        An ``X-Sendfile-Type`` header always decides, even when its value is
        unknown; the configured variation only applies when it is absent.
        """
        header = request.headers.get(SENDFILE_TYPE_HEADER)
        if header is None:
            return self.variation
        return SendfileVariant.from_header(header)

    def map_accel_path(self, request: Request, path: str) -> str | None:
        """Translate ``path`` into the proxy namespace for ``request``."""
        mappings = parse_mapping_header(request.headers.get(ACCEL_MAPPING_HEADER))
        if not mappings:
            mappings = self.mappings
        return mappings.resolve(path)


def offload_response(
    response: Response, variant: SendfileVariant, location: str
) -> Response:
    """Copy ``response`` with an empty body and the sendfile header set.

    Status, unrelated headers and the background task are carried over.
    """
    offloaded = Response(
        status_code=response.status_code, background=response.background
    )
    header_name = variant.value.lower().encode("latin-1")
    offloaded.raw_headers = [
        (name, value)
        for name, value in response.raw_headers
        if name not in (b"content-length", header_name)
    ]
    # Non latin-1 paths go out as UTF-8 bytes
    offloaded.raw_headers.append((b"content-length", b"0"))
    offloaded.raw_headers.append((header_name, location.encode("utf-8")))
    return offloaded


def _coerce_variation(
    variation: SendfileVariant | str | None,
) -> SendfileVariant | None:
    if variation is None or isinstance(variation, SendfileVariant):
        return variation
    variant = SendfileVariant.from_header(variation)
    if variant is None:
        raise ConfigurationError(
            f"Unknown sendfile variation: {variation!r}",
            details={"allowed": [v.value for v in SendfileVariant]},
        )
    return variant

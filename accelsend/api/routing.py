"""Route class that runs every endpoint through the sendfile interceptor."""

from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import Response

from accelsend.config.sendfile import SendfileSettings
from accelsend.sendfile import AccelMappings, SendfileInterceptor, SendfileVariant


@dataclass(frozen=True)
class SendfileOptions:
    """Interceptor configuration shared by the routes of a router."""

    variation: SendfileVariant | None = None
    mappings: AccelMappings = field(default_factory=AccelMappings)

    @classmethod
    def from_settings(cls, settings: SendfileSettings) -> "SendfileOptions":
        return cls(variation=settings.variation, mappings=settings.to_mappings())


def sendfile_route_class(options: SendfileOptions | None = None) -> type[APIRoute]:
    """Create an ``APIRoute`` subclass bound to ``options``.

    Use it as ``APIRouter(route_class=sendfile_route_class(options))`` so
    file responses of all the router's endpoints can be offloaded.
    """
    bound = options or SendfileOptions()

    class SendfileRoute(APIRoute):
        sendfile_options = bound

        def get_route_handler(
            self,
        ) -> Callable[[Request], Coroutine[Any, Any, Response]]:
            return SendfileInterceptor(
                super().get_route_handler(),
                variation=self.sendfile_options.variation,
                mappings=self.sendfile_options.mappings,
            )

    return SendfileRoute

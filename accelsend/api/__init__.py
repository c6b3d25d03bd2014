"""FastAPI integration for accelsend."""

from .routing import SendfileOptions, sendfile_route_class


__all__ = ["SendfileOptions", "sendfile_route_class"]

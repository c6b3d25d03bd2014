"""Classification of response bodies by whether a file on disk backs them."""

import os
from dataclasses import dataclass

from starlette.responses import FileResponse, Response


@dataclass(frozen=True)
class ByteStream:
    """Body produced by the application itself; nothing to offload."""


@dataclass(frozen=True)
class FileBacked:
    """Body that is exactly one file on disk."""

    path: str


ResponseBody = ByteStream | FileBacked


def classify_body(response: Response) -> ResponseBody:
    """Classify the body of ``response``.

    Only ``FileResponse`` carries a file path. The path is made absolute
    lexically; the file itself is never touched.
    """
    if isinstance(response, FileResponse):
        return FileBacked(path=os.path.abspath(os.fspath(response.path)))
    return ByteStream()

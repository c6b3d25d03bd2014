import pytest
from starlette.responses import FileResponse, PlainTextResponse, StreamingResponse

from accelsend.sendfile.bodies import ByteStream, FileBacked, classify_body


pytestmark = pytest.mark.unit


def test_file_response_is_file_backed():
    assert classify_body(FileResponse("/tmp/hello.txt")) == FileBacked("/tmp/hello.txt")


def test_file_backed_path_is_normalized():
    body = classify_body(FileResponse("/tmp/../tmp/./hello.txt"))

    assert body == FileBacked("/tmp/hello.txt")


def test_plain_response_is_byte_stream():
    assert isinstance(classify_body(PlainTextResponse("hello")), ByteStream)


def test_streaming_response_is_byte_stream():
    async def chunks():
        yield b"hello"

    assert isinstance(classify_body(StreamingResponse(chunks())), ByteStream)

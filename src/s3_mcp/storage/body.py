"""
Response body normalization.

Storage clients surface object bodies in two shapes: a buffered body
that can hand over its whole payload in one call, and a chunked stream
that delivers the payload as a sequence of byte chunks. Both are read
into a single contiguous ``bytes`` value.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Union

from s3_mcp.storage.exceptions import RemoteFetchError, UnsupportedBodyTypeError

logger = logging.getLogger(__name__)

_BYTES_TYPES = (bytes, bytearray, memoryview)


def _chunk_bytes(chunk: Any) -> bytes:
    if not isinstance(chunk, _BYTES_TYPES):
        raise UnsupportedBodyTypeError(f"{type(chunk).__name__} chunk")
    return bytes(chunk)


@dataclass(frozen=True)
class BufferedBody:
    """A body with a ``read()`` accessor returning the whole payload."""

    source: Any

    async def read_all(self) -> bytes:
        if isinstance(self.source, _BYTES_TYPES):
            return bytes(self.source)
        # botocore's StreamingBody.read() blocks on the socket
        data = await asyncio.to_thread(self.source.read)
        return bytes(data or b"")


@dataclass(frozen=True)
class ChunkedBody:
    """A body delivered as an (async) iterable of byte chunks."""

    source: Any

    async def read_all(self) -> bytes:
        chunks: list[bytes] = []
        try:
            if hasattr(self.source, "__aiter__"):
                async for chunk in self.source:
                    chunks.append(_chunk_bytes(chunk))
            else:
                iterator = (
                    self.source.iter_chunks()
                    if hasattr(self.source, "iter_chunks")
                    else self.source
                )
                chunks = await asyncio.to_thread(
                    lambda: [_chunk_bytes(chunk) for chunk in iterator]
                )
        except UnsupportedBodyTypeError:
            raise
        except Exception as e:
            raise RemoteFetchError(f"Error reading response stream: {e}") from e

        logger.debug(f"Collected {len(chunks)} chunk(s) from response stream")
        return b"".join(chunks)


ResponseBody = Union[BufferedBody, ChunkedBody]


def detect_body(body: Any) -> ResponseBody:
    """
    Select the body variant by checking the body's capabilities.

    A callable ``read`` or a bytes-like value is buffered. An async
    iterable, an ``iter_chunks()`` provider or a plain iterable of
    chunks is chunked.

    Raises:
        UnsupportedBodyTypeError: If the body has neither shape
    """
    if body is None:
        raise UnsupportedBodyTypeError("NoneType")
    if isinstance(body, _BYTES_TYPES) or callable(getattr(body, "read", None)):
        return BufferedBody(body)
    if (
        hasattr(body, "__aiter__")
        or callable(getattr(body, "iter_chunks", None))
        or (hasattr(body, "__iter__") and not isinstance(body, (str, dict)))
    ):
        return ChunkedBody(body)
    raise UnsupportedBodyTypeError(type(body).__name__)


async def read_body(body: Any) -> bytes:
    """Read a response body of either shape into one byte buffer."""
    return await detect_body(body).read_all()

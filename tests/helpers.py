"""Test helpers."""

import asyncio

from aiohttp.test_utils import TestClient


async def raw_request(
    test_client: TestClient,
    target: str,
    method: str = "GET",
) -> tuple[int, str]:
    """Send a request line verbatim, bypassing client-side URL normalization.

    Returns:
        Tuple of (status code, response body)
    """
    reader, writer = await asyncio.open_connection(
        test_client.server.host, test_client.server.port
    )
    try:
        writer.write(
            f"{method} {target} HTTP/1.1\r\n"
            f"Host: {test_client.server.host}\r\n"
            "Connection: close\r\n\r\n".encode("latin-1")
        )
        await writer.drain()
        data = await reader.read()
    finally:
        writer.close()
        await writer.wait_closed()

    head, _, body = data.partition(b"\r\n\r\n")
    status = int(head.split(b" ", 2)[1])
    return status, body.decode("utf-8", errors="replace")

"""FlowScroll JSON-lines server entry point.

Usage: python -m flowscroll.server

Reads JSON requests from stdin (one per line), writes JSON responses to stdout.
All logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from flowscroll.config.settings import Settings

from .handler import ServerHandler
from .protocol import Notification, ProtocolError, Response, parse_request


async def main() -> None:
    loop = asyncio.get_running_loop()
    settings = Settings.load()
    logging.basicConfig(
        level=settings.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = ServerHandler(settings=settings, write_notification=write_notification)
    await handler.runner.prefetch()

    print("flowscroll-server: ready", file=sys.stderr)

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    while True:
        line = await reader.readline()
        if not line:
            break  # stdin closed

        line_str = line.decode("utf-8", errors="replace").strip()
        if not line_str:
            continue

        try:
            request = parse_request(line_str)
        except ProtocolError as e:
            write_line(Response(id=0, error=str(e)).to_json_line())
            continue

        try:
            result = await handler.dispatch({"method": request.method, "params": request.params})
            resp = Response(id=request.id, result=result)
        except Exception as e:
            print(f"flowscroll-server: error: {e!r}", file=sys.stderr)
            resp = Response(id=request.id, error=str(e))

        write_line(resp.to_json_line())


if __name__ == "__main__":
    asyncio.run(main())

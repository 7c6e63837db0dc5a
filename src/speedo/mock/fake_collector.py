"""
Fake collection server for trying out reporting without a real backend.

    python -m speedo.mock.fake_collector
    speedo demo --server http://localhost:9100

Accepts both push layouts (/stat/<sid>, /stat, /info/<sid>, /info),
keeps every JSON body it receives and answers 204.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import List, Optional

log = logging.getLogger(__name__)


@dataclass
class ReceivedPush:
    kind: str            # "stat" or "info"
    sid: Optional[str]   # from the path, None for the body-embedded layout
    body: dict


class CollectorServer(HTTPServer):
    """HTTPServer that records what it was sent."""

    def __init__(self, address, handler=None):
        super().__init__(address, handler or _PushHandler)
        self._lock = threading.Lock()
        self._received: List[ReceivedPush] = []

    def record(self, push: ReceivedPush):
        with self._lock:
            self._received.append(push)

    @property
    def received(self) -> List[ReceivedPush]:
        with self._lock:
            return list(self._received)

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


def _parse_path(path: str):
    parts = [p for p in path.split("/") if p]
    if not parts or parts[0] not in ("stat", "info") or len(parts) > 2:
        return None, None
    return parts[0], (parts[1] if len(parts) == 2 else None)


class _PushHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        kind, sid = _parse_path(self.path)
        if kind is None:
            self.send_response(404)
            self.end_headers()
            return

        length = int(self.headers.get("Content-Length") or 0)
        try:
            body = json.loads(self.rfile.read(length) or b"{}")
        except ValueError:
            self.send_response(400)
            self.end_headers()
            return

        self.server.record(ReceivedPush(kind=kind, sid=sid, body=body))
        log.info("%s %s %s", kind, sid or body.get("sid", "-"), body)
        self.send_response(204)
        self.end_headers()

    def log_message(self, format, *args):
        pass  # Suppress request logging noise


def start_in_thread(host: str = "127.0.0.1", port: int = 0) -> CollectorServer:
    """Bind (port 0 picks a free one) and serve on a daemon thread."""
    server = CollectorServer((host, port))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


def run_fake_collector(host: str = "127.0.0.1", port: int = 9100):
    server = CollectorServer((host, port))
    print(f"Fake collector listening at {server.url}")
    print("Press Ctrl+C to stop.\n")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    server.server_close()
    print(f"\nCollector stopped. {len(server.received)} pushes received.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%H:%M:%S")
    run_fake_collector()

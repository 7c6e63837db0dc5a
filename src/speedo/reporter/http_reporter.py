"""
Best-effort HTTP pusher. Serializes a stat or info record, POSTs it,
and ignores whatever comes back. Failures are logged and dropped; the
next scheduled push is the only retry.
"""

from __future__ import annotations

import logging
from typing import Union

import httpx

from speedo.metrics import InstrumentInfo, SpeedStat
from speedo.reporter.protocol import ReportProtocol, get_protocol

log = logging.getLogger(__name__)


class HTTPReporter:

    def __init__(
        self,
        server: str,
        protocol: Union[str, ReportProtocol] = "path",
        timeout_seconds: float = 5.0,
    ):
        self._server = server.rstrip("/")
        self._protocol = get_protocol(protocol) if isinstance(protocol, str) else protocol
        self._timeout = timeout_seconds
        self._client = httpx.Client(timeout=self._timeout)

    def push_stat(self, info: InstrumentInfo, stat: SpeedStat) -> bool:
        path, body = self._protocol.stat_request(info, stat)
        return self._post(path, body)

    def push_info(self, info: InstrumentInfo) -> bool:
        path, body = self._protocol.info_request(info)
        return self._post(path, body)

    def _post(self, path: str, body: dict) -> bool:
        """Returns True if the request went out, whatever the status code."""
        url = self._server + path
        try:
            response = self._client.post(url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.warning("Push to %s failed: %s", url, e)
            return False
        log.debug("Pushed to %s: status=%d", url, response.status_code)
        return True

    def name(self) -> str:
        return f"{self._protocol.name} protocol ({self._server})"

    def close(self):
        self._client.close()

"""
=============================================================================
ACCESS LOGGING
=============================================================================

One log entry per response written, on the "minihttp.access" logger so it
can be routed separately from the server's lifecycle messages:

    logging.getLogger("minihttp.access").addHandler(file_handler)

Two formats:

    text   127.0.0.1 - - [19/Oct/2026:10:00:00 +0000] "GET index.html" 200 1234 0.41ms
    json   {"connection_id": "1a2b3c4d", "method": "GET", ...}

=============================================================================
"""

import json
import time
import logging
from dataclasses import dataclass, asdict

from .http.request import RequestOutcome


logger = logging.getLogger("minihttp.access")


@dataclass
class AccessLog:
    """Structured log entry for one response."""

    connection_id: str
    client_ip: str
    method: str
    path: str
    status_code: int
    close: bool
    response_bytes: int
    duration_ms: float
    timestamp: str

    @classmethod
    def from_outcome(
        cls,
        outcome: RequestOutcome,
        connection_id: str,
        client_ip: str,
        response_bytes: int,
        duration_ms: float,
    ) -> "AccessLog":
        return cls(
            connection_id=connection_id,
            client_ip=client_ip,
            method=outcome.method.value,
            path=outcome.path or "-",
            status_code=int(outcome.status),
            close=outcome.close,
            response_bytes=response_bytes,
            duration_ms=round(duration_ms, 2),
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def to_text(self) -> str:
        """Apache-style single line."""
        return (
            f'{self.client_ip} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.response_bytes} {self.duration_ms:.2f}ms'
        )

    def emit(self, log_format: str = "text", level: int = logging.INFO) -> None:
        if log_format == "json":
            logger.log(level, json.dumps(self.to_dict()))
        else:
            logger.log(level, self.to_text())

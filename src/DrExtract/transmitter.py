"""
Intake API client.

POSTs a serialized DmeRecord to the configured endpoint and reports the HTTP
status code. Transport failures are not raised to the caller: they are
logged and reported as 500 so the pipeline can finish and exit normally.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .record import DmeRecord
from .serializer import to_json
from .settings import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}
TRANSPORT_FAILURE_STATUS = 500


class DmeApiClient:
    """
    Thin wrapper around `requests` for the DME intake endpoint.

    Parameters
    ----------
    endpoint_url : str
        Full URL the JSON payload is POSTed to.
    session : requests.Session, optional
        Injected session (e.g. for tests or connection reuse). A session passed
        in is never closed by this client.
    timeout : float, optional
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        endpoint_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not endpoint_url or not endpoint_url.strip():
            raise ValueError("endpoint_url must be a non-empty string")
        self.endpoint_url = endpoint_url.strip()
        self.timeout = timeout
        self._owns_session = session is None
        self._session = requests.Session() if session is None else session

    def send(self, json_payload: str) -> int:
        """POST `json_payload`; return the status code, or 500 if the request failed."""
        logger.info(f"Transmitting DME data to {self.endpoint_url}")
        try:
            resp = self._session.post(
                self.endpoint_url,
                data=json_payload.encode("utf-8"),
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error transmitting DME data to {self.endpoint_url}: {e}")
            return TRANSPORT_FAILURE_STATUS

        status_code = int(resp.status_code)
        if 200 <= status_code < 300:
            logger.info(f"DME data accepted, status code {status_code}")
        else:
            logger.warning(f"DME data rejected, status code {status_code}")
        return status_code

    def send_record(self, record: DmeRecord, include_timestamp: bool = True) -> int:
        if record is None:
            raise TypeError("record must be a DmeRecord, got None")
        return self.send(to_json(record, include_timestamp=include_timestamp))

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "DmeApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

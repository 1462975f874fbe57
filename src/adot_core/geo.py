from __future__ import annotations
import datetime
import logging
from typing import Optional

import requests

from .errors import RemoteAPIError
from .models import GeoPayload, LocationRecord

log = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://ipinfo.io/json"


class GeolocationClient:
    """Single-shot client for an ipinfo-style geolocation endpoint.

    One GET per call, no retries and no timeout beyond what requests applies.
    The token is sent as the ``token`` query parameter.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "GeolocationClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def fetch_location(
        self, token: str, observed_at: datetime.datetime
    ) -> LocationRecord:
        log.debug("fetching location from %s", self.endpoint)
        resp = self.session.get(self.endpoint, params={"token": token})
        status = resp.status_code
        if not 200 <= status < 300:
            body = resp.text
            log.warning("geolocation request failed status=%s", status)
            raise RemoteAPIError(status, body)

        try:
            data = resp.json()
        except (ValueError, RecursionError):
            raise RemoteAPIError(status, resp.text, "invalid JSON body") from None
        if not isinstance(data, dict):
            raise RemoteAPIError(status, resp.text, "expected a JSON object")

        payload = GeoPayload.decode(data)
        return LocationRecord.from_payload(payload, observed_at)

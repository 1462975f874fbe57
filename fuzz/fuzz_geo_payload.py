"""Fuzz harness for the geolocation payload decoder.

Targets: raw response bytes -> GeolocationClient.fetch_location -> LocationRecord
-> stored document.

Fuzzer bytes are served as the body of a 200 response. Decoder rejections
(RemoteAPIError, MissingFieldError) are expected; anything else is a crash.
"""
from __future__ import annotations
import atheris
import datetime
import sys

with atheris.instrument_imports():
    from adot_core.errors import MissingFieldError, RemoteAPIError
    from adot_core.geo import GeolocationClient

_OBSERVED = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)


class _Response:
    status_code = 200

    def __init__(self, text: str):
        self.text = text

    def json(self):
        import json

        return json.loads(self.text)


class _Session:
    def __init__(self, body: str):
        self.body = body

    def get(self, url, params=None):
        return _Response(self.body)

    def close(self):
        pass


def TestOneInput(data: bytes):  # noqa: N802 (Atheris signature)
    body = data.decode("utf-8", errors="ignore")
    client = GeolocationClient(session=_Session(body))
    try:
        record = client.fetch_location("fuzz", _OBSERVED)
    except (RemoteAPIError, MissingFieldError):
        return
    doc = record.to_document()
    assert all(isinstance(doc[k], str) and doc[k] for k in ("city", "region", "country", "timezone"))
    assert doc["time"]["utc"].endswith("+00:00")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()

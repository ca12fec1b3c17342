from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
import requests


NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, json_error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


class FakeSession:
    def __init__(self, responses: Dict[str, object]) -> None:
        self.responses = responses
        self.calls: List[tuple] = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


class FakeClient:
    def __init__(self, releases: Dict[str, Optional[datetime]]) -> None:
        self.releases = releases
        self.calls: List[str] = []

    def fetch_time_data(self, package_name):
        raise NotImplementedError

    def fetch_last_release_time(self, package_name):
        self.calls.append(package_name)
        return self.releases.get(package_name)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture(autouse=True)
def clear_threshold_env(monkeypatch):
    monkeypatch.delenv("MONTHS_THRESHOLD", raising=False)

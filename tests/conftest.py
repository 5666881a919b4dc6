import pytest

from dlp_redact.types import ContentItem, RedactContentRequest, RedactContentResponse


class StubService:
    """In-memory RedactionService: records requests, returns canned items."""

    def __init__(self, items: list[ContentItem] | None = None, error: Exception | None = None):
        self.items = tuple(items or ())
        self.error = error
        self.requests: list[RedactContentRequest] = []
        self.closed = False

    def redact_content(self, request: RedactContentRequest) -> RedactContentResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return RedactContentResponse(items=self.items)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("DLP_REDACT_CONFIG", raising=False)
    monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)


@pytest.fixture
def stub_service():
    return StubService

import pytest

from harbormigrate.errors import DecodeError
from harbormigrate.models import HttpResult, RegistryEndpoint, RunContext
from harbormigrate.services.pagination import PaginatedFetcher
from harbormigrate.services.repositories import RepositoryEnumerator


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def info(self, *_args, **_kwargs):
        return None


class FakeTransport:
    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    def get(self, context, endpoint, path, params=None):
        self.calls.append((path, dict(params or {})))
        return HttpResult(status_code=200, body=self.pages.pop(0))


REGISTRY = RegistryEndpoint(url="https://source.example.com", username="admin", password="secret")


def _enumerator(transport):
    fetcher = PaginatedFetcher(transport=transport, logger=DummyLogger())
    return RepositoryEnumerator(fetcher=fetcher, logger=DummyLogger())


def test_fetch_image_names_concatenates_pages_in_order():
    transport = FakeTransport(
        [
            b'[{"name": "ns/b"}, {"name": "ns/a"}]',
            b'[{"name": "other/c"}, {"name": "ns/a"}]',
            b"[]",
        ]
    )

    names = _enumerator(transport).fetch_image_names(RunContext(), REGISTRY)

    assert names == ["ns/b", "ns/a", "other/c", "ns/a"]
    assert transport.calls[0] == ("/api/v2.0/repositories", {"page": 1, "page_size": 50})
    assert len(transport.calls) == 3


def test_fetch_image_names_ends_on_empty_body():
    transport = FakeTransport([b'[{"name": "ns/img1"}]', b""])

    assert _enumerator(transport).fetch_image_names(RunContext(), REGISTRY) == ["ns/img1"]


def test_fetch_image_names_raises_without_partial_result():
    transport = FakeTransport([b'[{"name": "ns/img1"}]', b"not json"])

    with pytest.raises(DecodeError):
        _enumerator(transport).fetch_image_names(RunContext(), REGISTRY)


def test_fetch_image_names_rejects_record_without_name():
    transport = FakeTransport([b'[{"id": 3}]'])

    with pytest.raises(DecodeError, match="without a name"):
        _enumerator(transport).fetch_image_names(RunContext(), REGISTRY)

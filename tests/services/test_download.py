import pytest
from rich.console import Console

from chatwootctl.errors import ManagerError
from chatwootctl.services.download import DownloadService


class DummyLogger:
    def info(self, *_args, **_kwargs):
        return None


class FakeResponse:
    def __init__(self, payload: bytes):
        self.payload = payload
        self.headers = {"Content-Length": str(len(payload))}

    def raise_for_status(self):
        return None

    def iter_content(self, chunk_size=8192):
        yield self.payload

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeRequestsModule:
    class RequestException(Exception):
        pass

    def __init__(self, payload: bytes):
        self.payload = payload
        self.urls = []

    def get(self, url, *_args, **_kwargs):
        self.urls.append(url)
        return FakeResponse(self.payload)


class FailingRequestsModule:
    class RequestException(Exception):
        pass

    def get(self, *_args, **_kwargs):
        raise self.RequestException("connection refused")


def test_download_file_writes_payload(tmp_path):
    requests_module = FakeRequestsModule(b"#!/bin/sh\necho docker\n")
    service = DownloadService(
        logger=DummyLogger(),
        console=Console(quiet=True),
        requests_module=requests_module,
    )
    destination = tmp_path / "nested" / "get-docker.sh"

    service.download_file("https://get.docker.com", destination, "Downloading script...")

    assert destination.read_bytes() == b"#!/bin/sh\necho docker\n"
    assert requests_module.urls == ["https://get.docker.com"]


def test_download_file_wraps_request_errors(tmp_path):
    service = DownloadService(
        logger=DummyLogger(),
        console=Console(quiet=True),
        requests_module=FailingRequestsModule(),
    )

    with pytest.raises(ManagerError, match="Download failed for docker-compose"):
        service.download_file("https://example.com/bin", tmp_path / "bin", "docker-compose")

    assert not (tmp_path / "bin").exists()

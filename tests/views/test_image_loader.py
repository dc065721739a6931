import logging
import httpx
import pytest
from models.exceptions import ImageFetchFailed
from views.image_loader import ImageLoader

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


class CountingHandler:
    """Serves PNG_BYTES for /ok.png and 404 for everything else."""

    def __init__(self):
        self.calls = []

    def __call__(self, request):
        self.calls.append(str(request.url))
        if request.url.path == "/ok.png":
            return httpx.Response(200, content=PNG_BYTES)
        return httpx.Response(404)


@pytest.fixture
def handler():
    return CountingHandler()


@pytest.fixture
def loader(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    image_loader = ImageLoader(client=client, max_workers=2)
    yield image_loader
    image_loader.close()
    client.close()


class TestImageLoader:
    def test_fetch(self, loader):
        assert loader.fetch("https://cdn.example.com/ok.png") == PNG_BYTES

    def test_fetch_not_found(self, loader):
        with pytest.raises(ImageFetchFailed) as exc_info:
            loader.fetch("https://cdn.example.com/missing.png")

        assert exc_info.value.source == "https://cdn.example.com/missing.png"
        assert "404" in str(exc_info.value)

    def test_request_delivers_on_drain(self, loader):
        received = []

        future = loader.request("https://cdn.example.com/ok.png", received.append)

        assert future.result(timeout=5) is True
        assert received == []
        assert loader.drain() == 1
        assert received == [PNG_BYTES]
        assert loader.drain() == 0

    def test_repeated_source_is_cached(self, loader, handler):
        received = []

        loader.request("https://cdn.example.com/ok.png", received.append).result(timeout=5)
        second = loader.request("https://cdn.example.com/ok.png", received.append)

        assert second.done()
        assert loader.drain() == 2
        assert received == [PNG_BYTES, PNG_BYTES]
        assert len(handler.calls) == 1

    def test_failed_request_is_logged_not_raised(self, loader, caplog):
        received = []

        with caplog.at_level(logging.WARNING):
            future = loader.request("https://cdn.example.com/missing.png", received.append)
            assert future.result(timeout=5) is False

        assert loader.drain() == 0
        assert received == []
        assert "missing.png" in caplog.text

    def test_failures_are_not_cached(self, loader, handler):
        loader.request("https://cdn.example.com/missing.png", lambda data: None).result(timeout=5)
        loader.request("https://cdn.example.com/missing.png", lambda data: None).result(timeout=5)

        assert len(handler.calls) == 2

    def test_malformed_url_is_logged_not_raised(self, loader, handler, caplog):
        with caplog.at_level(logging.WARNING):
            future = loader.request("http://[::1", lambda data: None)
            assert future.result(timeout=5) is False

        assert "http://[::1" in caplog.text
        assert handler.calls == []

    def test_fetch_malformed_url(self, loader):
        with pytest.raises(ImageFetchFailed):
            loader.fetch("http://[::1")

    def test_failing_callback_does_not_block_others(self, loader, caplog):
        received = []

        def explode(data):
            raise RuntimeError("canvas is gone")

        loader.request("https://cdn.example.com/ok.png", explode).result(timeout=5)
        loader.request("https://cdn.example.com/ok.png", received.append)

        with caplog.at_level(logging.ERROR):
            assert loader.drain() == 1

        assert received == [PNG_BYTES]
        assert "canvas is gone" in caplog.text

    def test_cache_evicts_least_recently_used(self):
        fetched = []

        def serve(request):
            fetched.append(request.url.path)
            return httpx.Response(200, content=b"img")

        client = httpx.Client(transport=httpx.MockTransport(serve))
        image_loader = ImageLoader(client=client, cache_size=2)
        try:
            for name in ("a", "b"):
                image_loader.request(f"https://cdn.example.com/{name}.png", lambda data: None).result(timeout=5)
            # Touch "a" so "b" becomes the oldest entry
            assert image_loader.request("https://cdn.example.com/a.png", lambda data: None).done()
            image_loader.request("https://cdn.example.com/c.png", lambda data: None).result(timeout=5)

            assert image_loader.cached_count == 2
            image_loader.request("https://cdn.example.com/a.png", lambda data: None).result(timeout=5)
            image_loader.request("https://cdn.example.com/b.png", lambda data: None).result(timeout=5)

            assert fetched == ["/a.png", "/b.png", "/c.png", "/b.png"]
        finally:
            image_loader.close()
            client.close()

    def test_clear_cache(self, loader, handler):
        loader.request("https://cdn.example.com/ok.png", lambda data: None).result(timeout=5)
        assert loader.cached_count == 1

        loader.clear_cache()
        loader.request("https://cdn.example.com/ok.png", lambda data: None).result(timeout=5)

        assert len(handler.calls) == 2

    def test_transport_error(self, caplog):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(refuse))
        image_loader = ImageLoader(client=client)
        try:
            with caplog.at_level(logging.WARNING):
                assert image_loader.request("https://cdn.example.com/ok.png", lambda data: None).result(timeout=5) is False
            assert "connection refused" in caplog.text
        finally:
            image_loader.close()
            client.close()

    def test_close_keeps_borrowed_client_open(self, handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        ImageLoader(client=client).close()

        assert not client.is_closed
        client.close()

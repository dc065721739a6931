"""
Background image fetching for image elements.

Downloads run on a small thread pool so building a hierarchy never waits for
the network. Finished payloads are queued and handed to their callbacks by
``drain``, which the UI calls from its own thread. A failed download only
leaves its element unfilled: it is logged and never raised.
"""
from concurrent.futures import Future, ThreadPoolExecutor
from collections import OrderedDict
from typing import Callable, Optional, Tuple
import logging
import queue
import threading

import httpx

from models.exceptions import ImageFetchFailed
from utils.constants import IMAGE_CACHE_SIZE, IMAGE_FETCH_TIMEOUT, IMAGE_FETCH_WORKERS

# Configure logging
logger = logging.getLogger(__name__)

ImageCallback = Callable[[bytes], None]


class ImageLoader:
    """Fire-and-forget image downloads with results delivered on the caller's thread."""

    def __init__(self, client: Optional[httpx.Client] = None,
                 max_workers: int = IMAGE_FETCH_WORKERS,
                 timeout: float = IMAGE_FETCH_TIMEOUT,
                 cache_size: int = IMAGE_CACHE_SIZE) -> None:
        """
        Initialize the loader.

        Args:
            client: HTTP client to use; one is created (and owned) if omitted
            max_workers: Number of concurrent downloads
            timeout: Per-request timeout in seconds for an owned client
            cache_size: Number of downloaded payloads kept for repeated sources
        """
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout, follow_redirects=True)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="image-loader")
        self._completed: "queue.Queue[Tuple[ImageCallback, bytes]]" = queue.Queue()
        self._cache: "OrderedDict[str, bytes]" = OrderedDict()
        self._cache_size = cache_size
        self._cache_lock = threading.Lock()

    def fetch(self, source: str) -> bytes:
        """
        Download an image synchronously.

        Args:
            source: Image URL

        Returns:
            The response body

        Raises:
            ImageFetchFailed: On transport errors or a non-success status
        """
        try:
            response = self._client.get(source)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageFetchFailed(source, str(e)) from e
        return response.content

    def request(self, source: str, on_loaded: ImageCallback) -> Future:
        """
        Start loading ``source`` in the background.

        Args:
            source: Image URL
            on_loaded: Called with the image bytes from ``drain`` once loaded

        Returns:
            Future resolving to True when the payload was queued, False on failure
        """
        with self._cache_lock:
            cached = self._cache.get(source)
            if cached is not None:
                self._cache.move_to_end(source)

        if cached is not None:
            self._completed.put((on_loaded, cached))
            future: Future = Future()
            future.set_result(True)
            return future

        return self._executor.submit(self._load, source, on_loaded)

    def _load(self, source: str, on_loaded: ImageCallback) -> bool:
        try:
            data = self.fetch(source)
        except ImageFetchFailed as e:
            logger.warning(str(e))
            return False

        with self._cache_lock:
            self._cache[source] = data
            self._cache.move_to_end(source)
            while len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
        self._completed.put((on_loaded, data))
        logger.debug(f"Loaded {len(data)} bytes from {source}")
        return True

    def drain(self) -> int:
        """
        Deliver every finished download to its callback.

        A callback that raises is logged and skipped; the rest are still delivered.

        Returns:
            Number of callbacks that completed
        """
        delivered = 0
        while True:
            try:
                on_loaded, data = self._completed.get_nowait()
            except queue.Empty:
                break
            try:
                on_loaded(data)
            except Exception as e:
                logger.error(f"Error delivering loaded image: {e}")
                continue
            delivered += 1
        return delivered

    @property
    def cached_count(self) -> int:
        with self._cache_lock:
            return len(self._cache)

    def clear_cache(self) -> None:
        """Forget every downloaded payload."""
        with self._cache_lock:
            self._cache.clear()

    def close(self) -> None:
        """Stop pending downloads and release the HTTP client."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        if self._owns_client:
            self._client.close()

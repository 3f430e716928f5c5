"""HTTP client implementation for probing."""

import time
from dataclasses import dataclass

import httpx

# Bodies without Content-Length are counted up to this many bytes.
MAX_BODY_BYTES = 1024 * 1024


@dataclass
class HTTPResponse:
    """Represents the metadata of one HTTP response."""

    url: str
    status_code: int
    size: int
    response_time: float
    location: str | None = None
    redirected: bool = False


class HTTPClient:
    """Synchronous HTTP client shared by all probe workers.

    The underlying ``httpx.Client`` pools connections and is safe to use
    from several threads at once.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        follow_redirects: bool = False,
        verify_ssl: bool = False,
        proxy: str | None = None,
        user_agent: str | None = None,
        max_connections: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.verify_ssl = verify_ssl
        self.proxy = proxy
        self.user_agent = user_agent
        self.max_connections = max_connections
        self._transport = transport
        self.client: httpx.Client | None = None

    def __enter__(self):
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        limits = httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_connections,
        )
        options: dict[str, object] = {
            "timeout": httpx.Timeout(self.timeout),
            "follow_redirects": self.follow_redirects,
            "verify": self.verify_ssl,
            "headers": headers,
            "limits": limits,
        }
        if self._transport is not None:
            options["transport"] = self._transport
        elif self.proxy:
            options["proxy"] = self.proxy
        self.client = httpx.Client(**options)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            self.client.close()
            self.client = None

    def request(self, method: str, url: str) -> HTTPResponse:
        """Make an HTTP request and return its metadata.

        The body is never kept. Its size comes from ``Content-Length`` when the
        server sends one; otherwise at most ``MAX_BODY_BYTES`` are read, and
        reading stops once the request has run for ``timeout`` seconds.
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use context manager.")

        start = time.perf_counter()

        with self.client.stream(method=method, url=url) as response:
            size = _response_size(response, deadline=start + self.timeout)

        elapsed = time.perf_counter() - start

        return HTTPResponse(
            url=str(response.url),
            status_code=response.status_code,
            size=size,
            response_time=elapsed,
            location=response.headers.get("location"),
            redirected=bool(response.history),
        )


def _response_size(response: httpx.Response, deadline: float) -> int:
    length = response.headers.get("content-length", "")
    if length.isdigit():
        return int(length)
    if response.request.method == "HEAD":
        return 0
    size = 0
    for chunk in response.iter_bytes():
        size += len(chunk)
        if size >= MAX_BODY_BYTES or time.perf_counter() >= deadline:
            break
    return size

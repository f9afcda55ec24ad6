"""Async HTTP transport for postline requests."""

from __future__ import annotations

import httpx

from postline.core.config import PostlineSettings, get_settings
from postline.core.exceptions import ConfigurationError, RequestError, RequestTimeoutError
from postline.core.logging import get_logger
from postline.models import RequestSpec, ResponseSummary

logger = get_logger(__name__)

ACCEPT_ENCODING = "gzip, deflate, br"


def create_client(
    timeout: float,
    follow_redirects: bool = False,
    verify: bool = True,
    user_agent: str | None = None,
) -> httpx.AsyncClient:
    """Create an HTTP client that decompresses gzip and brotli responses.

    Args:
        timeout: Total timeout in seconds applied to connect, read, write and pool
        follow_redirects: Whether 3xx responses are followed
        verify: Whether TLS certificates are verified
        user_agent: Optional User-Agent header value

    Returns:
        Unopened ``httpx.AsyncClient``; use it as an async context manager
    """
    if timeout <= 0:
        raise ConfigurationError(
            message="Timeout must be positive",
            error_code="invalid_timeout",
            details={"timeout_seconds": timeout},
        )

    headers = {"Accept-Encoding": ACCEPT_ENCODING}
    if user_agent:
        headers["User-Agent"] = user_agent

    return httpx.AsyncClient(
        headers=headers,
        timeout=timeout,
        follow_redirects=follow_redirects,
        verify=verify,
    )


class RequestClient:
    """Sends a ``RequestSpec`` and summarizes the response."""

    def __init__(
        self,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
        verify_ssl: bool | None = None,
        settings: PostlineSettings | None = None,
    ):
        """Initialize the client, falling back to settings for unset options."""
        settings = settings or get_settings()
        self.timeout = timeout if timeout is not None else settings.timeout_seconds
        self.follow_redirects = follow_redirects if follow_redirects is not None else settings.follow_redirects
        self.verify_ssl = verify_ssl if verify_ssl is not None else settings.verify_ssl
        self.user_agent = settings.user_agent

    async def send(self, spec: RequestSpec) -> ResponseSummary:
        """
        Send a request and return its response.

        HTTP error statuses are returned like any other response; only
        failures to obtain a response raise.

        Args:
            spec: The request to send

        Returns:
            ResponseSummary with status, headers and decoded body

        Raises:
            RequestTimeoutError: The request exceeded the timeout
            RequestError: The request could not be completed
        """
        content = spec.data.encode("utf-8") if spec.data is not None else None
        log = logger.bind(method=str(spec.method), url=spec.url)
        log.info("request.start", content_type=str(spec.content_type) if spec.content_type else None)

        try:
            async with create_client(
                self.timeout,
                follow_redirects=self.follow_redirects,
                verify=self.verify_ssl,
                user_agent=self.user_agent,
            ) as client:
                response = await client.request(
                    spec.method.value,
                    spec.url,
                    content=content,
                    headers=spec.request_headers(),
                )
        except httpx.TimeoutException as exc:
            error = RequestTimeoutError(
                message=f"Request timed out after {self.timeout:g}s: {spec.url}",
                error_code="request_timeout",
                details={"url": spec.url, "timeout_seconds": self.timeout},
            )
            log.error("request.timeout", **error.to_dict())
            raise error from exc
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            # httpx encodes header values as ASCII
            error = RequestError(
                message=f"Request failed: {exc}",
                error_code="request_failed",
                details={"url": spec.url, "error_type": type(exc).__name__},
            )
            log.error("request.failed", **error.to_dict())
            raise error from exc

        summary = ResponseSummary(
            status_code=response.status_code,
            reason=response.reason_phrase,
            http_version=response.http_version,
            headers=list(response.headers.multi_items()),
            text=response.text,
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )
        log.info(
            "request.complete",
            status=summary.status_code,
            is_error=summary.is_error,
            elapsed_ms=round(summary.elapsed_ms, 1),
        )
        return summary


async def send_request(spec: RequestSpec, settings: PostlineSettings | None = None) -> ResponseSummary:
    """Send ``spec`` with a client configured from ``settings``.

    Request events are logged through structlog. Call
    ``postline.core.logging.configure_logging`` first to route them to stderr;
    unconfigured structlog prints them to stdout.
    """
    return await RequestClient(settings=settings).send(spec)

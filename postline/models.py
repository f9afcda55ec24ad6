from __future__ import annotations

from dataclasses import dataclass, field

from postline.http import ContentType, HttpMethod, content_type_header


@dataclass(slots=True)
class RequestSpec:
    """A single request as assembled from the command line."""

    url: str
    method: HttpMethod = HttpMethod.GET
    content_type: ContentType | None = None
    data: str | None = None
    headers: list[tuple[str, str]] = field(default_factory=list)
    include: bool = False

    def has_header(self, name: str) -> bool:
        wanted = name.lower()
        return any(existing.lower() == wanted for existing, _ in self.headers)

    def request_headers(self) -> list[tuple[str, str]]:
        """Headers to send: the user's own, plus Content-Type unless the user set one."""
        headers = list(self.headers)
        if self.content_type is not None and not self.has_header("Content-Type"):
            headers.append(("Content-Type", content_type_header(self.content_type, self.data)))
        return headers


@dataclass(slots=True)
class ResponseSummary:
    """What postline keeps from an HTTP response."""

    status_code: int
    reason: str
    http_version: str
    headers: list[tuple[str, str]]
    text: str
    elapsed_ms: float = 0.0

    def status_line(self) -> str:
        return f"{self.http_version} {self.status_code} {self.reason}".rstrip()

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

from __future__ import annotations

from postline.models import ResponseSummary


def render_response(summary: ResponseSummary, include: bool = False) -> str:
    """Format a response for stdout: the body, optionally preceded by status line and headers."""
    if not include:
        return summary.text

    lines = [summary.status_line()]
    lines.extend(f"{name}: {value}" for name, value in summary.headers)
    lines.append("")
    lines.append(summary.text)
    return "\n".join(lines)

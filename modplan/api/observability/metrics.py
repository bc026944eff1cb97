from __future__ import annotations

import re
from prometheus_client import Counter, Histogram


def normalize_path(path: str) -> str:
    """Reduce high-cardinality paths for metrics labels."""
    p = path or "/"

    # Module names in path
    p = re.sub(r"^(/api/v1/modules)/(?!validate$)[^/]+$", r"\1/:name", p)
    p = re.sub(r"^(/api/v1/plans)/(?!resolve$)[^/]+$", r"\1/:root", p)

    return p


HTTP_REQUESTS_TOTAL = Counter(
    "modplan_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "modplan_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

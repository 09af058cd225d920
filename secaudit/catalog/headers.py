"""HTTP response headers expected on a hardened web application."""

from __future__ import annotations

from typing import Tuple

from secaudit.severity import Severity

from . import SecurityHeader

SECURITY_HEADERS: Tuple[SecurityHeader, ...] = (
    SecurityHeader(
        name="Strict-Transport-Security",
        description="Enforces HTTPS connections",
        recommended="max-age=31536000; includeSubDomains",
        severity=Severity.HIGH,
    ),
    SecurityHeader(
        name="Content-Security-Policy",
        description="Prevents XSS and data injection attacks",
        recommended="default-src 'self'",
        severity=Severity.HIGH,
    ),
    SecurityHeader(
        name="X-Content-Type-Options",
        description="Prevents MIME type sniffing",
        recommended="nosniff",
        severity=Severity.MEDIUM,
    ),
    SecurityHeader(
        name="X-Frame-Options",
        description="Prevents clickjacking",
        recommended="DENY or SAMEORIGIN",
        severity=Severity.MEDIUM,
    ),
    SecurityHeader(
        name="Referrer-Policy",
        description="Controls referrer information sent with requests",
        recommended="strict-origin-when-cross-origin",
        severity=Severity.LOW,
    ),
    SecurityHeader(
        name="Permissions-Policy",
        description="Controls browser feature access (camera, mic, geolocation)",
        recommended="camera=(), microphone=(), geolocation=()",
        severity=Severity.LOW,
    ),
    SecurityHeader(
        name="X-XSS-Protection",
        description="Legacy XSS filter, deprecated but still checked",
        recommended="0 (rely on CSP instead)",
        severity=Severity.LOW,
    ),
)

# Headers that disclose server software when present.
LEAKY_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("Server", "consider removing to hide server software"),
    ("X-Powered-By", "remove to hide framework information"),
)

"""Whole-file configuration predicates."""

from __future__ import annotations

import re
from typing import Tuple

from secaudit.severity import Severity

from . import NOT_FOUND, CheckOutcome, ConfigCheck

DEBUG_FLAG = re.compile(r"debug[\"']?\s*[=:]\s*[\"']?(?:true|1|yes|on)\b", re.IGNORECASE)
DEFAULT_SECRET_KEYS = (
    re.compile(r"SECRET_KEY[\"']?\s*[=:]\s*[\"'](?:changeme|secret|default|your[_-]?secret|please[_-]?change)", re.IGNORECASE),
    re.compile(r"SECRET_KEY[\"']?\s*[=:]\s*[\"'](?:django-insecure-|xxx|abc123|password)", re.IGNORECASE),
)
PUBLISHED_PORT = re.compile(r"ports:\s*\n\s*-\s*[\"']?(\d+):(\d+)", re.MULTILINE)
LOOPBACK = "127.0.0.1"
ROUTE_DEFINITION = re.compile(r"(?:route|router|app\.(?:get|post|put|delete|patch)|@app\.route)", re.IGNORECASE)
RATE_LIMITER = re.compile(r"(?:rate[_-]?limit|throttle|express-rate-limit|slowapi|limiter)", re.IGNORECASE)


def check_debug_enabled(content: str, filename: str) -> CheckOutcome:
    match = DEBUG_FLAG.search(content)
    if not match:
        return NOT_FOUND
    return CheckOutcome(found=True, detail=f"Debug mode is on: {match.group(0)}")


def check_default_secret_key(content: str, filename: str) -> CheckOutcome:
    for pattern in DEFAULT_SECRET_KEYS:
        match = pattern.search(content)
        if match:
            return CheckOutcome(found=True, detail=f"Default secret key detected: {match.group(0)[:60]}")
    return NOT_FOUND


def check_exposed_port(content: str, filename: str) -> CheckOutcome:
    match = PUBLISHED_PORT.search(content)
    if match and LOOPBACK not in content:
        host, container = match.group(1), match.group(2)
        return CheckOutcome(
            found=True,
            detail=f"Port {host}:{container} exposed on all interfaces (missing {LOOPBACK} binding)",
        )
    return NOT_FOUND


def check_rate_limiting(content: str, filename: str) -> CheckOutcome:
    if not ROUTE_DEFINITION.search(content):
        return NOT_FOUND
    if RATE_LIMITER.search(content):
        return NOT_FOUND
    return CheckOutcome(found=True, detail=f"API routes in {filename} without rate limiting")


CONFIG_CHECKS: Tuple[ConfigCheck, ...] = (
    ConfigCheck(
        id="debug-enabled",
        name="Debug Mode Enabled",
        file_pattern="**/*.{json,yaml,yml,toml,env}",
        check=check_debug_enabled,
        severity=Severity.MEDIUM,
    ),
    ConfigCheck(
        id="default-secret-key",
        name="Default Secret Key",
        file_pattern="**/*.{py,json,yaml,yml,env}",
        check=check_default_secret_key,
        severity=Severity.CRITICAL,
    ),
    ConfigCheck(
        id="exposed-port-all-interfaces",
        name="Service Exposed on All Interfaces",
        file_pattern="**/{docker-compose,compose}.{yml,yaml}",
        check=check_exposed_port,
        severity=Severity.MEDIUM,
    ),
    ConfigCheck(
        id="no-rate-limiting",
        name="No Rate Limiting Detected",
        file_pattern="**/*.{ts,js,py}",
        check=check_rate_limiting,
        severity=Severity.MEDIUM,
    ),
)

"""Credential formats detected by the secret scanner.

Order matters: the matcher reports only the first rule that hits a line.
"""

from __future__ import annotations

import re
from typing import Tuple

from secaudit.severity import Severity

from . import SecretPattern

# Token boundaries: the credential must not be glued to other word characters.
_START = r"(?:^|[^a-zA-Z0-9])"
_END = r"(?:[^a-zA-Z0-9]|$)"


def _token(body: str) -> str:
    return f"{_START}({body}){_END}"


SECRET_PATTERNS: Tuple[SecretPattern, ...] = (
    # API keys and tokens
    SecretPattern(
        id="aws-access-key",
        name="AWS Access Key ID",
        pattern=re.compile(_token(r"AKIA[0-9A-Z]{16}")),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="aws-secret-key",
        name="AWS Secret Access Key",
        pattern=re.compile(
            r"(?:aws_secret_access_key|aws_secret_key|secret_key)\s*[=:]\s*[\"']?([a-zA-Z0-9/+=]{40})[\"']?",
            re.IGNORECASE,
        ),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="github-token",
        name="GitHub Token",
        pattern=re.compile(_token(r"gh[ps]_[a-zA-Z0-9]{36,255}")),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="github-oauth",
        name="GitHub OAuth Token",
        pattern=re.compile(_token(r"gho_[a-zA-Z0-9]{36,255}")),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="slack-token",
        name="Slack Token",
        pattern=re.compile(_token(r"xox[bprs]-[a-zA-Z0-9\-]{10,255}")),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="stripe-secret",
        name="Stripe Secret Key",
        pattern=re.compile(_token(r"sk_live_[a-zA-Z0-9]{20,255}")),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="stripe-restricted",
        name="Stripe Restricted Key",
        pattern=re.compile(_token(r"rk_live_[a-zA-Z0-9]{20,255}")),
        severity=Severity.HIGH,
    ),
    SecretPattern(
        id="google-api-key",
        name="Google API Key",
        pattern=re.compile(_token(r"AIza[0-9A-Za-z\-_]{35}")),
        severity=Severity.HIGH,
    ),
    SecretPattern(
        id="openai-api-key",
        name="OpenAI API Key",
        pattern=re.compile(_token(r"sk-[a-zA-Z0-9]{20,255}")),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="anthropic-api-key",
        name="Anthropic API Key",
        pattern=re.compile(_token(r"sk-ant-[a-zA-Z0-9\-]{20,255}")),
        severity=Severity.CRITICAL,
    ),
    # Generic shapes
    SecretPattern(
        id="private-key",
        name="Private Key",
        pattern=re.compile(r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----"),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="generic-password",
        name="Hardcoded Password",
        pattern=re.compile(r"(?:password|passwd|pwd)\s*[=:]\s*[\"']([^\"']{8,255})[\"']", re.IGNORECASE),
        severity=Severity.HIGH,
    ),
    SecretPattern(
        id="generic-secret",
        name="Hardcoded Secret",
        pattern=re.compile(
            r"(?:secret|token|api_key|apikey|access_key)\s*[=:]\s*[\"']([a-zA-Z0-9+/=\-_]{16,255})[\"']",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    SecretPattern(
        id="connection-string",
        name="Database Connection String",
        pattern=re.compile(
            r"(?:mongodb\+srv|postgres(?:ql)?|mysql|mssql)://[^\s\"':]{1,255}:([^\s\"'@]{1,255})@[^\s\"']{1,255}",
            re.IGNORECASE,
        ),
        severity=Severity.CRITICAL,
    ),
    SecretPattern(
        id="jwt-token",
        name="JWT Token",
        pattern=re.compile(_token(r"eyJ[a-zA-Z0-9_-]{10,512}\.eyJ[a-zA-Z0-9_-]{10,8192}\.[a-zA-Z0-9_-]{10,1024}")),
        severity=Severity.HIGH,
    ),
    SecretPattern(
        id="basic-auth",
        name="Basic Auth Header",
        pattern=re.compile(r"(?:authorization|auth)\s*[=:]\s*[\"']?Basic\s+([a-zA-Z0-9+/=]{10,1024})[\"']?", re.IGNORECASE),
        severity=Severity.HIGH,
    ),
)

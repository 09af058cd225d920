"""Risky code constructs detected by the code scanner, tagged with CWE ids."""

from __future__ import annotations

import re
from typing import Tuple

from secaudit.severity import Severity

from . import VulnPattern

JS_TS = ("javascript", "typescript")
COMMON = ("javascript", "typescript", "python", "go")

VULN_PATTERNS: Tuple[VulnPattern, ...] = (
    # SQL injection
    VulnPattern(
        id="sql-injection-template",
        name="SQL Injection (Template Literal)",
        pattern=re.compile(r"(?:query|exec|execute|prepare|raw)\s*\(\s*`[^`]{0,200}\$\{"),
        severity=Severity.CRITICAL,
        cwe="CWE-89",
        description="SQL query built with template literals may be vulnerable to injection",
        languages=JS_TS,
    ),
    VulnPattern(
        id="sql-injection-concat",
        name="SQL Injection (String Concatenation)",
        pattern=re.compile(r"(?:query|exec|execute)\s*\(\s*[\"'][^\"']{0,200}[\"']\s*\+\s*(?![\"'])"),
        severity=Severity.CRITICAL,
        cwe="CWE-89",
        description="SQL query built with string concatenation may be vulnerable to injection",
        languages=COMMON,
    ),
    VulnPattern(
        id="sql-injection-fstring",
        name="SQL Injection (f-string)",
        pattern=re.compile(r"(?:cursor\.execute|\.query)\s*\(\s*f[\"'][^\"']{0,200}\{"),
        severity=Severity.CRITICAL,
        cwe="CWE-89",
        description="SQL query built with f-string may be vulnerable to injection",
        languages=("python",),
    ),
    # Cross-site scripting
    VulnPattern(
        id="xss-innerhtml",
        name="XSS (innerHTML)",
        pattern=re.compile(r"\.innerHTML\s*=\s*(?![\"']<)"),
        severity=Severity.HIGH,
        cwe="CWE-79",
        description="Setting innerHTML with dynamic content may enable cross-site scripting",
        languages=JS_TS,
    ),
    VulnPattern(
        id="xss-dangerously-set",
        name="XSS (dangerouslySetInnerHTML)",
        pattern=re.compile(r"dangerouslySetInnerHTML\s*=\s*\{\s*\{\s*__html\s*:"),
        severity=Severity.MEDIUM,
        cwe="CWE-79",
        description="dangerouslySetInnerHTML usage, ensure input is sanitized",
        languages=JS_TS,
    ),
    VulnPattern(
        id="xss-document-write",
        name="XSS (document.write)",
        pattern=re.compile(r"document\.write\s*\("),
        severity=Severity.HIGH,
        cwe="CWE-79",
        description="document.write with dynamic content may enable cross-site scripting",
        languages=JS_TS,
    ),
    # Command injection
    VulnPattern(
        id="cmd-injection-exec",
        name="Command Injection (exec)",
        pattern=re.compile(r"(?:child_process|exec|execSync|spawn)\s*\(\s*(?:`[^`]{0,200}\$\{|[\"'][^\"']{0,200}[\"']\s*\+)"),
        severity=Severity.CRITICAL,
        cwe="CWE-78",
        description="Shell command built with dynamic input may be vulnerable to injection",
        languages=JS_TS,
    ),
    VulnPattern(
        id="cmd-injection-os-system",
        name="Command Injection (os.system)",
        pattern=re.compile(r"os\.system\s*\(\s*(?:f[\"']|[\"'][^\"']{0,200}[\"']\s*\+|[a-zA-Z])"),
        severity=Severity.CRITICAL,
        cwe="CWE-78",
        description="os.system with dynamic input may be vulnerable to command injection",
        languages=("python",),
    ),
    VulnPattern(
        id="cmd-injection-subprocess",
        name="Command Injection (subprocess shell=True)",
        pattern=re.compile(r"subprocess\.(?:call|run|Popen)\s*\([^)]{0,300}shell\s*=\s*True"),
        severity=Severity.HIGH,
        cwe="CWE-78",
        description="subprocess with shell=True may be vulnerable to command injection",
        languages=("python",),
    ),
    # Path traversal
    VulnPattern(
        id="path-traversal",
        name="Path Traversal",
        pattern=re.compile(
            r"(?:readFile|writeFile|readFileSync|createReadStream|open)\s*\(\s*"
            r"(?:`[^`]{0,200}\$\{|[a-zA-Z_]{1,100}\s*\+|path\.join\s*\([^)]{0,300}(?:req\.|params\.|query\.))"
        ),
        severity=Severity.HIGH,
        cwe="CWE-22",
        description="File operation with user input may allow path traversal attacks",
        languages=JS_TS,
    ),
    # Weak cryptography
    VulnPattern(
        id="weak-hash-md5",
        name="Weak Hash (MD5)",
        pattern=re.compile(r"(?:createHash|hashlib\.md5|MD5\.Create|md5sum)\s*\(\s*[\"']?md5[\"']?\s*\)", re.IGNORECASE),
        severity=Severity.MEDIUM,
        cwe="CWE-328",
        description="MD5 is cryptographically broken, use SHA-256 or better",
        languages=COMMON,
    ),
    VulnPattern(
        id="weak-hash-sha1",
        name="Weak Hash (SHA-1)",
        pattern=re.compile(r"createHash\s*\(\s*[\"']sha1[\"']\s*\)"),
        severity=Severity.MEDIUM,
        cwe="CWE-328",
        description="SHA-1 is deprecated for security, use SHA-256 or better",
        languages=JS_TS,
    ),
    VulnPattern(
        id="hardcoded-iv",
        name="Hardcoded Initialization Vector",
        pattern=re.compile(
            r"(?:createCipheriv|createDecipheriv)\s*\([^,]{1,200},\s*[^,]{1,200},\s*"
            r"(?:Buffer\.from\s*\(\s*[\"']|new Uint8Array\s*\(\s*\[)"
        ),
        severity=Severity.HIGH,
        cwe="CWE-329",
        description="Hardcoded IV weakens encryption, use a random IV for each operation",
        languages=JS_TS,
    ),
    # Insecure transport
    VulnPattern(
        id="no-tls-verify",
        name="TLS Verification Disabled",
        pattern=re.compile(r"(?:NODE_TLS_REJECT_UNAUTHORIZED|rejectUnauthorized)\s*[=:]\s*(?:[\"']?0[\"']?|false)"),
        severity=Severity.HIGH,
        cwe="CWE-295",
        description="TLS certificate verification disabled, vulnerable to MITM attacks",
        languages=JS_TS,
    ),
    VulnPattern(
        id="http-url-hardcoded",
        name="Insecure HTTP URL",
        pattern=re.compile(r"[\"']http://(?!localhost|127\.0\.0\.1|0\.0\.0\.0|::1)[a-zA-Z]"),
        severity=Severity.MEDIUM,
        cwe="CWE-319",
        description="HTTP URL may transmit sensitive data in cleartext, use HTTPS",
        languages=COMMON,
    ),
    # Dynamic code execution
    VulnPattern(
        id="eval-usage",
        name="Eval Usage",
        pattern=re.compile(r"(?:^|[^a-zA-Z])eval\s*\("),
        severity=Severity.HIGH,
        cwe="CWE-95",
        description="eval() with dynamic input can execute arbitrary code",
        languages=("javascript", "typescript", "python"),
    ),
    VulnPattern(
        id="new-function",
        name="Dynamic Function Constructor",
        pattern=re.compile(r"new\s+Function\s*\("),
        severity=Severity.HIGH,
        cwe="CWE-95",
        description="new Function() with dynamic input can execute arbitrary code",
        languages=JS_TS,
    ),
    # CORS
    VulnPattern(
        id="cors-wildcard",
        name="CORS Wildcard Origin",
        pattern=re.compile(r"(?:Access-Control-Allow-Origin|origin)\s*[=:]\s*[\"']\*[\"']", re.IGNORECASE),
        severity=Severity.MEDIUM,
        cwe="CWE-942",
        description="CORS wildcard allows any origin, restrict to specific domains",
        languages=COMMON,
    ),
)

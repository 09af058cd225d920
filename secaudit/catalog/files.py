"""File selection tables shared by the collector and the scanners."""

from __future__ import annotations

SCANNABLE_EXTENSIONS = frozenset({
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
    ".py", ".pyw",
    ".go",
    ".rb",
    ".java", ".kt",
    ".php",
    ".cs",
    ".rs",
    ".swift",
    ".sh", ".bash", ".zsh",
    ".env",
    ".json", ".yaml", ".yml", ".toml", ".xml",
    ".sql",
    ".tf", ".tfvars",
    ".dockerfile",
    ".conf", ".cfg", ".ini",
})

# Matched as name suffixes so compound extensions like ``.min.js`` work.
BINARY_SUFFIXES = (
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".svg", ".webp",
    ".woff", ".woff2", ".ttf", ".eot",
    ".mp3", ".mp4", ".webm", ".ogg",
    ".zip", ".tar", ".gz", ".bz2",
    ".exe", ".dll", ".so", ".dylib",
    ".pyc", ".class", ".o",
    ".lock", ".min.js", ".min.css",
)

# Extensionless (or dot-prefixed) files worth scanning, compared lower-cased.
KNOWN_FILES = frozenset({
    "dockerfile",
    "makefile",
    ".gitignore",
    ".dockerignore",
    ".npmrc",
    ".env",
})

ENV_FILE_PREFIX = ".env"

SKIP_DIRS = frozenset({
    "node_modules", ".git", "dist", "build", ".next", "__pycache__",
    ".cache", "vendor", ".venv", "venv", "target", ".idea", ".vscode",
    "coverage", ".nyc_output", ".tox", "eggs", ".eggs", "bower_components",
})

CODE_EXTENSIONS = frozenset({
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".py", ".go", ".rb", ".php",
})

SENSITIVE_FILES = (
    ".env",
    ".env.local",
    ".env.production",
    "credentials.json",
    "service-account.json",
    "id_rsa",
    "id_ed25519",
)

SENSITIVE_ENV_KEYS = (
    "password", "secret", "key", "token", "auth", "credential",
    "private", "api_key", "apikey", "access_token", "client_secret",
    "database_url", "db_password", "smtp_password", "jwt_secret",
)

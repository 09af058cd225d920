from pathlib import Path

from secaudit.engine import scan_env
from secaudit.rules.env_files import is_env_file, parse_variables, sensitive_keys
from secaudit.severity import Severity

ENV_CONTENT = """
# database
DB_PASSWORD=supersecret123
DB_HOST=localhost

PORT=8080
STRIPE_API_KEY=sk_live_ABCDEFGHIJKLMNOPQRST
""".lstrip()


def test_parse_variables_ignores_comments_and_blanks():
    assert parse_variables(ENV_CONTENT) == ["db_password", "db_host", "port", "stripe_api_key"]


def test_sensitive_keys():
    assert sensitive_keys(["db_password", "db_host", "port", "stripe_api_key"]) == ["db_password", "stripe_api_key"]


def test_is_env_file():
    assert is_env_file(Path(".env"))
    assert is_env_file(Path(".env.production"))
    assert is_env_file(Path("config/staging.env"))
    assert not is_env_file(Path("environment.py"))


def test_env_without_gitignore_is_critical(make_tree):
    root = make_tree({".env": ENV_CONTENT})

    result = scan_env(str(root))

    assert len(result.env_files) == 1
    info = result.env_files[0]
    assert info.path == ".env"
    assert info.in_gitignore is False
    assert info.variable_count == 4
    assert info.sensitive_vars == ["db_password", "stripe_api_key"]

    first = result.findings[0]
    assert first.id == "env-not-gitignored"
    assert first.severity is Severity.CRITICAL
    assert first.line == 0
    assert first.match == ".env contains 2 sensitive variable(s) but is not in .gitignore"

    stripe = [f for f in result.findings if f.id == "stripe-secret"]
    assert len(stripe) == 1
    assert stripe[0].line == 6
    assert "sk_live_ABCDEFGHIJKLMNOPQRST" not in stripe[0].match


def test_gitignored_env_has_no_config_finding(make_tree):
    root = make_tree({".gitignore": "node_modules\n.env\n", ".env": "DB_PASSWORD=supersecret123\n"})

    result = scan_env(str(root))

    assert result.env_files[0].in_gitignore is True
    assert result.findings == []


def test_env_without_sensitive_keys_is_fine(make_tree):
    root = make_tree({"config/app.env": "PORT=8080\nHOST=0.0.0.0\n"})

    result = scan_env(str(root))

    assert [info.path for info in result.env_files] == ["config/app.env"]
    assert result.findings == []


def test_no_env_files(tmp_path):
    result = scan_env(str(tmp_path))

    assert result.env_files == []
    assert result.findings == []

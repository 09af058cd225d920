import os

import pytest

from secaudit import DirectoryNotFoundError, build_report, scan_code, scan_secrets
from secaudit.config import ScanConfig
from secaudit.engine import aggregate
from secaudit.result import Category, Finding
from secaudit.severity import Severity

STRIPE_LINE = 'const key = "sk_live_ABCDEFGHIJKLMNOPQRST";\n'


def test_missing_directory_fails_whole_scan(tmp_path):
    missing = tmp_path / "nope"

    with pytest.raises(DirectoryNotFoundError) as excinfo:
        build_report(str(missing))
    assert "Directory not found" in str(excinfo.value)

    with pytest.raises(DirectoryNotFoundError):
        scan_secrets(str(missing))


def test_file_as_root_is_rejected(make_tree):
    root = make_tree({"app.py": ""})

    with pytest.raises(DirectoryNotFoundError):
        scan_code(str(root / "app.py"))


def test_empty_directory_scores_perfect(tmp_path):
    report = build_report(str(tmp_path))

    assert report.score == 100
    assert report.grade == "A"
    assert report.total == 0
    assert report.findings == []
    assert report.summary == "No critical or high severity issues found."


def test_skip_listed_content_is_ignored(make_tree):
    root = make_tree({"node_modules/pkg/index.js": STRIPE_LINE, "dist/app.js": STRIPE_LINE})

    report = build_report(str(root))

    assert report.files_scanned == 0
    assert report.score == 100
    assert report.grade == "A"


def test_stripe_key_scenario(make_tree):
    root = make_tree({"config.js": STRIPE_LINE})

    report = build_report(str(root))

    assert report.total == 1
    finding = report.findings[0]
    assert finding.id == "stripe-secret"
    assert finding.severity is Severity.CRITICAL
    assert finding.category is Category.SECRET
    assert finding.line == 1
    assert "sk_l****" in finding.match
    assert "sk_live_ABCDEFGHIJKLMNOPQRST" not in finding.match
    assert report.score == 85
    assert report.grade == "B"


def test_env_scenario(make_tree):
    root = make_tree({".env": "DB_PASSWORD=supersecret123\n"})

    report = build_report(str(root))

    env_findings = [f for f in report.findings if f.id == "env-not-gitignored"]
    assert len(env_findings) == 1
    assert env_findings[0].severity is Severity.CRITICAL
    assert env_findings[0].category is Category.CONFIG
    assert report.env_files[0].sensitive_vars == ["db_password"]


def test_sql_template_scenario(make_tree):
    root = make_tree({"db.js": "db.query(`SELECT * FROM users WHERE id = ${id}`)\n"})

    findings = scan_code(str(root))

    assert len(findings) == 1
    assert findings[0].id == "sql-injection-template"
    assert findings[0].severity is Severity.CRITICAL
    assert findings[0].cwe == "CWE-89"


def test_code_scan_only_reads_source_files(make_tree):
    root = make_tree({"notes.json": '{"cmd": "eval(x)"}', "run.py": "eval(x)\n"})

    assert [f.file for f in scan_code(str(root))] == ["run.py"]


def test_report_truncates_but_grades_everything(make_tree):
    lines = "".join(f'token_{i} = "sk_live_{"A" * 20}{i:04d}"\n' for i in range(25))
    root = make_tree({"keys.js": lines})

    secrets = scan_secrets(str(root))
    report = build_report(str(root))

    assert len(secrets) == 25
    assert report.total == 25
    assert len(report.findings) == 20
    assert report.omitted == 5
    assert report.counts.critical == 25
    assert report.score == 0
    assert report.grade == "F"
    assert [f.line for f in report.findings] == list(range(1, 21))


def test_report_sorted_by_severity_with_stable_ties(make_tree):
    root = make_tree(
        {
            "a.js": "el.innerHTML = data;\nfetch('http://example.com');\n",
            "b.js": STRIPE_LINE,
        }
    )

    report = build_report(str(root), limit=50)

    assert [(f.id, f.severity) for f in report.findings] == [
        ("stripe-secret", Severity.CRITICAL),
        ("xss-innerhtml", Severity.HIGH),
        ("http-url-hardcoded", Severity.MEDIUM),
    ]
    assert report.sections == {"secrets": 1, "vulnerabilities": 2, "env": 0, "permissions": 0, "config": 0}


def test_scans_are_deterministic(make_tree):
    root = make_tree(
        {
            "src/a.py": 'password = "hunter2hunter2"\nos.system(cmd)\n',
            "src/b.js": STRIPE_LINE + "eval(code)\n",
            "lib/c.ts": "document.write(x)\n",
            "settings.json": '{"debug": true}',
        }
    )

    first = build_report(str(root)).to_dict()
    second = build_report(str(root)).to_dict()

    assert first == second


def test_ignore_rules_suppresses_findings(make_tree):
    root = make_tree({"config.js": STRIPE_LINE})

    report = build_report(str(root), config=ScanConfig(ignore_rules=frozenset({"stripe-secret"})))

    assert report.total == 0


def test_config_file_in_root_is_used(make_tree):
    root = make_tree({"config.js": STRIPE_LINE, ".secaudit.yaml": "ignore_rules:\n  - stripe-secret\n"})

    assert scan_secrets(str(root)) == []


def test_unreadable_and_binary_content_is_skipped(make_tree):
    root = make_tree({"good.py": "eval(x)\n"})
    (root / "latin1.py").write_bytes(b"caf\xe9 = eval(x)\n")

    findings = scan_code(str(root))

    assert [f.file for f in findings] == ["good.py"]


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX and a non-root user")
def test_permission_denied_files_are_skipped(make_tree):
    root = make_tree({"locked.py": "eval(x)\n", "open.py": "eval(x)\n"})
    os.chmod(root / "locked.py", 0)

    try:
        findings = scan_code(str(root))
    finally:
        os.chmod(root / "locked.py", 0o644)

    assert [f.file for f in findings] == ["open.py"]


def _finding(rule_id, severity, file="a.py"):
    return Finding(
        id=rule_id,
        name=rule_id,
        severity=severity,
        file=file,
        line=1,
        match="x",
        category=Category.VULNERABILITY,
    )


def test_aggregate_merges_sorts_and_grades_all_findings():
    first = [_finding("low-1", Severity.LOW), _finding("crit-1", Severity.CRITICAL)]
    second = [_finding("med-1", Severity.MEDIUM), _finding("high-1", Severity.HIGH)]

    merged = aggregate(first, second, limit=2)

    assert [f.id for f in merged.findings] == ["crit-1", "high-1", "med-1", "low-1"]
    assert [f.id for f in merged.shown] == ["crit-1", "high-1"]
    assert merged.omitted == 2
    assert merged.counts.total == 4
    # Low findings carry no penalty.
    assert merged.grade.score == 100 - 15 - 8 - 3


def test_aggregate_without_inputs_is_perfect():
    merged = aggregate()

    assert merged.findings == []
    assert merged.omitted == 0
    assert merged.grade.grade == "A"


def test_line_numbers_follow_newlines_only(tmp_path):
    (tmp_path / "legacy.js").write_bytes(b"const a = 1;\rconst b = eval(x);\r\nconst c = eval(y);\n")

    findings = scan_code(str(tmp_path))

    assert [(f.id, f.line) for f in findings] == [("eval-usage", 1), ("eval-usage", 2)]
    assert findings[0].match == "const a = 1;\rconst b = eval(x);"

"""Command-line entry point for the security audit engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import yaml

from . import engine
from .config import ScanConfig, load_config
from .errors import ConfigError, SecAuditError
from .headers import HeaderReport, evaluate_headers
from .result import Finding, Summary, exit_code_for, format_summary_table
from .rules.permissions import PermissionStatus
from .severity import Severity
from .utils.fileio import read_yaml_file

logger = logging.getLogger(__name__)

ERROR_EXIT_CODE = 3
DIRECTORY_COMMANDS = ("report", "secrets", "code", "env", "config", "permissions")


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secaudit",
        description="Local pattern-based security scanner for project directories",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Console output format (defaults to text).",
    )
    common.add_argument(
        "--out",
        "--output",
        dest="output_path",
        default=None,
        help="Path to write the structured JSON report.",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    helps = {
        "report": "Run every scanner and print a graded report.",
        "secrets": "Detect hardcoded credentials.",
        "code": "Detect vulnerable code patterns.",
        "env": "Audit .env files.",
        "config": "Audit configuration files.",
        "permissions": "Check permissions of sensitive files.",
    }
    for name in DIRECTORY_COMMANDS:
        sub = subparsers.add_parser(name, parents=[common], help=helps[name])
        sub.add_argument("directory", help="Project root to scan.")
        sub.add_argument(
            "--config",
            dest="config_path",
            default=None,
            help="YAML configuration file (defaults to <directory>/.secaudit.yaml).",
        )
        if name == "report":
            sub.add_argument(
                "--limit",
                type=non_negative_int,
                default=None,
                help="Maximum number of findings listed in the report.",
            )

    headers = subparsers.add_parser(
        "headers",
        parents=[common],
        help="Grade HTTP response headers stored in a YAML or JSON file.",
    )
    headers.add_argument("headers_file", help="File holding a header name to value mapping.")
    return parser


def _resolve_config(args: argparse.Namespace) -> Optional[ScanConfig]:
    """Load an explicit --config file; otherwise the engine looks in the root."""

    if args.config_path is None:
        return None
    return load_config(Path(args.directory), args.config_path)


def _findings_text(title: str, findings: Sequence[Finding]) -> str:
    return format_summary_table(Summary.from_findings(findings), findings, title=title)


def _report_text(report: engine.Report) -> str:
    lines = [format_summary_table(report.counts, report.findings, title="Security Report")]
    lines.append("")
    lines.append(f"Directory : {report.directory}")
    lines.append(f"Files     : {report.files_scanned}")
    lines.append(f"Grade     : {report.grade} ({report.score}/100)")
    lines.append(report.summary)
    for name, count in report.sections.items():
        lines.append(f"  {name:<16} {count} finding(s)")
    if report.omitted:
        lines.append(f"...and {report.omitted} more finding(s). Run a specific scan for details.")
    return "\n".join(lines)


def _env_text(result: engine.EnvAuditResult) -> str:
    lines = [_findings_text("Environment File Audit", result.findings), ""]
    if not result.env_files:
        lines.append("No .env files found.")
    for info in result.env_files:
        status = "gitignored" if info.in_gitignore else "NOT gitignored"
        lines.append(f"{info.path}: {info.variable_count} variable(s), {status}")
        if info.sensitive_vars:
            lines.append(f"  Sensitive keys: {', '.join(info.sensitive_vars)}")
    return "\n".join(lines)


def _permissions_text(audit: engine.PermissionAudit) -> str:
    if audit.status is PermissionStatus.NOT_APPLICABLE:
        return "Permission checks are not applicable on this platform."
    return _findings_text("File Permission Audit", audit.findings)


def _headers_text(report: HeaderReport) -> str:
    lines = ["Security Header Audit", "=" * 40]
    for check in report.checks:
        if check.present:
            lines.append(f"[OK]      {check.header.name}: {check.value}")
        else:
            lines.append(f"[MISSING] {check.header.name} ({check.header.severity.value})")
            lines.append(f"  {check.header.description}. Recommended: {check.header.recommended}")
    lines.append("-" * 40)
    lines.append(f"Grade     : {report.grade} ({report.present_count}/{len(report.checks)} headers, {report.score}%)")
    for leak in report.leaks:
        lines.append(f"Leak      : {leak}")
    return "\n".join(lines)


def write_output(text: str, payload: Dict[str, object], output_path: Optional[str], report_format: str) -> None:
    body = json.dumps(payload, indent=2)
    if report_format == "json":
        print(body)
    else:
        print(text)

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(body, encoding="utf-8")
        if report_format == "text":
            print(f"\nReport written to {output_path}")


def _run_headers(args: argparse.Namespace) -> int:
    try:
        data = read_yaml_file(Path(args.headers_file))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read headers file {args.headers_file}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Headers file {args.headers_file} must hold a mapping")
    report = evaluate_headers(data)
    write_output(_headers_text(report), report.to_dict(), args.output_path, args.format)
    missing = {check.header.severity for check in report.missing}
    if Severity.HIGH in missing:
        return 2
    if Severity.MEDIUM in missing:
        return 1
    return 0


def _run_directory(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    command = args.command

    if command == "report":
        report = engine.build_report(args.directory, config, limit=args.limit)
        write_output(_report_text(report), report.to_dict(), args.output_path, args.format)
        return exit_code_for(report.counts)
    if command == "env":
        env_result = engine.scan_env(args.directory, config)
        write_output(_env_text(env_result), env_result.to_dict(), args.output_path, args.format)
        return exit_code_for(Summary.from_findings(env_result.findings))
    if command == "permissions":
        audit = engine.check_permissions(args.directory, config)
        write_output(_permissions_text(audit), audit.to_dict(), args.output_path, args.format)
        return exit_code_for(Summary.from_findings(audit.findings))

    scanners: Dict[str, Callable[[str, Optional[ScanConfig]], List[Finding]]] = {
        "secrets": engine.scan_secrets,
        "code": engine.scan_code,
        "config": engine.audit_config,
    }
    titles = {
        "secrets": "Secret Detection",
        "code": "Code Vulnerability Scan",
        "config": "Configuration Audit",
    }
    findings = scanners[command](args.directory, config)
    payload = {
        "summary": Summary.from_findings(findings).to_dict(),
        "findings": [finding.to_dict() for finding in findings],
    }
    write_output(_findings_text(titles[command], findings), payload, args.output_path, args.format)
    return exit_code_for(Summary.from_findings(findings))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        if args.command == "headers":
            return _run_headers(args)
        return _run_directory(args)
    except SecAuditError as exc:
        logger.debug("Scan aborted", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return ERROR_EXIT_CODE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

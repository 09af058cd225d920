"""Line-oriented pattern matching engine."""

from __future__ import annotations

from typing import List, Sequence, Union

from .catalog import SecretPattern, VulnPattern
from .masking import mask_secrets
from .result import Category, Finding

MAX_MATCH_LENGTH = 120
COMMENT_PREFIXES = ("//", "#", "*", "/*")

LineRule = Union[SecretPattern, VulnPattern]


def is_comment_line(line: str) -> bool:
    return line.lstrip().startswith(COMMENT_PREFIXES)


def match_lines(
    content: str,
    file_path: str,
    rules: Sequence[LineRule],
    category: Category,
) -> List[Finding]:
    """Apply ``rules`` to every line of ``content``.

    The first rule that matches a line produces that line's only finding.
    Vulnerability rules skip comment lines; secret rules do not, since
    credentials left in comments are still leaked.
    """

    findings: List[Finding] = []
    is_secret = category is Category.SECRET

    for number, line in enumerate(content.split("\n"), start=1):
        if not is_secret and is_comment_line(line):
            continue
        for rule in rules:
            match = rule.pattern.search(line)
            if match is None:
                continue
            text = line.strip()[:MAX_MATCH_LENGTH]
            if is_secret:
                captured = match.group(1) if rule.pattern.groups else None
                text = mask_secrets(text, captured)
            findings.append(
                Finding(
                    id=rule.id,
                    name=rule.name,
                    severity=rule.severity,
                    file=file_path,
                    line=number,
                    match=text,
                    category=category,
                    cwe=getattr(rule, "cwe", None),
                    description=getattr(rule, "description", None),
                )
            )
            break

    return findings

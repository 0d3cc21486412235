from __future__ import annotations

import json
from typing import Iterable

from typelint import __version__
from typelint.core.finding import Finding
from typelint.core.lints import LINTS_BY_ID


def format_text(findings: Iterable[Finding], suppressed: int, files_scanned: int) -> str:
    lines = []
    for finding in findings:
        loc = finding.location
        lines.append(
            f"[{finding.severity}/{finding.confidence}] {finding.rule_id}: {finding.title}"
        )
        lines.append(f"  Location: {loc.path}:{loc.line}:{loc.column}")
        lines.append(f"  Snippet: {loc.snippet}")
        lines.append(f"  Message: {finding.message}")
        if finding.suggestion:
            lines.append(f"  Help: {finding.help or 'try'}: `{finding.suggestion}`")
        elif finding.help:
            lines.append(f"  Help: {finding.help}")
        lines.append(f"  Remediation: {finding.remediation}")
        if finding.references:
            lines.append("  References:")
            for ref in finding.references:
                lines.append(f"    - {ref}")
        lines.append("")
    lines.append(f"Files scanned: {files_scanned}")
    lines.append(f"Suppressed findings: {suppressed}")
    return "\n".join(lines).strip() + "\n"


def format_json(findings: Iterable[Finding], suppressed: int, files_scanned: int) -> str:
    findings_list = list(findings)
    data = {
        "summary": {
            "count": len(findings_list),
            "suppressed": suppressed,
            "files_scanned": files_scanned,
        },
        "findings": [
            {
                "rule_id": finding.rule_id,
                "title": finding.title,
                "severity": finding.severity,
                "confidence": finding.confidence,
                "message": finding.message,
                "location": {
                    "path": finding.location.path,
                    "line": finding.location.line,
                    "column": finding.location.column,
                    "end_line": finding.location.end_line,
                    "end_column": finding.location.end_column,
                    "snippet": finding.location.snippet,
                },
                "help": finding.help,
                "suggestion": finding.suggestion,
                "remediation": finding.remediation,
                "references": finding.references,
            }
            for finding in findings_list
        ],
    }
    return json.dumps(data, indent=2)


def format_sarif(findings: Iterable[Finding]) -> str:
    findings_list = list(findings)
    rules = {}
    results = []
    for finding in findings_list:
        lint = LINTS_BY_ID.get(finding.rule_id)
        rules[finding.rule_id] = {
            "id": finding.rule_id,
            "name": finding.title,
            "shortDescription": {"text": finding.title},
            "fullDescription": {"text": lint.description if lint else finding.message},
            "help": {"text": finding.remediation},
            "properties": {
                "group": lint.group if lint else "",
                "severity": finding.severity,
                "confidence": finding.confidence,
            },
        }
        loc = finding.location
        region = {
            "startLine": loc.line,
            "startColumn": loc.column,
            "snippet": {"text": loc.snippet},
        }
        if loc.end_line:
            region["endLine"] = loc.end_line
            region["endColumn"] = loc.end_column
        result = {
            "ruleId": finding.rule_id,
            "level": _sarif_level(finding.severity),
            "message": {"text": finding.message},
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": loc.path},
                        "region": region,
                    }
                }
            ],
        }
        if finding.suggestion:
            result["properties"] = {"suggestion": finding.suggestion}
        results.append(result)
    sarif = {
        "version": "2.1.0",
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "typelint",
                        "version": __version__,
                        "rules": list(rules.values()),
                    }
                },
                "results": results,
            }
        ],
    }
    return json.dumps(sarif, indent=2)


def _sarif_level(severity: str) -> str:
    severity = severity.lower()
    if severity in {"critical", "high"}:
        return "error"
    if severity in {"medium"}:
        return "warning"
    return "note"

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from typelint.core.config import Config
from typelint.core.finding import Finding
from typelint.core.registry import load_rules
from typelint.core.rule import RuleContext
from typelint.parsing.treesitter import ParsedFile, create_parser, parse_file, parse_source
from typelint.utils.files import iter_source_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanReport:
    findings: List[Finding]
    suppressed: int
    files_scanned: int
    files_skipped: int = 0


class ScanEngine:
    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config.load(None)
        self.rules = list(load_rules(self.config))
        self.context = RuleContext(config=self.config)
        self.parser = create_parser()

    def scan(self, path: str) -> ScanReport:
        findings: List[Finding] = []
        suppressed = 0
        scanned = 0
        skipped = 0
        for file_path in iter_source_files(path):
            try:
                parsed = parse_file(file_path, parser=self.parser)
            except OSError as exc:
                logger.warning("Skipping %s: %s", file_path, exc)
                skipped += 1
                continue
            scanned += 1
            file_findings, file_suppressed = self.check(parsed)
            findings.extend(file_findings)
            suppressed += file_suppressed
        findings.sort(key=lambda f: (f.location.path, f.location.line, f.location.column, f.rule_id))
        logger.info("Scanned %d files, %d findings, %d suppressed", scanned, len(findings), suppressed)
        return ScanReport(
            findings=findings,
            suppressed=suppressed,
            files_scanned=scanned,
            files_skipped=skipped,
        )

    def scan_source(self, source: str, path: str = "<memory>") -> ScanReport:
        parsed = parse_source(source.encode("utf-8"), path=path, parser=self.parser)
        findings, suppressed = self.check(parsed)
        findings.sort(key=lambda f: (f.location.line, f.location.column, f.rule_id))
        return ScanReport(findings=findings, suppressed=suppressed, files_scanned=1)

    def check(self, parsed: ParsedFile) -> tuple[List[Finding], int]:
        findings: List[Finding] = []
        suppressed = 0
        for rule in self.rules:
            for finding in rule.check(parsed, self.context):
                if not self.config.rule_enabled(finding.rule_id):
                    continue
                if self._is_suppressed(parsed, finding):
                    suppressed += 1
                    continue
                findings.append(finding)
        return findings, suppressed

    def _is_suppressed(self, parsed: ParsedFile, finding: Finding) -> bool:
        marker = self.config.suppression_marker()
        lines = parsed.lines
        idx = finding.location.line - 1
        if idx < 0 or idx >= len(lines):
            return False
        if marker in lines[idx]:
            return True
        if idx > 0 and marker in lines[idx - 1]:
            return True
        return False

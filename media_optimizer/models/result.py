#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Per-file conversion results and the run summary.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


@dataclass
class ConversionResult:
    """Outputs produced for one source file. Not persisted."""
    source: Path
    outputs: List[Path] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    source_deleted: bool = False

    @property
    def succeeded(self) -> bool:
        """At least one output format was produced."""
        return bool(self.outputs)


@dataclass
class RunSummary:
    """Counters accumulated over one optimizer run."""
    discovered: int = 0
    converted: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)
    deleted: List[Path] = field(default_factory=list)
    staged: List[Path] = field(default_factory=list)
    unstaged: List[Path] = field(default_factory=list)

    def record(self, result: ConversionResult) -> None:
        if result.succeeded:
            self.converted.extend(result.outputs)
        else:
            self.failed.append(result.source)
        if result.source_deleted:
            self.deleted.append(result.source)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "discovered": self.discovered,
            "converted": [str(p) for p in self.converted],
            "failed": [str(p) for p in self.failed],
            "deleted_sources": [str(p) for p in self.deleted],
            "staged": [str(p) for p in self.staged],
            "unstaged": [str(p) for p in self.unstaged],
        }

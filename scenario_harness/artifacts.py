"""Persistence of screenshots and reports produced by a run."""

import logging
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ArtifactStore:
    """Writes run artifacts below a single output directory."""

    output_dir: Path

    def _target(self, filename: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / filename

    def save_snapshot(self, filename: str, data: bytes) -> Path:
        """Write screenshot bytes and return the written path."""
        path = self._target(filename)
        path.write_bytes(data)
        log.info("📸 Screenshot saved: %s", path)
        return path

    def save_report(self, filename: str, report: str) -> Path:
        """Write the report text and return the written path."""
        path = self._target(filename)
        path.write_text(report, encoding="utf-8")
        log.info("✓ Test report saved: %s", path)
        return path

import json
import logging
from pathlib import Path
from typing import Any, Dict, List


logger = logging.getLogger(__name__)


class EventLogRepository:
    def __init__(self, path: Path):
        """Initializes the repository with the path of the NDJSON event log."""
        self.path = Path(path)

    def append(self, record: Dict[str, Any]) -> None:
        """
        Appends one record as a newline-terminated JSON line.

        The parent directory is created on first use. The line is written
        with a single unbuffered write on a descriptor opened in append mode,
        so concurrent writers never interleave partial lines.

        Raises:
            OSError: directory creation or the write failed.
        """
        line = json.dumps(record, ensure_ascii=False) + "\n"

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("ab", buffering=0) as fh:
            fh.write(line.encode("utf-8"))

    def read_lines(self) -> List[str]:
        """
        Returns every line of the log, blank ones included, so callers can
        report 1-indexed line numbers. A missing log reads as empty.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Event log %s does not exist yet", self.path)
            return []

        # str.splitlines would also break on U+2028 inside JSON strings.
        return [line.rstrip("\r") for line in content.split("\n")]

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from lightrail.app.ports.output import ISnapshotStore


@dataclass(slots=True)
class LocalFileSnapshotStore(ISnapshotStore):
    """Writes the latest raw feed payload to a fixed file (e.g. tmp/lightrail.pb)."""

    path: str | Path

    def save(self, raw: bytes) -> None:
        target = Path(self.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        # Each save gets its own temp file; concurrent saves only race on replace.
        with tempfile.NamedTemporaryFile(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as fp:
            fp.write(raw)
            tmp = Path(fp.name)
        try:
            os.replace(tmp, target)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

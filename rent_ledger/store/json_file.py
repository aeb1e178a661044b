"""JSON file ledger store."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

from rent_ledger.exceptions import StorageCorruptError, StorageIOError
from rent_ledger.models import Ledger
from rent_ledger.store.base import LedgerStore
from rent_ledger.store.seed import build_seed_ledger


class JsonFileLedgerStore(LedgerStore):
    """Store the ledger as a single JSON file."""

    def __init__(
        self,
        path: str | Path,
        pretty: bool = False,
        seed_factory: Callable[[], Ledger] = build_seed_ledger,
    ) -> None:
        """Initialize JSON file store.

        Parameters
        ----------
        path : str | Path
            Location of the ledger file. Parent directories are created on
            first save.
        pretty : bool
            Pretty-print JSON output.
        seed_factory : Callable[[], Ledger]
            Builds the ledger returned while the file does not exist.
        """
        super().__init__(seed_factory)
        self.path = Path(path)
        self.pretty = pretty

    def _read(self) -> Any | None:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StorageCorruptError(f"Ledger file {self.path} is not valid JSON: {exc}") from exc
        except OSError as exc:
            raise StorageIOError(f"Cannot read ledger file {self.path}: {exc}") from exc

    def _write(self, document: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    if self.pretty:
                        json.dump(document, f, indent=2, ensure_ascii=False)
                    else:
                        json.dump(document, f, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageIOError(f"Cannot write ledger file {self.path}: {exc}") from exc

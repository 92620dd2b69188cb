from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""File progress bar for batch runs (TTY only).

In non-TTY environments (CI, redirected output) no bar is created so log
output is not interleaved with control sequences.
"""

__all__ = [
    "ImportProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ImportProgress:
    """One tick per imported file, with running counts as postfix."""

    def __init__(self, total_files: int, *, description: str = "Importing files") -> None:
        self.total_files = total_files
        self.description = description
        self.done = 0
        self.enabled = is_tty_enabled()
        self.pbar: Any = None
        if self.enabled:
            self.pbar = tqdm(total=total_files, desc=description, unit="file", leave=True, ncols=80, ascii=True)

    def start(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def advance(self, **stats: Any) -> None:
        self.done += 1
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)
            if stats:
                self.pbar.set_postfix(**stats)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ImportProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

from __future__ import annotations

import logging
import os

from errors import LoadFailure, SaveFailure

logger = logging.getLogger(__name__)


class ConfigGateway:
    """Whole-file access to the canonical configuration file.

    Relative paths resolve against the working directory at construction.
    Writes replace the file in place; there is no locking and no temp-file
    swap, so the last writer wins.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.path.abspath(os.fspath(path))

    def load(self) -> str:
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read %s: %s", self.path, exc)
            raise LoadFailure(path=self.path, cause=exc) from exc
        logger.info("Loaded %s (%d chars)", self.path, len(text))
        return text

    def save(self, text: str) -> None:
        try:
            with open(self.path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as exc:
            logger.warning("Failed to write %s: %s", self.path, exc)
            raise SaveFailure(path=self.path, cause=exc) from exc
        logger.info("Saved %s (%d chars)", self.path, len(text))

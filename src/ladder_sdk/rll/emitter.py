"""
Output Emitter
==============

The emitter collects the generated program in memory and writes it to
its destination exactly once, when flush() is called at the end of a
successful translation. A translation that fails part-way therefore
never leaves a partially written output file behind.

Example
-------
>>> emitter = Emitter("Program.out")
>>> emitter.append("TAG ")
>>> emitter.append_line("lamp FALSE")
>>> emitter.flush()
"""

from pathlib import Path
from typing import Optional, Union
import logging

from ladder_sdk.rll.errors import OutputWriteError

logger = logging.getLogger(__name__)


class Emitter:
    """
    Accumulates generated text and persists it on flush().

    Attributes:
        path: Destination file, or None to keep the text in memory only
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self._chunks: list[str] = []

    @property
    def text(self) -> str:
        """Everything appended so far."""
        return "".join(self._chunks)

    def append(self, chunk: str) -> None:
        self._chunks.append(chunk)

    def append_line(self, chunk: str) -> None:
        self._chunks.append(chunk)
        self._chunks.append("\n")

    def flush(self) -> None:
        """
        Write the accumulated text to the destination file.

        Raises:
            OutputWriteError: If the file cannot be written
        """
        if self.path is None:
            return

        text = self.text
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(self.path), e.strerror or str(e)) from e

        logger.info(f"Wrote {len(text)} bytes to {self.path}")

"""Reader for GlusterFS io-stats dump files.

Depending on the GlusterFS release, the dump is either one JSON array of
objects or several JSON objects written back to back without a separator.
:class:`DumpReader` scans the text once, tracking brace depth, and decodes
every top-level object on its own. A ``[`` seen before the first object
switches to array mode, where the rest of the text is decoded as a single
document.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Tuple

from glusterperf.core.model import RawObject
from glusterperf.errors import DumpIOError, DumpParseError

LOG = logging.getLogger(__name__)


class ScanState(str, Enum):
    """States of the brace scanner."""

    IDLE = "idle"
    OBJECT = "object"
    STRING = "string"
    ESCAPE = "escape"


class DumpReader:
    """Split dump text into top-level JSON objects."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Return the scanner to the "no object open" state and drop results."""
        self.state = ScanState.IDLE
        self.depth = 0
        self.line = 1
        self.column = 0
        self.objects: List[RawObject] = []
        self._buffer: List[str] = []
        self._start: Tuple[int, int] = (1, 1)

    def read(self, text: str) -> List[RawObject]:
        """Decode every top-level object contained in ``text``."""
        self.reset()
        for offset, char in enumerate(text):
            self.column += 1
            if char == "[" and self.state is ScanState.IDLE and not self.objects:
                self.objects.extend(self._decode_array(text[offset:]))
                LOG.debug("Decoded %d objects from array dump", len(self.objects))
                return list(self.objects)
            self.step(char)
            if char == "\n":
                self.line += 1
                self.column = 0

        if self.state is not ScanState.IDLE:
            line, column = self._start
            raise DumpParseError(
                "Unterminated object at end of dump",
                line=line,
                column=column,
                fragment="".join(self._buffer),
            )
        LOG.debug("Decoded %d objects from concatenated dump", len(self.objects))
        return list(self.objects)

    def step(self, char: str) -> Optional[RawObject]:
        """Feed one character; return the decoded object when it closes one."""
        if self.state is ScanState.IDLE:
            if char == "{":
                self.state = ScanState.OBJECT
                self.depth = 1
                self._buffer = [char]
                self._start = (self.line, self.column)
            elif char == "}":
                raise DumpParseError("Unmatched '}' outside of any object", line=self.line, column=self.column)
            return None

        self._buffer.append(char)
        if self.state is ScanState.STRING:
            if char == "\\":
                self.state = ScanState.ESCAPE
            elif char == '"':
                self.state = ScanState.OBJECT
            return None
        if self.state is ScanState.ESCAPE:
            self.state = ScanState.STRING
            return None

        if char == '"':
            self.state = ScanState.STRING
        elif char == "{":
            self.depth += 1
        elif char == "}":
            self.depth -= 1
            if self.depth == 0:
                return self._complete()
        return None

    def _complete(self) -> RawObject:
        fragment = "".join(self._buffer)
        line, column = self._start
        try:
            decoded = json.loads(fragment)
        except json.JSONDecodeError as exc:
            raise DumpParseError(f"Malformed JSON object: {exc.msg}", line=line, column=column, fragment=fragment) from exc
        self.objects.append(decoded)
        self.state = ScanState.IDLE
        self.depth = 0
        self._buffer = []
        return decoded

    def _locate(self, document: str, offset: int) -> Tuple[int, int]:
        """Map an offset inside the array document to a line and column in the dump."""
        newlines = document.count("\n", 0, offset)
        if not newlines:
            return self.line, self.column + offset
        return self.line + newlines, offset - document.rfind("\n", 0, offset)

    def _decode_array(self, document: str) -> List[RawObject]:
        try:
            decoded: Any = json.loads(document)
        except json.JSONDecodeError as exc:
            line, column = self._locate(document, exc.pos)
            raise DumpParseError(
                f"Malformed JSON array: {exc.msg}", line=line, column=column, fragment=document
            ) from exc

        decoder = json.JSONDecoder()
        offset = 1
        for index, element in enumerate(decoded):
            while document[offset] in " \t\r\n,":
                offset += 1
            _, end = decoder.raw_decode(document, offset)
            if not isinstance(element, dict):
                line, column = self._locate(document, offset)
                raise DumpParseError(
                    f"Array element {index} is not a JSON object",
                    line=line,
                    column=column,
                    fragment=document[offset:end],
                )
            offset = end
        return decoded


def read_dump(text: str) -> List[RawObject]:
    """Return the JSON objects contained in raw dump text."""
    return DumpReader().read(text)


def read_dump_file(path: Path | str) -> List[RawObject]:
    """Read and decode a dump file."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DumpIOError(f"{path}: {exc}") from exc
    LOG.info("Read %d bytes from %s", len(text), path)
    return read_dump(text)


__all__ = ["DumpReader", "ScanState", "read_dump", "read_dump_file"]

"""Single-pass cursor over the Assembly blocks of an NDeps report.

The report is read with ``xml.etree.ElementTree.iterparse``: each
``Assembly`` element is yielded once it has been fully read, in document
order, then cleared so memory stays bounded by the largest assembly rather
than the whole report.
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from ..exceptions import MalformedInputError

ASSEMBLY_TAG = "Assembly"

ReportSource = Union[str, os.PathLike, BinaryIO]


def local_name(element: ET.Element) -> str:
    """Tag without any ``{namespace}`` prefix."""
    tag = element.tag
    if isinstance(tag, str) and tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def child_elements(element: ET.Element, name: Optional[str] = None) -> Iterator[ET.Element]:
    """Direct children of ``element``, optionally filtered by local name."""
    for child in element:
        if name is None or local_name(child) == name:
            yield child


def source_name(source: ReportSource) -> str:
    if isinstance(source, (str, os.PathLike)):
        return str(Path(source).absolute())
    return str(getattr(source, "name", "<stream>"))


class AssemblyCursor:
    """Iterates the ``Assembly`` elements of one report, once.

    Usage::

        with AssemblyCursor("ndeps-report.xml") as cursor:
            for assembly in cursor:
                ...

    A path source is opened and closed by the cursor. A stream source is
    read but left open for its owner. Iterating a second time raises
    RuntimeError.
    """

    def __init__(self, source: ReportSource) -> None:
        self.source = source
        self.name = source_name(source)
        self._stream: Optional[BinaryIO] = None
        self._owns_stream = False
        self._consumed = False

    def __enter__(self) -> AssemblyCursor:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying file if the cursor opened it."""
        if self._stream is not None and self._owns_stream:
            self._stream.close()
        self._stream = None

    @property
    def closed(self) -> bool:
        return self._stream is None

    def _open(self) -> BinaryIO:
        if isinstance(self.source, (str, os.PathLike)):
            try:
                self._stream = open(self.source, "rb")
            except OSError as e:
                raise MalformedInputError(self.name, f"cannot read report: {e.strerror or e}")
            self._owns_stream = True
        else:
            self._stream = self.source
        return self._stream

    def __iter__(self) -> Iterator[ET.Element]:
        if self._consumed:
            raise RuntimeError(f"Report {self.name} has already been walked")
        self._consumed = True
        return self._walk()

    def _walk(self) -> Iterator[ET.Element]:
        stream = self._open()
        try:
            for _, element in ET.iterparse(stream, events=("end",)):
                if local_name(element) == ASSEMBLY_TAG:
                    yield element
                    element.clear()
        except ET.ParseError as e:
            raise MalformedInputError(self.name, str(e)) from e
        finally:
            self.close()

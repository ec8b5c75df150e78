"""
Sequential object streams used to feed raw values into the indexers.

A stream hands out one object per `read()` call and returns ``None`` once it is
exhausted. Streams can be rewound with `reset()` so the same source can be
consumed several times, and must be closed to release the underlying resource.
"""

from __future__ import annotations

import codecs
import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Callable, Generic, Iterator, Optional, TypeVar


T = TypeVar("T")

InputStreamFactory = Callable[[], BinaryIO]


class ObjectStream(ABC, Generic[T]):
    """Base class for readers that produce objects one at a time."""

    @abstractmethod
    def read(self) -> Optional[T]:
        """Return the next object, or ``None`` at the end of the stream."""

    @abstractmethod
    def reset(self) -> None:
        """Rewind to the first object of the stream."""

    def close(self) -> None:  # pragma: no cover - trivial
        pass

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self.read()
            if item is None:
                return
            yield item

    def __enter__(self) -> "ObjectStream[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PlainTextByLineStream(ObjectStream[str]):
    """
    Read a text source and return each line as a string.

    Parameters
    ----------
    stream_factory:
        Zero-argument callable that opens a fresh binary stream over the
        source. It is called once on construction and again on every `reset()`.
    encoding:
        Character encoding of the source, ``utf-8`` by default.
    """

    def __init__(self, stream_factory: InputStreamFactory, encoding: str = "utf-8") -> None:
        self._encoding = codecs.lookup(encoding).name
        self._stream_factory = stream_factory
        self._reader: Optional[io.TextIOWrapper] = None
        self.reset()

    @classmethod
    def from_path(cls, path: Path, encoding: str = "utf-8") -> "PlainTextByLineStream":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Expected text file at {path} but file was not found.")
        return cls(lambda: path.open("rb"), encoding)

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def closed(self) -> bool:
        return self._reader is None

    def read(self) -> Optional[str]:
        if self._reader is None:
            raise OSError("Cannot read from a closed line stream.")
        line = self._reader.readline()
        if not line:
            return None
        return line[:-1] if line.endswith("\n") else line

    def reset(self) -> None:
        # Open the new source first so a failing factory leaves the current reader usable.
        # newline=None folds "\r\n" and "\r" into "\n"; undecodable bytes become U+FFFD.
        reader = io.TextIOWrapper(
            self._stream_factory(), encoding=self._encoding, errors="replace", newline=None
        )
        self.close()
        self._reader = reader

    def close(self) -> None:
        if self._reader is not None:
            reader, self._reader = self._reader, None
            reader.close()

"""Runtime environment for ArchScript.

The Environment holds a global mapping plus a stack of local frames. Frames
are pushed by block, loop iterations, closure calls and try handlers, and
popped on every way out of those constructs (see ``scope``).
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterator, Optional

from archscript import ArchValue
from archscript.types.errors import ArchError, ArchUnboundSymbol

Frame = dict[str, ArchValue]


class Environment:
    """Global bindings plus an explicit stack of local frames."""

    __slots__ = ("globals", "frames")

    def __init__(self):
        self.globals: Frame = {}
        # Innermost frame last
        self.frames: list[Frame] = []

    def define(self, name: str, value: ArchValue) -> None:
        """Bind `name` globally regardless of any local frames."""
        self.globals[name] = value

    def update(self, mapping: dict[str, ArchValue]) -> None:
        """Bulk-define a mapping of name -> value in the global frame."""
        self.globals.update(mapping)

    def find(self, name: str) -> Optional[Frame]:
        """Find the innermost frame (or the globals) that binds `name`."""
        for frame in reversed(self.frames):
            if name in frame:
                return frame
        if name in self.globals:
            return self.globals
        return None

    def lookup(self, name: str) -> ArchValue:
        frame = self.find(name)
        if frame is None:
            raise ArchUnboundSymbol(f"unbound symbol [{name}]")
        return frame[name]

    def set(self, name: str, value: ArchValue) -> None:
        """Overwrite the nearest existing binding; otherwise create a global."""
        frame = self.find(name)
        if frame is None:
            frame = self.globals
        frame[name] = value

    def set_local(self, name: str, value: ArchValue) -> None:
        """Bind `name` in the innermost frame, shadowing outer bindings."""
        frame = self.frames[-1] if self.frames else self.globals
        frame[name] = value

    def push(self, frame: Optional[Frame] = None) -> None:
        self.frames.append(dict(frame) if frame else {})

    def push_empty(self) -> None:
        self.push()

    def pop(self) -> Frame:
        if not self.frames:
            raise ArchError("frame stack underflow")
        return self.frames.pop()

    @contextmanager
    def scope(self, frame: Optional[Frame] = None) -> Iterator[Frame]:
        """Push a frame for the duration of a with-block; always pops."""
        self.push(frame)
        try:
            yield self.frames[-1]
        finally:
            self.pop()

    @property
    def depth(self) -> int:
        return len(self.frames)

    @staticmethod
    def _write_vars(buffer: StringIO, frame: Frame) -> None:
        """Write one frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in frame.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Innermost frame only, with an indicator for what lies beneath."""
        with StringIO() as buffer:
            self._write_vars(buffer, self.frames[-1] if self.frames else {})
            buffer.write(f" -> {len(self.frames) - 1 if self.frames else 0} frames + globals")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment frames: ")
            chain = []
            for frame in reversed(self.frames):
                frame_buffer = StringIO()
                self._write_vars(frame_buffer, frame)
                chain.append(frame_buffer.getvalue())
            chain.append(f"<{len(self.globals)} globals>")
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()

"""Runtime environment for Kappa.

An Environment is a chain of frames linked through `outer`. `extend` never
touches the receiver: it returns a new child frame holding one binding, so
closures that captured the parent keep seeing exactly what they saw before.
`modify` rewrites an existing slot in place, which is how set!, define and
letrec make a later value visible through every frame that shares the slot.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from kappa import Value
from kappa.errors import KappaUnboundVariable


class Environment:
    """Chain of name -> value frames, searched innermost first."""

    __slots__ = ("vars", "outer")

    def __init__(
        self,
        bindings: dict[str, Value] | None = None,
        outer: Optional[Environment] = None,
    ):
        self.vars: dict[str, Value] = dict(bindings) if bindings else {}
        self.outer: Environment | None = outer

    def frames(self) -> Iterator[Environment]:
        env: Optional[Environment] = self
        while env is not None:
            yield env
            env = env.outer

    def _frame_of(self, name: str) -> Optional[Environment]:
        for frame in self.frames():
            if name in frame.vars:
                return frame
        return None

    def find(self, name: str) -> Optional[Value]:
        """Return the nearest binding of `name`, or None when it is unbound."""
        frame = self._frame_of(name)
        if frame is None:
            return None
        return frame.vars[name]

    def __contains__(self, name: str) -> bool:
        return self._frame_of(name) is not None

    def extend(self, name: str, value: Value) -> Environment:
        """Return a new child frame binding `name`; the receiver is unchanged."""
        return Environment({name: value}, outer=self)

    def modify(self, name: str, value: Value) -> None:
        """Overwrite the nearest existing binding of `name`.

        Raises KappaUnboundVariable if `name` is not bound anywhere in the chain.
        """
        frame = self._frame_of(name)
        if frame is None:
            raise KappaUnboundVariable(name)
        frame.vars[name] = value

    def depth(self) -> int:
        return sum(1 for _ in self.frames())

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            for i, frame in enumerate(self.frames()):
                if i:
                    buffer.write(" -> ")
                frame._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()

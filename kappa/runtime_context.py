from __future__ import annotations

import sys
from typing import Optional, TextIO

# NOTE: process-global, like the rest of the runtime. The evaluator is
# single-threaded so no locking is done here.
_output: Optional[TextIO] = None


def set_output(sink: Optional[TextIO]) -> Optional[TextIO]:
    """Install the sink `display` writes to (None means sys.stdout).

    Returns the previously installed sink so the caller can put it back.
    """
    global _output
    previous = _output
    _output = sink
    return previous


def get_output() -> TextIO:
    return _output if _output is not None else sys.stdout

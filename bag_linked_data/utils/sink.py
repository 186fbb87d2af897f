"""Output sink: the append-only text stream a conversion writes to.

A sink is either a file (created or truncated on open) or standard output
(``"-"``). Output is written strictly in order and is never rewound, so a
run that aborts half way leaves whatever was already written in place.
"""

from __future__ import annotations

import contextlib
import sys
from typing import TYPE_CHECKING, TextIO

from bag_linked_data.core.exceptions import WriteFailedError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

STDOUT_SINK = "-"


@contextlib.contextmanager
def open_sink(target: Path | str) -> Iterator[TextIO]:
    """Open ``target`` for writing UTF-8 text with ``\\n`` line endings.

    Standard output is flushed but never closed on exit; a file sink is
    always closed, including when the body raises.

    Raises:
        WriteFailedError: If the file cannot be opened, flushed or closed.
    """
    if str(target) == STDOUT_SINK:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    try:
        stream = open(target, "w", encoding="utf-8", newline="\n")  # noqa: SIM115
    except OSError as exc:
        msg = f"Cannot open output file {target}: {exc}"
        raise WriteFailedError(msg) from exc

    try:
        yield stream
    finally:
        try:
            stream.close()
        except OSError as exc:
            msg = f"Cannot close output file {target}: {exc}"
            raise WriteFailedError(msg) from exc

"""Copy text to the desktop clipboard through whichever platform tool exists."""

from __future__ import annotations

import shutil
import subprocess
from typing import Protocol, Sequence

CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class Clipboard(Protocol):
    def copy(self, text: str) -> bool: ...


class SystemClipboard:
    """Pipe text into the first clipboard command found on ``PATH``.

    Failures are reported through the return value, never raised.
    """

    def __init__(self, commands: Sequence[Sequence[str]] = CLIPBOARD_COMMANDS, *, timeout: float = 5.0) -> None:
        self.commands = [tuple(cmd) for cmd in commands]
        self.timeout = timeout

    def _resolve(self) -> list[str] | None:
        for cmd in self.commands:
            exe = shutil.which(cmd[0])
            if exe:
                return [exe, *cmd[1:]]
        return None

    def copy(self, text: str) -> bool:
        argv = self._resolve()
        if argv is None:
            return False
        try:
            completed = subprocess.run(
                argv,
                input=text.encode("utf-8"),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError):
            return False
        return completed.returncode == 0


class MemoryClipboard:
    """Keeps copied text in memory."""

    def __init__(self, *, available: bool = True) -> None:
        self.available = available
        self.history: list[str] = []

    @property
    def text(self) -> str | None:
        return self.history[-1] if self.history else None

    def copy(self, text: str) -> bool:
        if not self.available:
            return False
        self.history.append(text)
        return True


__all__ = ["CLIPBOARD_COMMANDS", "Clipboard", "MemoryClipboard", "SystemClipboard"]

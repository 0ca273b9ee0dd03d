from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class UnreadableContent(ValueError):
    pass


def _looks_binary(data: bytes) -> bool:
    """
    Heuristic: NUL bytes, or too many control bytes in the first 4KB.
    """
    if not data:
        return False
    if b"\x00" in data:
        return True

    sample = data[:4096]
    control = sum(1 for b in sample if b < 9 or (13 < b < 32))
    return (control / max(1, len(sample))) > 0.02


@dataclass(frozen=True, slots=True)
class TextLoader:
    """
    Reads a post file from disk.

    - strict utf-8, no fallback encoding
    - refuses files larger than max_bytes or that look binary
    """
    max_bytes: int = 2_000_000  # 2MB
    encoding: str = "utf-8"

    def load(self, path: Path) -> str:
        try:
            size = path.stat().st_size
        except OSError as e:
            raise UnreadableContent(f"cannot stat file: {e}") from e
        if size > self.max_bytes:
            raise UnreadableContent(f"file is {size} bytes, limit is {self.max_bytes}")

        try:
            data = path.read_bytes()
        except OSError as e:
            raise UnreadableContent(f"cannot read file: {e}") from e

        if _looks_binary(data):
            raise UnreadableContent("file looks binary")

        try:
            return data.decode(self.encoding, errors="strict")
        except UnicodeDecodeError as e:
            raise UnreadableContent(f"file is not valid {self.encoding}: {e}") from e

# records.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List

HEADER = "=== ENIGMA ENCRYPTED MESSAGE ==="
FOOTER = "=== END MESSAGE ==="


@dataclass(slots=True)
class MessageRecord:
    """One enciphered message plus the settings that produced it."""

    input: str
    output: str
    ring_settings: str
    initial_positions: str
    plugboard_pairs: List[str] = field(default_factory=list)
    date: datetime = field(default_factory=datetime.now)

    def render(self) -> str:
        lines = [
            HEADER,
            f"Date: {self.date.isoformat()}",
            f"Input: {self.input}",
            f"Output: {self.output.replace(chr(10), ' ').strip()}",
            f"Ring Settings: {self.ring_settings}",
            f"Initial Positions: {self.initial_positions}",
            f"Plugboard Pairs: {' '.join(self.plugboard_pairs)}",
            FOOTER,
        ]
        return "\n".join(lines) + "\n"


def save_record(path: str | Path, record: MessageRecord) -> Path:
    if not record.output:
        raise ValueError("No message to save")
    path = Path(path)
    path.write_text(record.render(), encoding="utf-8")
    return path


def load_record(path: str | Path) -> str:
    """Records are read back as opaque text; nothing is re-parsed."""
    return Path(path).read_text(encoding="utf-8")

# keyboard_and_plugboard.py
from __future__ import annotations

import string
from collections.abc import Iterable
from debug import Debug

debug = Debug()

ALPHABET = string.ascii_uppercase


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    """Letter <-> signal conversion. Case-insensitive, A=0 .. Z=25."""

    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.size: int = len(alphabet)
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    def accepts(self, letter: str) -> bool:
        return letter.upper() in self.alpha_to_index

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            return self.alpha_to_index[letter.upper()]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r} for current alphabet."
            )

    # integer signal → letter (wraps like the rotor arithmetic does)
    def backward(self, signal: int) -> str:
        return self.alphabet[signal % self.size]


KEYBOARD = Keyboard()


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Symmetric letter swaps applied on entry and exit.

    Malformed pairs (anything that is not two letters) are skipped rather
    than rejected; strict checking lives in ``utilities.validate_plug_pairs``.
    """

    def __init__(self, pairs: Iterable[str] = ()) -> None:
        self.mapping: dict[str, str] = {}

        for raw in pairs:
            if len(raw) != 2 or not all(KEYBOARD.accepts(ch) for ch in raw):
                debug.log("plugboard", f"skipping malformed pair {raw!r}")
                continue
            a, b = raw.upper()
            self.mapping[a] = b
            self.mapping[b] = a

    def swap(self, letter: str) -> str:
        letter = letter.upper()
        mapped = self.mapping.get(letter, letter)
        debug.log("plugboard", f"{letter}->{mapped}")
        return mapped

    def pairs(self) -> list[str]:
        """Active connections, each listed once (``["AT", "BS"]``)."""
        return sorted(a + b for a, b in self.mapping.items() if a < b)

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(self.pairs())}>"

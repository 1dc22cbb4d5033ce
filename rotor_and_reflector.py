# rotor_and_reflector.py
from __future__ import annotations
from debug import Debug
from keyboard_and_plugboard import KEYBOARD

debug = Debug()


class Rotor:
    def __init__(
        self,
        wiring: str,
        notch: str,
        ring_setting: int = 0,
        position: int = 0,
    ) -> None:
        self.wiring = wiring.upper()
        self.notch = notch.upper()
        self.size = KEYBOARD.size

        # integer lookup table
        self._fwd = [KEYBOARD.forward(c) for c in self.wiring]

        self.ring_setting = ring_setting % self.size
        self.position = position % self.size

    # ── position & notch helpers ──────────────────────────────────
    @property
    def current_position(self) -> str:
        return KEYBOARD.backward(self.position)

    def set_position(self, letter: str) -> None:
        self.position = KEYBOARD.forward(letter)

    def is_at_notch(self) -> bool:
        return self.current_position == self.notch

    # ── stepping --------------------------------------------------
    def advance(self) -> bool:
        """Advance one and return True if the rotor now sits at its notch."""
        self.position = (self.position + 1) % self.size
        hit = self.is_at_notch()
        debug.log("rotor", f"Rotor pos {self.current_position}, notch_hit={hit}")
        return hit

    # ── signal paths ---------------------------------------------
    def encode_forward(self, letter: str) -> str:
        """Right-to-left pass through the wiring."""
        shift = (KEYBOARD.forward(letter) + self.position - self.ring_setting) % self.size
        mapped = self._fwd[shift]
        return KEYBOARD.backward(mapped - self.position + self.ring_setting)

    def encode_backward(self, letter: str) -> str:
        """Left-to-right pass: reverse lookup of the adjusted contact."""
        shift = (KEYBOARD.forward(letter) + self.position - self.ring_setting) % self.size
        wiring_index = self.wiring.find(KEYBOARD.backward(shift))
        return KEYBOARD.backward(wiring_index - self.position + self.ring_setting)

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"<Rotor pos={self.current_position} "
            f"ring={KEYBOARD.backward(self.ring_setting)} notch={self.notch}>"
        )


class Reflector:
    def __init__(self, wiring: str) -> None:
        self.wiring = wiring.upper()

    def reflect(self, letter: str) -> str:
        out = self.wiring[KEYBOARD.forward(letter)]
        debug.log("reflector", f"{letter.upper()}->{out}")
        return out

    def is_involution(self) -> bool:
        """True if w[w[i]] == i for every contact and no letter maps to itself."""
        if sorted(self.wiring) != sorted(KEYBOARD.alphabet):
            return False
        for i, c in enumerate(self.wiring):
            j = KEYBOARD.forward(c)
            if i == j or KEYBOARD.forward(self.wiring[j]) != i:
                return False
        return True

    def __repr__(self) -> str:
        return f"<Reflector {self.wiring}>"

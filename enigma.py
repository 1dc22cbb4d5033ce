# enigma.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from debug import Debug
from keyboard_and_plugboard import KEYBOARD, Plugboard
from rotor_and_reflector import Reflector, Rotor

debug = Debug()


def _letter_offsets(text: str, count: int) -> list[int]:
    """Turn ``"A D Q"`` into ``[0, 3, 16]``; anything missing reads as 'A'."""
    tokens = text.split()
    offsets = []
    for i in range(count):
        letter = tokens[i][0] if i < len(tokens) else "A"
        offsets.append(KEYBOARD.forward(letter) if KEYBOARD.accepts(letter) else 0)
    return offsets


def step_flags(at_notch: Sequence[bool]) -> list[bool]:
    """Decide which rotors advance on the next key-press.

    ``at_notch`` is the notch state of every rotor, leftmost first, taken
    *before* anything moves. The rightmost rotor always steps; a rotor whose
    right neighbour sits at its notch steps, and so does that neighbour
    (the double step). Flags only ever get switched on, so the scan order
    cannot change the outcome.
    """
    n = len(at_notch)
    flags = [False] * n
    if n == 0:
        return flags

    flags[-1] = True
    for i in range(n - 2, -1, -1):
        if at_notch[i + 1]:
            flags[i] = True
            flags[i + 1] = True
    return flags


class Enigma:
    def __init__(
        self,
        rotor_wirings: Sequence[str],
        notches: Sequence[str],
        reflector_wiring: str,
        ring_settings: str = "",
        initial_positions: str = "",
        plugboard_pairs: Iterable[str] = (),
    ) -> None:
        count = len(rotor_wirings)
        rings = _letter_offsets(ring_settings, count)
        positions = _letter_offsets(initial_positions, count)

        self.rotors: list[Rotor] = [
            Rotor(
                wiring,
                notches[i] if i < len(notches) else "A",
                ring_setting=rings[i],
                position=positions[i],
            )
            for i, wiring in enumerate(rotor_wirings)
        ]
        self.reflector = Reflector(reflector_wiring)
        self.plugboard = Plugboard(plugboard_pairs)

        debug.log("encipher", f"built {self!r}")

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors for one key-press."""
        flags = step_flags([rotor.is_at_notch() for rotor in self.rotors])
        for rotor, flag in zip(self.rotors, flags):
            if flag:
                rotor.advance()
        debug.log("stepping", f"Rotor pos {self.get_current_rotor_positions()}")

    # ── encipher  ───────────────────────────────────────────────

    def substitute(self, letter: str) -> str:
        """Run one letter through the wiring at the current rotor state."""
        signal = self.plugboard.swap(letter.upper())

        for rotor in reversed(self.rotors):
            signal = rotor.encode_forward(signal)

        signal = self.reflector.reflect(signal)

        for rotor in self.rotors:
            signal = rotor.encode_backward(signal)

        return self.plugboard.swap(signal)

    def encipher_letter(self, letter: str) -> str:
        self._step_rotors()
        out_ch = self.substitute(letter)
        debug.log("encipher", f"{letter.upper()}->{out_ch}")
        return out_ch

    def encipher(self, text: str) -> str:
        """Encipher *text*; anything but A-Z is copied through and never steps."""
        return "".join(
            self.encipher_letter(ch) if ch.isalpha() and KEYBOARD.accepts(ch) else ch
            for ch in text
        )

    # ── positions  ──────────────────────────────────────────────

    def get_current_rotor_positions(self) -> str:
        return " ".join(rotor.current_position for rotor in self.rotors)

    def reset_rotor_positions(self, positions: str) -> None:
        """Overwrite window letters left to right; extra tokens are dropped,
        missing ones leave the rotor where it is."""
        for rotor, token in zip(self.rotors, positions.split()):
            if KEYBOARD.accepts(token[0]):
                rotor.set_position(token[0])
            else:
                debug.log("stepping", f"ignoring position token {token!r}")

    def rotor_states(self) -> list[tuple[str, bool]]:
        """``(window letter, at notch)`` for every rotor, leftmost first."""
        states = [(r.current_position, r.is_at_notch()) for r in self.rotors]
        for i, (pos, notch) in enumerate(states, 1):
            debug.log("stepping", f"Rotor {i}: Position={pos}, AtNotch={notch}")
        return states

    def get_configuration(self) -> str:
        return (
            f"Rotor Positions: {self.get_current_rotor_positions()}\n"
            f"Number of Rotors: {len(self.rotors)}\n"
        )

    def __repr__(self) -> str:
        return f"<Enigma rotors={len(self.rotors)} pos={self.get_current_rotor_positions()!r}>"

# utilities.py
from __future__ import annotations

import re
from typing import Dict, List, Sequence, Tuple

from debug import Debug
from keyboard_and_plugboard import ALPHABET

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Errors, regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────


class ConfigurationError(ValueError):
    """Operator-supplied settings rejected before an engine is built."""


_letter_re = re.compile(r"^[A-Za-z]$")
_pair_re = re.compile(r"^[A-Za-z]{2}$")


def ask(prompt: str) -> str:
    """Read & normalise an operator’s response (uppercase, trimmed)."""
    return input(prompt).strip().upper()


def parse_letter_list(text: str) -> List[str]:
    """``"a d  q"`` → ``["A", "D", "Q"]`` (one entry per whitespace token)."""
    return [token.upper() for token in text.split()]


def preprocess_message(msg: str) -> str:
    """Keep letters, spaces and digits; drop everything else."""
    return "".join(ch for ch in msg if ch.isalpha() or ch == " " or ch.isdigit())


# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database
# ────────────────────────────────────────────────────────────────────────

# name -> (wiring, notch)
ROTORS: Dict[str, Tuple[str, str]] = {
    "I":   ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":  ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III": ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":  ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":   ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
}

REFLECTORS: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}

DEFAULT_ROTORS = ["I", "II", "III"]
DEFAULT_REFLECTOR = "B"


# ────────────────────────────────────────────────────────────────────────
#  2. Validation (configuration intake)
# ────────────────────────────────────────────────────────────────────────


def validate_letter_list(text: str, count: int, label: str) -> str:
    """Require exactly *count* single letters; return them normalised."""
    letters = parse_letter_list(text)
    if len(letters) != count or not all(_letter_re.match(ch) for ch in letters):
        example = " ".join("A" * count)
        raise ConfigurationError(f"{label} must be in format '{example}'")
    return " ".join(letters)


def validate_plug_pairs(pairs: str | Sequence[str]) -> List[str]:
    """Return a list of *validated* plugboard pairs (e.g. ["AB", "CD"])."""
    if isinstance(pairs, str):
        pairs = pairs.split()

    used: set[str] = set()
    result: List[str] = []
    for raw in pairs:
        if not _pair_re.match(raw):
            raise ConfigurationError(
                f"Plugboard pairs must be 2 letters each (e.g., AT BS DE), got {raw!r}"
            )
        a, b = raw.upper()
        if a == b:
            raise ConfigurationError(f"Pair {raw!r} cannot map a letter to itself")
        if {a, b} & used:
            dup = ({a, b} & used).pop()
            raise ConfigurationError(f"Letter {dup!r} already used in plugboard")
        used.update((a, b))
        result.append(a + b)
    return result


def validate_wiring(wiring: str) -> str:
    wiring = wiring.upper()
    if sorted(wiring) != sorted(ALPHABET):
        raise ConfigurationError(f"Wiring {wiring!r} must be a permutation of {ALPHABET}")
    return wiring


def validate_reflector(wiring: str) -> str:
    wiring = validate_wiring(wiring)
    for i, c in enumerate(wiring):
        j = ALPHABET.index(c)
        if i == j or wiring[j] != ALPHABET[i]:
            raise ConfigurationError("Reflector wiring must be an involution with no fixed points")
    return wiring


def validate_notch(notch: str) -> str:
    if not _letter_re.match(notch):
        raise ConfigurationError(f"Notch {notch!r} must be a single letter")
    return notch.upper()


def resolve_rotor(wheel: str, notch: str | None = None) -> Tuple[str, str]:
    """Look up a named rotor (``"II"``) or accept a raw 26-letter wiring.

    Raw wirings need an explicit *notch*; an explicit notch also overrides a
    named rotor's own one.
    """
    name = wheel.strip().upper()
    if name in ROTORS:
        wiring, default_notch = ROTORS[name]
        return wiring, validate_notch(notch) if notch else default_notch
    if len(name) != len(ALPHABET):
        raise ConfigurationError(f"Unknown rotor {wheel!r}. Expected one of {list(ROTORS)}")
    if notch is None:
        raise ConfigurationError(f"Rotor wiring {wheel!r} needs a notch letter")
    return validate_wiring(name), validate_notch(notch)


def resolve_reflector(wheel: str) -> str:
    name = wheel.strip().upper()
    if name in REFLECTORS:
        return REFLECTORS[name]
    if len(name) != len(ALPHABET):
        raise ConfigurationError(f"Unknown reflector {wheel!r}. Expected one of {list(REFLECTORS)}")
    return validate_reflector(name)


# ────────────────────────────────────────────────────────────────────────
#  3. Interactive question helpers
# ────────────────────────────────────────────────────────────────────────


def get_letter_list(count: int, label: str, current: str) -> str:
    while True:
        raw = ask(f"{label} [{current}]: ")
        if not raw:
            return current
        try:
            return validate_letter_list(raw, count, label)
        except ConfigurationError as exc:
            print(f"❌  {exc}")


def get_plugboard(current: Sequence[str]) -> List[str]:
    shown = " ".join(current) or "none"
    while True:
        raw = ask(f"Plugboard pairs, e.g. AT BS DE [{shown}] ('-' clears): ")
        if not raw:
            return list(current)
        if raw == "-":
            return []
        try:
            return validate_plug_pairs(raw)
        except ConfigurationError as exc:
            print(f"❌  {exc}")


def get_settings(count: int, rings: str, positions: str, plugs: Sequence[str]) -> Tuple[str, str, List[str]]:
    """Prompt for ring settings, initial positions and plugs; Enter keeps the
    current value."""
    new_rings = get_letter_list(count, "Ring settings", rings)
    new_positions = get_letter_list(count, "Initial positions", positions)
    new_plugs = get_plugboard(plugs)
    debug.log("config", f"rings={new_rings} positions={new_positions} plugs={new_plugs}")
    return new_rings, new_positions, new_plugs


__all__ = [
    "ConfigurationError",
    "ROTORS",
    "REFLECTORS",
    "validate_letter_list",
    "validate_plug_pairs",
    "resolve_rotor",
    "resolve_reflector",
    "get_settings",
    "preprocess_message",
]

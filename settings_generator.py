# settings_generator.py
from __future__ import annotations

import argparse
import json
from pathlib import Path
from random import Random, SystemRandom
from typing import Dict, List, Sequence

from keyboard_and_plugboard import ALPHABET
from utilities import ROTORS

N_ROT = 3
MAX_PAIRS = 10
SHEET_REFLECTORS = ["B", "C"]

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, len(alpha) // 2)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def choose_letters(count: int, rng: Random | SystemRandom) -> str:
    return " ".join(rng.choice(ALPHABET) for _ in range(count))


def generate(
    rng: Random | SystemRandom,
    *,
    pairs: int = MAX_PAIRS,
    rotors: Sequence[str] = tuple(ROTORS),
    reflectors: Sequence[str] = SHEET_REFLECTORS,
) -> Dict:
    """One day's settings, in the shape ``MachineConfig.from_dict`` reads."""
    order = rng.sample(list(rotors), N_ROT)
    return {
        "rotors": order,
        "reflector": rng.choice(list(reflectors)),
        "ring_settings": choose_letters(N_ROT, rng),
        "initial_positions": choose_letters(N_ROT, rng),
        "plugboard": choose_pairs(ALPHABET, pairs, rng),
    }


def parse_cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a daily key sheet")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=MAX_PAIRS, help=f"Plug pairs to wire (default: {MAX_PAIRS})")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_config.json"),
        help="Destination JSON file (default: enigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_cli(argv)
    if not 0 <= args.pairs <= len(ALPHABET) // 2:
        raise SystemExit(f"❌  --pairs must be between 0 and {len(ALPHABET) // 2}")

    cfg = generate(build_rng(args.seed), pairs=args.pairs)

    args.outfile.write_text(json.dumps(cfg, indent=2), encoding="utf-8")
    print(f"✅  Wrote {args.outfile}\n"
          f"   rotors      : {' '.join(cfg['rotors'])}\n"
          f"   reflector   : {cfg['reflector']}\n"
          f"   rings       : {cfg['ring_settings']}\n"
          f"   start       : {cfg['initial_positions']}\n"
          f"   plug pairs  : {len(cfg['plugboard'])}")


if __name__ == "__main__":
    main()

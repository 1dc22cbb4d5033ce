# main.py
from __future__ import annotations

import argparse, json
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import enigma
import keyboard_and_plugboard
import rotor_and_reflector
import utilities
from debug import COMPONENTS, Debug, add_log_file
from enigma import Enigma
from records import MessageRecord, load_record, save_record
from utilities import (
    ConfigurationError,
    DEFAULT_REFLECTOR,
    DEFAULT_ROTORS,
    get_settings,
    preprocess_message,
    resolve_reflector,
    resolve_rotor,
    validate_letter_list,
    validate_plug_pairs,
)

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()

_DEBUG_TARGETS = (debug, enigma.debug, rotor_and_reflector.debug,
                  keyboard_and_plugboard.debug, utilities.debug)


def enable_debug(components: Sequence[str]) -> None:
    """Switch *components* on in every module's Debug instance."""
    for target in _DEBUG_TARGETS:
        target.enable(*components)


def _str_field(value: object, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"Config key {key!r} must be a string, got {type(value).__name__}")
    return value


def _str_list(value: object, key: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"Config key {key!r} must be a list of strings")
    return list(value)


@dataclass(slots=True)
class MachineConfig:
    """Everything needed to (re)build an engine.

    Rotors are listed leftmost first, by wheel name ("III") or raw wiring.
    ``notches`` may be left out when every rotor is named.
    """

    rotors: List[str] = field(default_factory=lambda: list(DEFAULT_ROTORS))
    reflector: str = DEFAULT_REFLECTOR
    notches: List[str] | None = None
    ring_settings: str = ""  # empty means "A" for every rotor
    initial_positions: str = ""
    plugboard: List[str] = field(default_factory=list)

    @classmethod
    def default(cls) -> "MachineConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> "MachineConfig":
        required = {"rotors", "reflector"}
        missing = required - data.keys()
        if missing:
            raise ConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")

        plugs = data.get("plugboard", [])
        if isinstance(plugs, str):
            plugs = plugs.split()
        notches = data.get("notches")

        return cls(
            rotors=_str_list(data["rotors"], "rotors"),
            reflector=_str_field(data["reflector"], "reflector"),
            notches=_str_list(notches, "notches") if notches is not None else None,
            ring_settings=_str_field(data.get("ring_settings", ""), "ring_settings"),
            initial_positions=_str_field(data.get("initial_positions", ""), "initial_positions"),
            plugboard=_str_list(plugs, "plugboard"),
        )

    def to_dict(self) -> dict:
        data = {
            "rotors": list(self.rotors),
            "reflector": self.reflector,
            "ring_settings": self.ring_settings,
            "initial_positions": self.initial_positions,
            "plugboard": list(self.plugboard),
        }
        if self.notches is not None:
            data["notches"] = list(self.notches)
        return data

    # ––– validation –––––––––––––––––––––––––––––––––––––––––––––––––

    def resolve(self) -> Tuple[List[str], List[str], str]:
        """Return ``(wirings, notches, reflector_wiring)`` or raise."""
        if not self.rotors:
            raise ConfigurationError("At least one rotor is required")
        if self.notches is not None and len(self.notches) != len(self.rotors):
            raise ConfigurationError(
                f"Got {len(self.notches)} notches for {len(self.rotors)} rotors"
            )

        wheels = [
            resolve_rotor(wheel, self.notches[i] if self.notches else None)
            for i, wheel in enumerate(self.rotors)
        ]
        wirings = [wiring for wiring, _ in wheels]
        notches = [notch for _, notch in wheels]
        return wirings, notches, resolve_reflector(self.reflector)

    def validate(self) -> "MachineConfig":
        """Check every field; return a normalised copy."""
        self.resolve()
        count = len(self.rotors)
        home = " ".join("A" * count)
        cfg = replace(
            self,
            rotors=list(self.rotors),
            ring_settings=validate_letter_list(self.ring_settings or home, count, "Ring settings"),
            initial_positions=validate_letter_list(self.initial_positions or home, count, "Initial positions"),
            plugboard=validate_plug_pairs(self.plugboard),
        )
        debug.log("config", f"validated {cfg}")
        return cfg

    def build(self) -> Enigma:
        cfg = self.validate()
        wirings, notches, reflector = cfg.resolve()
        return Enigma(
            wirings,
            notches,
            reflector,
            cfg.ring_settings,
            cfg.initial_positions,
            cfg.plugboard,
        )


# ────────────────────────────────────────────────────────────────────────
#  1. JSON loading helpers
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> MachineConfig:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"{path}: not UTF-8 text ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return MachineConfig.from_dict(data).validate()


def save_config(path: str | Path, cfg: MachineConfig) -> Path:
    path = Path(path)
    path.write_text(json.dumps(cfg.to_dict(), indent=2), encoding="utf-8")
    return path


# ────────────────────────────────────────────────────────────────────────
#  2. MachineContext – wraps an Enigma & reset logic
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """Owns the current configuration and the live engine built from it."""

    def __init__(self, config: MachineConfig | None = None) -> None:
        self.config: MachineConfig = (config or MachineConfig.default()).validate()
        self.reset()

    def reset(self) -> None:
        """Throw the engine away and build a fresh one from the config."""
        self.machine: Enigma = self.config.build()
        debug.log("config", f"reset to {self.positions}")

    def apply(self, config: MachineConfig) -> None:
        """Swap in a new configuration; the old one stays if it is rejected."""
        self.config = config.validate()
        self.reset()

    @property
    def positions(self) -> str:
        return self.machine.get_current_rotor_positions()

    # ––– enciphering ––––––––––––––––––––––––––––––––––––––––––––––––

    def feed(self, text: str) -> str:
        """Encipher *text*, continuing from the current rotor state."""
        return self.machine.encipher(preprocess_message(text))

    def encipher_all(self, text: str, *, reset: bool = True) -> str:
        if reset:
            self.reset()
        return self.feed(text)

    def record(self, text: str, output: str) -> MessageRecord:
        return MessageRecord(
            input=text,
            output=output,
            ring_settings=self.config.ring_settings,
            initial_positions=self.config.initial_positions,
            plugboard_pairs=list(self.config.plugboard),
        )


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encipher text with a rotor machine")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encipher. If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON.")
    p.add_argument("--rings", metavar="'A A A'", help="Ring settings, one letter per rotor.")
    p.add_argument("--positions", metavar="'A A A'", help="Initial rotor positions, one letter per rotor.")
    p.add_argument("--plugs", metavar="'AT BS'", help="Plugboard pairs separated by spaces.")
    p.add_argument("--save", metavar="FILE", help="Write a message record after a one-shot run.")
    p.add_argument("--load", metavar="FILE", help="Print a saved message record and exit.")
    p.add_argument("--write-config", dest="write_config", metavar="FILE", help="Store the effective settings as JSON.")
    p.add_argument("--log-file", dest="log_file", metavar="FILE", help="Also write debug output to FILE.")
    p.add_argument("--debug", nargs="+", choices=COMPONENTS, default=[], metavar="COMPONENT",
                   help=f"Enable debug logging for: {', '.join(COMPONENTS)}")
    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> MachineConfig:
    cfg = load_config(args.config) if args.config else MachineConfig.default()

    overrides: Dict[str, object] = {}
    if args.rings is not None:
        overrides["ring_settings"] = args.rings
    if args.positions is not None:
        overrides["initial_positions"] = args.positions
    if args.plugs is not None:
        overrides["plugboard"] = args.plugs.split()
    return replace(cfg, **overrides).validate()


def show_config(ctx: MachineContext) -> None:
    cfg = ctx.config
    print(f"  rotors      : {' '.join(cfg.rotors)}")
    print(f"  reflector   : {cfg.reflector}")
    print(f"  rings       : {cfg.ring_settings}")
    print(f"  start       : {cfg.initial_positions}")
    print(f"  plug pairs  : {' '.join(cfg.plugboard) or 'none'}")
    print(ctx.machine.get_configuration(), end="")


REPL_HELP = """Commands:
  :reset        rebuild the machine from its settings
  :pos          show rotor positions
  :show         show the current settings
  :config       change ring settings, positions and plugs
  :save FILE    write everything typed since the last reset
  :help         this text
Blank line quits."""


def repl(ctx: MachineContext) -> None:
    typed: List[str] = []
    produced: List[str] = []

    print("Type text to encipher; rotor state carries over between lines.")
    print(REPL_HELP)
    while True:
        try:
            line = input("\n> ")
        except EOFError:
            break
        if not line.strip():
            break

        cmd, _, arg = line.strip().partition(" ")
        if cmd == ":reset":
            ctx.reset()
            typed.clear()
            produced.clear()
            print(f"Reset. Rotors: {ctx.positions}")
        elif cmd == ":pos":
            print(ctx.positions)
        elif cmd == ":show":
            show_config(ctx)
        elif cmd == ":config":
            rings, positions, plugs = get_settings(
                len(ctx.config.rotors),
                ctx.config.ring_settings,
                ctx.config.initial_positions,
                ctx.config.plugboard,
            )
            ctx.apply(replace(ctx.config, ring_settings=rings,
                              initial_positions=positions, plugboard=plugs))
            typed.clear()
            produced.clear()
            print(f"Configuration updated. Rotors: {ctx.positions}")
        elif cmd == ":save":
            if not arg:
                print("❌  Usage: :save FILE")
                continue
            try:
                path = save_record(arg, ctx.record(" ".join(typed), " ".join(produced)))
            except (ValueError, OSError) as exc:
                print(f"❌  Error saving file: {exc}")
                continue
            print(f"✅  Saved {path}")
        elif cmd == ":help":
            print(REPL_HELP)
        else:
            out = ctx.feed(line)
            typed.append(line)
            produced.append(out)
            print(out)
            print(f"[{ctx.positions}]")


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    enable_debug(args.debug)
    if args.log_file:
        add_log_file(args.log_file)

    if args.load:
        try:
            print(load_record(args.load), end="")
        except OSError as exc:
            sys.exit(f"❌  Error loading file: {exc}")
        return

    try:
        ctx = MachineContext(config_from_args(args))
    except ConfigurationError as exc:
        sys.exit(f"❌  Error in configuration: {exc}")
    except OSError as exc:
        sys.exit(f"❌  Cannot read configuration: {exc}")

    if args.write_config:
        print(f"✅  Wrote {save_config(args.write_config, ctx.config)}")

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        cipher = ctx.encipher_all(args.message)
        print("Enciphered:", cipher)
        print("Rotors    :", ctx.positions)
        if args.save:
            try:
                print(f"✅  Saved {save_record(args.save, ctx.record(args.message, cipher))}")
            except (ValueError, OSError) as exc:
                sys.exit(f"❌  Error saving file: {exc}")
        return

    # interactive REPL ---------------------------------------------------
    show_config(ctx)
    repl(ctx)


if __name__ == "__main__":
    main()

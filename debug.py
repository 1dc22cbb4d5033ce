# debug.py
from __future__ import annotations
import logging
from typing import Dict, Iterable

COMPONENTS = ("plugboard", "rotor", "reflector", "stepping", "encipher", "config")
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"


def add_log_file(path: str) -> logging.Handler:
    """Mirror every ENIGMA record into *path* as well."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.getLogger("ENIGMA").addHandler(handler)
    return handler


class Debug:
    """Per-module switchboard in front of the shared ``ENIGMA`` logger.

    Each module keeps its own instance, so turning a component on in one
    module leaves the others quiet.
    """

    _root_configured: bool = False          # class-level guard

    def __init__(self) -> None:
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format=LOG_FORMAT,
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            Debug._root_configured = True

        self.logger = logging.getLogger("ENIGMA")
        self.logger.setLevel(logging.DEBUG)  # gating happens in log(), not here
        self.enabled = True        # global switch
        self.components: Dict[str, bool] = {c: False for c in COMPONENTS}

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.enabled and self.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        self._set(components, True)

    def disable(self, *components: str) -> None:
        self._set(components, False)

    def toggle(self, component: str) -> None:
        self._require(component)
        self.components[component] = not self.components[component]

    def toggle_global(self, state: bool) -> None:
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _set(self, components: Iterable[str], state: bool) -> None:
        for c in components:
            self._require(c)
            self.components[c] = state

    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"

# debug.py
from __future__ import annotations
import logging
from typing import Dict

COMPONENTS = ("config", "stepping", "plugboard", "rotor", "reflector", "convert")

_root_configured: bool = False


def setup_logging(verbose: bool = False, *, log_to: str | None = None) -> None:
    """
    Configure the root logger once per process.
    If `log_to` is given, messages also stream to that file.
    """
    global _root_configured
    if _root_configured:
        return

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_to:
        handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
    _root_configured = True


class Debug:
    """Component-gated diagnostic sink handed to a Machine."""

    def __init__(self, *enabled: str, name: str = "enigma") -> None:
        self.logger = logging.getLogger(name)
        self.enabled = True        # global switch

        self.components: Dict[str, bool] = {c: False for c in COMPONENTS}
        self.enable(*enabled)

    # ── logging API ──────────────────────────────────────────────
    def active(self, component: str) -> bool:
        return self.enabled and self.components.get(component, False)

    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def enable_all(self) -> None:
        self.enable(*self.components)

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        self.components[component] = not self.components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from ..config import InputConfig
from ..exceptions import InvalidInputEvent
from .actions import InputAction

logger = logging.getLogger(__name__)

# Canonical key names a backend may expose as constants (e.g. ``arcade.key``)
BACKEND_KEY_NAMES = (
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "PAGEUP",
    "PAGEDOWN",
    "HOME",
    "END",
    "ENTER",
    "RETURN",
    "SPACE",
    "NUM_8",
    "NUM_9",
    "NUM_6",
    "NUM_3",
    "NUM_2",
    "NUM_1",
    "NUM_4",
    "NUM_7",
    "NUM_ENTER",
)


class InputMapper:
    """Rebindable mapping from physical keys to logical actions.

    Keys are represented as strings that are normalized internally
    (case-insensitive). Backends that report numeric codes (browser keyCodes,
    Arcade/pyglet symbols) register aliases from the code to a canonical name.

    Example usage:
        mapper = InputMapper.default()
        action = mapper.translate_key("up")   # -> InputAction.MOVE_N
        action = mapper.translate_key(38)     # -> InputAction.MOVE_N via alias
    """

    def __init__(self, bindings: Optional[Dict[str, InputAction]] = None) -> None:
        self._bindings: Dict[str, InputAction] = {}
        if bindings:
            for key, action in bindings.items():
                self.bind(key, action)

        self._aliases: Dict[str, str] = {}

    # ---------- Canonicalization ----------
    @staticmethod
    def _normalize(key: str | int) -> Optional[str]:
        """Normalize a key into a canonical uppercase string.

        Accepts ints or strings; ints are converted to strings. Returns None
        for unsupported/empty inputs.
        """
        if key is None:
            return None
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    # ---------- Binding API ----------
    def bind(self, key: str | int, action: InputAction) -> None:
        """Bind a single key to an action."""
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = action

    def bind_many(self, keys: Iterable[str | int], action: InputAction) -> None:
        """Bind multiple keys to the same action."""
        for k in keys:
            self.bind(k, action)

    def unbind(self, key: str | int) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop(nk, None)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Register an alias mapping from a backend-specific key to a canonical name.

        Example: set_alias(65362, "UP") or set_alias(13, "ENTER").
        """
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    def clear_aliases(self) -> None:
        self._aliases.clear()

    def alias_backend_keys(self, namespace: Any, names: Iterable[str] = BACKEND_KEY_NAMES) -> int:
        """Alias a backend's key constants (``namespace.UP`` etc.) onto canonical names.

        Existing aliases (the browser keyCodes from config) are dropped first:
        a backend has its own numbering, and in Arcade 33-40 are punctuation
        symbols. Names the backend does not define are skipped. Returns the
        number of aliases registered.
        """
        if self._aliases:
            logger.debug("Replacing %d configured key aliases with backend symbols", len(self._aliases))
        self.clear_aliases()
        count = 0
        for name in names:
            code = getattr(namespace, name, None)
            if code is None:
                continue
            canonical = name
            if name.startswith("NUM_"):
                canonical = _NUMPAD_CANONICAL.get(name, name)
            self.set_alias(code, canonical)
            count += 1
        logger.debug("Registered %d backend key aliases", count)
        return count

    # ---------- Translation ----------
    def translate_key(self, key: str | int) -> Optional[InputAction]:
        """Translate a physical key into a logical action or None.

        Applies alias remapping, then looks up the action in the binding table.
        """
        nk = self._normalize(key)
        if nk is None:
            return None
        canonical = self._aliases.get(nk, nk)
        return self._bindings.get(canonical)

    def resolve(self, key: str | int) -> InputAction:
        """Like translate_key, but raises InvalidInputEvent for unbound keys."""
        action = self.translate_key(key)
        if action is None:
            raise InvalidInputEvent(key)
        return action

    # ---------- Defaults ----------
    @classmethod
    def from_config(cls, config: InputConfig) -> "InputMapper":
        """Build a mapper from an InputConfig (action names -> keys, code -> name aliases)."""
        mapper = cls()
        for action_name, keys in config.bindings.items():
            try:
                action = InputAction[action_name.upper()]
            except KeyError:
                logger.warning("Ignoring binding for unknown action %r", action_name)
                continue
            mapper.bind_many(keys, action)
        for code, name in config.aliases.items():
            mapper.set_alias(code, name)
        return mapper

    @classmethod
    def default(cls) -> "InputMapper":
        """Create the default mapper.

        - Arrows plus PageUp/PageDown/Home/End cover the eight directions.
        - Enter/Return/Space map to INTERACT.
        - Browser keyCodes (38, 33, 39, 34, 40, 35, 37, 36, 13, 32) are aliased.
        """
        return cls.from_config(InputConfig())


_NUMPAD_CANONICAL = {
    "NUM_8": "UP",
    "NUM_9": "PAGEUP",
    "NUM_6": "RIGHT",
    "NUM_3": "PAGEDOWN",
    "NUM_2": "DOWN",
    "NUM_1": "END",
    "NUM_4": "LEFT",
    "NUM_7": "HOME",
    "NUM_ENTER": "ENTER",
}


__all__ = ["InputMapper", "BACKEND_KEY_NAMES"]

from __future__ import annotations

from typing import Callable, Optional

MAX_LOGIC_KEY_LENGTH = 32
LOGIC_KEY_REQUIRED = "Logic key required"


class LogicKeyVM:
    """State of the logic-key configuration dialog.

    - Holds the key text and its validation error; blank keys cannot be saved.
    - ``save`` commits the current text as the unmodified baseline and hands
      it to ``on_save`` (the configuration source of the service).
    - Does not persist anything itself.
    """

    def __init__(
        self,
        initial_key: Optional[str] = None,
        *,
        on_save: Optional[Callable[[str], None]] = None,
        on_delete: Optional[Callable[[], None]] = None,
    ) -> None:
        self.on_save = on_save
        self.on_delete = on_delete
        self.logic_key: Optional[str] = initial_key
        self.logic_key_error: Optional[str] = None
        self.is_valid: bool = bool(initial_key and initial_key.strip())
        self.is_editing: bool = True
        self._initial_key = initial_key

    def set_logic_key(self, value: str) -> None:
        text = (value or "")[:MAX_LOGIC_KEY_LENGTH]
        self.logic_key = text
        self.is_valid = bool(text.strip())
        self.logic_key_error = None if self.is_valid else LOGIC_KEY_REQUIRED

    def has_unsaved_modifications(self) -> bool:
        return self.logic_key != self._initial_key

    def save(self) -> str:
        if not self.is_valid or self.logic_key is None:
            self.logic_key_error = LOGIC_KEY_REQUIRED
            raise ValueError(LOGIC_KEY_REQUIRED)
        self._initial_key = self.logic_key
        self.is_editing = False
        if self.on_save:
            self.on_save(self.logic_key)
        return self.logic_key

    def delete(self) -> None:
        self.is_editing = False
        if self.on_delete:
            self.on_delete()

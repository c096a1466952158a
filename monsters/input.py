"""Keyboard, mouse and text-input state."""

from __future__ import annotations

from typing import Union

from .keycodes import CursorMode, KeyCode, MouseButton


class Input:
    """Holds which keys and buttons are down, the cursor and typed characters."""

    def __init__(self) -> None:
        self._keys: set[KeyCode] = set()
        self._buttons: set[MouseButton] = set()
        self._mouse = (0.0, 0.0)
        self._characters: list[str] = []
        self.cursor_mode = CursorMode.NORMAL

    def press(self, key: Union[KeyCode, int]) -> None:
        self._keys.add(KeyCode(key))

    def release(self, key: Union[KeyCode, int]) -> None:
        self._keys.discard(KeyCode(key))

    def is_key_down(self, key: Union[KeyCode, int]) -> bool:
        return KeyCode(key) in self._keys

    def press_button(self, button: Union[MouseButton, int]) -> None:
        self._buttons.add(MouseButton(button))

    def release_button(self, button: Union[MouseButton, int]) -> None:
        self._buttons.discard(MouseButton(button))

    def is_mouse_button_down(self, button: Union[MouseButton, int]) -> bool:
        return MouseButton(button) in self._buttons

    def move_mouse(self, x: float, y: float) -> None:
        self._mouse = (float(x), float(y))

    def mouse_position(self) -> tuple[float, float]:
        return self._mouse

    def set_cursor_mode(self, mode: Union[CursorMode, int]) -> None:
        self.cursor_mode = CursorMode(mode)

    def type_text(self, text: str) -> None:
        """Queue characters as if typed on the keyboard."""
        self._characters.extend(text)

    def drain_characters(self) -> list[str]:
        """Return the queued characters and empty the queue."""
        characters, self._characters = self._characters, []
        return characters
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional, Protocol

from flask import flash


@dataclass(frozen=True)
class DialogMessage:
    icon: str
    title: str
    text: Optional[str] = None
    html: Optional[str] = None
    confirm_button_text: str = "OK"
    confirm_button_color: Optional[str] = None


class Dialog(Protocol):
    def fire(self, message: DialogMessage) -> None:
        raise NotImplementedError


class FlashDialog(Dialog):
    """Queues the dialog for the next rendered page (see templates/base.html)."""

    def fire(self, message: DialogMessage) -> None:
        flash(asdict(message), "dialog")

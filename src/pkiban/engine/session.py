"""
Interactive generator state: the field values a front-end edits and the
result/error it displays.

The IBAN core is stateless; this object is the presentation-layer state
machine wrapped around it:

    IDLE -> VALIDATING -> ERROR | READY

- Editing the account number or the bank selection returns to IDLE and clears
  the previous result. Live validation runs on the account number only.
- `generate()` re-validates everything and ends in ERROR or READY.
- `clear()` resets every field.

Copying is fire-and-forget: the writer is called once, and a successful write
turns on `copied` until a timer switches it off again.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Callable, Optional

import structlog

from ..config import Bank, PkibanConfig
from ..core.builder import IBANBuilder, compact_iban

log = structlog.get_logger()

ClipboardWriter = Callable[[str], None]


class SessionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    ERROR = "error"
    READY = "ready"


class GeneratorSession:
    def __init__(
        self,
        builder: IBANBuilder,
        clipboard: Optional[ClipboardWriter] = None,
        copied_reset_seconds: float = 2.0,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.builder = builder
        self.clipboard = clipboard
        self.copied_reset_seconds = copied_reset_seconds
        self._timer_factory = timer_factory
        self._copied_timer: Optional[threading.Timer] = None
        self._copied_token = 0
        self._copied_lock = threading.Lock()
        self.clear()

    @classmethod
    def from_config(cls, cfg: PkibanConfig, clipboard: Optional[ClipboardWriter] = None) -> "GeneratorSession":
        return cls(
            IBANBuilder.from_config(cfg),
            clipboard=clipboard,
            copied_reset_seconds=cfg.generator.copied_reset_seconds,
        )

    # ---------------- Field edits ----------------

    def set_account_number(self, text: str) -> None:
        """Store the raw text as typed and re-run live validation on it."""
        self.account_number = text
        self._reset_output()
        failure = self.builder.validate(text)
        self.error = failure.message if failure else ""

    def select_bank(self, code: str) -> None:
        self.bank_code = code
        self._reset_output()
        # the account field keeps its own live message
        failure = self.builder.validate(self.account_number) if self.account_number else None
        self.error = failure.message if failure else ""

    def clear(self) -> None:
        self._clear_copied()
        self.account_number = ""
        self.bank_code = ""
        self.result = ""
        self.error = ""
        self.loading = False
        self.state = SessionState.IDLE

    # ---------------- Actions ----------------

    def generate(self) -> str:
        """Validate the current fields and build the IBAN; returns the formatted IBAN or ""."""
        self.loading = True
        self.state = SessionState.VALIDATING
        self.error = ""
        self.result = ""
        self._clear_copied()

        outcome = self.builder.generate(self.account_number, self.bank_code)
        if outcome.ok:
            self.result = outcome.formatted or ""
            self.state = SessionState.READY
            log.info("iban_generated", bank=outcome.bank.code if outcome.bank else None)
        else:
            self.error = outcome.error.message
            self.state = SessionState.ERROR
            log.info("iban_rejected", kind=outcome.error.kind.value)
        self.loading = False
        return self.result

    def copy(self) -> bool:
        """
        Send the compact IBAN to the clipboard writer.

        Returns True if the write succeeded. Failures are logged and otherwise
        ignored; they never change the result or error shown to the user.
        """
        if not self.result:
            return False
        if self.clipboard is None:
            log.info("clipboard_unavailable")
            return False
        try:
            self.clipboard(compact_iban(self.result))
        except Exception as e:
            log.warning("clipboard_write_failed", error=str(e))
            return False
        with self._copied_lock:
            self._drop_copied_timer()
            self.copied = True
            timer = self._timer_factory(
                self.copied_reset_seconds, self._revert_copied, args=(self._copied_token,)
            )
            timer.daemon = True
            self._copied_timer = timer
            timer.start()
        return True

    # ---------------- Views ----------------

    @property
    def selected_bank(self) -> Optional[Bank]:
        return self.builder.registry.get(self.bank_code)

    # --------------- Internals ------------------

    def _reset_output(self) -> None:
        self.result = ""
        self._clear_copied()
        self.state = SessionState.IDLE

    def _clear_copied(self) -> None:
        with self._copied_lock:
            self._drop_copied_timer()
            self.copied = False

    def _drop_copied_timer(self) -> None:
        # caller holds _copied_lock; bumping the token turns a late callback into a no-op
        if self._copied_timer is not None:
            self._copied_timer.cancel()
        self._copied_timer = None
        self._copied_token += 1

    def _revert_copied(self, token: int) -> None:
        """Timer callback: switch `copied` off unless a newer copy replaced this timer."""
        with self._copied_lock:
            if token != self._copied_token:
                return
            self._copied_timer = None
            self.copied = False

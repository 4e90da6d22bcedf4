"""
go-scaffold Wizard Orchestrator

Runs the WizardController inside a live terminal screen. Key presses, timer
ticks, terminal resizes and the materializer's completion all arrive through
one queue and are handed to the controller one at a time; the effects it
returns are carried out here.
"""

import os
import queue
import select
import signal
import sys
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

import readchar
from rich.console import Console
from rich.live import Live

from go_scaffold.config import ScaffoldConfig
from go_scaffold.generator.materializer import OVERLAY_MANIFEST, Materializer, ProjectSpec
from go_scaffold.wizard.controller import (
    DoneEvent,
    Effect,
    Event,
    KeyEvent,
    MaterializeEffect,
    QuitEffect,
    ResizeEvent,
    TickEvent,
    WizardController,
    WizardState,
)
from go_scaffold.wizard.logging_config import get_logger
from go_scaffold.wizard.ui import WizardUI


logger = get_logger("orchestrator")

# Seconds between ticks while waiting for input
TICK_INTERVAL = 0.1

# Seconds to wait for the rest of an escape sequence after ESC
ESC_TIMEOUT = 0.05

KEY_NAMES = {
    readchar.key.UP: "up",
    readchar.key.DOWN: "down",
    readchar.key.ENTER: "enter",
    readchar.key.CR: "enter",
    readchar.key.LF: "enter",
    readchar.key.SPACE: "space",
    readchar.key.BACKSPACE: "backspace",
    "\x08": "backspace",
    readchar.key.ESC: "esc",
    readchar.key.TAB: "tab",
    readchar.key.CTRL_C: "ctrl_c",
}


def normalize_key(raw: str) -> Optional[str]:
    """Map a readchar key sequence to a controller key name.

    Returns:
        Key name, or None for sequences the wizard does not use
    """
    if raw in KEY_NAMES:
        return KEY_NAMES[raw]
    if len(raw) == 1 and raw.isprintable():
        return raw
    return None


class TerminalKeyReader:
    """Reads one key press at a time from a POSIX terminal in cbreak mode.

    readchar.readkey() blocks after ESC until the rest of an escape sequence
    arrives, so a lone ESC would only show up glued to the next key. This
    reader gives a follow-up byte esc_timeout seconds and reports a bare ESC
    when none comes. Arrow keys and other CSI/SS3 sequences come back whole,
    matching the readchar.key constants.
    """

    def __init__(self, fd: int, esc_timeout: float = ESC_TIMEOUT):
        self.fd = fd
        self.esc_timeout = esc_timeout
        self._pending = b""

    def _read_byte(self, timeout: Optional[float] = None) -> Optional[bytes]:
        if self._pending:
            byte, self._pending = self._pending[:1], self._pending[1:]
            return byte
        if timeout is not None:
            ready, _, _ = select.select([self.fd], [], [], timeout)
            if not ready:
                return None
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("terminal closed")
        return data

    def _escape_sequence(self) -> str:
        second = self._read_byte(self.esc_timeout)
        if second is None:
            return readchar.key.ESC
        if second not in (b"[", b"O"):
            # ESC followed by an ordinary key: report both separately
            self._pending = second + self._pending
            return readchar.key.ESC

        sequence = b"\x1b" + second
        while True:
            byte = self._read_byte(self.esc_timeout)
            if byte is None:
                break
            sequence += byte
            # SS3 takes one byte; CSI ends with a byte in 0x40-0x7e
            if second == b"O" or 0x40 <= byte[0] <= 0x7E:
                break
        return sequence.decode("ascii", errors="replace")

    def __call__(self) -> str:
        first = self._read_byte()
        if first == b"\x1b":
            return self._escape_sequence()

        lead = first[0]
        if lead >= 0xF0:
            extra = 3
        elif lead >= 0xE0:
            extra = 2
        elif lead >= 0xC0:
            extra = 1
        else:
            extra = 0

        data = first
        for _ in range(extra):
            data += self._read_byte()
        return data.decode("utf-8", errors="replace")


def terminal_fd() -> Optional[int]:
    """File descriptor of an interactive POSIX stdin, else None."""
    if sys.platform == "win32" or not sys.stdin.isatty():
        return None
    return sys.stdin.fileno()


def default_key_reader() -> Callable[[], str]:
    fd = terminal_fd()
    if fd is None:
        return readchar.readkey
    return TerminalKeyReader(fd)


@contextmanager
def cbreak_terminal(fd: Optional[int]) -> Iterator[None]:
    """Turn off echo and line buffering, restoring the saved attributes on exit.

    The key-reader thread is a daemon that is usually blocked in a read when
    the wizard ends, so the main thread owns the terminal mode.
    """
    if fd is None:
        yield
        return

    import termios
    import tty

    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


class WizardOrchestrator:
    """Event loop and effect interpreter for the interactive wizard."""

    def __init__(
        self,
        config: ScaffoldConfig,
        console: Optional[Console] = None,
        controller: Optional[WizardController] = None,
        read_key: Optional[Callable[[], str]] = None
    ):
        self.config = config
        self.console = console or Console()
        self.ui = WizardUI(self.console)
        self.controller = controller or WizardController()
        self.materializer = Materializer(config, overlay=OVERLAY_MANIFEST)
        self.events: "queue.Queue[Event]" = queue.Queue()
        self._read_key = read_key or default_key_reader()
        self._worker: Optional[threading.Thread] = None
        self._size = (0, 0)

    # -- Event sources ------------------------------------------------------

    def _start_key_reader(self):
        thread = threading.Thread(target=self._key_loop, name="go-scaffold-keys", daemon=True)
        thread.start()

    def _key_loop(self):
        while True:
            try:
                raw = self._read_key()
            except KeyboardInterrupt:
                self.events.put(KeyEvent("ctrl_c"))
                return
            except (OSError, EOFError) as e:
                logger.debug("Key reader stopped: %s", e)
                self.events.put(KeyEvent("ctrl_c"))
                return

            key = normalize_key(raw)
            if key is not None:
                self.events.put(KeyEvent(key))

    def _handle_interrupt(self, signum, frame):
        """SIGINT/SIGTERM become the same hard abort as CTRL+C."""
        self.events.put(KeyEvent("ctrl_c"))

    def _next_event(self) -> Event:
        width, height = self.console.size
        if (width, height) != self._size:
            self._size = (width, height)
            return ResizeEvent(width, height)

        try:
            return self.events.get(timeout=TICK_INTERVAL)
        except queue.Empty:
            return TickEvent()

    # -- Effects ------------------------------------------------------------

    def _start_materialize(self, spec: ProjectSpec):
        if self._worker is not None:
            logger.warning("Materialization already started; ignoring")
            return

        self._worker = threading.Thread(
            target=self._materialize,
            args=(spec,),
            name="go-scaffold-materialize",
            daemon=True,
        )
        self._worker.start()

    def _materialize(self, spec: ProjectSpec):
        try:
            message = self.materializer.materialize(spec)
        except Exception as e:
            logger.error("Project creation failed: %s", e)
            self.events.put(DoneEvent(error=e))
        else:
            self.events.put(DoneEvent(message=message))

    def apply(self, effects: List[Effect]) -> Optional[int]:
        """Carry out effects.

        Returns:
            Exit code if one of the effects ends the wizard, else None
        """
        for effect in effects:
            if isinstance(effect, QuitEffect):
                return effect.exit_code
            if isinstance(effect, MaterializeEffect):
                self._start_materialize(effect.spec)
        return None

    # -- Main loop ----------------------------------------------------------

    def dispatch(self, event: Event) -> Optional[int]:
        """Hand one event to the controller and apply its effects."""
        _, effects = self.controller.handle(event)
        return self.apply(effects)

    def run(self) -> int:
        """Run the wizard until it quits.

        Returns:
            Process exit code
        """
        previous = {
            sig: signal.signal(sig, self._handle_interrupt)
            for sig in (signal.SIGINT, signal.SIGTERM)
        }

        exit_code: Optional[int] = None
        try:
            with cbreak_terminal(terminal_fd()):
                self._start_key_reader()
                with Live(
                    self.ui.render(self.controller),
                    console=self.console,
                    screen=True,
                    auto_refresh=False,
                    transient=True,
                ) as live:
                    while exit_code is None:
                        exit_code = self.dispatch(self._next_event())
                        live.update(self.ui.render(self.controller), refresh=True)
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

        self._print_outcome(exit_code)
        return exit_code

    def _print_outcome(self, exit_code: int):
        state = self.controller.state
        if state == WizardState.SUCCESS:
            self.ui.print_success(self.controller.message)
            spec = self.controller.spec
            if spec is not None:
                self.ui.print_info(f"cd {spec.display_path()}")
        elif exit_code == 130:
            if state == WizardState.PROCESSING:
                self.ui.print_warning("Aborted while the project was being created; check the target directory")
            else:
                self.ui.print_warning("Aborted")
        elif state == WizardState.CONFIRM:
            self.ui.print_warning("Cancelled, nothing was created")
        elif state == WizardState.ERROR:
            self.ui.print_error(self.controller.error_message)

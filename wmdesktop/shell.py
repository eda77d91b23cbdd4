import signal
import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from wmdesktop.local.config import effective_settings as config
from wmdesktop.local.sidecar.paths import BuildMode, detect_build_mode, detect_resource_dir

log = logging.getLogger(__name__)

T = TypeVar("T")
SetupHook = Callable[["DesktopShell"], None]
EventHook = Callable[["DesktopShell", "RunEvent"], None]


class RunEvent(Enum):
    READY = "ready"
    EXIT_REQUESTED = "exit_requested"
    EXIT = "exit"


class DesktopShell:
    """
    The host runtime the desktop integrations plug into.

    It keeps one managed state object per type, runs setup hooks once, then
    waits until an exit is requested and announces it to the event hooks.
    Rendering is left to the frontend; this class only owns the lifecycle.
    """

    def __init__(self, build_mode: Optional[BuildMode] = None, source_root: Optional[Path] = None) -> None:
        self.build_mode = build_mode if build_mode is not None else detect_build_mode()
        self.source_root = Path(source_root) if source_root is not None else config.SOURCE_ROOT
        self.exit_code = 0

        self._states: Dict[type, Any] = {}
        self._setup_hooks: List[SetupHook] = []
        self._event_hooks: List[EventHook] = []
        self._exit_requested = threading.Event()

    #* --- State Registry ---
    def manage(self, state: Any) -> "DesktopShell":
        """Registers a state object, keyed by its type. One per type."""
        self._states[type(state)] = state
        return self

    def state(self, cls: Type[T]) -> T:
        """Returns the managed state of the given type, raising KeyError if absent."""
        try:
            return self._states[cls]
        except KeyError:
            raise KeyError(f"No state of type '{cls.__name__}' is managed by this shell.") from None

    def try_state(self, cls: Type[T]) -> Optional[T]:
        """Returns the managed state of the given type, or None."""
        return self._states.get(cls)

    #* --- Hooks ---
    def setup(self, hook: SetupHook) -> "DesktopShell":
        self._setup_hooks.append(hook)
        return self

    def on_event(self, hook: EventHook) -> "DesktopShell":
        self._event_hooks.append(hook)
        return self

    def resource_dir(self) -> Path:
        """
        The directory bundled resources live in.

        :raises ConfigurationError: If it cannot be determined.
        """
        return detect_resource_dir()

    def _emit(self, event: RunEvent) -> None:
        log.debug(f"Dispatching run event: {event.value}")
        for hook in self._event_hooks:
            try:
                hook(self, event)
            except Exception as e:
                log.error(f"Event handler {hook!r} failed on '{event.value}': {e}", exc_info=True)

    #* --- Run Loop ---
    def request_exit(self, code: int = 0) -> None:
        """Asks the run loop to exit. Safe to call from any thread."""
        self.exit_code = code
        self._exit_requested.set()

    def _handle_signal(self, signum, frame) -> None:
        log.info(f"Received signal {signal.Signals(signum).name}. Exiting.")
        self.request_exit(0)

    def _install_signal_handlers(self) -> Dict[int, Any]:
        if threading.current_thread() is not threading.main_thread():
            log.debug("Not on the main thread. Signal handlers not installed.")
            return {}
        previous = {}
        for signum in (signal.SIGINT, signal.SIGTERM):
            previous[signum] = signal.signal(signum, self._handle_signal)
        return previous

    def run(self, install_signal_handlers: bool = True) -> int:
        """
        Runs setup hooks, then blocks until an exit is requested.

        Event hooks see READY after setup, then EXIT_REQUESTED and EXIT when
        the loop ends. A failing setup hook skips straight to EXIT.

        :param install_signal_handlers: Route SIGINT/SIGTERM to `request_exit`.
        :return int: The exit code.
        """
        previous = self._install_signal_handlers() if install_signal_handlers else {}
        try:
            try:
                for hook in self._setup_hooks:
                    hook(self)
            except Exception as e:
                log.critical(f"Application setup failed: {e}", exc_info=True)
                self.exit_code = 1
                self._emit(RunEvent.EXIT)
                return self.exit_code

            self._emit(RunEvent.READY)
            try:
                while not self._exit_requested.wait(timeout=0.5):
                    pass
            except KeyboardInterrupt:
                log.info("Interrupted by user.")

            self._emit(RunEvent.EXIT_REQUESTED)
            self._emit(RunEvent.EXIT)
            return self.exit_code
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)

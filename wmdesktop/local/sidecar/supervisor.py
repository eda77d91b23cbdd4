import psutil
import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from wmdesktop.local.config import effective_settings as config
from wmdesktop.local.sidecar import process_utils
from .errors import ConfigurationError, LockError, MissingEntrypointError
from .paths import ResolvedPaths, resolve_paths

if TYPE_CHECKING:
    from wmdesktop.shell import DesktopShell

log = logging.getLogger(__name__)


class LocalApiSupervisor:
    """
    Owns the single local API sidecar process of the desktop shell.

    One instance is created at startup and registered on the shell, which
    hands it to the lifecycle hooks. The child handle lives in one optional
    slot; the lock makes check-then-spawn in `start` and take-then-kill in
    `stop` atomic, so there is never more than one tracked process.
    """

    def __init__(self, lock_timeout: Optional[float] = None) -> None:
        self._lock = threading.Lock()
        self._lock_timeout = config.LOCK_TIMEOUT if lock_timeout is None else lock_timeout
        self._child: Optional[psutil.Popen] = None

    def _acquire(self) -> bool:
        return self._lock.acquire(timeout=self._lock_timeout)

    def resolve(self, app: "DesktopShell") -> ResolvedPaths:
        """
        Resolves the sidecar paths for the running host.

        :param app: The host shell providing build mode and base directories.
        :return ResolvedPaths: The entrypoint and resource root.
        """
        resource_dir: Optional[Path]
        try:
            resource_dir = app.resource_dir()
        except ConfigurationError as e:
            log.debug(f"Resource directory unavailable ({e}). Using '.' instead.")
            resource_dir = None
        return resolve_paths(app.build_mode, app.source_root, resource_dir)

    def start(self, app: "DesktopShell") -> None:
        """
        Starts the sidecar unless one is already tracked.

        :param app: The host shell the sidecar belongs to.
        :raises LockError: If the state lock cannot be acquired.
        :raises MissingEntrypointError: If the sidecar script does not exist or cannot be checked.
        :raises SpawnError: If the process cannot be created.
        """
        if not self._acquire():
            raise LockError()
        try:
            if self._child is not None:
                log.debug(f"Local API already running (PID {self._child.pid}). Nothing to start.")
                return

            paths = self.resolve(app)
            try:
                found = paths.entrypoint.exists()
            except OSError as e:
                # Before Python 3.12, exists() raises for errors other than a missing path.
                raise MissingEntrypointError(paths.entrypoint) from e
            if not found:
                raise MissingEntrypointError(paths.entrypoint)

            self._child = process_utils.launch_sidecar(paths)
            log.info(
                f"Local API started with PID {self._child.pid} on port {config.LOCAL_API_PORT} "
                f"(resource root: {paths.resource_root})"
            )
        finally:
            self._lock.release()

    def stop(self) -> None:
        """
        Kills the tracked sidecar, if any. Never raises.

        Calling it again, or before anything was started, does nothing.
        """
        if not self._acquire():
            log.debug("Could not lock local API state during shutdown. Skipping.")
            return
        try:
            child, self._child = self._child, None
            if child is None:
                return
            if process_utils.kill_process(child):
                log.info(f"Local API (PID {child.pid}) stopped.")
            else:
                log.info(f"Local API (PID {child.pid}) released without a confirmed kill.")
        except Exception as e:
            log.debug(f"Ignoring error while stopping local API: {e}")
        finally:
            self._lock.release()

    @property
    def pid(self) -> Optional[int]:
        """PID of the tracked sidecar, or None."""
        if not self._acquire():
            return None
        try:
            return self._child.pid if self._child is not None else None
        finally:
            self._lock.release()

    def is_running(self) -> bool:
        """Returns True if a tracked sidecar exists and has not exited."""
        if not self._acquire():
            return False
        try:
            return self._child is not None and process_utils.is_alive(self._child)
        finally:
            self._lock.release()

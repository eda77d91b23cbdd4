"""
Binds the local API sidecar to the shell's lifecycle.

The sidecar starts once setup is done and is killed on both EXIT_REQUESTED and
EXIT, so it goes away whether the user closes the app or the app exits itself.
"""
import logging
from wmdesktop.shell import DesktopShell, RunEvent
from wmdesktop.local.sidecar import LocalApiError, LocalApiSupervisor

log = logging.getLogger(__name__)


def start_local_api(app: DesktopShell) -> None:
    """Starts the sidecar. Failures are logged and the shell keeps running without it."""
    supervisor = app.try_state(LocalApiSupervisor)
    if supervisor is None:
        log.error("local API sidecar failed to start: no LocalApiSupervisor is managed by the shell")
        return
    try:
        supervisor.start(app)
    except LocalApiError as e:
        log.error(f"local API sidecar failed to start: {e}")


def stop_local_api(app: DesktopShell) -> None:
    supervisor = app.try_state(LocalApiSupervisor)
    if supervisor is None:
        return
    supervisor.stop()


def on_run_event(app: DesktopShell, event: RunEvent) -> None:
    if event in (RunEvent.EXIT_REQUESTED, RunEvent.EXIT):
        stop_local_api(app)


def install(app: DesktopShell) -> DesktopShell:
    """Registers the sidecar hooks on a shell."""
    return app.setup(start_local_api).on_event(on_run_event)

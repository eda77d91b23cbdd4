import os
import sys
import psutil
import logging
import subprocess
from typing import Any, Dict, List

from wmdesktop.local.config import effective_settings as config
from .errors import SpawnError
from .paths import ResolvedPaths

log = logging.getLogger(__name__)


#* --- Process Creation ---
def _get_popen_creation_flags() -> Dict[str, Any]:
    """Returns platform-specific creation flags for subprocess.Popen."""
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NO_WINDOW}
    return {}

def get_sidecar_args(paths: ResolvedPaths) -> List[str]:
    """Returns the command line that runs the sidecar script."""
    return [config.NODE_EXECUTABLE, str(paths.entrypoint)]

def get_sidecar_env(paths: ResolvedPaths) -> Dict[str, str]:
    """
    Builds the environment handed to the sidecar.

    The host's own environment is inherited; on top of it the worker is told
    which port to bind, where its resources live, and that it runs supervised.

    :param paths: The resolved sidecar paths.
    :return dict: The full environment for the child process.
    """
    env = dict(os.environ)
    env["LOCAL_API_PORT"] = str(config.LOCAL_API_PORT)
    env["LOCAL_API_RESOURCE_DIR"] = str(paths.resource_root)
    env["LOCAL_API_MODE"] = config.LOCAL_API_MODE
    return env

def launch_sidecar(paths: ResolvedPaths) -> psutil.Popen:
    """
    Spawns the sidecar process.

    Stdout is discarded and stderr is inherited so worker diagnostics land in
    the host's console.

    :param paths: The resolved sidecar paths.
    :return psutil.Popen: The handle of the new process.
    :raises SpawnError: If the operating system cannot create the process.
    """
    args = get_sidecar_args(paths)
    log.debug(f"Launching local API: {' '.join(args)}")
    try:
        return psutil.Popen(
            args,
            env=get_sidecar_env(paths),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=None,
            **_get_popen_creation_flags()
        )
    except OSError as e:
        raise SpawnError(e) from e

#* --- Process Termination ---
def kill_process(proc: psutil.Popen) -> bool:
    """
    Sends a hard kill to a process, ignoring processes that are already gone.

    :return: True if the kill was delivered or the process had already exited.
    """
    try:
        log.debug(f"Killing local API process (PID {proc.pid}).")
        proc.kill()
        return True
    except psutil.NoSuchProcess:
        log.debug(f"Process {proc.pid} no longer exists, skipping kill.")
        return True
    except (psutil.Error, OSError) as e:
        log.warning(f"Failed to kill local API process {proc.pid}: {e}")
        return False

def is_alive(proc: psutil.Popen) -> bool:
    """Returns True while the process runs. A zombie counts as exited."""
    try:
        return proc.is_running() and proc.status() != psutil.STATUS_ZOMBIE
    except psutil.Error:
        return False

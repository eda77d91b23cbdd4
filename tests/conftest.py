import sys
import logging
import textwrap
from pathlib import Path

import psutil
import pytest

from wmdesktop.local import effective_settings as config
from wmdesktop.local.sidecar import BuildMode, LocalApiSupervisor
from wmdesktop.shell import DesktopShell

# Stands in for the Node.js worker: records the environment it was given, then idles.
WORKER_SCRIPT = textwrap.dedent(
    """
    import json, os, time
    from pathlib import Path

    keys = ("LOCAL_API_PORT", "LOCAL_API_RESOURCE_DIR", "LOCAL_API_MODE")
    Path(__file__).with_name("env.json").write_text(json.dumps({k: os.environ.get(k) for k in keys}))
    time.sleep(60)
    """
)


def worker_children(script: Path):
    """Children of the test process that are running the given script."""
    found = []
    for child in psutil.Process().children():
        try:
            if child.status() != psutil.STATUS_ZOMBIE and str(script) in child.cmdline():
                found.append(child)
        except psutil.Error:
            continue
    return found


@pytest.fixture
def python_as_node(monkeypatch):
    """Runs the sidecar script with the current interpreter instead of node."""
    monkeypatch.setattr(config, "NODE_EXECUTABLE", sys.executable)


@pytest.fixture
def source_root(tmp_path) -> Path:
    return tmp_path / "app"


@pytest.fixture
def sidecar_script(source_root) -> Path:
    script = source_root / config.SIDECAR_SCRIPT_SUBPATH
    script.parent.mkdir(parents=True)
    script.write_text(WORKER_SCRIPT)
    return script


@pytest.fixture
def shell(source_root) -> DesktopShell:
    return DesktopShell(build_mode=BuildMode.DEVELOPMENT, source_root=source_root)


@pytest.fixture
def supervisor():
    sup = LocalApiSupervisor()
    yield sup
    pid = sup.pid
    sup.stop()
    if pid is not None:
        try:
            psutil.Process(pid).wait(timeout=10)
        except psutil.Error:
            pass


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)

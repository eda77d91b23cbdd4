import sys
import logging
import setproctitle

# Basic console logger for messages BEFORE full setup is complete.
# This logger will be replaced by the full setup later.
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)-8s - [desktop] - %(message)s',
    stream=sys.stdout
)
log = logging.getLogger("desktop")

from wmdesktop.local import effective_settings as config
from wmdesktop.local import lifecycle
from wmdesktop.local.sidecar import LocalApiSupervisor
from wmdesktop.log.setup import setup_logging
from wmdesktop.shell import DesktopShell


def build_shell() -> DesktopShell:
    """Creates the shell with the sidecar supervisor registered and its hooks bound."""
    shell = DesktopShell()
    shell.manage(LocalApiSupervisor())
    return lifecycle.install(shell)


def main() -> None:
    """The main entry point for the desktop shell."""
    setproctitle.setproctitle(config.PROCESS_TITLE)

    args = sys.argv[1:]
    console_level = logging.DEBUG if "--verbose" in args else logging.INFO
    setup_logging(console_level)
    log.debug(f"Effective settings: {config.as_dict()}")

    shell = build_shell()
    log.info(f"{config.APP_NAME} starting ({shell.build_mode.value} build).")
    exit_code = shell.run()
    log.info(f"{config.APP_NAME} exited with code {exit_code}.")
    sys.exit(exit_code)

if __name__ == "__main__":
    main()

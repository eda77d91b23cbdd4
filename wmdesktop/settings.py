"""
This module contains the configuration defaults for the World Monitor desktop shell.
It defines paths, local API sidecar settings and logging options.
Values here are the baseline that `wmdesktop.local.config` merges overrides into.
"""

import os
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

#* --- Core Paths ---
BASE_DIR = pathlib.Path(__file__).resolve().parent.parent  # Project Root
# The directory the sidecar script ships under in a development checkout.
SOURCE_ROOT = BASE_DIR
LOGS_DIR = BASE_DIR / "logs"
OVERRIDES_JSON_PATH = BASE_DIR / "overrides.json"

#* --- App Settings ---
APP_NAME = "World Monitor"
PROCESS_TITLE = "WorldMonitor - Desktop Shell"

#* --- Build Mode ---
# 'development' or 'packaged'. Left unset, a frozen interpreter means packaged.
BUILD_MODE = os.getenv("WM_BUILD_MODE") or None
# Explicit runtime resource directory, mostly useful for packaged smoke tests.
RESOURCE_DIR = os.getenv("WM_RESOURCE_DIR") or None

#* --- Local API Sidecar ---
SIDECAR_SCRIPT_SUBPATH = pathlib.Path("sidecar") / "local-api-server.mjs"
LOCAL_API_PORT = int(os.getenv("LOCAL_API_PORT", "46123"))
# The worker checks this marker to tell supervised runs from standalone ones.
LOCAL_API_MODE = "tauri-sidecar"
NODE_EXECUTABLE = os.getenv("NODE_EXECUTABLE", "node")
LOCK_TIMEOUT = 5.0  # seconds

#* --- Logging ---
LOG_FILE_ENABLED = os.getenv("WM_LOG_FILE", "true").lower() in ("true", "1", "t", "yes", "y")
LOG_FILE_PATH = LOGS_DIR / "desktop.log"
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3

#* --- Runtime Overrides ---
# Only these keys may be changed through overrides.json.
MODIFIABLE_SETTINGS = {
    "LOCAL_API_PORT",
    "NODE_EXECUTABLE",
    "LOG_FILE_ENABLED",
}

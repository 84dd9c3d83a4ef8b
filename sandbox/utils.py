import subprocess
import os
import logging
import colorlog
from typing import List

# -------------------------
# Centralized Logging
# -------------------------
logger = logging.getLogger("lintbox")
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

handler = logging.StreamHandler()
handler.setFormatter(colorlog.ColoredFormatter(
    "%(log_color)s[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
    reset=True,
    log_colors={
        'DEBUG':    'cyan',
        'INFO':     'green',
        'WARNING':  'yellow',
        'ERROR':    'red',
        'CRITICAL': 'red,bg_white',
    },
    secondary_log_colors={},
    style='%'
))

# Prevent duplicate handlers if re-imported
if not logger.handlers:
    logger.addHandler(handler)


# -------------------------
# Helper Functions
# -------------------------

def get_logger(name: str):
    """Returns a child logger for a specific component."""
    return logger.getChild(name)

def set_log_level(level: str) -> None:
    logger.setLevel(level.upper())

def run_subprocess(cmd: List[str]) -> subprocess.CompletedProcess:
    """
    Runs a subprocess without shell=True and captures its output.
    FileNotFoundError propagates when the binary itself is missing.
    """
    tool_name = os.path.basename(cmd[0])
    log = get_logger(f"subprocess.{tool_name}")

    log.debug(f"Exec: {' '.join(cmd)}")

    proc = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        check=False
    )

    if proc.returncode != 0:
        log.warning(f"{tool_name} exited with code {proc.returncode}")

    return proc

# app/utils/system_utils.py
import os
import subprocess
import sys
from pathlib import Path
from send2trash import send2trash
from app.utils.logger_utils import logger
from app.core.signals import global_signals


class SystemUtils:
    """OS-level helpers: file explorer and recycle bin."""

    @staticmethod
    def open_path_in_explorer(path: Path):
        """Opens `path` (usually the game folder) in the platform's file manager."""
        if not path or not path.exists():
            logger.error(f"Cannot open missing path: {path}")
            global_signals.toast_requested.emit(f"Folder not found: {path}", "error")
            return

        logger.info(f"Opening in file explorer: {path}")
        try:
            if sys.platform == "win32":
                os.startfile(path)
            else:
                opener = "open" if sys.platform == "darwin" else "xdg-open"
                subprocess.Popen([opener, str(path)])
        except OSError as e:
            logger.error(f"File explorer could not open '{path}': {e}", exc_info=True)
            global_signals.toast_requested.emit(f"Could not open '{path}'.", "error")

    @staticmethod
    def move_to_recycle_bin(path: Path) -> bool:
        """Sends a file to the recycle bin. False if it is missing or the move failed."""
        if not path.exists():
            logger.debug(f"Nothing to recycle at {path}")
            return False
        try:
            send2trash(str(path))
        except OSError as e:
            logger.error(f"Could not recycle {path}: {e}")
            return False
        logger.info(f"Moved {path.name} to the recycle bin.")
        return True

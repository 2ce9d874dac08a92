# app/services/game_service.py
from pathlib import Path
from dataclasses import dataclass, field

from app.core.constants import OPTIONS_FILE_NAME, SAVES_DIR_NAME, SESSION_LOCK_NAME
from app.utils.logger_utils import logger


@dataclass(frozen=True)
class GameDirInfo:
    """A structured result for the game directory detection."""

    is_valid: bool
    game_dir: Path
    options_path: Path
    worlds: list[str] = field(default_factory=list)


class GameService:
    """Handles game-directory logic: locating the options file and the worlds."""

    # Launchers nest the game directory in different places
    GAME_SUBFOLDER_PRIORITY = [".minecraft", "minecraft", "game"]

    def _find_actual_game_dir(self, path: Path) -> Path:
        """Returns the folder that holds the options file, trying known subfolders first."""
        if (path / OPTIONS_FILE_NAME).is_file() or (path / SAVES_DIR_NAME).is_dir():
            return path

        for subfolder in self.GAME_SUBFOLDER_PRIORITY:
            potential_path = path / subfolder
            if (potential_path / OPTIONS_FILE_NAME).is_file():
                logger.debug(f"Found game directory for '{path.name}' at: {potential_path}")
                return potential_path

        logger.debug(f"No known game subfolder found under '{path}'. Using it as is.")
        return path

    def inspect_game_dir(self, path: Path) -> GameDirInfo:
        """Detects the options file and the worlds of a game directory."""
        if not path.is_dir():
            logger.warning(f"Provided path is not a directory: {path}")
            return GameDirInfo(is_valid=False, game_dir=path, options_path=path / OPTIONS_FILE_NAME)

        game_dir = self._find_actual_game_dir(path)
        options_path = game_dir / OPTIONS_FILE_NAME
        worlds = self.list_worlds(game_dir)
        is_valid = options_path.is_file() or bool(worlds)

        logger.info(
            f"Inspected game directory '{game_dir}': options file {'found' if options_path.is_file() else 'missing'}, "
            f"{len(worlds)} worlds."
        )
        return GameDirInfo(is_valid=is_valid, game_dir=game_dir, options_path=options_path, worlds=worlds)

    def list_worlds(self, game_dir: Path) -> list[str]:
        """Folder names of every world in the saves directory, sorted case-insensitively."""
        saves_dir = game_dir / SAVES_DIR_NAME
        if not saves_dir.is_dir():
            return []

        worlds = []
        for entry in saves_dir.iterdir():
            # A world folder always carries its level.dat or session lock
            if entry.is_dir() and ((entry / "level.dat").is_file() or (entry / SESSION_LOCK_NAME).is_file()):
                worlds.append(entry.name)
        return sorted(worlds, key=str.lower)

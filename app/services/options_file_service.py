# app/services/options_file_service.py
from enum import Enum
from pathlib import Path

from app.models.game_options_model import (
    AmbientOcclusion,
    CloudRenderMode,
    GameOptions,
    SimpleOption,
)
from app.utils.logger_utils import logger


class OptionsWriteError(IOError):
    pass


class OptionsFileService:
    """
    Reads and writes the game's options file.

    The file holds one `key:value` pair per line; the first colon splits key
    from value. Only the keys modelled by `GameOptions` are parsed, every other
    line is written back unchanged and in place.
    """

    def load(self, options_path: Path) -> GameOptions:
        """
        Loads the options file into a live `GameOptions` bound to this service.
        A missing file yields the game's defaults; it is created on the first write.
        """
        options = GameOptions(writer=lambda opts: self.save(opts, options_path))

        if not options_path.is_file():
            logger.warning(f"Options file not found at '{options_path}'. Using game defaults.")
            return options

        try:
            with open(options_path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (IOError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read options file '{options_path}': {e}. Using game defaults.")
            return options

        parsed = 0
        for line_no, line in enumerate(lines, 1):
            key, sep, raw_value = line.partition(":")
            if not sep:
                continue
            option = options.by_key(key.strip())
            if option is None:
                continue
            try:
                option.set_value(self._parse_value(option, raw_value.strip()))
                parsed += 1
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                # The line is kept verbatim and the option stays at its default
                logger.warning(
                    f"Invalid value for '{option.key}' on line {line_no} of '{options_path.name}': {e}"
                )

        options.source_lines = lines
        logger.info(f"Loaded {parsed} known options from '{options_path}'.")
        return options

    def save(self, options: GameOptions, options_path: Path):
        """Writes every modelled option back, preserving unknown lines and line order."""
        logger.debug(f"Writing options to {options_path}...")

        pending = {o.key: o for o in options.all_options()}
        new_lines = []
        for line in options.source_lines:
            key, sep, _ = line.partition(":")
            option = pending.pop(key.strip(), None) if sep else None
            if option is None:
                new_lines.append(line)
            else:
                new_lines.append(f"{option.key}:{self._format_value(option)}")

        # Options the file didn't have yet
        for option in pending.values():
            new_lines.append(f"{option.key}:{self._format_value(option)}")

        try:
            options_path.parent.mkdir(parents=True, exist_ok=True)
            with open(options_path, "w", encoding="utf-8") as f:
                f.write("\n".join(new_lines) + "\n")
        except IOError as e:
            logger.error(f"IOError while writing options file: {e}", exc_info=True)
            raise OptionsWriteError(f"Failed to write options file: {e}") from e

        options.source_lines = new_lines
        logger.info(f"Options written to '{options_path}'.")

    # --- Value Codec ---

    @staticmethod
    def _parse_value(option: SimpleOption, text: str):
        text = text.strip('"')
        value_type = option.value_type

        if value_type is AmbientOcclusion:
            # Newer game versions store a boolean, older ones the level
            if text.lower() in ("true", "false"):
                return AmbientOcclusion.MAX if text.lower() == "true" else AmbientOcclusion.OFF
            return AmbientOcclusion(int(text))
        if value_type is CloudRenderMode:
            return CloudRenderMode(text.lower())
        if issubclass(value_type, Enum):
            return value_type(int(text))
        if value_type is bool:
            if text.lower() not in ("true", "false"):
                raise ValueError(f"'{text}' is not a boolean")
            return text.lower() == "true"
        if value_type is int:
            return int(float(text))
        if value_type is float:
            return float(text)
        return text

    @staticmethod
    def _format_value(option: SimpleOption) -> str:
        value = option.get_value()
        if isinstance(value, AmbientOcclusion):
            return "false" if value is AmbientOcclusion.OFF else "true"
        if isinstance(value, CloudRenderMode):
            return f'"{value.value}"'
        if isinstance(value, Enum):
            return str(value.value)
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

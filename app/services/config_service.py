# app/services/config_service.py
import json
from pathlib import Path

from app.core.constants import CONFIG_BACKUP_SUFFIX, DEFAULT_CYCLE_KEY
from app.core.signals import global_signals
from app.models.config_model import UserConfig
from app.models.preset_model import Preset, Profile, builtin_presets
from app.utils.logger_utils import logger
from app.utils.system_utils import SystemUtils


class ConfigSaveError(IOError):
    pass


class ConfigService:
    """Manages all read/write operations for the presets.json file."""

    def __init__(self, config_path: Path):
        # --- Service Setup ---
        self.config_path = config_path
        self._cached: UserConfig | None = None

    def default_config(self) -> UserConfig:
        """A fresh configuration holding the built-in presets."""
        presets = builtin_presets()
        return UserConfig(presets=presets, default_preset_id=presets[0].id)

    def load_or_create(self) -> UserConfig:
        """
        Returns the cached configuration, loading it on first use. A missing
        config file is created with the built-in presets.
        """
        if self._cached is not None:
            return self._cached

        if not self.config_path.exists():
            logger.info(f"No config at '{self.config_path}'. Creating one with built-in presets.")
            config = self.default_config()
            try:
                self.save_config(config)
            except ConfigSaveError:
                logger.warning("Running on in-memory built-in presets until the config can be saved.")
            return config

        self._cached = self.load_config()
        return self._cached

    def load_config(self) -> UserConfig:
        """
        Loads the entire configuration from presets.json.
        Handles FileNotFoundError and parsing errors gracefully by returning a default config.
        """
        if not self.config_path.exists():
            logger.warning(
                f"Config file not found at '{self.config_path}'. Returning default config."
            )
            return self.default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError(f"Top-level JSON value must be an object, got {type(data).__name__}")

            # --- Parse [presets] list ---
            presets: list[Preset] = []
            seen_ids: set[str] = set()
            for preset_dict in data.get("presets", []):
                try:
                    preset_id = str(preset_dict["id"])
                    if preset_id in seen_ids:
                        logger.warning(f"Duplicate preset id '{preset_id}' in config. Skipping.")
                        continue
                    profile_data = preset_dict.get("profile") or {}
                    if not isinstance(profile_data, dict):
                        raise TypeError(f"profile must be an object, got {profile_data!r}")
                    presets.append(
                        Preset(
                            id=preset_id,
                            name=str(preset_dict.get("name") or preset_id),
                            profile=Profile.from_dict(profile_data),
                        )
                    )
                    seen_ids.add(preset_id)
                except (TypeError, KeyError) as e:
                    logger.error(f"Malformed preset entry in config: {preset_dict}. Error: {e}. Skipping.")

            # --- Parse settings ---
            default_preset_id = data.get("default_preset_id")
            if default_preset_id is not None and default_preset_id not in seen_ids:
                logger.warning(
                    f"Default preset '{default_preset_id}' does not exist. Falling back to the first preset."
                )
                default_preset_id = None
            if default_preset_id is None and presets:
                default_preset_id = presets[0].id

            cycle_key = data.get("cycle_key") or DEFAULT_CYCLE_KEY
            game_dir = data.get("game_dir")

            logger.info(f"Successfully loaded {len(presets)} presets from config.")
            return UserConfig(
                presets=presets,
                default_preset_id=default_preset_id,
                cycle_key=str(cycle_key),
                game_dir=str(game_dir) if game_dir else None,
            )

        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"Failed to parse {self.config_path.name}: {e}. Returning default config.")
            return self.default_config()
        except Exception as e:
            logger.critical(f"An unexpected error occurred while loading config: {e}", exc_info=True)
            return self.default_config()

    def save_config(self, config: UserConfig):
        """
        Saves the entire UserConfig object to the presets.json file.
        The object becomes the cached configuration even if the write fails.
        """
        logger.info(f"Saving configuration to {self.config_path}...")
        self._cached = config

        try:
            config_data = {
                "default_preset_id": config.default_preset_id,
                "cycle_key": config.cycle_key,
                "game_dir": config.game_dir,
                "presets": [preset.to_dict() for preset in config.presets],
            }

            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(config_data, f, indent=4)

            logger.info(f"Configuration saved successfully to {self.config_path.name}.")

        except IOError as e:
            logger.error(f"IOError while saving config: {e}", exc_info=True)
            raise ConfigSaveError(f"Failed to write to config file: {e}") from e
        except TypeError as e:
            logger.error(f"TypeError during JSON serialization: {e}", exc_info=True)
            raise ConfigSaveError(f"A data type could not be saved to JSON: {e}") from e

    def reset_to_defaults(self) -> UserConfig:
        """
        Replaces the configuration with the built-in presets. The old file is
        moved to the recycle bin so the user's presets stay recoverable.
        """
        if self.config_path.exists():
            backup_path = self.config_path.with_name(self.config_path.name + CONFIG_BACKUP_SUFFIX)
            try:
                backup_path.write_bytes(self.config_path.read_bytes())
                if not SystemUtils.move_to_recycle_bin(backup_path):
                    logger.warning(f"Could not recycle config backup. It stays at '{backup_path}'.")
            except IOError as e:
                logger.error(f"Failed to back up config before reset: {e}")
                global_signals.toast_requested.emit(
                    "Could not back up your presets before resetting.", "warning"
                )

        config = self.default_config()
        # Keep the non-preset settings the user chose
        if self._cached is not None:
            config = UserConfig(
                presets=config.presets,
                default_preset_id=config.default_preset_id,
                cycle_key=self._cached.cycle_key,
                game_dir=self._cached.game_dir,
            )
        self.save_config(config)
        logger.info("Configuration reset to built-in presets.")
        return config

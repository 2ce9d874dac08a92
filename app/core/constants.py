# app/core/constants.py

# --- Application Info ---
APP_NAME: str = "Preset Cycler"
ORG_NAME: str = "preset-cycler"
APP_VERSION: str = "1.0.2"
LOGGER_NAME: str = "PresetCycler_App"
LOG_FILE_PREFIX: str = "LOG_PRESETS"
# 5 MB per file, 10 rotated files
LOG_MAX_BYTES: int = 5 * 1024 * 1024
LOG_BACKUP_COUNT: int = 10

# --- File & Directory Names ---
CONFIG_FILE_NAME: str = "presets.json"
LOG_DIR_NAME: str = "logs"
OPTIONS_FILE_NAME: str = "options.txt"
SAVES_DIR_NAME: str = "saves"
SESSION_LOCK_NAME: str = "session.lock"
CONFIG_BACKUP_SUFFIX: str = ".bak"

# --- Key Binding ---
CYCLE_KEY_ID: str = "key.presets.cycle"
CYCLE_KEY_CATEGORY: str = "Preset Cycler"
DEFAULT_CYCLE_KEY: str = "F9"

# --- Host Loop ---
# 20 ticks per second, like the game's own client tick
TICK_INTERVAL_MS: int = 50
FRAME_INTERVAL_MS: int = 16

# --- HUD Toast ---
TOAST_TTL_MS: int = 4500
TOAST_PADDING_X: int = 8
TOAST_PADDING_Y: int = 5
TOAST_TOP_MARGIN: int = 8
TOAST_BACKGROUND_ARGB: int = 0x99000000
TOAST_TEXT_ARGB: int = 0xFFFFFFFF

# --- User-facing Messages ---
PRESET_TOAST_PREFIX: str = "Preset: "
DEFERRED_NOTICE: str = "vsync/mipmap queued until you leave the world"
DEFERRED_APPLIED_NOTICE: str = "Queued preset settings applied"

# --- Option Ranges (min, max) ---
RENDER_DISTANCE_RANGE: tuple[int, int] = (2, 32)
# The game crashes with a simulation distance below 5
SIMULATION_DISTANCE_RANGE: tuple[int, int] = (5, 32)
ENTITY_DISTANCE_SCALING_RANGE: tuple[float, float] = (0.5, 5.0)
MIPMAP_LEVELS_RANGE: tuple[int, int] = (0, 4)
BIOME_BLEND_RADIUS_RANGE: tuple[int, int] = (0, 7)
DISTORTION_EFFECTS_SCALE_RANGE: tuple[float, float] = (0.0, 1.0)
# 260 is shown as "Unlimited" by the game
MAX_FPS_RANGE: tuple[int, int] = (5, 260)
UNLIMITED_FPS: int = 260

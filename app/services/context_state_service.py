# app/services/context_state_service.py
from app.utils.logger_utils import logger


class ContextStateStore:
    """
    Remembers the last preset applied in each play context (a world or
    server identifier). Lives for the process only and is never written to disk.
    """

    def __init__(self):
        self._last_preset_by_context: dict[str, str] = {}

    def get(self, context_key: str) -> str | None:
        return self._last_preset_by_context.get(context_key)

    def put(self, context_key: str, preset_id: str):
        self._last_preset_by_context[context_key] = preset_id
        logger.debug(f"Context '{context_key}' -> preset '{preset_id}'")

    def clear(self):
        self._last_preset_by_context.clear()

    def snapshot(self) -> dict[str, str]:
        """A copy of the current mapping."""
        return dict(self._last_preset_by_context)

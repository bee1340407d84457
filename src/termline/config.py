"""Editor configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "TERMLINE_"


@dataclass
class EditorConfig:
    """Settings for a :class:`termline.editor.LineEditor` session."""

    prompt: str = "> "
    high_water_mark: int = 16
    cancel_message: str = "No option selected"
    write_log: str = ""

    @classmethod
    def from_env(cls) -> EditorConfig:
        """Build a config from ``TERMLINE_*`` environment variables."""
        config = cls()
        prompt = os.environ.get(f"{ENV_PREFIX}PROMPT")
        if prompt is not None:
            config.prompt = prompt
        hwm = os.environ.get(f"{ENV_PREFIX}HIGH_WATER_MARK")
        if hwm:
            try:
                config.high_water_mark = int(hwm)
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}HIGH_WATER_MARK must be an integer, got {hwm!r}"
                ) from None
        cancel_message = os.environ.get(f"{ENV_PREFIX}CANCEL_MESSAGE")
        if cancel_message is not None:
            config.cancel_message = cancel_message
        config.write_log = os.environ.get(f"{ENV_PREFIX}WRITE_LOG", config.write_log)
        return config

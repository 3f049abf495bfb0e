import logging
from typing import Any, Dict

import yaml

from .models import EmulatorConfig, DEFAULT_KEYMAP

logger = logging.getLogger(__name__)

KNOWN_KEYS = {"cycles_per_frame", "frames_per_second", "scale", "rom", "keymap"}


class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        config = self.parse(data or {})
        logger.info("Loaded configuration from %s", path)
        return config

    def parse(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a mapping.")
        unknown = set(data) - KNOWN_KEYS
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        defaults = EmulatorConfig()
        cycles = self._parse_positive(data, "cycles_per_frame", defaults.cycles_per_frame)
        fps = self._parse_positive(data, "frames_per_second", defaults.frames_per_second)
        scale = self._parse_positive(data, "scale", defaults.scale)

        rom = data.get("rom")
        if rom is not None and not isinstance(rom, str):
            raise ValueError(f"Invalid rom path: {rom}")

        keymap = dict(DEFAULT_KEYMAP)
        if "keymap" in data:
            keymap = self._parse_keymap(data["keymap"])

        return EmulatorConfig(
            cycles_per_frame=cycles,
            frames_per_second=fps,
            scale=scale,
            rom=rom,
            keymap=keymap,
        )

    def _parse_keymap(self, raw: Any) -> Dict[str, int]:
        if not isinstance(raw, dict):
            raise ValueError("keymap must be a mapping of key names to key codes.")
        keymap = {}
        for name, code in raw.items():
            value = self._parse_int(code)
            if not 0 <= value <= 0xF:
                raise ValueError(f"Key code for '{name}' out of range (0x0-0xF): {code}")
            keymap[str(name).upper()] = value
        return keymap

    def _parse_positive(self, data: Dict[str, Any], key: str, default: int) -> int:
        value = self._parse_int(data.get(key, default))
        if value <= 0:
            raise ValueError(f"{key} must be a positive integer: {value}")
        return value

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")

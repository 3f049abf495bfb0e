import logging
from typing import Optional

from chipi8.core.cpu import RandomSource
from chipi8.emulator import Emulator
from .models import EmulatorConfig

logger = logging.getLogger(__name__)


# @intent:responsibility 設定（Config）に基づいてEmulatorを生成し、指定があればROMをロードします。
class SystemBuilder:
    def build(self, config: EmulatorConfig, random_source: Optional[RandomSource] = None) -> Emulator:
        emulator = Emulator(cycles_per_frame=config.cycles_per_frame, random_source=random_source)
        if config.rom:
            emulator.load_rom(config.rom)
        else:
            logger.info("No ROM configured; waiting for a ROM to be loaded")
        return emulator

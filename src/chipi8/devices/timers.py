# src/chipi8/devices/timers.py
"""
ディレイタイマとサウンドタイマ。

内部クロックは持たず、呼び出し側が任意のバッチ単位で tick() を呼び出す。
"""


# @intent:responsibility 0で飽和する8bitダウンカウンタの組を保持します。
class Timers:
    def __init__(self):
        self.delay_timer: int = 0
        self.sound_timer: int = 0

    def reset(self) -> None:
        self.delay_timer = 0
        self.sound_timer = 0

    def get_delay_timer(self) -> int:
        return self.delay_timer

    def get_sound_timer(self) -> int:
        return self.sound_timer

    def set_delay_timer(self, value: int) -> None:
        self.delay_timer = value & 0xFF

    def set_sound_timer(self, value: int) -> None:
        self.sound_timer = value & 0xFF

    # @intent:responsibility 非ゼロのカウンタをそれぞれ1だけ減らします。
    def tick(self) -> None:
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    # @intent:responsibility 呼び出し側へ「トーンを鳴らすべきか」を通知します。
    @property
    def is_sound_active(self) -> bool:
        return self.sound_timer > 0

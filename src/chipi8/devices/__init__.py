"""
CHIP-8 周辺デバイスパッケージ。
"""
from .stack import CallStack
from .timers import Timers
from .keypad import Keypad, Keycode
from .display import Display, DisplayState

# src/chipi8/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
コマンドライン引数を解釈し、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chipi8.config.loader import ConfigLoader
from chipi8.config.models import EmulatorConfig
from .main_window import MainWindow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chipi8", description="CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="ROM file to load on start-up")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (default: WARNING)")
    return parser


# @intent:responsibility 設定ファイルとコマンドライン引数から実行時設定を組み立てます。
# @intent:note コマンドラインのROM指定は設定ファイルの rom より優先する。
def load_config(args: argparse.Namespace) -> EmulatorConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.rom:
        config.rom = args.rom
    return config


# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args)

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config)
    main_win.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()

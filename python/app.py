#!/usr/bin/env python3
"""Tkinter entry point for the roulette wheel."""

from __future__ import annotations

import logging
import sys
import tkinter as tk
from pathlib import Path

from roulette_window import RouletteWindow
from settings import DEFAULT_CONFIG_PATH, RouletteConfig, load_settings


def open_window(config: RouletteConfig) -> None:
    root = tk.Tk()
    root.withdraw()
    RouletteWindow(root, config, on_close=root.destroy)
    root.mainloop()


def main() -> None:
    config_path = DEFAULT_CONFIG_PATH
    if len(sys.argv) > 1:
        config_path = Path(sys.argv[1])
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    open_window(load_settings(config_path))


if __name__ == "__main__":
    main()

"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and magic numbers (panel footprint,
   wattage, animation rate) scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (textures, models) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SOLAR_TEXTURE_PATH (str): Absolute path to the panel surface texture.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/solargrid/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# --- Paths ---
ASSETS_PATH: str = get_resource_path("assets")
SOLAR_TEXTURE_PATH: str = os.path.join(ASSETS_PATH, "models", "solar-panel.jpg")

# --- Panel footprint (not user-tunable) ---
PANEL_WIDTH: float = 1.6
PANEL_DEPTH: float = 1.0
PANEL_THICKNESS: float = 0.1

# --- Layout defaults ---
DEFAULT_ROWS: int = 3
DEFAULT_COLS: int = 4
DEFAULT_SPACING: float = 0.2
DEFAULT_VERTICAL_OFFSET: float = 0.2

# --- Energy estimate defaults ---
PANEL_WATTAGE: float = 400.0
PANEL_EFFICIENCY: float = 0.2
SUNLIGHT_HOURS: float = 5.0

# --- Capture animation ---
CAPTURE_RATE: float = 0.5  # 1/s
GROUND_LEVEL: float = 0.0
SETTLE_TOLERANCE: float = 1e-3
FRAME_INTERVAL_MS: int = 16

# --- Slider ranges (min, max, step) ---
ROWS_RANGE: tuple[int, int] = (1, 8)
COLS_RANGE: tuple[int, int] = (1, 8)
HEIGHT_RANGE: tuple[float, float, float] = (0.0, 2.0, 0.1)
HORIZONTAL_RANGE: tuple[float, float, float] = (-5.0, 5.0, 0.1)
SPACING_RANGE: tuple[float, float, float] = (0.0, 1.0, 0.05)

# --- Environment ---
LOG_LEVEL_ENV: str = "SOLARGRID_LOG_LEVEL"

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")

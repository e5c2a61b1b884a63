"""Configuration path constants."""

from pathlib import Path

# 3 levels up from sl_learners/models/config/paths.py -> project root
CONFIG_ROOT = Path(__file__).resolve().parents[3] / "config"
CONFIG_DIR = CONFIG_ROOT / "models"

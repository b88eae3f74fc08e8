# paths.py

from pathlib import Path

# Project root (this file lives in the root directory)
ROOT = Path(__file__).parent

# Subdirectories within the project
DATA_DIR = ROOT / "Data"
PUBLIC_DIR = ROOT / "public"
UPLOAD_DIR = PUBLIC_DIR / "uploads"

# Helpers for resolving files inside each directory
def data_file(filename: str) -> Path:
    return DATA_DIR / filename

"""Configuration management for the Meal Calendar application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Calendar Settings (0 = Monday ... 6 = Sunday, same numbering as the calendar module)
FIRST_WEEKDAY: Final[int] = int(os.getenv('MEALCAL_FIRST_WEEKDAY', '0')) % 7

# Legacy import: remove the legacy key once its records were copied into the store
CLEAR_LEGACY_AFTER_IMPORT: Final[bool] = os.getenv('MEALCAL_CLEAR_LEGACY', 'False').lower() in ('1', 'true', 'yes')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALCAL_DATA_DIR') or (BASE_DIR / 'data')).expanduser()
STORE_FILE: Final[Path] = Path(os.getenv('MEALCAL_STORE_FILE') or (DATA_DIR / 'records.json')).expanduser()
LEGACY_FILE: Final[Path] = Path(os.getenv('MEALCAL_LEGACY_FILE') or (DATA_DIR / 'legacy_defaults.json')).expanduser()

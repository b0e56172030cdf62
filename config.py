"""
Configuration Management
Loads and validates environment variables
"""
import os
import pytz
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Application configuration"""

    # Local key-value store (replaces browser local storage)
    STORE_PATH = os.getenv("STORE_PATH", "shift_planner_store.json")

    # Application Settings
    TIMEZONE = os.getenv("TIMEZONE", "Europe/Copenhagen")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    REFRESH_INTERVAL_SECONDS = int(os.getenv("REFRESH_INTERVAL_SECONDS", 60))
    DISPLAY_DECIMALS = int(os.getenv("DISPLAY_DECIMALS", 2))

    # Shift Schedule Defaults (pre-filled on an empty settings form)
    DEFAULT_SHIFT_START = os.getenv("DEFAULT_SHIFT_START", "09:00")
    DEFAULT_SHIFT_END = os.getenv("DEFAULT_SHIFT_END", "17:00")

    # Persisted record keys
    SETTINGS_KEY = "settings"
    UPDATE_DATA_KEY = "updateData"

    @classmethod
    def validate(cls):
        """Validate configuration values"""
        errors = []

        if cls.TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"unknown TIMEZONE '{cls.TIMEZONE}'")

        if cls.REFRESH_INTERVAL_SECONDS <= 0:
            errors.append("REFRESH_INTERVAL_SECONDS must be positive")

        if cls.DISPLAY_DECIMALS < 0:
            errors.append("DISPLAY_DECIMALS must not be negative")

        if not cls.STORE_PATH:
            errors.append("STORE_PATH must not be empty")

        if errors:
            raise ValueError(f"Invalid configuration: {', '.join(errors)}")

        return True

# Validate on import
Config.validate()

"""
Configuration settings for the schedule import pipeline.
Load configuration from environment variables or a .env file.
"""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


class Settings:
    """Application settings loaded from environment variables."""

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', '')

    # ============================================================================
    # XER Parsing
    # ============================================================================
    XER_ENCODING = os.getenv('XER_ENCODING', 'utf-8')

    # ============================================================================
    # Float Analysis
    # ============================================================================
    HOURS_PER_DAY = float(os.getenv('HOURS_PER_DAY', '8'))
    NEAR_CRITICAL_THRESHOLD_HOURS = float(os.getenv('NEAR_CRITICAL_THRESHOLD_HOURS', '40'))  # 5 work days
    LONG_DURATION_THRESHOLD_HOURS = float(os.getenv('LONG_DURATION_THRESHOLD_HOURS', '160'))  # 20 work days
    FLOAT_MATCH_TOLERANCE_HOURS = float(os.getenv('FLOAT_MATCH_TOLERANCE_HOURS', '8'))

    @classmethod
    def get_log_dir(cls) -> Optional[Path]:
        """Directory for rotating log files, or None when file logging is off."""
        if not cls.LOG_DIR:
            return None
        return Path(cls.LOG_DIR)

    @classmethod
    def validate_required_settings(cls) -> list[str]:
        """
        Validate that numeric settings are usable.
        Returns list of problems found.
        """
        problems = []

        if cls.HOURS_PER_DAY <= 0:
            problems.append('HOURS_PER_DAY must be positive')
        if cls.NEAR_CRITICAL_THRESHOLD_HOURS < 0:
            problems.append('NEAR_CRITICAL_THRESHOLD_HOURS must not be negative')
        if cls.LONG_DURATION_THRESHOLD_HOURS <= 0:
            problems.append('LONG_DURATION_THRESHOLD_HOURS must be positive')

        return problems


# Create settings instance
settings = Settings()

"""Configuration module for the LIDO briefing core."""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _csv_env(name: str, default: str) -> list:
    return [k.strip().upper() for k in os.getenv(name, default).split(',') if k.strip()]


class Config:
    """Application configuration."""

    # Logging level
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Software Version
    VERSION = os.getenv('VERSION', 'v0.0.0')

    # Alternate reference time = destination landing + buffer. This is an
    # approximation of the diversion arrival time, not a computed value.
    ALTN_BUFFER_MINUTES = int(os.getenv('ALTN_BUFFER_MINUTES', '60'))

    # Relevance windows around each reference time (minutes)
    DEP_WINDOW_BEFORE = 120
    DEP_WINDOW_AFTER = 60
    DEST_WINDOW_BEFORE = 60
    DEST_WINDOW_AFTER = 120
    ALTN_WINDOW_BEFORE = 60
    ALTN_WINDOW_AFTER = 180

    # NOTAM bucketing keywords (matched against upper-cased record text)
    ILS_KEYWORDS = _csv_env('ILS_KEYWORDS', 'ILS,LOC,GP,APPROACH,GLIDEPATH,APCH')
    # Alternates only get the approach panel for these
    ALTN_ILS_KEYWORDS = _csv_env('ALTN_ILS_KEYWORDS', 'ILS,APPROACH,APCH')
    RUNWAY_KEYWORDS = _csv_env('RUNWAY_KEYWORDS', 'RWY,RUNWAY')
    SKIP_KEYWORDS = _csv_env('SKIP_KEYWORDS', 'LASER,LGT BEAM,LIGHT BEAM')

    @classmethod
    def validate(cls):
        """Validate configuration."""
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL.upper()), int):
            raise ValueError(f"Unknown LOG_LEVEL: {cls.LOG_LEVEL}")
        if cls.ALTN_BUFFER_MINUTES < 0:
            raise ValueError("ALTN_BUFFER_MINUTES must not be negative")
        windows = (
            cls.DEP_WINDOW_BEFORE, cls.DEP_WINDOW_AFTER,
            cls.DEST_WINDOW_BEFORE, cls.DEST_WINDOW_AFTER,
            cls.ALTN_WINDOW_BEFORE, cls.ALTN_WINDOW_AFTER,
        )
        if any(w < 0 for w in windows):
            raise ValueError("Relevance window offsets must not be negative")
        return True

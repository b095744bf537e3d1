"""
Configuration settings for TriageLens.

Centralized configuration for triage, aggregation and assistant parameters.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Storage
DATABASE_PATH = os.getenv("TRIAGELENS_DB", str(DATA_ROOT / "feedback.db"))

# API Configuration
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")

# LLM Models
TRIAGE_MODEL = os.getenv("TRIAGE_MODEL", "gemini-1.5-flash")
ASSISTANT_MODEL = os.getenv("ASSISTANT_MODEL", TRIAGE_MODEL)

# Temperature settings (0.0 for deterministic)
LLM_TEMPERATURE = 0.0

# Ingestion limits
MAX_SOURCE_CHARS = 100
MAX_TEXT_CHARS = 5000
MAX_QUESTION_CHARS = 1200

# Analysis limits
MAX_THEMES = 6
MAX_THEME_CHARS = 40
MAX_SUMMARY_CHARS = 200
ERROR_EXCERPT_CHARS = 600

# Aggregation
TOP_THEMES = 8
ASSISTANT_WINDOW = 120  # Most recent rows fed into the assistant digest

# Listing
DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 200

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "triagelens.log"

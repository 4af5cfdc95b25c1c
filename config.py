from pathlib import Path

# Base directory (where this file lives)
BASE_DIR = Path(__file__).parent

# Scan data (loaded once at startup)
DATA_DIR = BASE_DIR / "data"
PROFILE_PATH = DATA_DIR / "profile.json"
RECORDS_PATH = DATA_DIR / "records.json"

# Dashboard
APP_TITLE = "Body Scan Tracker"
DASHBOARD_HOST = "0.0.0.0"
DASHBOARD_PORT = 5000

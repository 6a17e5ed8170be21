"""
Runtime configuration for Pathfinder.
Values come from the environment (a local .env file is loaded first).
"""
import os
from dotenv import load_dotenv

load_dotenv()

MODEL = os.environ.get("PATHFINDER_MODEL", "llama-3.3-70b-versatile")

STORE_PATH = os.environ.get("PATHFINDER_STORE_PATH", "pathfinder_store.json")

NOMINATIM_URL = os.environ.get(
    "NOMINATIM_URL", "https://nominatim.openstreetmap.org/reverse"
)

# Seconds between staged job-alert scan messages
JOB_SCAN_INTERVAL = float(os.environ.get("JOB_SCAN_INTERVAL", "0.8"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

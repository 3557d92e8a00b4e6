import os
import json

# Load configuration based on environment
ENVIRONMENT = os.getenv("environment", "stg")
CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "configurations")
CONFIG_FILE = os.path.join(CONFIG_DIR, f"{ENVIRONMENT}_conf.json")

if os.path.exists(CONFIG_FILE):
    with open(CONFIG_FILE, "r") as config_file:
        config = json.load(config_file)
else:
    raise RuntimeError(f"Configuration file {CONFIG_FILE} not found!")

# MongoDB settings
MONGO_URI = os.getenv("MONGO_URI") or config.get("mongo_uri", "mongodb://localhost:27017/")
MONGO_DB_NAME = config.get("mongo_db_name", "test")
SERVER_SELECTION_TIMEOUT_MS = int(config.get("server_selection_timeout_ms", 5000))

# Collection the pruner runs against when none is given on the command line
PRUNE_COLLECTION = os.getenv("PRUNE_COLLECTION") or config.get("prune_collection")

# Logging settings
LOGS_FOLDER = config.get("logs_folder", "logs")
LOG_LEVEL = config.get("log_level", "INFO").upper()

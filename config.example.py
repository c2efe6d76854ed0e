# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACK_APP_NAME": "App display name (default: tasktrack).",
    "TASKTRACK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "TASKTRACK_DATA_DIR": "Local data directory (default: .local/tasktrack).",
    "TASKTRACK_STORAGE": "Storage backend: sqlite | json | memory (default: sqlite).",
    "TASKTRACK_SQLITE_PATH": "SQLite file (default: <data_dir>/tasktrack.sqlite3).",
    "TASKTRACK_JSON_PATH": "JSON document (default: <data_dir>/tasktrack.json).",
    # Demo data
    "TASKTRACK_SEED_DEMO_TASKS": "Load the two demo tasks when there are no tasks yet (true/false, default: true).",
    "TASKTRACK_BOOTSTRAP_DELAY_SECONDS": "Simulated network delay of the demo data source (default: 1.0).",
}

# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKMASTER_APP_NAME": "App display name, also the OpenAPI title (default: taskmaster).",
    "TASKMASTER_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKMASTER_LOG_DIR": "Directory for taskmaster.log (default: <data_dir>).",
    # HTTP server
    "TASKMASTER_HOST": "Bind address (default: 127.0.0.1).",
    "TASKMASTER_PORT": "Bind port (default: 8080).",
    "TASKMASTER_ACCESS_LOG": "Log every request line (true/false, default: false).",
    # Paths (gitignored)
    "TASKMASTER_DATA_DIR": "Local data directory (default: .local/taskmaster).",
    "TASKMASTER_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
}

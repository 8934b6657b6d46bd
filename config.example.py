# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name used in logs (default: todo-sessions).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). Logs always go to stderr.",
    "TODO_LOG_TO_FILE": "Also write DEBUG logs to <data_dir>/todo-sessions.log (true/false).",
    # Connector
    "TODO_CONNECTOR": "mcp (stdio MCP server, default) or console (interactive REPL).",
    "TODO_SERVER_NAME": "MCP server name announced to clients (default: todo-list-server).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for log files (default: .local/todo-sessions).",
}

"""
Todo Manager Server Launcher

Starts the HTTP server for the todo API and front-end.

Usage:
    python start_server.py
    python start_server.py --port 3000
    python start_server.py --host 0.0.0.0 --port 9000 --data-file /var/lib/todos/data.txt
"""

import argparse
import dataclasses
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def main():
    parser = argparse.ArgumentParser(description="Todo Manager HTTP server")
    parser.add_argument("--config", help="Path to config.properties (auto-discovered if omitted)")
    parser.add_argument("--host", help="Host to bind (default: server.host or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Port to bind (default: server.port or 3000)")
    parser.add_argument("--data-file", help="Task data file (default: storage.data_file or data.txt)")
    parser.add_argument("--static-root", help="Directory served for non-API paths (default: static.root or .)")
    args = parser.parse_args()

    try:
        import uvicorn  # noqa: F401
    except ImportError:
        print("Error: uvicorn is required. Install it with:")
        print("  pip install uvicorn[standard]")
        sys.exit(1)

    try:
        import fastapi  # noqa: F401
    except ImportError:
        print("Error: fastapi is required. Install it with:")
        print("  pip install fastapi")
        sys.exit(1)

    from todo_manager.config import ServerSettings
    from todo_manager.utils.exceptions import ConfigurationError
    from todo_manager.utils.logger import setup_logging

    settings = ServerSettings.from_properties(args.config)
    overrides = {
        "host": args.host,
        "port": args.port,
        "data_file": args.data_file,
        "static_root": args.static_root,
    }
    settings = dataclasses.replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    try:
        from ui.server import create_app, start_server
        application = create_app(settings)
    except ConfigurationError as e:
        print(f"Error: {e.message}")
        sys.exit(2)

    start_server(application=application)


if __name__ == "__main__":
    main()

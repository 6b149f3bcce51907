#!/usr/bin/env python3
"""
FinAPI Entry Point

Starts the FastAPI server on the configured host and port (default 3333).
"""

import sys

from finapi.api import run_server
from finapi.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("🏦 Starting FinAPI...")
    print(f"🌐 API available at: http://localhost:{config.api_port}")
    print(f"📚 Documentation at: http://localhost:{config.api_port}/docs")
    print()
    
    try:
        run_server(debug=False)
    except KeyboardInterrupt:
        print("\n👋 Shutting down FinAPI...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)

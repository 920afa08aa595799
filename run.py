#!/usr/bin/env python3
"""
Receipt Points Service
Main execution script - run this file to start the API server
"""

import sys
from pathlib import Path

# Add current directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

import uvicorn

from app.main import create_app
from app.services.config_service import ConfigService


def main():
    """Main entry point for the Receipt Points Service"""
    try:
        config = ConfigService()
        print("Receipt Points Service")
        print("=" * 50)
        print(f"API Documentation: http://localhost:{config.port}/docs")
        print("=" * 50)

        app = create_app(config=config)

        uvicorn.run(
            app,
            host=config.host,
            port=config.port,
            reload=False,
            access_log=True,
            log_level=config.log_level.lower(),
        )

    except Exception as e:
        print(f"Critical error during startup: {e}")
        import traceback
        traceback.print_exc()
        raise


if __name__ == "__main__":
    main()

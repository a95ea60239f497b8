#!/usr/bin/env python3
"""
Run script for the credential service.
This script launches the FastAPI server that carries the auth message patterns.
"""
import uvicorn
import sys
import traceback

from credential_service.config import HOST, PORT, LOG_LEVEL

if __name__ == "__main__":
    try:
        print("Starting credential service...")
        print(f"Send messages to http://{HOST}:{PORT}/messages or ws://{HOST}:{PORT}/ws")

        uvicorn.run(
            "credential_service.main:app",
            host=HOST,
            port=PORT,
            reload=True,
            log_level=LOG_LEVEL.lower()
        )
    except Exception as e:
        print(f"Error starting server: {e}")
        traceback.print_exc()
        sys.exit(1)

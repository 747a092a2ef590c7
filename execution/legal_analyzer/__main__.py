"""
Run the analyzer API with uvicorn.

Usage: python -m execution.legal_analyzer
"""

import os
import logging

import uvicorn
from dotenv import load_dotenv


def main():
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Importing the app validates configuration and fails fast without a key
    from .api import app

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )


if __name__ == "__main__":
    main()

"""Environment bootstrap module.

Importing this module will load environment variables from a .env file
and configure logging so that lower layers don't need to do it themselves.
"""

import logging
import os

from dotenv import load_dotenv as _load_dotenv

# Load environment variables from .env if present
_load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

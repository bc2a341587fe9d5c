import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# Gemini credentials and model
GEMINI_API_KEY: Optional[str] = (
    os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")
)
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# W&B inference tracking (disabled when no key is set)
WANDB_API_KEY: Optional[str] = os.getenv("WANDB_API_KEY")
WANDB_PROJECT: str = os.getenv("WANDB_PROJECT", "revit-family-optimizer")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_IMAGE_MIME_TYPE = "image/png"

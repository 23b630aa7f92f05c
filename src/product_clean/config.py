"""Runtime settings for ProductClean, read from the environment (via .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Defaults – override through environment variables or a .env file.

# Gemini model to invoke. Adjust this if Google changes the model identifier.
MODEL_NAME: str = "gemini-2.5-flash-image"

# Environment variables searched, in order, for the Gemini API key.
API_KEY_ENV_VARS: tuple[str, ...] = ("GEMINI_API_KEY", "API_KEY")

# Environment variable overriding MODEL_NAME.
MODEL_ENV_VAR: str = "PRODUCT_CLEAN_MODEL"

# Number of completed edits kept in the session history.
HISTORY_LIMIT: int = 10

# Filename used by the download action.
DOWNLOAD_FILE_NAME: str = "edited-product.png"

# Status line shown while the remote edit is running.
PROCESSING_MESSAGE: str = "Applying AI magic..."

# Wording wrapped around every user instruction before it reaches Gemini.
PROMPT_TEMPLATE: str = (
    "You are a professional product photo editor. {instruction}. "
    "Please provide the resulting edited image."
)


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved configuration for one ProductClean process."""

    api_key: Optional[str] = None
    model_name: str = MODEL_NAME
    history_limit: int = HISTORY_LIMIT
    download_file_name: str = DOWNLOAD_FILE_NAME
    processing_message: str = PROCESSING_MESSAGE

    @classmethod
    def from_env(cls, *, load_dotenv_file: bool = True) -> "Settings":
        """Build settings from the process environment.

        A missing API key is not an error here: the edit client reports it when a
        request is actually made.
        """

        if load_dotenv_file:
            load_dotenv()

        return cls(
            api_key=load_api_key(),
            model_name=os.getenv(MODEL_ENV_VAR) or MODEL_NAME,
        )


def load_api_key() -> Optional[str]:
    """Return the first non-empty API key found in ``API_KEY_ENV_VARS``."""

    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value and value.strip():
            return value.strip()
    return None


def build_edit_prompt(instruction: str) -> str:
    """Wrap a user instruction in the product-photo editor prompt."""

    stripped = instruction.strip()
    if not stripped:
        raise ValueError("The instruction could not be empty.")
    return PROMPT_TEMPLATE.format(instruction=stripped)

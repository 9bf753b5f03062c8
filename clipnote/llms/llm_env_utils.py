# llm_env_utils.py
import os

from dotenv import load_dotenv

DEFAULT_QUICK_START_MODEL = "gpt-5-nano"
DEFAULT_SUMMARY_MODEL = "gpt-4o-mini"


def load_llm_env():
    """
    Loads environment variables from .env for the OpenAI-backed gateway.
    Returns a dict with the API key and per-operation model names.
    """
    load_dotenv()  # ensure .env is loaded

    openai_key = os.getenv("OPENAI_API_KEY", "")
    if not openai_key:
        raise ValueError("OPENAI_API_KEY is missing in .env")

    return {
        "OPENAI_API_KEY": openai_key,
        "QUICK_START_MODEL": os.getenv("QUICK_START_MODEL", DEFAULT_QUICK_START_MODEL),
        "SUMMARY_MODEL": os.getenv("SUMMARY_MODEL", DEFAULT_SUMMARY_MODEL),
        "LLM_REQUEST_TIMEOUT_SECONDS": os.getenv("LLM_REQUEST_TIMEOUT_SECONDS"),
    }

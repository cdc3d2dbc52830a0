"""
Configuration for the StudyGenius planner.

Supports both local development (environment variables / .env file) and
GCP production (Secret Manager for API keys).

Usage:
    from studygenius.config import settings as config
    config.MAX_EXTRACTED_CHARS
"""
import os
from typing import Optional

# Load environment variables from .env file (if present)
# This must happen before any os.getenv() calls
from dotenv import load_dotenv

load_dotenv()


def is_gcp_environment() -> bool:
    """Check if running on GCP."""
    return (
        os.getenv("GAE_ENV") is not None or  # App Engine
        os.getenv("K_SERVICE") is not None or  # Cloud Run
        os.getenv("GOOGLE_CLOUD_PROJECT") is not None  # Any GCP service
    )


def get_secret(secret_id: str, project_id: Optional[str] = None) -> Optional[str]:
    """
    Get secret from environment variable (local) or Google Secret Manager (GCP).

    Priority:
    1. Environment variable (works everywhere, can override in Cloud Run)
    2. Secret Manager (if on GCP and env var not set)
    3. None

    Args:
        secret_id: Secret name in Secret Manager or env var name
        project_id: GCP project ID (auto-detected if None)

    Returns:
        Secret value or None if not found
    """
    env_value = os.getenv(secret_id)
    if env_value:
        return env_value

    if not is_gcp_environment():
        return None

    project_id = project_id or os.getenv("GOOGLE_CLOUD_PROJECT")
    if not project_id:
        print(f"⚠ Warning: GOOGLE_CLOUD_PROJECT not set, cannot fetch secret {secret_id}")
        return None

    try:
        from google.cloud import secretmanager

        client = secretmanager.SecretManagerServiceClient()
        name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
        response = client.access_secret_version(request={"name": name})
        return response.payload.data.decode("UTF-8")
    except ImportError:
        # google-cloud-secret-manager not installed (local dev)
        return None
    except Exception as e:
        # Secret not found or permission denied
        print(f"⚠ Warning: Could not fetch secret {secret_id} from Secret Manager: {e}")
        return None


# --- Model Configuration ---
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "google")
LLM_MODEL = os.getenv("LLM_MODEL", "gemini-2.5-flash")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "4000"))
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "90"))

# Azure OpenAI (LLM_PROVIDER=azure)
AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT")
AZURE_OPENAI_DEPLOYMENT = os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4o")
AZURE_OPENAI_API_VERSION = os.getenv("AZURE_OPENAI_API_VERSION", "2025-01-01-preview")

# --- Text Extraction ---
MAX_EXTRACTED_CHARS = int(os.getenv("MAX_EXTRACTED_CHARS", "10000"))
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))

# --- Syllabus Detection ---
SYLLABUS_KEYWORD_THRESHOLD = int(os.getenv("SYLLABUS_KEYWORD_THRESHOLD", "3"))

# --- Resource Search ---
MAX_WEB_RESULTS = int(os.getenv("MAX_WEB_RESULTS", "5"))
SEARCH_TIMEOUT_SECONDS = float(os.getenv("SEARCH_TIMEOUT_SECONDS", "15"))
RESOURCE_GOOD_ENOUGH_COUNT = int(os.getenv("RESOURCE_GOOD_ENOUGH_COUNT", "5"))
MAX_RESOURCES = int(os.getenv("MAX_RESOURCES", "10"))

# --- Roadmaps ---
DEFAULT_ROADMAP_WEEKS = int(os.getenv("DEFAULT_ROADMAP_WEEKS", "4"))

# --- Blob Storage ---
# "gcs", "http" or "local"
BLOB_STORE_BACKEND = os.getenv("BLOB_STORE_BACKEND", "local")
GCS_BUCKET_NAME = os.getenv("GCS_BUCKET_NAME")
LOCAL_BLOB_DIR = os.getenv("LOCAL_BLOB_DIR", "study_materials")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- API Keys (from Secret Manager or env vars) ---
GOOGLE_API_KEY = get_secret("GOOGLE_API_KEY")
AZURE_OPENAI_API_KEY = get_secret("AZURE_OPENAI_API_KEY")
TAVILY_API_KEY = get_secret("TAVILY_API_KEY")

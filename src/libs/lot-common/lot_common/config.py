# src/libs/lot-common/lot_common/config.py
import os
import re
from dotenv import load_dotenv

# Load environment variables from a .env file for local development.
load_dotenv()


# Database Configurations
POSTGRES_USER = os.getenv("POSTGRES_USER", "postgres")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
POSTGRES_DB = os.getenv("POSTGRES_DB", "postgres")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")

# Caller-scoped sessions assume this role so the catalog's row-level security applies.
CATALOG_CALLER_ROLE = os.getenv("CATALOG_CALLER_ROLE", "anon")
if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", CATALOG_CALLER_ROLE):
    raise ValueError(f"CATALOG_CALLER_ROLE is not a valid role name: {CATALOG_CALLER_ROLE!r}")

# Autocomplete Configurations
AUTOCOMPLETE_MIN_QUERY_LENGTH = int(os.getenv("AUTOCOMPLETE_MIN_QUERY_LENGTH", "3"))
AUTOCOMPLETE_MAX_RESULTS = int(os.getenv("AUTOCOMPLETE_MAX_RESULTS", "10"))
QUALITY_CANDIDATE_WINDOW = int(os.getenv("QUALITY_CANDIDATE_WINDOW", "50"))

# Cross-origin headers carried by every autocomplete response.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

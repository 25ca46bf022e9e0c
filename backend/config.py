import os
from dotenv import load_dotenv

load_dotenv()

# --- Supabase Configuration ---
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

# --- JWT Configuration ---
# Supabase signs access tokens with the project's JWT secret
JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET") or os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "1"))

# --- Database ---
# Local store used when Supabase is not configured (development and tests)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/codetrack.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Statistics ---
STATS_TIMEZONE = os.getenv("STATS_TIMEZONE", "UTC")
STATS_WINDOW_DAYS = int(os.getenv("STATS_WINDOW_DAYS", "365"))
STATS_MAX_WINDOW_DAYS = 730

# --- HTTP ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

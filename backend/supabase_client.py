# supabase_client.py — Supabase admin client for auth-level operations

from supabase import create_client, Client

import config

_supabase_admin: Client = None


def get_supabase_admin() -> Client:
    """
    Get Supabase client with service role key (admin privileges).
    Use for backend operations that require elevated permissions.
    """
    global _supabase_admin

    if _supabase_admin is None:
        if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in environment variables")

        _supabase_admin = create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_ROLE_KEY)

    return _supabase_admin


def is_supabase_configured() -> bool:
    """Check if Supabase is properly configured with required environment variables."""
    return bool(config.SUPABASE_URL and config.SUPABASE_SERVICE_ROLE_KEY and config.SUPABASE_ANON_KEY)


def delete_auth_user(user_id: str):
    """Remove the user from Supabase Auth. Their profile row cascades in the database."""
    supabase = get_supabase_admin()
    return supabase.auth.admin.delete_user(user_id)

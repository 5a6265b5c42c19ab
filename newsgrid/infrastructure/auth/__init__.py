"""Аутентификация через Supabase Auth."""

from newsgrid.infrastructure.auth.supabase_auth import AuthUser, SupabaseAuthClient

__all__ = ['AuthUser', 'SupabaseAuthClient']

"""
Lazily built services shared by the CLI commands.

Everything is cached on the click context object so a command builds the
config, session provider and API client at most once, and only when it
needs them. ``crow config --show`` works without any auth settings.
"""

from typing import Optional

import click

from ..api import SocialApi
from ..core.config import ConfigManager, CrowConfig
from ..infrastructure.session import FileSessionStore, Session
from ..infrastructure.session.supabase import SupabaseSessionProvider
from ..exceptions import NoCredential


def get_config_manager(ctx: click.Context) -> ConfigManager:
    obj = ctx.ensure_object(dict)
    if "config_manager" not in obj:
        obj["config_manager"] = ConfigManager(obj.get("config_file"))
    return obj["config_manager"]


def get_config(ctx: click.Context) -> CrowConfig:
    return get_config_manager(ctx).load_config()


def get_session_provider(ctx: click.Context) -> SupabaseSessionProvider:
    """Supabase provider persisting its session to ``session.file``."""
    obj = ctx.ensure_object(dict)
    if "session_provider" not in obj:
        config = get_config_manager(ctx).require("auth.url", "auth.anon_key")
        obj["session_provider"] = SupabaseSessionProvider(
            config.auth.url,
            config.auth.anon_key,
            store=FileSessionStore(config.session.file),
            timeout=config.http.timeout,
        )
    return obj["session_provider"]


def get_api(ctx: click.Context) -> SocialApi:
    obj = ctx.ensure_object(dict)
    if "api" not in obj:
        config = get_config_manager(ctx).require("auth.url", "auth.anon_key")
        api = SocialApi.create(
            config.api_base_url,
            get_session_provider(ctx),
            config.auth.anon_key,
            timeout=config.http.timeout,
        )
        ctx.call_on_close(api.close)
        obj["api"] = api
    return obj["api"]


def current_session(ctx: click.Context) -> Session:
    """The stored session, or NoCredential when nobody is signed in."""
    session: Optional[Session] = get_session_provider(ctx).get_session()
    if session is None or not session.has_credential:
        raise NoCredential()
    return session

"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from whisper.config import (
    AuthSettings,
    LeaderboardSettings,
    ProfileSettings,
    Settings,
    ThreadSettings,
)
from whisper.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_thread_settings(self, settings: Settings) -> ThreadSettings:
        """Provide reply threading settings."""
        return settings.threads

    @provide(scope=Scope.APP)
    def provide_leaderboard_settings(self, settings: Settings) -> LeaderboardSettings:
        """Provide leaderboard settings."""
        return settings.leaderboard

    @provide(scope=Scope.APP)
    def provide_profile_settings(self, settings: Settings) -> ProfileSettings:
        """Provide profile editing settings."""
        return settings.profiles

"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    bot_token: str
    database_url: str

    debug: bool = False

    # ELO Configuration
    elo_initial_rating: int = 1200  # Rating given to a player on their first match
    elo_k_factor: int = 32  # Maximum rating change per match
    elo_scale_factor: float = 400.0

    # Race Configuration (monthly points competition)
    race_base_points: int = 10  # Awarded to both players for every match
    race_win_bonus: int = 15
    race_off_peak_bonus: int = 5
    race_challenge_bonus: int = 20  # Matchmaking challenge accepted
    race_tournament_multiplier: float = 2.5

    # Leaderboard Configuration
    leaderboard_default_limit: int = 10
    leaderboard_max_limit: int = 50

    # Admin Configuration
    admin_user_ids: str | None = None  # Comma-separated list of Telegram user IDs

    def get_admin_user_ids(self) -> list[int]:
        """Parse admin user IDs from comma-separated string."""
        if not self.admin_user_ids:
            return []
        return [int(uid.strip()) for uid in self.admin_user_ids.split(",") if uid.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

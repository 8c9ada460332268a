"""
CodeBattle Server Configuration

This file contains all server-side configurable settings.
Modify these values to tune the battle and power-up behaviour.
"""

from dataclasses import dataclass
from pathlib import Path
import os


BACKEND_DIR = Path(__file__).parent.parent


@dataclass
class ServerConfig:
    """Server networking configuration."""
    HOST: str = "0.0.0.0"
    PORT: int = 8000


@dataclass
class DatabaseConfig:
    """Database configuration."""
    DATABASE_URL: str = os.getenv(
        "CODEBATTLE_DATABASE_URL",
        f"sqlite:///{BACKEND_DIR / 'data' / 'code_battles.db'}",
    )
    ECHO_SQL: bool = False  # Log SQL queries
    LOAD_FIXTURES: bool = os.getenv("CODEBATTLE_LOAD_FIXTURES", "false").lower() in ("true", "1", "yes")


@dataclass
class BattleConfig:
    """Battle outcome and power-up rules."""
    # Battle outcome: draw uniformly from 0..DRAW_MAX, lose on LOSING_DRAW (2 in 3 win)
    DRAW_MAX: int = 2
    LOSING_DRAW: int = 2

    # Power-up magnitude range (inclusive)
    POWER_UP_MIN: int = 3
    POWER_UP_MAX: int = 7
    # Power-up turns negative on this draw (0..DRAW_MAX), magnitude floor-divided first
    NEGATIVE_DRAW: int = 2
    NEGATIVE_DIVISOR: int = 2

    # Entity ranges
    PROJECT_DIFFICULTY_MIN: int = 1
    PROJECT_DIFFICULTY_MAX: int = 10
    AVATAR_MIN: int = 1
    AVATAR_MAX: int = 6

    # Power level thresholds for UI styling
    DANGER_MAX_POWER: int = 3
    WARNING_MAX_POWER: int = 7


@dataclass
class SecurityConfig:
    """API token authentication configuration."""
    TOKEN_HEADER_KEY: str = "token"  # Authorization: token ABCDEF
    TOKEN_BITS: int = 160
    TOKEN_MAX_LENGTH: int = 32


@dataclass
class Settings:
    """Main settings container."""
    server: ServerConfig = None
    database: DatabaseConfig = None
    battle: BattleConfig = None
    security: SecurityConfig = None

    # Application info
    APP_NAME: str = "CodeBattle"
    VERSION: str = "0.1.0"
    DEBUG: bool = True

    def __post_init__(self):
        self.server = self.server or ServerConfig()
        self.database = self.database or DatabaseConfig()
        self.battle = self.battle or BattleConfig()
        self.security = self.security or SecurityConfig()


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings

"""Application configuration settings"""

import os
from dotenv import load_dotenv

from finbot.domain.exceptions import ConfigurationError

# .env.local overrides .env, environment variables set before startup win over both
load_dotenv()
load_dotenv(".env.local", override=True)


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    APP_ENV = os.getenv("APP_ENV", "development")
    TESTING = _flag("TESTING")
    DEBUG = _flag("DEBUG")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5001"))

    # Slack gateway
    SLACK_ENABLED = _flag("SLACK_ENABLED", "true")
    SLACK_BOT_TOKEN: str = os.getenv("SLACK_BOT_TOKEN", "")
    SLACK_SIGNING_SECRET: str = os.getenv("SLACK_SIGNING_SECRET", "")
    # Publishing the command vocabulary needs an app configuration token
    SLACK_APP_ID: str = os.getenv("SLACK_APP_ID", "")
    SLACK_APP_CONFIG_TOKEN: str = os.getenv("SLACK_APP_CONFIG_TOKEN", "")
    # Public URL Slack posts slash commands to, e.g. https://bot.example.com/slack/commands
    SLACK_COMMANDS_URL: str = os.getenv("SLACK_COMMANDS_URL", "")

    # In-flight invocations get this long to finish on shutdown before being cancelled
    SHUTDOWN_GRACE_SECONDS: float = float(os.getenv("SHUTDOWN_GRACE_SECONDS", "10"))

    # Postgresql Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    SHUTDOWN_GRACE_SECONDS = 1.0


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])


def validate_config(cfg=Config) -> None:
    """
    Fail fast on settings the bot cannot start without.

    Raises:
        ConfigurationError: listing every missing setting
    """
    missing = []
    if cfg.SLACK_ENABLED:
        if not cfg.SLACK_BOT_TOKEN:
            missing.append("SLACK_BOT_TOKEN")
        if not cfg.SLACK_SIGNING_SECRET:
            missing.append("SLACK_SIGNING_SECRET")
    if not cfg.DATABASE_URL:
        missing.append("DATABASE_URL")
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}"
        )

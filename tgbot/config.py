from dataclasses import dataclass
from typing import Optional

from environs import Env

# Apps Script /exec URL the landing page has always posted to
DEFAULT_SHEETS_WEBHOOK = (
    "https://script.google.com/macros/s/"
    "AKfycbzUc_25VvcxebarxCVmZdiYCZiTkErNqkqwT5glmVZ2kL3Eibj_S_LqZPYyyILNODU/exec"
)


@dataclass
class TgBot:
    """
    Creates the TgBot object from environment variables.
    """

    token: str
    use_redis: bool

    @staticmethod
    def from_env(env: Env):
        """
        Creates the TgBot object from environment variables.
        """
        token = env.str("BOT_TOKEN")
        use_redis = env.bool("USE_REDIS", False)
        return TgBot(token=token, use_redis=use_redis)


@dataclass
class RedisConfig:
    """
    Redis configuration class, used for the FSM storage.

    Attributes
    ----------
    redis_pass : Optional(str)
        The password used to authenticate with Redis.
    redis_port : Optional(int)
        The port where Redis server is listening.
    redis_host : Optional(str)
        The host where Redis server is located.
    """

    redis_pass: Optional[str]
    redis_port: Optional[int]
    redis_host: Optional[str]

    def dsn(self) -> str:
        """
        Constructs and returns a Redis DSN (Data Source Name) for this database configuration.
        """
        if self.redis_pass:
            return f"redis://:{self.redis_pass}@{self.redis_host}:{self.redis_port}/0"
        else:
            return f"redis://{self.redis_host}:{self.redis_port}/0"

    @staticmethod
    def from_env(env: Env):
        """
        Creates the RedisConfig object from environment variables.
        """
        redis_pass = env.str("REDIS_PASSWORD", None)
        redis_port = env.int("REDIS_PORT", 6379)
        redis_host = env.str("REDIS_HOST", "localhost")

        return RedisConfig(
            redis_pass=redis_pass, redis_port=redis_port, redis_host=redis_host
        )


@dataclass
class WebhookConfig:
    """Telegram webhook mode settings; polling is used when disabled."""

    use_webhook: bool
    host: str
    path: str
    port: int

    @staticmethod
    def from_env(env: Env):
        return WebhookConfig(
            use_webhook=env.bool("USE_WEBHOOK", False),
            host=env.str("WEBHOOK_HOST", ""),
            path=env.str("WEBHOOK_PATH", "/webhook"),
            port=env.int("WEBHOOK_PORT", 8443),
        )


@dataclass
class SheetsConfig:
    """
    Where waiting-list leads are posted.

    An empty ``SHEETS_WEBHOOK`` turns posting off (local development).
    """

    webhook_url: str

    @property
    def is_configured(self) -> bool:
        return bool(self.webhook_url.strip())

    @staticmethod
    def from_env(env: Env):
        return SheetsConfig(
            webhook_url=env.str("SHEETS_WEBHOOK", DEFAULT_SHEETS_WEBHOOK)
        )


@dataclass
class Config:
    """
    The main configuration class that integrates all the other configuration classes.
    """

    tg_bot: TgBot
    sheets: SheetsConfig
    webhook: WebhookConfig
    redis: Optional[RedisConfig] = None


def load_config(path: Optional[str] = None) -> Config:
    """
    This function takes an optional file path as input and returns a Config object.
    :param path: The path of env file from where to load the configuration variables.
    Variables already set in the process environment take precedence over the file.
    :return: Config object with attributes set as per environment variables.
    """

    env = Env()
    if path:
        env.read_env(path)

    return Config(
        tg_bot=TgBot.from_env(env),
        sheets=SheetsConfig.from_env(env),
        webhook=WebhookConfig.from_env(env),
        redis=RedisConfig.from_env(env),
    )

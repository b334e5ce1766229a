from dataclasses import dataclass, field
from environs import Env

@dataclass
class DBConfig:
    """ SQLite """
    path: str = "chat.db"
    echo: bool = False

@dataclass
class PollingConfig:
    interval: float = 2.0  # seconds

@dataclass
class LoggingConfig:
    level: str = "WARNING"

@dataclass
class Config:
    """ Config """
    db: DBConfig = field(default_factory=DBConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

def load_config(path: str | None) -> Config:
    env = Env()
    env.read_env(path)

    return Config(
        db=DBConfig(
            path=env('DB_PATH', 'chat.db'),
            echo=env.bool('DB_ECHO', False)
        ),
        polling=PollingConfig(
            interval=env.float('POLL_INTERVAL', 2.0)
        ),
        logging=LoggingConfig(
            level=env('LOG_LEVEL', 'WARNING').upper()
        )
    )

import asyncio
import logging
import sys

from dishka import make_async_container

from simple_chat.config import Config
from simple_chat.core.exceptions import StoreUnavailable
from simple_chat.providers.dishka_app import AdaptersProvider, GatewaysProvider, ServicesProvider, UIProvider
from simple_chat.ui.console import ConsoleApp

logger = logging.getLogger("simple_chat")

async def run(env_path: str | None = ".env") -> int:
    container = make_async_container(
        AdaptersProvider(env_path),
        GatewaysProvider(),
        ServicesProvider(),
        UIProvider(),
    )
    try:
        config = await container.get(Config)
        logging.basicConfig(
            level=config.logging.level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )

        try:
            app = await container.get(ConsoleApp)
        except StoreUnavailable as e:
            logger.critical("Cannot open chat database %s: %s", config.db.path, e, exc_info=True)
            return 1

        await app.run()
        return 0
    finally:
        await container.close()

def main():
    sys.exit(asyncio.run(run()))

if __name__ == "__main__":
    main()

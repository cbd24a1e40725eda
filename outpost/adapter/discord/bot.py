"""Discord bot presence.

The bot is used only to report readiness on the health endpoint. Starting
it verifies the bot token against the Discord API; no gateway connection is
held and no commands are handled.
"""

import httpx
import logfire

DISCORD_BOT_USER_URL = "https://discord.com/api/v10/users/@me"


class DiscordBot:
    """Process-wide bot presence with a ready flag."""

    def __init__(self) -> None:
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def status(self) -> str:
        return "ready" if self._ready else "not ready"

    async def start(self) -> None:
        raise NotImplementedError

    async def stop(self) -> None:
        self._ready = False


class RealDiscordBot(DiscordBot):
    """Bot presence that checks its token with Discord on startup.

    A missing or rejected token leaves the bot "not ready"; it never stops
    the application from starting.
    """

    def __init__(self, token: str | None) -> None:
        super().__init__()
        self.token = token

    async def start(self) -> None:
        if not self.token:
            logfire.warn("Discord bot token not provided, skipping Discord bot")
            return

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    DISCORD_BOT_USER_URL,
                    headers={"Authorization": f"Bot {self.token}"},
                    timeout=10.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Discord bot login HTTP error", error=str(e))
            self._ready = False
            return

        if response.status_code != 200:
            logfire.error(
                "Discord bot login failed", status_code=response.status_code
            )
            self._ready = False
            return

        self._ready = True
        logfire.info("Discord bot is ready", bot=response.json().get("username"))

    async def stop(self) -> None:
        if self._ready:
            logfire.info("Discord bot stopped")
        await super().stop()


class MockDiscordBot(DiscordBot):
    """Bot presence for tests; becomes ready on start unless told otherwise."""

    def __init__(self, ready_on_start: bool = True) -> None:
        super().__init__()
        self.ready_on_start = ready_on_start

    async def start(self) -> None:
        self._ready = self.ready_on_start

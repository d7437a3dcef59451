"""Tests for configuration loading and the global error handler."""

from unittest.mock import AsyncMock, MagicMock

from discord.ext import commands

from memebot.bot.utils.error_handler import ErrorHandler
from memebot.config.settings import BotConfig, MemeEntry
from memebot.plugins.memegen.config import MemegenConfig


class TestBotConfig:
    def test_memes_parsed_from_json_env(self, monkeypatch):
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "token")
        monkeypatch.setenv("MEMEGEN_MEMES", '[{"key": "petpet", "name": "摸"}]')
        monkeypatch.setenv("MEMEGEN_ENDPOINT", "http://meme:2233/")
        config = BotConfig()
        assert config.discord_token == "token"
        assert config.memegen_memes == [MemeEntry(key="petpet", name="摸")]

    def test_plugin_config_from_settings(self):
        settings = BotConfig(
            discord_bot_token="token",
            bot_name="akarin",
            memegen_endpoint="http://meme:2233/",
            memegen_memes=[{"key": "petpet", "name": "摸"}],
            memegen_stop_on_error=False,
        )
        config = MemegenConfig.from_settings(settings)
        assert config.endpoint == "http://meme:2233"
        assert config.bot_name == "akarin"
        assert config.enabled
        assert not config.stop_on_error

    def test_plugin_disabled_without_memes(self):
        settings = BotConfig(discord_bot_token="token", memegen_memes=[])
        assert not MemegenConfig.from_settings(settings).enabled


class TestErrorHandler:
    async def test_command_not_found_ignored(self):
        ctx = MagicMock()
        ctx.send = AsyncMock()
        await ErrorHandler.on_command_error(ctx, commands.CommandNotFound())
        ctx.send.assert_not_awaited()

    async def test_missing_argument_shows_usage(self):
        ctx = MagicMock()
        ctx.send = AsyncMock()
        ctx.prefix = "!"
        ctx.command.qualified_name = "memegen-petpet"
        ctx.command.signature = "[图片1]"
        param = MagicMock()
        param.displayed_name = "图片1"
        await ErrorHandler.on_command_error(ctx, commands.MissingRequiredArgument(param))
        embed = ctx.send.await_args.kwargs["embed"]
        assert "图片1" in embed.description
        assert embed.fields[0].value == "`!memegen-petpet [图片1]`"

"""Tests for the bot's command registration."""

from unittest.mock import MagicMock

import pytest
from discord.ext import commands

from memebot.bot.core.bot import MyBot
from memebot.config.settings import BotConfig, Settings


async def _noop(ctx):
    pass


@pytest.fixture
async def bot(monkeypatch):
    monkeypatch.setattr(Settings, "_instance", BotConfig(discord_bot_token="token"))
    instance = MyBot(command_prefix="!", logger=MagicMock())
    yield instance
    await instance.close()


class TestRegisterCommand:
    async def test_registers_new_command(self, bot):
        cmd = commands.Command(_noop, name="memegen-petpet")
        assert bot.register_command(cmd) is cmd
        assert bot.get_command("memegen-petpet") is cmd

    async def test_duplicate_name_raises(self, bot):
        bot.register_command(commands.Command(_noop, name="memegen-petpet"))
        with pytest.raises(commands.CommandRegistrationError) as exc_info:
            bot.register_command(commands.Command(_noop, name="memegen-petpet"))
        assert exc_info.value.name == "memegen-petpet"
        assert not exc_info.value.alias_conflict

    async def test_alias_conflict_raises(self, bot):
        bot.register_command(commands.Command(_noop, name="memegen-petpet", aliases=["摸"]))
        with pytest.raises(commands.CommandRegistrationError) as exc_info:
            bot.register_command(commands.Command(_noop, name="memegen-pat", aliases=["摸"]))
        assert exc_info.value.alias_conflict

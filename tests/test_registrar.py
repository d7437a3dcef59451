"""Tests for loading command specs from configured memes."""

import logging

from conftest import info_body
from memebot.config.settings import MemeEntry
from memebot.plugins.memegen.registrar import load_command_specs

ENTRIES = [
    MemeEntry(key="petpet", name="摸"),
    MemeEntry(key="broken", name="坏"),
    MemeEntry(key="do_it", name="do_it"),
]


class TestLoadCommandSpecs:
    async def test_loads_all_in_order(self, service, meme_api, caplog):
        for entry in ENTRIES:
            meme_api.infos[entry.key] = info_body(entry.key)
        with caplog.at_level(logging.INFO, logger="memebot.plugins.memegen.registrar"):
            result = await load_command_specs(service, ENTRIES, "memebot")
        assert result.complete
        assert [s.command_name for s in result.specs] == [
            "memegen-petpet", "memegen-broken", "memegen-do-it",
        ]
        assert "3 meme(s) loaded." in caplog.text

    async def test_first_failure_aborts_remaining(self, service, meme_api, caplog):
        """A failing meme stops registration of itself and every later meme."""
        meme_api.infos["petpet"] = info_body("petpet")
        meme_api.infos["do_it"] = info_body("do_it")
        with caplog.at_level(logging.INFO, logger="memebot.plugins.memegen.registrar"):
            result = await load_command_specs(service, ENTRIES, "memebot")
        assert [s.key for s in result.specs] == ["petpet"]
        assert result.aborted
        assert [e.key for e in result.failures] == ["broken"]
        assert ("GET", "/memes/do_it/info") not in meme_api.requests
        assert "Meme broken load failed" in caplog.text
        assert "meme(s) loaded." not in caplog.text

    async def test_continue_on_error(self, service, meme_api):
        meme_api.infos["petpet"] = info_body("petpet")
        meme_api.infos["do_it"] = info_body("do_it")
        result = await load_command_specs(service, ENTRIES, "memebot", stop_on_error=False)
        assert [s.key for s in result.specs] == ["petpet", "do_it"]
        assert not result.aborted
        assert not result.complete

    async def test_empty_config(self, service, meme_api):
        result = await load_command_specs(service, [], "memebot")
        assert result.specs == []
        assert result.complete
        assert meme_api.requests == []

    async def test_same_schema_twice_gives_same_spec(self, service, meme_api):
        meme_api.infos["petpet"] = info_body("petpet", min_texts=1, max_texts=3)
        first = await load_command_specs(service, ENTRIES[:1], "memebot")
        second = await load_command_specs(service, ENTRIES[:1], "memebot")
        assert first.specs == second.specs

"""Tests for the chatroute command line."""

from unittest.mock import AsyncMock

import pytest

from chatroute import command
from chatroute.command import main, run, use_param
from chatroute.models import ConfigError, ExitCode


def test_use_param():
    argv = ["--config", "conf.toml", "--debug", "log.txt"]
    assert use_param("--debug", argv) == "log.txt"
    assert argv == ["--config", "conf.toml"]
    assert use_param("--missing", argv) == ""
    assert use_param("--config", argv) == "conf.toml"
    assert argv == []


def test_use_param_without_value():
    with pytest.raises(ValueError):
        use_param("--config", ["--config"])


@pytest.fixture
def config_file(tmp_path):
    fname = tmp_path / "config.toml"
    fname.write_text('[chatroute]\nprefix = "!"\nextensions = ["basic"]\nquit_word = "bye"\n', encoding="utf-8")
    return fname


@pytest.mark.asyncio
async def test_run(config_file, mocker):
    channel_run = mocker.patch("chatroute.channels.console.ConsoleChannel.run", new_callable=AsyncMock)
    listen = mocker.spy(command.Router, "listen")
    assert await run(str(config_file)) == ExitCode.SUCCESS
    channel_run.assert_awaited_once()
    router, channel = listen.call_args.args
    assert router.prefix == "!"
    assert channel.quit_word == "bye"
    assert channel.prompt == ">"
    assert channel.prefix == "!"
    assert router.commands.names() == ["ping", "echo", "count"]
    assert router.channel is None
    assert channel.closed


@pytest.mark.asyncio
async def test_run_bad_config(tmp_path):
    fname = tmp_path / "config.toml"
    fname.write_text("[chatroute]\nprefix = 1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        await run(str(fname))


@pytest.fixture
def discord_config(tmp_path):
    fname = tmp_path / "config.toml"
    fname.write_text('[chatroute]\nprefix = "!"\ntransport = "discord"\ntoken_env = "CHATROUTE_TOKEN"\n', encoding="utf-8")
    return fname


@pytest.mark.asyncio
async def test_run_discord(discord_config, mocker, monkeypatch):
    discord = pytest.importorskip("discord")
    from chatroute.channels.discord_client import DiscordChannel

    monkeypatch.setenv("CHATROUTE_TOKEN", "secret")
    start = mocker.patch.object(DiscordChannel, "start", new_callable=AsyncMock)
    client_close = mocker.patch.object(discord.Client, "close", new_callable=AsyncMock)
    listen = mocker.spy(command.Router, "listen")
    assert await run(str(discord_config)) == ExitCode.SUCCESS
    start.assert_awaited_once_with("secret")
    router, channel = listen.call_args.args
    assert isinstance(channel, DiscordChannel)
    assert router.channel is None
    assert channel.closed
    client_close.assert_awaited_once()


@pytest.mark.asyncio
async def test_run_discord_without_token(discord_config, mocker, monkeypatch):
    monkeypatch.delenv("CHATROUTE_TOKEN", raising=False)
    listen = mocker.spy(command.Router, "listen")
    with pytest.raises(ConfigError, match="CHATROUTE_TOKEN is not set"):
        await run(str(discord_config))
    listen.assert_not_called()


@pytest.mark.asyncio
async def test_run_unknown_transport(tmp_path):
    fname = tmp_path / "config.toml"
    fname.write_text('[chatroute]\nprefix = "!"\ntransport = "irc"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        await run(str(fname))


@pytest.fixture
def cli(monkeypatch, mocker):
    "Run `main` with the given arguments, returning the exit code"
    mocker.patch("chatroute.command.init_logger")

    def _run(*args):
        monkeypatch.setattr("sys.argv", ["chatroute", *args])
        with pytest.raises(SystemExit) as exc:
            main()
        return exc.value.code

    return _run


def close_coro(coro):
    coro.close()


def test_main_success(cli, mocker):
    asyncio_run = mocker.patch("chatroute.command.asyncio.run", side_effect=lambda coro: close_coro(coro) or ExitCode.SUCCESS)
    assert cli("--config", "some.toml") == ExitCode.SUCCESS
    asyncio_run.assert_called_once()


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ConfigError("bad"), ExitCode.CONFIG_ERROR),
        (RuntimeError("boom"), ExitCode.RUNTIME_ERROR),
        (KeyboardInterrupt(), ExitCode.SUCCESS),
    ],
)
def test_main_errors(cli, mocker, error, code):
    def fail(coro):
        coro.close()
        raise error

    mocker.patch("chatroute.command.asyncio.run", side_effect=fail)
    assert cli() == code


def test_main_usage(cli, mocker, capsys):
    asyncio_run = mocker.patch("chatroute.command.asyncio.run")
    assert cli("--config") == ExitCode.USAGE_ERROR
    assert cli("extra") == ExitCode.USAGE_ERROR
    assert cli("--help") == ExitCode.SUCCESS
    assert "Syntax: chatroute" in capsys.readouterr().out
    asyncio_run.assert_not_called()


def test_main_debug(cli, mocker):
    mocker.patch("chatroute.command.asyncio.run", side_effect=lambda coro: close_coro(coro) or ExitCode.SUCCESS)
    cli("--debug", "/tmp/chatroute.log")
    command.init_logger.assert_called_once_with(filename="/tmp/chatroute.log", force_debug=True)

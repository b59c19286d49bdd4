# tests/checker/test_cli.py
import json
import logging

import pytest

from link_checker import cli
from link_checker.utils.configure_logging import NOISY_LOGGERS, TqdmStreamHandler, configure_logger, parse_level


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    quiet_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)


@pytest.fixture
def site(tmp_path):
    (tmp_path / "about").mkdir()
    (tmp_path / "index.html").write_text('<a href="about/">About</a><img src="logo.png">')
    (tmp_path / "about" / "index.html").write_text('<a href="../index.html">Home</a>')
    (tmp_path / "logo.png").write_bytes(b"\x89PNG")
    return tmp_path


def test_load_file_set(site):
    files = cli.load_file_set(site)
    assert sorted(files) == ["about/index.html", "index.html", "logo.png"]
    assert files["logo.png"] == b"\x89PNG"


def test_clean_site_exits_zero(site, capsys):
    assert cli.main([str(site)]) == cli.EXIT_OK
    assert "No broken links" in capsys.readouterr().out


def test_broken_site_exits_one(site, capsys):
    (site / "about" / "index.html").write_text('<a href="../missing.html">Gone</a>')
    assert cli.main([str(site)]) == cli.EXIT_BROKEN_LINKS
    err = capsys.readouterr().err
    assert "Broken links found:" in err
    assert "about/index.html:\n  ../missing.html (not found)" in err


def test_ignore_flag(site):
    (site / "index.html").write_text('<a href="drafts/x.html">x</a>')
    assert cli.main([str(site), "--ignore", "^drafts/"]) == cli.EXIT_OK


def test_config_file_is_merged(site, tmp_path_factory):
    (site / "index.html").write_text('<a href="drafts/x.html">x</a>')
    config_file = tmp_path_factory.mktemp("cfg") / "settings.json"
    config_file.write_text(json.dumps({"ignore": ["^drafts/"]}))
    assert cli.main([str(site), "--config", str(config_file)]) == cli.EXIT_OK


def test_bad_regex_is_an_operational_failure(site, capsys):
    assert cli.main([str(site), "--ignore", "("]) == cli.EXIT_ERROR
    assert "❌" in capsys.readouterr().err


def test_missing_build_dir(tmp_path):
    assert cli.main([str(tmp_path / "nope")]) == cli.EXIT_ERROR


def test_options_from_args():
    args = cli.build_parser().parse_args([
        "site", "--pattern", "**/*.htm", "--timeout", "3", "--parallelism", "2",
        "--user-agent", "ua/1", "--ignore", "a", "--ignore", "b", "--progress",
    ])
    assert cli.options_from_args(args) == {
        "html": {"pattern": "**/*.htm"},
        "ignore": ["a", "b"],
        "timeout": 3.0,
        "parallelism": 2,
        "userAgent": "ua/1",
        "progress": True,
    }


def test_configure_logger_installs_single_handler():
    configure_logger("info")
    configure_logger("info")
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], TqdmStreamHandler)
    assert "%(lineno)d" not in root.handlers[0].formatter._fmt
    assert logging.getLogger("aiohttp").level == logging.WARNING


def test_configure_logger_debug_format_keeps_noisy_loggers_quiet():
    handler = configure_logger(logging.DEBUG)
    assert "%(lineno)d" in handler.formatter._fmt
    assert logging.getLogger("asyncio").level == logging.WARNING


def test_parse_level():
    assert parse_level("warning") == logging.WARNING
    assert parse_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        parse_level("loud")


def test_log_level_from_config_file(site, tmp_path_factory):
    config_file = tmp_path_factory.mktemp("cfg") / "settings.json"
    config_file.write_text(json.dumps({"debug": {"level": "ERROR"}}))
    assert cli.main([str(site), "--config", str(config_file)]) == cli.EXIT_OK
    assert logging.getLogger().level == logging.ERROR

    assert cli.main([str(site), "--config", str(config_file), "--log-level", "INFO"]) == cli.EXIT_OK
    assert logging.getLogger().level == logging.INFO


def test_unknown_log_level(site, capsys):
    assert cli.main([str(site), "--log-level", "loud"]) == cli.EXIT_ERROR
    assert "Unknown log level" in capsys.readouterr().err

import pytest

from apiruntime.logger import Logger, StandardLogger, debug_enabled


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("SWAGGER_DEBUG", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    return monkeypatch


def test_logger_debug_disabled_by_default(clean_env):
    assert debug_enabled() is False


@pytest.mark.parametrize("name", ["SWAGGER_DEBUG", "DEBUG"])
@pytest.mark.parametrize("value, expected", [("1", True), ("yes", True), ("false", False), ("0", False)])
def test_debug_enabled_from_env(clean_env, name, value, expected):
    clean_env.setenv(name, value)
    assert debug_enabled() is expected


def test_printf_appends_newline(capsys):
    StandardLogger().printf("hello %s", "world")
    assert capsys.readouterr().err == "hello world\n"


def test_debugf_keeps_existing_newline(capsys):
    StandardLogger().debugf("count %d\n", 3)
    assert capsys.readouterr().err == "count 3\n"


def test_printf_go_verbs(capsys):
    StandardLogger().printf("%q is %v, valid: %t", "x", [1], True)
    assert capsys.readouterr().err == '"x" is [1], valid: true\n'


def test_printf_missing_argument(capsys):
    StandardLogger().printf("%s and %s", "one")
    assert capsys.readouterr().err == "one and %!s(MISSING)\n"


def test_standard_logger_satisfies_protocol(capsys):
    logger = StandardLogger()
    assert isinstance(logger, Logger)
    logger.printf("")
    assert capsys.readouterr().err == "\n"
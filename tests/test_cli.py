import pytest

from movieapi.cli import DEFAULT_DSN, Config, main, parse_args


def test_defaults():
    config = parse_args([])
    assert config == Config()
    assert config.dsn == DEFAULT_DSN
    assert config.jwt_issuer == "example.com"
    assert config.cookie_domain == "localhost"


def test_default_dsn_names_movies_database():
    assert "dbname=movies" in parse_args([]).dsn


def test_single_dash_flags():
    config = parse_args(["-dsn", "host=db.example.com", "-jwt-audience", "api.example.com"])
    assert config.dsn == "host=db.example.com"
    assert config.jwt_audience == "api.example.com"


def test_double_dash_flags():
    config = parse_args(["--cookie-domain", "cookies.example.com", "--domain", "site.example.com"])
    assert config.cookie_domain == "cookies.example.com"
    assert config.domain == "site.example.com"


def test_unknown_flag_exits_with_usage_error():
    with pytest.raises(SystemExit) as info:
        parse_args(["--nope"])
    assert info.value.code == 2


@pytest.mark.parametrize("dsn", ["bogus", "host=localhost port=abc"])
def test_main_fails_on_bad_connection_string(dsn):
    assert main(["-dsn", dsn]) == 1
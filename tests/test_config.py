import os

from relay import config


def test_default_origins():
    assert config.get_allowed_origins() == [
        "http://localhost:3000",
        "https://localhost:3000",
    ]


def test_platform_domains_extend_defaults():
    os.environ["RAILWAY_PUBLIC_DOMAIN"] = "relay.up.railway.app"
    os.environ["VERCEL_URL"] = "eodsa.vercel.app"
    os.environ["FRONTEND_URL"] = "https://eodsa.example.com"

    assert config.get_allowed_origins() == [
        "http://localhost:3000",
        "https://localhost:3000",
        "https://relay.up.railway.app",
        "https://eodsa.vercel.app",
        "https://eodsa.example.com",
    ]


def test_explicit_origins_replace_defaults():
    os.environ["ALLOWED_ORIGINS"] = " https://a.example , https://b.example,, "
    os.environ["FRONTEND_URL"] = "https://ignored.example"

    assert config.get_allowed_origins() == ["https://a.example", "https://b.example"]


def test_port_defaults_and_parsing():
    assert config.get_port() == 3001
    os.environ["PORT"] = "8080"
    assert config.get_port() == 8080
    os.environ["PORT"] = "eighty"
    assert config.get_port() == 3001


def test_host_environment_and_log_level():
    assert config.get_host() == "0.0.0.0"
    assert config.get_environment() == "development"
    assert config.get_log_level() == "INFO"
    assert config.get_public_domain() is None

    os.environ["SERVER_HOST"] = "127.0.0.1"
    os.environ["APP_ENV"] = "production"
    os.environ["LOG_LEVEL"] = "debug"
    assert config.get_host() == "127.0.0.1"
    assert config.get_environment() == "production"
    assert config.get_log_level() == "DEBUG"

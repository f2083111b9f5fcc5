"""Tests for the storefront command-line interface."""

import logging
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from storefront.cli import cli


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger onto the runner's captured streams."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "storefront.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "database": {"url": f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}"},
                "auth": {"jwt_secret": "cli-test-secret-that-is-long-enough", "bcrypt_rounds": 4},
                "theme": {"css_path": str(tmp_path / "public" / "theme.css")},
            }
        )
    )
    return path


@pytest.fixture
def run(config_file, monkeypatch):
    for name in ("DATABASE_URL", "STOREFRONT_DATABASE_URL", "JWT_SECRET", "ADMIN_EMAIL", "ADMIN_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    runner = CliRunner()

    def _run(*args, input=None):
        return runner.invoke(
            cli,
            ["--config", str(config_file), "--log-level", "WARNING", *args],
            obj={},
            input=input,
        )

    return _run


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0


def test_init_db_then_seed(run):
    assert run("init-db").exit_code == 0

    result = run("seed", "--admin-email", "owner@example.com", "--admin-password", "pw-123")

    assert result.exit_code == 0, result.output
    assert "owner@example.com" in result.output
    assert "Seed completed" in result.output


def test_seed_twice_creates_nothing_new(run):
    run("init-db")
    run("seed")

    result = run("seed")

    assert result.exit_code == 0, result.output
    assert "admin@example.com" not in result.output
    assert "t-shirts" not in result.output


def test_generate_css_uses_defaults_without_stored_theme(run, tmp_path):
    run("init-db")

    result = run("generate-css")

    assert result.exit_code == 0, result.output
    css = (tmp_path / "public" / "theme.css").read_text()
    assert "--primary-color: #dc2626;" in css


def test_generate_css_output_override(run, tmp_path):
    run("init-db")
    target = tmp_path / "elsewhere.css"

    result = run("generate-css", "--output", str(target))

    assert result.exit_code == 0, result.output
    assert target.exists()


def test_create_admin(run):
    run("init-db")

    result = run(
        "create-admin",
        "--email",
        "Boss@Example.com",
        "--password",
        "s3cret-pass",
        "--name",
        "Boss",
    )

    assert result.exit_code == 0, result.output
    assert "boss@example.com" in result.output


def test_create_admin_rejects_overlong_password(run):
    run("init-db")

    result = run("create-admin", "--email", "boss@example.com", "--password", "x" * 73)

    assert result.exit_code == 1
    assert "Error" in result.output


def test_bad_config_file(tmp_path):
    bad = tmp_path / "storefront.yaml"
    bad.write_text("auth:\n  unknown_key: 1\n")

    result = CliRunner().invoke(cli, ["--config", str(bad), "init-db"], obj={})

    assert result.exit_code == 1
    assert "Config error" in result.output

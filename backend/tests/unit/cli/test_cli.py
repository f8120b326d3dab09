"""``flask seed`` and ``flask keys`` commands."""

from __future__ import annotations

from click.testing import CliRunner
from sqlalchemy import func, select

from complaints.cli.keys import keys_cli
from complaints.core.keys import load_asymmetric_pair
from complaints.models import Department, Role, User


def test_seed_run_is_idempotent(app, session):
    app.config["SEED_ADMIN_PASSWORD"] = "Adm1nPassw0rd"
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed", "run"])
    second = runner.invoke(args=["seed", "run"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "existing= 1" in second.output
    assert session.scalar(select(func.count()).select_from(Role)) == 2
    assert session.scalar(select(func.count()).select_from(Department)) == 1
    admin = session.scalar(select(User).where(User.username == "admin"))
    assert admin.role.name == "ROLE_ADMIN"
    assert admin.verify_password("Adm1nPassw0rd")


def test_seed_run_needs_admin_password(app):
    app.config["SEED_ADMIN_PASSWORD"] = None

    result = app.test_cli_runner().invoke(args=["seed", "run"])

    assert result.exit_code != 0
    assert "SEED_ADMIN_PASSWORD" in result.output


def test_keys_generate_writes_matching_pair(tmp_path):
    out = tmp_path / "keys"

    result = CliRunner().invoke(keys_cli, ["generate", "--out", str(out)])

    assert result.exit_code == 0, result.output
    pair = load_asymmetric_pair(str(out / "private_key.pem"), str(out / "public_key.pem"))
    assert pair.algorithm == "RS256"


def test_keys_generate_refuses_to_overwrite(tmp_path):
    CliRunner().invoke(keys_cli, ["generate", "--out", str(tmp_path)])

    result = CliRunner().invoke(keys_cli, ["generate", "--out", str(tmp_path)])

    assert result.exit_code != 0
    assert "--force" in result.output

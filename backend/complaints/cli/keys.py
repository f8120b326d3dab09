"""``flask keys`` commands for RSA signing key management."""

from __future__ import annotations

from pathlib import Path

import click

from complaints.core.keys import generate_rsa_pair


@click.group("keys")
def keys_cli() -> None:
    """Signing key utilities."""


@keys_cli.command("generate")
@click.option(
    "--out",
    "out_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("keys"),
    show_default=True,
    help="Directory receiving private_key.pem and public_key.pem.",
)
@click.option("--bits", type=click.IntRange(min=2048), default=2048, show_default=True)
@click.option("--force", is_flag=True, help="Overwrite existing key files.")
def generate_command(out_dir: Path, bits: int, force: bool) -> None:
    """Write a fresh PKCS#8 private key and its X.509 public key."""
    private_path = out_dir / "private_key.pem"
    public_path = out_dir / "public_key.pem"
    existing = [p for p in (private_path, public_path) if p.exists()]
    if existing and not force:
        raise click.ClickException(
            f"{', '.join(str(p) for p in existing)} already exists; pass --force to overwrite"
        )

    private_pem, public_pem = generate_rsa_pair(bits)
    out_dir.mkdir(parents=True, exist_ok=True)
    private_path.write_bytes(private_pem)
    private_path.chmod(0o600)
    public_path.write_bytes(public_pem)
    click.echo(f"Wrote {private_path} and {public_path}")

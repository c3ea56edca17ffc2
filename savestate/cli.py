from __future__ import annotations

import json
from pathlib import Path

import typer

from .config import Settings
from .controller import SaveController
from .errors import SaveDecodeError, SaveError
from .logging import configure_logging
from .store.save_file import SaveFile
from .store.values import render, to_json

app = typer.Typer(help="Inspect and edit save files")


@app.callback()
def main(
    ctx: typer.Context,
    save_dir: Path | None = typer.Option(None, help="Directory holding the save file"),
    file_name: str | None = typer.Option(None, help="Save file name"),
    obscure: bool | None = typer.Option(
        None, "--obscure/--no-obscure", help="Whether the file is obscured"
    ),
    verbose: bool = typer.Option(False, help="Print effective settings"),
) -> None:
    """Select the save file the commands operate on."""
    configure_logging("DEBUG" if verbose else "WARNING")
    overrides: dict[str, object] = {}
    if save_dir is not None:
        overrides["save_dir"] = save_dir
    if file_name is not None:
        overrides["save_file_name"] = file_name
    if obscure is not None:
        overrides["obscure_save"] = obscure
    settings = Settings(**overrides)
    if verbose:
        typer.echo(settings.model_dump_json(indent=2), err=True)
    ctx.obj = settings


def _open(settings: Settings) -> SaveFile:
    store = SaveFile(settings.save_dir, obscure=settings.obscure_save)
    if not store.exists(settings.save_file_name):
        typer.echo(f"No save file at {settings.save_path}", err=True)
        raise typer.Exit(code=1)
    try:
        store.load(settings.save_file_name)
    except SaveDecodeError as exc:
        typer.echo(f"Corrupt save file ({exc.category.value}): {exc}", err=True)
        raise typer.Exit(code=2) from exc
    return store


@app.command()
def show(ctx: typer.Context) -> None:
    """Print all entries as JSON."""
    store = _open(ctx.obj)
    entries = {key: to_json(value) for key, value in store.snapshot().items()}
    typer.echo(json.dumps(entries, indent=2, sort_keys=True, ensure_ascii=False))


@app.command()
def get(ctx: typer.Context, key: str) -> None:
    """Print a single entry."""
    value = _open(ctx.obj).get(key)
    if value is None:
        typer.echo(f"{key}: not set", err=True)
        raise typer.Exit(code=1)
    typer.echo(render(value))


@app.command("set")
def set_(ctx: typer.Context, key: str, value: str) -> None:
    """Write an entry through the controller, stamping version and timestamp."""
    controller = SaveController(ctx.obj)
    try:
        controller.start()
        controller.set_value(key, value)
    except SaveError as exc:
        typer.echo(f"Save failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    typer.echo(f"{key} = {value}")


if __name__ == "__main__":  # pragma: no cover
    app()

"""Command-line entry point: ``passage-tui [CONFIG]``."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from .config import DEFAULT_CONFIG_PATH, load_config
from .errors import ConfigError

err_console = Console(stderr=True)


@click.command()
@click.argument("config", required=False, default=str(DEFAULT_CONFIG_PATH), type=click.Path(dir_okay=False))
def main(config: str) -> None:
    """Practice typing the passages listed in CONFIG (default ./config.toml)."""
    try:
        loaded = load_config(config)
    except ConfigError as exc:
        err_console.print(f"[red]error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    from .app import PassageTUI

    PassageTUI(loaded).run()


if __name__ == "__main__":
    main()

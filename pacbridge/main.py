"""
pacbridge — CLI entrypoint.

Usage:
    pacbridge -S curl
    pacbridge -Syu
    pacbridge -Qs py regex --using conda
    pacbridge -S curl -- --no-install-recommends
    python -m pacbridge.main --compat
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from pacbridge import __version__
from pacbridge.adapters.base import OPERATIONS
from pacbridge.adapters.registry import ManagerRegistry
from pacbridge.core.config.loader import Config, load_config
from pacbridge.core.context import get_terminal, set_terminal
from pacbridge.core.errors import PacbridgeError
from pacbridge.core.observability.logging_config import setup_from_flags
from pacbridge.core.use_cases.run import OPERATION_LETTERS, operation_name, run_operation, split_extra_flags

logger = logging.getLogger(__name__)

_COUNTED = ("c", "i", "y")
_MODIFIERS = ("c", "e", "g", "i", "k", "l", "m", "n", "o", "p", "s", "u", "w", "y")


def _print_compat(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print the manager × operation table and exit."""
    if not value or ctx.resilient_parsing:
        return
    registry = (ctx.obj or {}).get("registry") or ManagerRegistry()
    table = registry.compat_table()
    width = max(len(name) for name in table)
    click.secho(" " * width + " " + " ".join(f"{op:>4}" for op in OPERATIONS), bold=True)
    for name, ops in table.items():
        cells = " ".join(f"{'*' if op in ops else '':>4}" for op in OPERATIONS)
        click.echo(f"{name:<{width}} {cells}")
    ctx.exit(0)


def _modifier_options(fn):
    """Attach one short option per pacman modifier letter."""
    for letter in reversed(_MODIFIERS):
        if letter in _COUNTED:
            opt = click.option(f"-{letter}", f"mod_{letter}", count=True, help=f"Modifier -{letter} (repeatable).")
        else:
            opt = click.option(f"-{letter}", f"mod_{letter}", is_flag=True, help=f"Modifier -{letter}.")
        fn = opt(fn)
    return fn


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="pacbridge")
@click.option("-Q", "--query", "op_q", is_flag=True, help="Query the installed packages.")
@click.option("-R", "--remove", "op_r", is_flag=True, help="Remove packages.")
@click.option("-S", "--sync", "op_s", is_flag=True, help="Install / sync packages.")
@click.option("-U", "--upgrade", "op_u", is_flag=True, help="Upgrade or add local package files.")
@_modifier_options
@click.option("--using", "--pm", "using", default=None, help="Package manager to use (default: detect).")
@click.option("--dry-run", "--dryrun", "dry_run", is_flag=True, help="Print commands instead of running them.")
@click.option("--yes", "--noconfirm", "--no-confirm", "no_confirm", is_flag=True, help="Answer yes to every prompt.")
@click.option("--needed", is_flag=True, help="Do not reinstall up-to-date packages.")
@click.option("--no-cache", "--nocache", "no_cache", is_flag=True, help="Clean the package cache after installing.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to config.yml (default: $PACBRIDGE_CONFIG or ~/.config/pacbridge/config.yml).",
)
@click.option(
    "--compat",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_print_compat,
    help="Show which operations each package manager supports.",
)
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.argument("keywords", nargs=-1)
@click.pass_context
def cli(
    ctx: click.Context,
    op_q: bool,
    op_r: bool,
    op_s: bool,
    op_u: bool,
    using: str | None,
    dry_run: bool,
    no_confirm: bool,
    needed: bool,
    no_cache: bool,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
    keywords: tuple[str, ...],
    **modifiers: int,
) -> None:
    """pacman-style commands for whatever package manager is installed."""
    ctx.ensure_object(dict)

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_flags(debug=debug, verbose=verbose, quiet=quiet)

    extra_flags: list[str] = list(ctx.obj.get("extra_flags", []))
    registry: ManagerRegistry = ctx.obj.get("registry") or ManagerRegistry()
    if ctx.obj.get("terminal") is not None:
        set_terminal(ctx.obj["terminal"])

    try:
        selected = [
            letter for letter, on in zip(OPERATION_LETTERS, (op_q, op_r, op_s, op_u)) if on
        ]
        counts = {name.removeprefix("mod_"): int(value) for name, value in modifiers.items()}
        op = operation_name(selected, counts)

        cli_cfg = Config(
            default_pm=using,
            dry_run=dry_run,
            no_confirm=no_confirm,
            needed=needed,
            no_cache=no_cache,
        )
        cfg = cli_cfg.join(load_config(Path(config_path) if config_path else None))
        logger.debug("Effective config: %s", cfg.model_dump())

        pm = registry.create(cfg, executor=ctx.obj.get("executor"), terminal=get_terminal())
        run_operation(pm, op, keywords, extra_flags)
    except PacbridgeError as e:
        logger.debug("Command failed", exc_info=True)
        click.secho(f"error: {e}", fg="red", err=True)
        sys.exit(e.exit_code)


def main(argv: list[str] | None = None) -> None:
    """Console-script entrypoint: everything after ``--`` goes to the tool."""
    args, extra = split_extra_flags(sys.argv[1:] if argv is None else argv)
    cli.main(args=args, obj={"extra_flags": extra}, prog_name="pacbridge")


if __name__ == "__main__":
    main()

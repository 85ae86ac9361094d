import logging
from pathlib import Path

import click
import tomli

from .daemon.controller import ProcessDaemonController
from .stop import run_stop
from .utils.config import (
    DEFAULT_PORT,
    PROGRAM_NAME,
    StopOptions,
    get_config_path,
    get_log_dir,
    load_config,
)


def setup_logging(config: dict) -> None:
    logging_config = config.get("logging", {})
    level = str(logging_config.get("level", "info")).upper()
    if level not in logging.getLevelNamesMapping():
        raise click.ClickException(f"Invalid config {get_config_path()}: unknown log level {level.lower()!r}")

    if not logging_config.get("file", True):
        logging.getLogger().addHandler(logging.NullHandler())
        return

    log_dir = get_log_dir()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / "passenger.log")
    except OSError:
        # Unwritable cache dir: run without a log file
        logging.getLogger().addHandler(logging.NullHandler())
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
    )


@click.group(
    help=f"Control {PROGRAM_NAME} Standalone instances.",
    context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 120},
)
@click.pass_context
def cli(ctx):
    ctx.ensure_object(dict)
    ctx.obj.setdefault("controller_factory", ProcessDaemonController)
    try:
        config = load_config()
    except tomli.TOMLDecodeError as e:
        raise click.ClickException(f"Invalid config {get_config_path()}: {e}")
    setup_logging(config)


@cli.command("stop")
@click.option(
    "-p", "--port", type=click.IntRange(min=1), default=DEFAULT_PORT, show_default=True,
    help=f"The port number of the {PROGRAM_NAME} instance",
)
@click.option(
    "--pid-file", type=click.Path(path_type=Path),
    help=f"PID file of the running {PROGRAM_NAME} Standalone instance",
)
@click.option(
    "-i", "--ignore-pid-not-found", is_flag=True,
    help="Don't abort with an error if PID file cannot be found",
)
@click.pass_context
def stop(ctx, port, pid_file, ignore_pid_not_found):
    """Stops a running Standalone instance.

    Without --pid-file, looks for passenger.PORT.pid in tmp/pids and then in
    the current directory.

    \b
    Examples:
      passenger stop
      passenger stop -p 4000
      passenger stop --pid-file /var/run/passenger.pid -i
    """
    options = StopOptions(
        port=port,
        pid_file=pid_file,
        ignore_pid_not_found=ignore_pid_not_found,
    )
    result = run_stop(options, ctx.obj["controller_factory"])
    if result.message:
        click.echo(result.message, err=True)
    ctx.exit(result.exit_code)


@cli.command()
@click.pass_context
def config(ctx):
    """Print config file location and contents."""
    config_path = get_config_path()
    click.echo(f"Config file: {config_path}")
    click.echo()

    if config_path.exists():
        click.echo(config_path.read_text())
    else:
        click.echo("(file does not exist, using defaults)")


if __name__ == "__main__":
    cli()

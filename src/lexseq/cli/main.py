"""lexseq CLI entry point."""

from __future__ import annotations

import itertools
from pathlib import Path

import click
from pydantic import ValidationError

from lexseq.core.codec import encode
from lexseq.core.models import SequenceConfig


class _Settings:
    def __init__(self, config: SequenceConfig, project_dir: Path) -> None:
        self.config = config
        self.engine = config.make_sequence()
        self.project_dir = project_dir

    def render(self, value: int) -> str:
        return encode(value, self.config.base, self.config.symbols)


pass_settings = click.make_pass_decorator(_Settings)


@click.group()
@click.version_option(package_name="lexseq")
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path.cwd,
    help="Project root directory.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: <project-dir>/.lexseq/config.yaml).",
)
@click.option("--base", type=int, default=None, help="Sequence base (even, >= 4).")
@click.option("--alphabet", default=None, help="Digit symbols in ascending code-point order.")
@click.option("--json-logs", is_flag=True, default=False, help="Output logs as JSON.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Log level.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    project_dir: Path,
    config_path: Path | None,
    base: int | None,
    alphabet: str | None,
    json_logs: bool,
    log_level: str,
) -> None:
    """lexseq — sortable, prefix-free sequence IDs from the command line."""
    from lexseq.core.config import default_config_path, load_config, make_sequence_config
    from lexseq.core.logging import configure_logging

    configure_logging(json_output=json_logs, level=log_level)

    project_dir = project_dir.resolve()
    path = config_path if config_path is not None else default_config_path(project_dir)
    try:
        config = make_sequence_config(load_config(path), base=base, alphabet=alphabet)
    except ValidationError as exc:
        raise click.UsageError(_first_error(exc)) from exc

    ctx.obj = _Settings(config, project_dir)


@cli.command()
@click.argument("indexes", type=click.IntRange(min=0), nargs=-1, required=True)
@pass_settings
def sequence(settings: _Settings, indexes: tuple[int, ...]) -> None:
    """Print the sequence member at each INDEX."""
    for index in indexes:
        value = settings.engine.sequence(index)
        click.echo(f"{index}\t{value}\t{settings.render(value)}")


@cli.command(name="list")
@click.option("--start", type=click.IntRange(min=0), default=0, help="First index.")
@click.option("--count", type=click.IntRange(min=1), default=10, help="Number of members.")
@pass_settings
def list_(settings: _Settings, start: int, count: int) -> None:
    """Print consecutive sequence members."""
    from lexseq.core.ids import iter_values

    values = itertools.islice(iter_values(settings.engine, start), count)
    for index, value in enumerate(values, start=start):
        click.echo(f"{index}\t{value}\t{settings.render(value)}")


@cli.command()
@click.argument("values", nargs=-1, required=True)
@click.option("--encoded", is_flag=True, default=False, help="Values are encoded strings.")
@pass_settings
def inverse(settings: _Settings, values: tuple[str, ...], encoded: bool) -> None:
    """Print the sequence index of each VALUE.

    Exits with status 1 at the first value that is not a member.
    """
    from lexseq.core.errors import NotAMember

    for raw in values:
        index = _lookup(settings, raw, encoded)
        if index == -1:
            raise click.ClickException(str(NotAMember(raw, settings.config.base)))
        click.echo(f"{raw}\t{index}")


@cli.command()
@click.argument("values", nargs=-1, required=True)
@click.option("--encoded", is_flag=True, default=False, help="Values are encoded strings.")
@pass_settings
def check(settings: _Settings, values: tuple[str, ...], encoded: bool) -> None:
    """Report whether each VALUE is a sequence member."""
    for raw in values:
        index = _lookup(settings, raw, encoded)
        if index == -1:
            click.echo(f"{raw}\tnot a member")
        else:
            click.echo(f"{raw}\tmember\t{index}")


@cli.command(name="next-id")
@click.argument("prefix")
@click.option("--count", type=click.IntRange(min=1), default=1, help="Number of IDs to issue.")
@pass_settings
def next_id(settings: _Settings, prefix: str, count: int) -> None:
    """Issue the next COUNT IDs for PREFIX, persisting the counter."""
    import anyio

    from lexseq.core.config import CONFIG_DIR
    from lexseq.core.ids import IdGenerator
    from lexseq.core.state import StateStore

    store = StateStore(settings.project_dir / CONFIG_DIR)

    async def _issue() -> list[str]:
        async with store.locked():
            state = await store.load_ids()
            gen = IdGenerator(state, settings.config)
            ids = [gen.next_id(prefix) for _ in range(count)]
            await store.save_ids(state)
        return ids

    for id_ in anyio.run(_issue):
        click.echo(id_)


@cli.command()
@pass_settings
def reset(settings: _Settings) -> None:
    """Clear all persisted ID counters."""
    import anyio

    from lexseq.core.config import CONFIG_DIR
    from lexseq.core.state import StateStore

    store = StateStore(settings.project_dir / CONFIG_DIR)

    async def _clear() -> int:
        async with store.locked():
            return await store.clear()

    removed = anyio.run(_clear)
    click.echo(f"Cleared {removed} state files.")


def _lookup(settings: _Settings, raw: str, encoded: bool) -> int:
    """Return the index of *raw*, or -1 if it is not a member."""
    from lexseq.core.ids import encoded_index

    try:
        if encoded:
            return encoded_index(settings.engine, raw, settings.config.symbols)
        return settings.engine.sequence_inv_safe(int(raw))
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="VALUES") from exc


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    err = errors[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err['msg']}" if loc else err["msg"]

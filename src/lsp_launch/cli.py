import logging
from pathlib import Path

import click

from lsp_launch.config import StoreConfig
from lsp_launch.definitions import (
    ARGS,
    COMMAND,
    EXTENSION,
    MAIN_CLASS,
    PACKAGE,
    PATH,
    LaunchDefinition,
    VariantTag,
    normalize_extension,
    to_array,
    to_record,
)
from lsp_launch.editing import SettingsSession
from lsp_launch.storage import DefinitionStore, StoreError

TAG_CHOICES = [tag.value for tag in VariantTag]


def _describe(definition: LaunchDefinition) -> str:
    _, *values = to_array(definition)
    extension, *rest = values
    details = " | ".join(value for value in rest if value)
    return f"{extension}\t{definition.tag.value}\t{details}"


def _open_session(store: DefinitionStore) -> SettingsSession:
    try:
        baseline = store.load()
    except StoreError as e:
        raise click.ClickException(str(e)) from e
    session = SettingsSession(baseline, notify=click.echo)
    session.reset()
    return session


def _commit(store: DefinitionStore, session: SettingsSession) -> None:
    if not session.is_modified():
        click.echo("No changes.")
        return
    session.commit()
    try:
        store.save(session.baseline)
    except StoreError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding servers.yaml (default: LSP_LAUNCH_CONFIG_DIR or user config dir)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config_dir: Path | None, verbose: bool) -> None:
    """Manage which language server is launched for each file extension."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    try:
        config = StoreConfig(config_dir) if config_dir else StoreConfig.from_env()
    except RuntimeError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj = DefinitionStore.from_config(config)


@main.command("list")
@click.pass_obj
def list_command(store: DefinitionStore) -> None:
    """List configured servers."""
    session = _open_session(store)
    if not session.baseline:
        click.echo("No servers configured.")
        return
    for definition in session.baseline:
        click.echo(_describe(definition))


@main.command()
@click.argument("extension")
@click.pass_obj
def show(store: DefinitionStore, extension: str) -> None:
    """Show the server configured for EXTENSION."""
    session = _open_session(store)
    definition = session.baseline.get(extension)
    if definition is None:
        raise click.ClickException(f"No server configured for '{normalize_extension(extension)}'")
    click.echo(f"extension: {definition.extension}")
    for key, value in to_record(definition).items():
        if isinstance(value, list):
            value = " ".join(value)
        click.echo(f"{key}: {value}")


@main.command("set")
@click.argument("extension")
@click.option(
    "--type",
    "tag",
    type=click.Choice(TAG_CHOICES),
    default=None,
    help="Launch strategy (new servers default to Artifact; existing ones keep theirs)",
)
@click.option("--package", default=None, help="Artifact coordinate (Artifact)")
@click.option("--main-class", default=None, help="Main class to run (Artifact)")
@click.option("--path", default=None, help="Executable path (Executable)")
@click.option("--args", default=None, help="Arguments as a shell-quoted string")
@click.option("--command", default=None, help="Full command line (RawCommand)")
@click.pass_obj
def set_command(
    store: DefinitionStore,
    extension: str,
    tag: str | None,
    package: str | None,
    main_class: str | None,
    path: str | None,
    args: str | None,
    command: str | None,
) -> None:
    """Add or update the server for EXTENSION.

    Without --type an existing server keeps its launch strategy.
    """
    session = _open_session(store)
    index = session.entries.index_of(extension)
    if index is None:
        index = session.append(tag or VariantTag.ARTIFACT.value, {EXTENSION: extension})
    elif tag is not None and session.entries.tag_at(index) != tag:
        session.retype(index, tag)
    current = session.entries.tag_at(index) if index is not None else None
    if index is None or current is None:
        raise click.ClickException(f"Could not edit the server for '{extension}'")

    updates = {
        PACKAGE: package,
        MAIN_CLASS: main_class,
        PATH: path,
        ARGS: args,
        COMMAND: command,
    }
    for name, value in updates.items():
        if value is None:
            continue
        if not session.set_field(index, name, value):
            raise click.BadParameter(
                f"'{name}' does not apply to {current.value} servers",
                param_hint=f"--{name.replace('_', '-')}",
            )

    if session.entries[index].compose() is None:
        raise click.ClickException("Invalid server definition (check quoting in arguments)")
    _commit(store, session)


@main.command()
@click.argument("extension")
@click.argument("tag", type=click.Choice(TAG_CHOICES))
@click.pass_obj
def retype(store: DefinitionStore, extension: str, tag: str) -> None:
    """Switch EXTENSION to another launch strategy, keeping shared fields."""
    session = _open_session(store)
    index = session.entries.index_of(extension)
    if index is None:
        raise click.ClickException(f"No server configured for '{normalize_extension(extension)}'")
    session.retype(index, tag)
    _commit(store, session)


@main.command()
@click.argument("extension")
@click.pass_obj
def remove(store: DefinitionStore, extension: str) -> None:
    """Remove the server configured for EXTENSION."""
    session = _open_session(store)
    index = session.entries.index_of(extension)
    if index is None:
        raise click.ClickException(f"No server configured for '{normalize_extension(extension)}'")
    session.remove_at(index)
    _commit(store, session)


if __name__ == "__main__":
    main()

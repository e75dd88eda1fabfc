import json
import logging
import os
import sys
from dataclasses import asdict

import click

from .config import load_options
from .errors import DataLoadError
from .loader import DataLoader
from .project import DEFAULT_SOURCE, Project


def _read_working_set(ctx: click.Context, files_path: str | None) -> dict:
    import yaml

    if files_path:
        with open(files_path, "r", encoding="utf-8") as fh:
            raw = fh.read()
        origin = files_path
    else:
        if sys.stdin.isatty():
            click.echo(ctx.get_help())
            ctx.exit(1)
        raw = sys.stdin.read()
        origin = "stdin"
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML on {origin}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.ClickException(
            "Working set must be a mapping of document paths to metadata"
        )
    return data


def _dump(data, fmt: str) -> str:
    if fmt == "yaml":
        import yaml

        class _NoAliasDumper(yaml.SafeDumper):
            # shared loads would otherwise be written as anchors
            def ignore_aliases(self, data):
                return True

        return yaml.dump(
            data, Dumper=_NoAliasDumper, sort_keys=False, allow_unicode=True
        ).rstrip("\n")
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _collect_options(config_path, **overrides):
    try:
        return load_options(config_path, **overrides)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug)")
@click.pass_context
def cli(ctx, verbose):
    """
    sitedata - load JSON/YAML data files into document metadata
    """
    ctx.ensure_object(dict)
    if verbose:
        level = logging.DEBUG if verbose > 1 else logging.INFO
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


_option_flags = [
    click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False),
        help="YAML config file (default: $XDG_CONFIG_HOME/sitedata/config.yaml)",
    ),
    click.option("--data-property", help="Metadata field holding references (default: data)"),
    click.option("--models", help="Directory for !-prefixed references (default: models/)"),
    click.option("--match", help="Glob selecting candidate documents (default: **/*)"),
    click.option("--dot", is_flag=True, help="Let wildcards match dotfiles"),
    click.option("--nocase", is_flag=True, help="Match case-insensitively"),
    click.option(
        "--remove-source",
        is_flag=True,
        help="Drop referenced documents from the working set",
    ),
    click.option(
        "--ignore-read-failure",
        is_flag=True,
        help="Leave references unresolved when their file cannot be loaded",
    ),
]


def _loader_options(func):
    for decorator in reversed(_option_flags):
        func = decorator(func)
    return func


def _match_options(dot, nocase):
    match_options = {}
    if dot:
        match_options["dot"] = True
    if nocase:
        match_options["nocase"] = True
    return match_options or None


@cli.command("resolve")
@click.argument(
    "files_path",
    required=False,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(file_okay=False),
    help="Project directory (default: current directory)",
)
@click.option("--source", default=DEFAULT_SOURCE, help="Source tree, relative to the project")
@_loader_options
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format (default: json)",
)
@click.pass_context
def resolve_cmd(
    ctx,
    files_path,
    directory,
    source,
    config_path,
    data_property,
    models,
    match,
    dot,
    nocase,
    remove_source,
    ignore_read_failure,
    output_format,
):
    """
    Resolve data references in a working set read from FILES_PATH or stdin.
    """
    options = _collect_options(
        config_path,
        data_property=data_property,
        directory=models,
        match=match,
        match_options=_match_options(dot, nocase),
        remove_source=remove_source or None,
        ignore_read_failure=ignore_read_failure or None,
    )
    files = _read_working_set(ctx, files_path)
    project = Project(directory=os.path.abspath(directory or os.getcwd()), source=source)
    try:
        result = DataLoader(options).run(files, project)
    except DataLoadError as exc:
        raise click.ClickException(str(exc)) from exc
    for skipped in result.skipped:
        click.echo(f"skipped: {skipped}", err=True)
    click.echo(_dump(files, output_format.lower()))


@cli.command("options")
@_loader_options
def options_cmd(
    config_path,
    data_property,
    models,
    match,
    dot,
    nocase,
    remove_source,
    ignore_read_failure,
):
    """
    Print the effective loader options.
    """
    options = _collect_options(
        config_path,
        data_property=data_property,
        directory=models,
        match=match,
        match_options=_match_options(dot, nocase),
        remove_source=remove_source or None,
        ignore_read_failure=ignore_read_failure or None,
    )
    click.echo(json.dumps(asdict(options), indent=2))


def main():
    cli()


if __name__ == "__main__":
    main()

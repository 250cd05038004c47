from pathlib import Path
from typing import Optional

import typer

from gospec import __version__
from gospec.cli.config import CLIConfig
from gospec.cli.output import echo, get_console, print_error, print_json, print_table
from gospec.config import NAMING_CONVENTIONS, GospecConfig, parse_ignore_list
from gospec.exceptions import GospecError
from gospec.logging_config import logger, reset_logging, setup_logging
from gospec.pipeline import generate as run_generation
from gospec.scanner import discover_packages
from gospec.swagger import definition_names, to_json

app = typer.Typer(help="Generate Swagger 2.0 documents from annotated Go source.")
console = get_console()


# Global CLI callback for flags that apply to all commands
@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: tables and colors (also via GOSPEC_HUMAN_MODE env var)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log pipeline progress to stderr at DEBUG level.",
    ),
):
    """
    gospec: Swagger documents from Go comment annotations.

    Machine mode is the default (plain output, no console logging).
    Use --human/-H for pretty output.
    """
    CLIConfig.set_machine_mode(False if human else None)
    CLIConfig.set_verbose(verbose)

    reset_logging()
    setup_logging(
        level="DEBUG" if verbose else "INFO",
        suppress_console=CLIConfig.is_machine_mode() and not verbose,
    )


def _validate_naming(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in NAMING_CONVENTIONS:
        raise typer.BadParameter(f"must be one of: {', '.join(NAMING_CONVENTIONS)}")
    return value


def _build_config(module: Optional[str], naming: Optional[str], ignore: Optional[str]) -> GospecConfig:
    return GospecConfig().with_overrides(
        module_path=module,
        naming=naming,
        ignored_packages=parse_ignore_list(ignore),
    )


DirectoryArgument = typer.Argument(
    ..., help="Root of the Go source tree.", exists=True, file_okay=False, readable=True
)
ModuleOption = typer.Option(
    None, "--module", "-m", help="Module path of the tree (default: read from go.mod)."
)
NamingOption = typer.Option(
    None, "--naming", "-n", help="Definition naming: full, partial or simple.", callback=_validate_naming
)
IgnoreOption = typer.Option(
    None, "--ignore", "-i", help="Comma separated import paths to skip; 'path/...' skips sub-packages too."
)


@app.command()
def version():
    """
    Prints the current version of gospec.
    """
    echo(f"gospec v{__version__}")


@app.command()
def generate(
    directory: Path = DirectoryArgument,
    module: Optional[str] = ModuleOption,
    naming: Optional[str] = NamingOption,
    ignore: Optional[str] = IgnoreOption,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the document to this file instead of stdout.", dir_okay=False
    ),
):
    """
    Scrapes annotations, resolves every referenced type and prints the Swagger document.
    """
    try:
        result = run_generation(directory, _build_config(module, naming, ignore))
    except GospecError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    text = to_json(result.document)
    if output is None:
        echo(text)
        return

    output.write_text(text + "\n", encoding="utf-8")
    logger.info(f"Wrote Swagger document to '{output}'")
    if CLIConfig.is_machine_mode() and not CLIConfig.is_verbose():
        return
    console.print(
        f"Wrote [bold green]{len(result.document['paths'])}[/bold green] paths and "
        f"[bold green]{len(result.document['definitions'])}[/bold green] definitions to [bold]{output}[/bold]."
    )


@app.command()
def definitions(
    directory: Path = DirectoryArgument,
    module: Optional[str] = ModuleOption,
    naming: Optional[str] = NamingOption,
    ignore: Optional[str] = IgnoreOption,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Lists the definitions resolved from the annotated operations.
    """
    try:
        config = _build_config(module, naming, ignore)
        result = run_generation(directory, config)
    except GospecError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    records = result.store.records()
    names = definition_names(records, config.naming)

    if json_output:
        print_json([
            {"definition_name": names[record.key], **record.model_dump()}
            for record in records
        ])
        return

    rows = []
    for record in records:
        if record.underlying is None:
            shape = f"struct ({len(record.members)} members)"
        else:
            shape = record.underlying
        enum = ", ".join(str(value) for value in record.enum_values) if record.enum_values else ""
        rows.append((names[record.key], record.package_path, shape, enum))

    print_table(f"Definitions in '{directory}'", ["Definition", "Package", "Shape", "Enum"], rows)


@app.command()
def packages(
    directory: Path = DirectoryArgument,
    module: Optional[str] = ModuleOption,
    ignore: Optional[str] = IgnoreOption,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Shows the package index of a Go source tree.
    """
    try:
        config = _build_config(module, None, ignore)
        index = discover_packages(directory, module_path=config.module_path, ignored_packages=config.ignored_packages)
    except GospecError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if json_output:
        print_json({
            "module_path": index.module_path,
            "packages": [index.package_info(path).model_dump() for path in index.import_paths()],
        })
        return

    rows = []
    for path in index.import_paths():
        info = index.package_info(path)
        imports = ", ".join(
            f"{', '.join(aliases) or '_'}={imported}" for imported, aliases in info.imports.items()
        )
        rows.append((path, info.name, len(info.files), imports))

    print_table(f"Packages of '{index.module_path}'", ["Import Path", "Name", "Files", "Imports"], rows)


if __name__ == "__main__":
    app()

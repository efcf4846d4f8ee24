"""Command line interface for profiling record files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
import yaml

from tabprofile.assistant import build_dataset_context, execute_query
from tabprofile.config import get_settings
from tabprofile.errors import TabprofileError
from tabprofile.insights import synthesize_insights
from tabprofile.profiling import profile_dataset

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tabprofile",
    help="Profile tabular datasets: column types, statistics, correlations and insights.",
    no_args_is_help=True,
)

RecordsArg = Annotated[
    Path,
    typer.Argument(
        help="JSON or YAML file holding a list of records",
        exists=True,
        dir_okay=False,
        file_okay=True,
        resolve_path=True,
    ),
]

JsonFlag = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON instead of YAML"),
]


def load_records(path: Path) -> list[dict[str, Any]]:
    """Load a list of records from a JSON or YAML file.

    Raises:
        ValueError: If the file does not hold a list of objects

    """
    with path.open(encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        msg = f"{path} must contain a list of records"
        raise ValueError(msg)
    return data


def _emit(payload: Any, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        typer.echo(
            yaml.safe_dump(
                payload, default_flow_style=False, allow_unicode=True, sort_keys=False
            ),
            nl=False,
        )


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def configure() -> None:
    """Set up logging from the environment."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def profile(path: RecordsArg, json_output: JsonFlag = False) -> None:
    """Print column types, summary statistics, missing values and correlations."""
    try:
        result = profile_dataset(load_records(path))
    except (TabprofileError, ValueError) as e:
        _fail(e)
    _emit(result.model_dump(mode="json"), json_output)


@app.command()
def insights(path: RecordsArg, json_output: JsonFlag = False) -> None:
    """Print the quality score, key findings and recommendations."""
    try:
        records = load_records(path)
        result = synthesize_insights(profile_dataset(records), records)
    except (TabprofileError, ValueError) as e:
        _fail(e)
    _emit(result.model_dump(mode="json"), json_output)


@app.command()
def query(
    path: RecordsArg,
    query_type: Annotated[
        str,
        typer.Argument(
            help="statistics, correlation, missing_values, sample_data or count"
        ),
    ],
    json_output: JsonFlag = False,
) -> None:
    """Answer one of the assistant's canned queries."""
    try:
        records = load_records(path)
        context = build_dataset_context(
            dataset_id=path.stem,
            file_name=path.name,
            dataset=records,
            profile=profile_dataset(records),
            sample_rows=get_settings().context_sample_rows,
        )
    except (TabprofileError, ValueError) as e:
        _fail(e)
    result = execute_query(query_type, context)
    _emit(result.model_dump(mode="json"), json_output)
    if result.type == "error":
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

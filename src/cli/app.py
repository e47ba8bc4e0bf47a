"""Main application setup for the esarrow CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, CycloptsError, Parameter
from cyclopts.config import Toml

from cli.commands.convert import convert_command
from cli.commands.demo import demo_command
from cli.commands.generate import generate_command
from cli.commands.schema import schema_command
from cli.commands.version import get_version, version_command
from cli.exit_codes import ExitCode
from cli.groups import session_group
from columnar.documents import DocumentDecodeError
from mapping_spec.loader import MappingError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HELP_EPILOGUE = """
Examples:
  esarrow convert mapping.json docs.jsonl -o out.parquet   Convert documents to Parquet
  esarrow schema mapping.json --documents docs.jsonl       Show baseline and adjusted schemas
  esarrow generate mapping.json -n 100 -o docs.jsonl       Generate synthetic documents
  esarrow demo                                             Run the built-in sample

Environment Variables:
  ESARROW_LOG_LEVEL         Default log level (DEBUG, INFO, WARNING, ERROR)
  ESARROW_WRITE_PROFILE     Parquet write profile (DEFAULT, COMPACT, NONE)
  ESARROW_SAMPLE_SIZE       Documents used for schema reconciliation
  ESARROW_LIST_PROBABILITY  Chance of list-wrapping generated values
  ESARROW_SEED              Seed for document generation
"""

app = App(
    name="esarrow",
    help="Convert search-index mappings and documents into Arrow batches and Parquet.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action="print_non_int_return_int_as_exit_code",
    config=[
        Toml("esarrow.toml", must_exist=False, search_parents=True),
        Toml(
            "pyproject.toml",
            root_keys=("tool", "esarrow"),
            must_exist=False,
            search_parents=True,
        ),
    ],
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to a TOML configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="ESARROW_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for logging and config selection.

    Returns
    -------
    int
        Exit status code from command execution.

    Raises
    ------
    ValueError
        Raised when the log level or config path is invalid.
    """
    if session.log_level not in LOG_LEVELS:
        msg = f"Unsupported log level {session.log_level!r}."
        raise ValueError(msg)
    logging.basicConfig(level=session.log_level, format=LOG_FORMAT)

    if session.config_file is not None:
        config_path = Path(session.config_file)
        if not config_path.exists():
            msg = f"Config file not found: {session.config_file!r}."
            raise ValueError(msg)
        app.config = [Toml(config_path, must_exist=True)]

    return invoke(app, list(tokens))


def invoke(target: App, tokens: list[str]) -> int:
    """Parse ``tokens`` against ``target`` and run the selected command.

    Returns
    -------
    int
        Exit status code.
    """
    overrides: dict[str, object] = {"print_error": True, "exit_on_error": False}
    with target.app_stack(tokens, overrides):
        try:
            command, bound, _ignored = target.parse_args(
                tokens,
                exit_on_error=False,
                print_error=True,
            )
        except CycloptsError as exc:
            return ExitCode.from_exception(exc)
        try:
            result = command(*bound.args, **bound.kwargs)
        except (MappingError, DocumentDecodeError, KeyError, OSError, ValueError) as exc:
            logger.error("%s failed: %s", getattr(command, "__name__", "command"), exc)
            return ExitCode.from_exception(exc)
    return ExitCode.from_result(result)


app.command(convert_command, name="convert", alias="c")
app.command(schema_command, name="schema", alias="s")
app.command(generate_command, name="generate", alias="g")
app.command(demo_command, name="demo")
app.command(version_command, name="version", alias="v")


def main() -> None:
    """Run the esarrow CLI."""
    sys.exit(app.meta())


__all__ = ["app", "invoke", "main"]

import json
import math
from collections.abc import Iterator
from pathlib import Path
from typing import Annotated

import srsly
import typer
from pydantic import ValidationError

from bezierclip.interval.core import Interval
from bezierclip.interval.models import (
    IntervalRecord,
    Operation,
    apply_operation,
)

app = typer.Typer(help="Closed-interval arithmetic for curve clipping.")
_NON_FINITE_TOKENS = frozenset(
    {
        "nan",
        "+nan",
        "-nan",
        "inf",
        "+inf",
        "-inf",
        "infinity",
        "+infinity",
        "-infinity",
    }
)


class _RowError(Exception):
    def __init__(self, *, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(reason)


def _parse_number(token: str, value: str) -> float:
    stripped = token.strip()
    if not stripped:
        raise typer.BadParameter(f"Invalid number list '{value}': empty item")
    if stripped.lower() in _NON_FINITE_TOKENS:
        raise typer.BadParameter(
            f"Invalid number '{stripped}': non-finite numbers are not allowed"
        )
    try:
        number = float(stripped)
    except ValueError as err:
        raise typer.BadParameter(f"Invalid number '{stripped}'") from err
    if not math.isfinite(number):
        raise typer.BadParameter(
            f"Invalid number '{stripped}': overflows to infinity"
        )
    return number


def _parse_values(value: str) -> list[float]:
    """Parse 'a,b,c' into floats. Raises typer.BadParameter on bad input."""
    return [_parse_number(token, value) for token in value.split(",")]


def _parse_interval(value: str) -> Interval:
    """Parse 'lo,hi' into an Interval. Raises typer.BadParameter."""
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(
            f"Invalid interval '{value}': expected 'LO,HI' (e.g., '1,2.5')"
        )
    lo = _parse_number(parts[0], value)
    hi = _parse_number(parts[1], value)
    try:
        record = IntervalRecord(lo=lo, hi=hi)
    except ValidationError as err:
        raise typer.BadParameter(
            f"Invalid interval '{value}': low must be <= high"
        ) from err
    return record.to_interval()


def _dump_interval(interval: Interval) -> str:
    return srsly.json_dumps(IntervalRecord.from_interval(interval).model_dump())


def _iter_validated_records(input_file: Path) -> Iterator[IntervalRecord]:
    with input_file.open("rb") as input_handle:
        for line_number, raw_line in enumerate(input_handle, start=1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as err:
                raise _RowError(
                    line_number=line_number,
                    reason=f"invalid UTF-8 ({err.reason})",
                ) from err
            stripped = line.strip()
            if not stripped:
                continue
            try:
                raw = json.loads(stripped)
            except json.JSONDecodeError as err:
                raise _RowError(
                    line_number=line_number,
                    reason=f"malformed JSON ({err.msg})",
                ) from err
            try:
                yield IntervalRecord.model_validate(raw)
            except ValidationError as err:
                first_error = err.errors(include_url=False)[0]
                loc = ".".join(str(item) for item in first_error["loc"])
                message = first_error["msg"]
                where = f" at '{loc}'" if loc else ""
                raise _RowError(
                    line_number=line_number,
                    reason=f"invalid interval row{where}: {message}",
                ) from err


def _render_row_error(input_file: Path, error: _RowError) -> str:
    return (
        f"Error: invalid JSONL row in {input_file} at line "
        f"{error.line_number}: {error.reason}"
    )


@app.command(name="hull")
def hull_values(
    values: Annotated[
        str, typer.Argument(help="Comma-separated numbers, e.g. '3,1,2'")
    ],
) -> None:
    """Print the smallest interval holding all VALUES."""
    interval = Interval.from_array(_parse_values(values))
    typer.echo(_dump_interval(interval))


@app.command()
def combine(
    left: Annotated[str, typer.Argument(help="Left interval as 'LO,HI'")],
    right: Annotated[str, typer.Argument(help="Right interval as 'LO,HI'")],
    op: Annotated[
        Operation,
        typer.Option(
            "--op", help="add, subtract, multiply, unify, or intersect"
        ),
    ] = Operation.UNIFY,
) -> None:
    """Combine two intervals and print the result (null if disjoint)."""
    result = apply_operation(op, _parse_interval(left), _parse_interval(right))
    if result is None:
        typer.echo("null")
        return
    try:
        typer.echo(_dump_interval(result))
    except ValueError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err


@app.command()
def info(
    input_file: Annotated[Path, typer.Argument(help="Input JSONL file")],
) -> None:
    """Show row count, empty rows and hull of an intervals file."""
    try:
        total = 0
        n_empty = 0
        span = Interval()
        for record in _iter_validated_records(input_file):
            total += 1
            if record.is_empty:
                n_empty += 1
            span.union_with(record.to_interval())

        typer.echo(f"{input_file}: {total} intervals")
        typer.echo(f"  empty: {n_empty}")
        typer.echo(f"  hull: {_dump_interval(span)}")
    except _RowError as err:
        typer.echo(_render_row_error(input_file, err), err=True)
        raise typer.Exit(1) from err
    except OSError as err:
        typer.echo(
            f"Error: file operation failed for {input_file}: {err}",
            err=True,
        )
        raise typer.Exit(1) from err

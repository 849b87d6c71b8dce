"""
Command-line interface for Interval Lab.

Usage:
    interval-lab info            Show binary64 layout and parallel settings
    interval-lab ulp X...        Show the unit in the last place of values
    interval-lab eval A OP B     Evaluate an interval operation
    interval-lab norm X...       Euclidean norm of exact values
    interval-lab frobenius       Compare sequential and parallel Frobenius norms
"""

import logging
import time
from typing import Annotated

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from interval_lab import __version__
from interval_lab.arithmetic import Interval
from interval_lab.data import FLOAT64, MACHINE_EPSILON, MIN_SUBNORMAL, unit_last_place
from interval_lab.errors import IntervalLabError
from interval_lab.linalg import Matrix, Vector
from interval_lab.parallel import (
    ParallelConfig,
    configure_parallel,
    get_parallel_config,
    should_parallelize,
)

app = typer.Typer(
    name="interval-lab",
    help="Validated numerics with outward-rounded interval arithmetic",
    add_completion=False,
)
console = Console()

_OPERATIONS = {
    "+": Interval.add,
    "-": Interval.subtract,
    "*": Interval.multiply,
    "/": Interval.divide,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"interval-lab version {__version__}")
        raise typer.Exit()


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log dispatch decisions."),
    ] = False,
    threshold: Annotated[
        int | None,
        typer.Option("--threshold", "-t", help="Parallel complexity threshold."),
    ] = None,
    parallel: Annotated[
        bool,
        typer.Option("--parallel/--no-parallel", help="Enable parallel execution."),
    ] = True,
) -> None:
    """Interval Lab - Validated interval computations."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    configure_parallel(threshold=threshold, enabled=parallel)


@app.command()  # type: ignore[misc]
def info() -> None:
    """Display the binary64 layout and the parallel settings."""
    table = Table(title="IEEE-754 binary64")

    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")

    table.add_row("Bits", str(FLOAT64.bits))
    table.add_row("Mantissa bits", str(FLOAT64.mantissa_bits))
    table.add_row("Exponent bits", str(FLOAT64.exponent_bits))
    table.add_row("Exponent bias", str(FLOAT64.exponent_bias))
    table.add_row("MSW index", str(FLOAT64.msw_index))
    table.add_row("ULP(1.0)", f"{MACHINE_EPSILON:.3e}")
    table.add_row("Smallest subnormal", f"{MIN_SUBNORMAL:.3e}")

    console.print(table)

    config = get_parallel_config()
    settings = Table(title="Parallel Execution")
    settings.add_column("Setting", style="cyan", no_wrap=True)
    settings.add_column("Value", justify="right")
    settings.add_row("Enabled", "✓" if config.enabled else "✗")
    settings.add_row("Threshold", str(config.threshold))
    settings.add_row("Workers", str(config.workers))

    console.print(settings)


@app.command()  # type: ignore[misc]
def ulp(
    values: Annotated[
        list[float],
        typer.Argument(help="Values to inspect"),
    ],
) -> None:
    """Show the unit in the last place and the measured interval of values."""
    table = Table(title="Unit in the Last Place")

    table.add_column("Value", justify="right", style="bold")
    table.add_column("ULP", justify="right")
    table.add_column("Measured interval", justify="right")

    for x in values:
        measured = Interval.measured(x)
        table.add_row(repr(x), repr(unit_last_place(x)), f"[{measured.lower!r}; {measured.upper!r}]")

    console.print(table)


# negative operands such as -1,1 are passed through as arguments
@app.command(name="eval", context_settings={"ignore_unknown_options": True})  # type: ignore[misc]
def evaluate(
    left: Annotated[str, typer.Argument(help="Left operand: 'lower,upper' or a value")],
    operation: Annotated[str, typer.Argument(help="One of + - * /")],
    right: Annotated[str, typer.Argument(help="Right operand: 'lower,upper' or a value")],
    exact: Annotated[
        bool,
        typer.Option("--exact", help="Treat single values as exact points."),
    ] = False,
) -> None:
    """Evaluate an interval operation."""
    if operation not in _OPERATIONS:
        console.print(f"[red]Unknown operation:[/] {operation!r}. Valid: {list(_OPERATIONS)}")
        raise typer.Exit(code=2)
    try:
        a = _parse_interval(left, exact=exact)
        b = _parse_interval(right, exact=exact)
    except (IntervalLabError, ValueError) as exc:
        console.print(f"[red]Invalid operand:[/] {exc}")
        raise typer.Exit(code=2) from exc

    result = _OPERATIONS[operation](a, b)

    table = Table(title=f"{a} {operation} {b}")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Result", str(result))
    table.add_row("Lower", repr(result.lower))
    table.add_row("Upper", repr(result.upper))
    table.add_row("Width", repr(result.width))
    table.add_row("Point", "✓" if result.is_point else "✗")
    table.add_row("Empty", "✓" if result.is_empty else "✗")

    console.print(table)


@app.command()  # type: ignore[misc]
def norm(
    values: Annotated[
        list[float],
        typer.Argument(help="Vector components"),
    ],
    measured: Annotated[
        bool,
        typer.Option("--measured", "-m", help="Pad components by one ULP."),
    ] = False,
) -> None:
    """Euclidean norm of a vector."""
    v = Vector.from_values(values, exact=not measured)
    result = v.norm()
    console.print(f"v = {v}")
    console.print(f"||v|| = {result}  [dim](width {result.width:.3e})[/]")


@app.command()  # type: ignore[misc]
def frobenius(
    size: Annotated[
        int,
        typer.Option("--size", "-n", help="Matrix dimension"),
    ] = 200,
    threshold: Annotated[
        int | None,
        typer.Option("--threshold", "-t", help="Complexity threshold (default: global)."),
    ] = None,
    parallel: Annotated[
        bool | None,
        typer.Option("--parallel/--no-parallel", help="Enable parallel dispatch (default: global)."),
    ] = None,
    seed: Annotated[
        int,
        typer.Option("--seed", "-s", help="Random seed"),
    ] = 42,
) -> None:
    """Compare sequential and dispatched Frobenius norms of a random matrix."""
    rng = np.random.default_rng(seed)
    m = Matrix.from_values(rng.standard_normal((size, size)))

    base = get_parallel_config()
    dispatched = ParallelConfig(
        threshold=base.threshold if threshold is None else threshold,
        enabled=base.enabled if parallel is None else parallel,
        max_workers=base.max_workers,
    )
    strategies = {
        "sequential": ParallelConfig(threshold=dispatched.threshold, enabled=False),
        "dispatched": dispatched,
    }

    table = Table(title=f"Frobenius Norm ({size}×{size})")
    table.add_column("Strategy", style="cyan")
    table.add_column("Mode", justify="center")
    table.add_column("Norm", justify="right")
    table.add_column("Width", justify="right")
    table.add_column("Time (s)", justify="right")

    results = {}
    for name, config in strategies.items():
        mode = "parallel" if should_parallelize(size * size, config) else "sequential"
        start = time.perf_counter()
        results[name] = m.frobenius_norm(config=config)
        elapsed = time.perf_counter() - start
        table.add_row(name, mode, str(results[name]), f"{results[name].width:.3e}", f"{elapsed:.4f}")

    console.print(table)

    reference = float(np.linalg.norm(m.midpoints(), "fro"))
    agree = results["sequential"].intersects(results["dispatched"])
    console.print(f"numpy reference: {reference!r}")
    console.print(f"strategies overlap: {'✓' if agree else '✗'}")


def _parse_interval(text: str, *, exact: bool) -> Interval:
    """Parse 'lower,upper' or a single value."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) == 2:
        return Interval(float(parts[0]), float(parts[1]))
    if len(parts) == 1:
        return Interval.from_value(float(parts[0]), exact=exact)
    msg = f"Expected 'lower,upper' or a single value, got {text!r}"
    raise ValueError(msg)


if __name__ == "__main__":
    app()

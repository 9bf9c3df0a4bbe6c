"""
Command-line interface for fixpoint.

Runs one or more iteration schemes on a function given as an expression in
``x`` (and ``n`` for the generic scheme and weight sequences) over the names
of the ``math`` module, then prints a summary and a comparison table.
"""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING

import click

from fixpoint import __version__
from fixpoint.alg.convergence import CONVERGENCE_TESTS
from fixpoint.alg.methods import METHODS
from fixpoint.alg.schedules import STEP_SIZE_SCHEDULES
from fixpoint.utils.logger import configure_logging
from fixpoint.utils.result import ValidationFailure
from fixpoint.utils.reporting import compare

if TYPE_CHECKING:
    from collections.abc import Callable

MATH_NAMESPACE = {name: getattr(math, name) for name in dir(math) if not name.startswith("_")}
MATH_NAMESPACE["abs"] = abs


def compile_expression(expression: str, variables: tuple[str, ...]) -> Callable[..., float]:
    """
    Compile an arithmetic expression into a function of ``variables``.

    Only the names in ``variables`` and the public names of ``math`` may
    appear in the expression.

    Raises:
        click.BadParameter: If the expression does not parse or uses other names
    """
    try:
        code = compile(expression, "<expression>", "eval")
    except SyntaxError as e:
        raise click.BadParameter(f"Cannot parse {expression!r}: {e.msg}") from e

    unknown = sorted(set(code.co_names) - set(MATH_NAMESPACE) - set(variables))
    if unknown:
        raise click.BadParameter(f"Unknown names in {expression!r}: {', '.join(unknown)}")

    def _evaluate(*args: float) -> float:
        namespace = dict(MATH_NAMESPACE)
        namespace.update(zip(variables, args, strict=True))
        return eval(code, {"__builtins__": {}}, namespace)

    if len(variables) == 1:
        return lambda x: _evaluate(x)
    return lambda x, n: _evaluate(x, n)


def _sequence_option(value: str) -> Callable[[int], float] | str:
    if value in STEP_SIZE_SCHEDULES:
        return value
    return compile_expression(value, ("n",))


@click.group()
@click.version_option(version=__version__, prog_name="fixpoint")
def main():
    """
    fixpoint: fixed points of scalar functions by iteration.

    Picard, Krasnoselskii, Mann and Ishikawa iterations with convergence,
    divergence and cycle detection.
    """


@main.command()
@click.argument("expression")
@click.option("--x0", type=float, required=True, help="Initial approximation")
@click.option(
    "--method",
    "-m",
    "methods",
    type=click.Choice(list(METHODS)),
    multiple=True,
    default=("picard",),
    help="Iteration scheme (repeatable)",
)
@click.option("--lam", type=float, default=0.5, help="Krasnoselskii constant in [0, 1]")
@click.option("--alpha", default="harmonic", help="Mann/Ishikawa alpha: schedule name or expression in n")
@click.option("--beta", default="harmonic", help="Ishikawa beta: schedule name or expression in n")
@click.option("--max-error", type=float, default=None, help="Accepted error (default 1e-7)")
@click.option("--max-steps", type=int, default=None, help="Step budget (default 1000)")
@click.option("--check-cycles/--no-check-cycles", default=True, help="Detect exact repetitions")
@click.option(
    "--test",
    "convergence_test",
    type=click.Choice(sorted(CONVERGENCE_TESTS)),
    default="mixed",
    help="Convergence test",
)
@click.option("--precision", type=int, default=6, help="Digits shown in the table")
@click.option("--format", "report_format", type=click.Choice(["text", "latex"]), default="text")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def run(
    expression,
    x0,
    methods,
    lam,
    alpha,
    beta,
    max_error,
    max_steps,
    check_cycles,
    convergence_test,
    precision,
    report_format,
    verbose,
):
    """
    Iterate EXPRESSION, a function of x, from X0.

    Examples:
        fixpoint run "cos(x)" --x0 1
        fixpoint run "cos(x)" --x0 1 -m picard -m mann --alpha "1/(n+2)"
        fixpoint run "x/2 + 1" --x0 0 -m krasnoselskii --lam 0.3 --format latex
    """
    if verbose:
        configure_logging(level="DEBUG")

    options = {
        "max_error": max_error,
        "max_steps": max_steps,
        "check_cycles": check_cycles,
        "convergence_test": convergence_test,
    }

    if methods == ("iterate",):
        f = compile_expression(expression, ("x", "n"))
    else:
        f = compile_expression(expression, ("x",))
        if "iterate" in methods:
            raise click.UsageError("'iterate' takes a function of x and n and cannot be combined with other methods")

    runs = []
    failed = False
    for method in methods:
        if method in ("iterate", "picard"):
            result = METHODS[method](f, x0, options)
        elif method == "krasnoselskii":
            result = METHODS[method](f, lam, x0, options)
        elif method == "mann":
            result = METHODS[method](f, _sequence_option(alpha), x0, options)
        else:
            result = METHODS[method](f, _sequence_option(alpha), _sequence_option(beta), x0, options)

        if isinstance(result, ValidationFailure):
            click.echo(f"{method}: invalid argument '{result.error_argument}': {result.error_message}", err=True)
            failed = True
            continue

        summary = f"{method}: {result.status.value} after {result.num_steps} steps"
        if result.xn is not None:
            summary += f", xn = {result.xn:.{precision}f}"
        click.echo(summary)
        if result.error_message:
            click.echo(f"  {result.error_message}")
        if result.warning_message:
            click.echo(f"  Warning: {result.warning_message}")
        runs.append(result)

    if runs:
        click.echo("")
        click.echo(compare(runs, precision, report_format), nl=report_format == "latex")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()

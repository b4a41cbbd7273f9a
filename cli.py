"""CLI commands for wedding site submissions maintenance."""

import asyncio

import typer

from src.config.submissions import get_submission_config
from src.submissions.rate_limit import utcnow
from src.wishes.features.cleanup_rate_limits.write_model import SqlRateLimitCleanupWriteModel
from src.wishes.spam import detect_spam

app = typer.Typer(help="CLI commands for wedding site submissions maintenance")


@app.command()
def cleanup_rate_limits():
    """Remove stale wishes rate limit records (run from cron)."""
    # Typer doesn't support async directly, so use asyncio.run
    removed = asyncio.run(SqlRateLimitCleanupWriteModel().cleanup(now=utcnow()))

    typer.secho("Rate limit records cleaned up successfully", fg=typer.colors.GREEN)
    typer.secho(f"  Removed: {removed}", fg=typer.colors.BLUE)


@app.command()
def score_message(
    message: str = typer.Argument(
        ...,
        help="Wish text to score",
    ),
    name: str = typer.Option(
        "Guest",
        "--name",
        "-n",
        help="Guest name submitted with the wish",
    ),
):
    """Show the spam verdict a wish would get."""
    verdict = detect_spam(message, name, threshold=get_submission_config().spam_score_threshold)

    if verdict.is_spam:
        typer.secho("Held for review (pending)", fg=typer.colors.YELLOW)
    else:
        typer.secho("Published (approved)", fg=typer.colors.GREEN)
    typer.secho(f"  Spam score: {verdict.spam_score}", fg=typer.colors.BLUE)
    for reason in verdict.reasons:
        typer.secho(f"  - {reason}", fg=typer.colors.CYAN)


if __name__ == "__main__":
    app()

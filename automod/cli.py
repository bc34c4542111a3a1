"""automod CLI — run the moderation engine against text from the terminal."""

import json
import logging

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from automod import __version__

console = Console()

_ACTION_STYLES = {"approve": "green", "review": "yellow", "reject": "red"}
_RISK_STYLES = {"low": "green", "medium": "yellow", "high": "red", "critical": "bold red"}


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, help="YAML moderation config")
@click.option("--verbose", "-v", is_flag=True, help="Log every detector and policy step")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool):
    """automod — deterministic moderation for forum threads and replies.

    Scores text for profanity and spam, then decides whether a submission
    is approved, queued for review, or rejected for a given user.
    """
    from automod.moderation.config import ConfigurationError, load_config
    from automod.moderation.engine import ContentModerator

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    config = None
    if config_path:
        try:
            config = load_config(config_path)
        except ConfigurationError as e:
            console.print("[red]Invalid moderation config:[/]")
            for issue in e.issues:
                console.print(f"  [red]x[/] {issue}")
            ctx.exit(1)

    ctx.obj = ContentModerator(config)


def _check_length(ctx: click.Context, text: str) -> None:
    limit = ctx.obj.config.max_content_length
    if len(text) > limit:
        console.print(f"[red]Content is {len(text)} characters; the limit is {limit}.[/]")
        ctx.exit(1)


def _print_analysis(analysis) -> None:
    risk = analysis.overall_risk.value
    action = analysis.recommendations.action.value

    table = Table(title=f"Content Analysis ({analysis.kind.value})")
    table.add_column("Check", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Level")
    table.add_column("Findings")

    profanity = analysis.profanity
    table.add_row(
        "Profanity",
        str(profanity.risk_score),
        profanity.severity.value,
        ", ".join(profanity.violated_terms) or "-",
    )
    spam = analysis.spam
    table.add_row(
        "Spam",
        str(spam.risk_score),
        spam.spam_level.value,
        ", ".join(spam.indicators) or "-",
    )
    console.print(table)

    console.print(
        Panel(
            f"Risk: [{_RISK_STYLES[risk]}]{risk}[/]  "
            f"Score: {analysis.combined_score}  "
            f"Recommendation: [{_ACTION_STYLES[action]}]{action}[/] "
            f"({analysis.recommendations.confidence.value} confidence)\n"
            f"{analysis.recommendations.reason}",
            title="Verdict",
        )
    )


# ── Analyze ──────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--title", default=None, help="Thread title (analyzes TEXT as the thread body)")
@click.option("--kind", type=click.Choice(["thread", "reply"]), default=None)
@click.option("--json", "as_json", is_flag=True, help="Print the audit report as JSON")
@click.pass_context
def analyze(ctx: click.Context, text: str, title: str | None, kind: str | None, as_json: bool):
    """Score TEXT for profanity and spam."""
    _check_length(ctx, " ".join(filter(None, [title, text])))

    moderator = ctx.obj
    if title is not None:
        analysis = moderator.analyze(title, text, kind)
    else:
        analysis = moderator.analyze(text, kind=kind)

    if as_json:
        click.echo(json.dumps(moderator.build_report(analysis), indent=2, ensure_ascii=False))
        return
    _print_analysis(analysis)


# ── Decide ───────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--title", default=None, help="Thread title (analyzes TEXT as the thread body)")
@click.option("--kind", type=click.Choice(["thread", "reply"]), default=None)
@click.option("--role", type=click.Choice(["user", "moderator", "admin"]), default="user")
@click.option(
    "--trust-level",
    type=click.Choice(["new", "basic", "trusted", "moderator"]),
    default="new",
)
@click.option("--posts", default=0, type=click.IntRange(min=0), help="Posts written so far")
@click.option("--reports", default=0, type=click.IntRange(min=0), help="Reports received")
@click.option("--likes", default=0, type=click.IntRange(min=0), help="Likes received")
@click.option("--auto-approval", is_flag=True, help="User has auto-approval enabled")
@click.option("--audit-dir", default=None, help="Append the decision to this audit log")
@click.option("--actor", default="cli", help="Actor recorded in the audit log")
@click.pass_context
def decide(
    ctx: click.Context,
    text: str,
    title: str | None,
    kind: str | None,
    role: str,
    trust_level: str,
    posts: int,
    reports: int,
    likes: int,
    auto_approval: bool,
    audit_dir: str | None,
    actor: str,
):
    """Decide approve / review / reject for TEXT submitted by a described user."""
    from automod.moderation.models import TrustLevel, UserReputationSnapshot, UserRole
    from automod.moderation.outcome import validate_outcome

    _check_length(ctx, " ".join(filter(None, [title, text])))

    moderator = ctx.obj
    user = UserReputationSnapshot(
        role=UserRole(role),
        trust_level=TrustLevel(trust_level),
        auto_approval_enabled=auto_approval,
        posts_count=posts,
        reports_received=reports,
        likes_received=likes,
    )
    if title is not None:
        analysis, outcome = moderator.decide(user, title, text, kind)
    else:
        analysis, outcome = moderator.decide(user, text, kind=kind)

    _print_analysis(analysis)

    action = outcome.action.value
    console.print(f"\n  Decision: [{_ACTION_STYLES[action]}]{action.upper()}[/] ({outcome.status})")
    console.print(f"  {outcome.note}")

    errors = validate_outcome(outcome)
    for error in errors:
        console.print(f"  [red]x[/] {error}")

    if audit_dir:
        from automod.audit_log import ModerationAuditLog

        log = ModerationAuditLog(audit_dir)
        entry = log.record(
            moderator.build_report(analysis),
            outcome,
            actor=actor,
            resource_type=analysis.kind.value,
        )
        console.print(f"  [dim]Audit entry {entry.id} written[/]")


# ── Sanitize ─────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.pass_context
def sanitize(ctx: click.Context, text: str):
    """Print TEXT with banned terms and contact details masked."""
    click.echo(ctx.obj.sanitize(text))


# ── Config ───────────────────────────────────────────────────────────


@main.command(name="show-config")
@click.pass_context
def show_config(ctx: click.Context):
    """Print the active moderation configuration as YAML."""
    from automod.moderation.config import config_to_dict

    click.echo(
        yaml.safe_dump(config_to_dict(ctx.obj.config), allow_unicode=True, sort_keys=False)
    )


# ── Audit ────────────────────────────────────────────────────────────


@main.command()
@click.option("--audit-dir", required=True, help="Audit log directory")
@click.option(
    "--status", type=click.Choice(["approved", "pending", "rejected"]), default=None
)
@click.option("--limit", default=20, type=click.IntRange(min=1))
@click.option("--export", "fmt", type=click.Choice(["json", "csv"]), default=None)
def audit(audit_dir: str, status: str | None, limit: int, fmt: str | None):
    """List recorded moderation decisions."""
    from automod.audit_log import ModerationAuditLog

    log = ModerationAuditLog(audit_dir)

    if fmt:
        click.echo(log.export(fmt, status=status, limit=limit))
        return

    entries = log.get_entries(status=status, limit=limit)
    if not entries:
        console.print("[yellow]No audit entries found.[/]")
        return

    table = Table(title=f"Moderation Decisions ({len(entries)})")
    table.add_column("Time", style="dim")
    table.add_column("Kind")
    table.add_column("Actor", style="cyan")
    table.add_column("Status")
    table.add_column("Note")

    for entry in entries:
        style = _ACTION_STYLES.get(entry.action, "white")
        table.add_row(
            entry.timestamp[:19],
            entry.resource_type,
            entry.actor,
            f"[{style}]{entry.status}[/]",
            entry.note[:60],
        )

    console.print(table)


if __name__ == "__main__":
    main()

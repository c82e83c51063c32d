"""Command-line interface for lfmatch.

Provides CLI commands for ranking lost/found match candidates.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("lfmatch")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="lfmatch")
def cli() -> None:
    """Lost-and-found item matching for campus portals.

    Use 'lfmatch COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("lost_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("found_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="out",
    help="Output directory for results (default: out)",
)
@click.option(
    "--found-status",
    "found_statuses",
    multiple=True,
    help="Only match found items with this status (repeatable, e.g. --found-status verified)",
)
@click.option(
    "--weights",
    "weights_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file overriding signal weights and threshold",
)
@click.option(
    "--top-k",
    type=click.IntRange(min=1),
    default=None,
    help="Keep only the best N candidates",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def match(
    lost_path: str,
    found_path: str,
    output_dir: str,
    found_statuses: tuple[str, ...],
    weights_path: str | None,
    top_k: int | None,
    verbose: bool,
) -> None:
    """Rank candidate matches between LOST_PATH and FOUND_PATH.

    Both inputs are JSON arrays or JSON Lines files of item documents as
    exported from the portal. Claimed found items are never matched.

    Examples
    --------
        lfmatch match lost.json found.json
        lfmatch match lost.json found.json --found-status verified -o results
        lfmatch match lost.jsonl found.jsonl --weights weights.json --top-k 20
    """
    from lfmatch.engine import MatchConfig, run_matching

    if verbose:
        click.echo("Starting match run...", err=True)
        click.echo(f"  Lost items: {lost_path}", err=True)
        click.echo(f"  Found items: {found_path}", err=True)
        click.echo(f"  Output: {output_dir}", err=True)
        if found_statuses:
            click.echo(f"  Found statuses: {', '.join(found_statuses)}", err=True)

    try:
        config = MatchConfig(
            weights_path=Path(weights_path) if weights_path else None,
            found_statuses=list(found_statuses) or None,
            output_dir=Path(output_dir),
            top_k=top_k,
        )

        result = run_matching(Path(lost_path), Path(found_path), config)

        if not result.success:
            click.secho(f"✗ Match run failed: {result.error_message}", fg="red", err=True)
            sys.exit(1)

        if verbose:
            click.echo("\n✓ Match run completed successfully!", err=True)
            click.echo("\nResults:", err=True)
            click.echo(f"  Lost items: {result.total_lost}", err=True)
            click.echo(f"  Found items: {result.total_found} ({result.eligible_found} eligible)", err=True)
            click.echo(f"  Pairs considered: {result.pairs_considered}", err=True)
            click.echo(f"  Skipped (claimed): {result.pairs_skipped_claimed}", err=True)
            for label, count in result.strength_counts.items():
                click.echo(f"  {label.capitalize()} matches: {count}", err=True)
            click.echo("\nOutputs:", err=True)
            for name, path in result.output_files.items():
                click.echo(f"  {name}: {path}", err=True)

        click.secho(
            f"✓ Found {result.total_candidates} candidate match(es) "
            f"for {result.total_lost} lost item(s)",
            fg="green",
        )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


@cli.command()
@click.argument("lost_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("found_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("candidate_id")
def compare(lost_path: str, found_path: str, candidate_id: str) -> None:
    """Explain one candidate pair, identified by CANDIDATE_ID.

    CANDIDATE_ID is the "<lost id>-<found id>" key written to matches.jsonl.
    Prints the ranking score breakdown and the side-by-side similarity
    percentages.

    Examples
    --------
        lfmatch compare lost.json found.json 66a1f0-66b2c4
    """
    from lfmatch import load_found_items, load_lost_items
    from lfmatch.scoring import MatchStrength, compare_items, score_pair, split_candidate_id

    try:
        lost_id, found_id = split_candidate_id(candidate_id)
        lost = {item.id: item for item in load_lost_items(lost_path, strict=False)}
        found = {item.id: item for item in load_found_items(found_path, strict=False)}

        if lost_id not in lost:
            raise KeyError(f"Lost item not found: {lost_id}")
        if found_id not in found:
            raise KeyError(f"Found item not found: {found_id}")

        lost_item, found_item = lost[lost_id], found[found_id]
        breakdown = score_pair(lost_item, found_item)
        metrics = compare_items(lost_item, found_item)

    except (KeyError, ValueError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        click.secho(f"✗ Error: {message}", fg="red", err=True)
        sys.exit(1)

    click.echo(f"{lost_item.item_name} (lost) vs {found_item.item_name} (found)")
    if found_item.is_claimed:
        click.secho("  Found item is already claimed; it is never ranked.", fg="yellow")
    click.echo(f"Score: {breakdown.total} ({MatchStrength.for_score(breakdown.total).value})")
    click.echo(f"  category: +{breakdown.category}")
    click.echo(f"  date:     +{breakdown.date} ({breakdown.days_apart} day(s) apart)")
    click.echo(f"  location: +{breakdown.location}")
    keywords = ", ".join(breakdown.matched_keywords) or "-"
    click.echo(f"  keywords: +{breakdown.keywords} ({keywords})")
    click.echo("Similarity:")
    click.echo(f"  category:    {metrics.category}%")
    click.echo(f"  date:        {metrics.date}%")
    click.echo(f"  location:    {metrics.location:.0f}%")
    click.echo(f"  description: {metrics.description:.0f}%")
    click.echo(f"  overall:     {metrics.overall}%")


if __name__ == "__main__":
    cli()

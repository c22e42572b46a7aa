"""Typer CLI root application.

Commands:
    serve       Start the web server
    counties    List counties and their poll data coverage
    ticket      Print one township's poll ticket
    render-map  Write the county map as a standalone SVG
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from poll_map.core.config import get_settings
from poll_map.core.logging import setup_logging
from poll_map.lib.poll_tape import PollTicketView
from poll_map.lib.selection import ViewState, selection_from_query
from poll_map.services.map_service import MapDataset, build_county_panel, build_map_view, load_map_dataset

app = typer.Typer(name="poll-map", help="Michigan county poll tape map")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


async def _load(lookup_winners: bool) -> MapDataset:
    from poll_map.main import create_client

    settings = get_settings()
    async with create_client(settings) as client:
        return await load_map_dataset(
            client,
            boundaries_file=settings.boundaries_file,
            lookup_winners=lookup_winners and settings.winner_lookup_enabled,
            winner_concurrency=settings.winner_lookup_concurrency,
        )


def _report_errors(dataset: MapDataset) -> None:
    for notice in dataset.notices:
        if notice.level == "error":
            typer.echo(f"Warning: {notice.message}", err=True)


def format_ticket(ticket: PollTicketView) -> str:
    """Render a poll ticket view as plain text."""
    lines = [ticket.election_type, ticket.election_date, ticket.location, ticket.precinct, "", "Election Results"]
    for contest in ticket.contests:
        lines.append(f"  {contest.title}")
        lines.extend(f"    {winner.text}" for winner in contest.winners)

    details = ticket.details
    if details is not None:
        lines += [
            "",
            "Voting System",
            f"  Type: {details.voting_system_type}",
            f"  S/N: {details.serial_number}",
            f"  Version: {details.version}",
            "",
            "Poll Status",
            f"  Opened: {details.opened.timestamp}",
            f"  Ballot Counter: {details.opened.ballot_counter}",
        ]
        if details.closed is not None:
            lines += [f"  Closed: {details.closed.timestamp}", f"  Final Counter: {details.closed.ballot_counter}"]
        lines += ["", "Detailed Results"]
        for contest in details.contests:
            lines.append(f"  {contest.title}")
            for candidate in contest.candidates:
                marker = "*" if candidate.is_winner else " "
                lines.append(f"   {marker}{candidate.names} - {candidate.votes}")
    return "\n".join(lines)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("127.0.0.1", "--host", help="Bind host"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the web server."""
    import uvicorn

    uvicorn.run(
        "poll_map.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def counties() -> None:
    """List counties and how many townships have poll data."""
    dataset = asyncio.run(_load(lookup_winners=True))
    _report_errors(dataset)
    for feature in dataset.features:
        townships = dataset.poll_data.get(feature.name, {})
        winner = dataset.county_winners.get(feature.name, "-")
        typer.echo(f"{feature.name}\t{len(townships)} townships\t{winner}")


@app.command()
def ticket(
    county: Annotated[str, typer.Argument(help="County name, e.g. Oakland")],
    township: Annotated[str, typer.Argument(help="Township name as listed by the backend")],
    details: Annotated[bool, typer.Option("--details", help="Include the full poll tape")] = False,
) -> None:
    """Print the poll ticket for one township."""
    dataset = asyncio.run(_load(lookup_winners=False))
    _report_errors(dataset)
    view_state = ViewState(selection=selection_from_query(county, township), show_details=details)
    panel = build_county_panel(dataset, view_state)
    if panel.ticket is None:
        typer.echo(panel.message or f"No poll data for {township}, {county} County", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_ticket(panel.ticket))


@app.command("render-map")
def render_map(
    output: Annotated[Path, typer.Argument(help="SVG file to write")],
    county: Annotated[str | None, typer.Option("--county", help="County to highlight")] = None,
) -> None:
    """Write the county map as a standalone SVG file."""
    from poll_map.api.views import templates

    dataset = asyncio.run(_load(lookup_winners=True))
    _report_errors(dataset)
    map_view = build_map_view(dataset, ViewState(selection=selection_from_query(county, None)))
    svg = templates.env.get_template("map.svg").render(map_view=map_view)
    output.write_text(svg, encoding="utf-8")
    logger.info(f"Wrote {len(map_view.counties)} counties to {output}")
    typer.echo(f"Wrote {output}")

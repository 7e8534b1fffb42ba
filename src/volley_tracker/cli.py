"""Volleyball tracker CLI using Typer."""

from typing import List, Optional

import typer
from typing_extensions import Annotated

from .errors import TrackerError
from .models.enums import ResultCategory, Roster, ShotType
from .taxonomy import category_of, legal_outcomes, outcome_label, shot_type_label

app = typer.Typer(help="Record volleyball shots and report player and team statistics")


@app.callback()
def main_options(
    ctx: typer.Context,
    game: Annotated[Optional[str], typer.Option("--game", help="6-digit game id (defaults to the most recent game)")] = None,
    db: Annotated[Optional[str], typer.Option("--db", help="SQLAlchemy URI of the local snapshot store")] = None,
):
    """Shared options for every command."""
    ctx.obj = {"game": game, "db": db}


def _open_session(ctx: typer.Context, team: Optional[Roster] = None):
    """Build a session backed by the local snapshot store and load the game."""
    # Import at runtime to keep `--help` fast
    from .persistence.snapshots import SqliteSnapshotStore
    from .session import TrackerSession
    from .tracker_logging import configure_logging

    configure_logging()
    options = ctx.obj or {}
    local = SqliteSnapshotStore(db_uri=options.get("db"))

    game_id = options.get("game")
    if game_id is None:
        sessions = local.list_sessions()
        game_id = sessions[0][0] if sessions else None

    session = TrackerSession(game_id=game_id, local=local)
    session.load()
    if team is not None:
        session.select_roster(team)
    return session


def _player_by_number(session, number: int):
    for player in session.players():
        if player.number == number:
            return player
    raise TrackerError(f"No player #{number} on the {session.current_roster.value} roster")


def _fail(error: Exception) -> None:
    typer.echo(f"❌ {error}", err=True)
    raise typer.Exit(1)


@app.command("add-player")
def add_player(
    ctx: typer.Context,
    number: Annotated[int, typer.Argument(help="Jersey number (0-99)")],
    name: Annotated[str, typer.Argument(help="Player name")],
    team: Annotated[Roster, typer.Option(help="Roster to add the player to")] = Roster.HOME,
):
    """Add a player to a roster."""
    session = _open_session(ctx, team)
    try:
        player = session.add_player(number, name)
    except TrackerError as e:
        _fail(e)
    typer.echo(f"✅ Added {player.label} to {team.value} (game {session.game_id})")


@app.command("record-shot")
def record_shot(
    ctx: typer.Context,
    number: Annotated[int, typer.Argument(help="Jersey number of the player")],
    shot_type: Annotated[str, typer.Argument(help="serve, spike, block, dig, set or attack")],
    outcome: Annotated[str, typer.Argument(help="Outcome legal for the shot type")],
    x: Annotated[float, typer.Argument(help="Court x (0-200)")],
    y: Annotated[float, typer.Argument(help="Court y (0-300)")],
    set_number: Annotated[int, typer.Option("--set", help="Set the shot belongs to")] = 1,
    team: Annotated[Roster, typer.Option(help="Roster of the player")] = Roster.HOME,
):
    """Record a shot for a player."""
    session = _open_session(ctx, team)
    try:
        player = _player_by_number(session, number)
        shot = session.record_shot(player.id, shot_type, outcome, (x, y), set_number)
    except TrackerError as e:
        _fail(e)
    typer.echo(f"✅ {player.label}: {outcome_label(shot.outcome)} in set {shot.set_number} [{shot.id}]")


@app.command("delete-shot")
def delete_shot(
    ctx: typer.Context,
    shot_id: Annotated[str, typer.Argument(help="Id printed when the shot was recorded")],
):
    """Delete a shot by id (no-op when it does not exist)."""
    session = _open_session(ctx)
    if session.delete_shot(shot_id):
        typer.echo(f"🗑️  Deleted shot {shot_id}")
    else:
        typer.echo(f"⚠️  No shot with id {shot_id}")


@app.command("clear-set")
def clear_set(
    ctx: typer.Context,
    set_number: Annotated[int, typer.Option("--set", help="Set to clear")] = 1,
    team: Annotated[Roster, typer.Option(help="Roster to clear")] = Roster.HOME,
):
    """Remove every shot of one set from a roster."""
    session = _open_session(ctx, team)
    try:
        session.filters.select_set(set_number)
    except TrackerError as e:
        _fail(e)
    removed = session.clear_current_set()
    typer.echo(f"🧹 Removed {removed} shots from set {set_number} ({team.value})")


@app.command()
def rename(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Display name for the game")],
):
    """Set the game's display name."""
    session = _open_session(ctx)
    session.rename_game(name)
    typer.echo(f"✅ Game {session.game_id} is now '{session.game_name}'")


@app.command()
def court(
    ctx: typer.Context,
    set_number: Annotated[int, typer.Option("--set", help="Set to show")] = 1,
    player: Annotated[Optional[int], typer.Option("--player", help="Only this jersey number")] = None,
    exclude: Annotated[Optional[List[ResultCategory]], typer.Option("--exclude", help="Hide a result category")] = None,
    team: Annotated[Roster, typer.Option(help="Roster to show")] = Roster.HOME,
):
    """List the shots the court view would draw."""
    session = _open_session(ctx, team)
    try:
        session.filters.select_set(set_number)
        if player is not None:
            session.filters.select_player(_player_by_number(session, player).id)
    except TrackerError as e:
        _fail(e)
    for category in exclude or []:
        session.filters.toggle_category(category, False)

    visible = session.visible_shots()
    typer.echo(f"🏐 {team.value} - set {set_number}: {len(visible)} shots")
    for item in visible:
        shot = item.shot
        typer.echo(
            f"   #{item.player.number:<3} {shot_type_label(shot.shot_type):<7} "
            f"{outcome_label(shot.outcome):<17} ({shot.position.x:.0f}, {shot.position.y:.0f}) "
            f"{category_of(shot.outcome).value:<8} {shot.id}"
        )


@app.command()
def stats(
    ctx: typer.Context,
    team: Annotated[Roster, typer.Option(help="Roster to summarize")] = Roster.HOME,
):
    """Print the team summary, top results and player table."""
    session = _open_session(ctx, team)
    summary = session.team_summary()

    title = f" - {session.game_name}" if session.game_name else ""
    typer.echo(f"📊 Game {session.game_id}{title} ({team.value})")
    typer.echo(
        f"   Shots: {summary.total}  Kills: {summary.kills}  "
        f"Errors: {summary.errors}  Success: {summary.success_rate}%"
    )

    if summary.by_set:
        typer.echo("\n   By set:")
        for set_number in sorted(summary.by_set):
            s = summary.by_set[set_number]
            typer.echo(f"     Set {set_number}: {s.total} shots, {s.kills} kills, {s.errors} errors, {s.success_rate}%")

    if summary.by_shot_type:
        typer.echo("\n   By shot type:")
        for shot_type, s in summary.by_shot_type.items():
            typer.echo(f"     {shot_type_label(shot_type)}: {s.total} shots, {s.success_rate}%")

    results = session.top_results()
    if results:
        typer.echo("\n   Top results:")
        for outcome, count in results:
            typer.echo(f"     {outcome_label(outcome)}: {count}")

    lines = summary.players_by_number()
    if lines:
        typer.echo("\n   Players:")
        for line in lines:
            typer.echo(
                f"     #{line.number} - {line.name}: {line.total} shots, "
                f"{line.kills} kills, {line.errors} errors, {line.success_rate}%"
            )


@app.command("player-stats")
def player_stats(
    ctx: typer.Context,
    number: Annotated[int, typer.Argument(help="Jersey number of the player")],
    team: Annotated[Roster, typer.Option(help="Roster of the player")] = Roster.HOME,
):
    """Print one player's breakdown by set, shot type and top results."""
    session = _open_session(ctx, team)
    try:
        player = _player_by_number(session, number)
    except TrackerError as e:
        _fail(e)
    detail = session.player_detail(player.id)

    typer.echo(f"📊 {player.label} ({team.value})")
    typer.echo(
        f"   Shots: {detail.total}  Kills: {detail.kills}  "
        f"Errors: {detail.errors}  Success: {detail.success_rate}%"
    )

    if detail.by_set:
        typer.echo("\n   By set:")
        for set_number in sorted(detail.by_set):
            s = detail.by_set[set_number]
            typer.echo(f"     Set {set_number}: {s.total} shots, {s.kills} kills, {s.errors} errors, {s.success_rate}%")

    if detail.by_shot_type:
        typer.echo("\n   By shot type:")
        for shot_type, s in detail.by_shot_type.items():
            typer.echo(f"     {shot_type_label(shot_type)}: {s.total} shots, {s.success_rate}%")

    results = session.player_top_results(player.id)
    if results:
        typer.echo("\n   Top results:")
        for outcome, count in results:
            typer.echo(f"     {outcome_label(outcome)}: {count}")


@app.command()
def outcomes():
    """Show every shot type with its legal outcomes and categories."""
    for shot_type in ShotType:
        typer.echo(f"{shot_type_label(shot_type)}:")
        for outcome in legal_outcomes(shot_type):
            typer.echo(f"   {outcome.value:<17} {category_of(outcome).value}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    app()

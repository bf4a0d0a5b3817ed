"""Command-line front end.

    python -m playdeck search ":artist jean gold"
    python -m playdeck add-all artist <id>
    python -m playdeck playlist
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable, Sequence

from playdeck import __version__
from playdeck.config import Settings, get_settings
from playdeck.domain.entities import Kind, SearchResult, Track
from playdeck.domain.exceptions import DomainException
from playdeck.infrastructure.lifecycle import PlayDeck, lifespan
from playdeck.infrastructure.observability import configure_logging, set_correlation_id

logger = logging.getLogger(__name__)

Handler = Callable[[PlayDeck, argparse.Namespace], Awaitable[int]]

BROWSABLE_KINDS = {"artist": Kind.ARTIST, "album": Kind.ALBUM}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playdeck",
        description="Search a music catalog and drive a remote player",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--catalog-url", help="Catalog server URL (env CATALOG_BASE_URL)")
    parser.add_argument("--player-url", help="Player server URL (env PLAYER_BASE_URL)")
    parser.add_argument("--log-level", help="Log level (env LOG_LEVEL)")
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit JSON log lines"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser(
        "search", help='Hybrid search (":artist ...", ":album ..." or song text)'
    )
    search.add_argument("query", nargs="+", help="Query words")

    show = commands.add_parser("show", help="List the tracks of an artist or album")
    show.add_argument("kind", choices=sorted(BROWSABLE_KINDS))
    show.add_argument("id", help="Artist/album id from a search result")

    add = commands.add_parser("add", help="Add one track to the playlist")
    add.add_argument("id", help="Track id")

    add_all = commands.add_parser("add-all", help="Add every track of an artist/album")
    add_all.add_argument("kind", choices=sorted(BROWSABLE_KINDS))
    add_all.add_argument("id", help="Artist/album id from a search result")

    commands.add_parser("playlist", help="Show the playlist in play order")

    play = commands.add_parser("play", help="Play a position, or resume")
    play.add_argument("index", nargs="?", type=int, help="0-based playlist position")

    remove = commands.add_parser("remove", help="Remove a playlist position")
    remove.add_argument("index", type=int, help="0-based playlist position")

    commands.add_parser("pause", help="Pause playback")
    commands.add_parser("next", help="Skip to next track")
    commands.add_parser("previous", help="Back to previous track")
    commands.add_parser("current", help="Print the current playlist position")

    volume = commands.add_parser("volume", help="Change volume")
    volume.add_argument("direction", choices=["up", "down"])

    return parser


def settings_from_args(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command-line overrides on top of env/.env settings."""
    settings = base or get_settings()
    updates: dict[str, object] = {}
    if args.catalog_url:
        updates["catalog"] = settings.catalog.model_copy(
            update={"base_url": args.catalog_url.strip().rstrip("/")}
        )
    if args.player_url:
        updates["player"] = settings.player.model_copy(
            update={"base_url": args.player_url.strip().rstrip("/")}
        )
    if args.log_level or args.json_logs:
        updates["log"] = settings.log.model_copy(
            update={
                "level": (args.log_level or settings.log.level).upper(),
                "json_format": args.json_logs or settings.log.json_format,
            }
        )
    return settings.model_copy(update=updates) if updates else settings


def format_track(position: int, track: Track) -> str:
    if not track.title and not track.artist:
        return f"{position:>3}  {track.id}  (unknown track)"
    return f"{position:>3}  {track.id}  {track.title} - {track.artist} ({track.album})"


def print_result(result: SearchResult) -> None:
    print(f"[{result.kind.value}] {len(result)} result(s)")
    for row in result:
        if result.kind is Kind.SONG:
            print(f"  {row.id}  {row.title} - {row.artist} ({row.album})")
        else:
            print(f"  {row.id}  {row.display_name}")


async def cmd_search(deck: PlayDeck, args: argparse.Namespace) -> int:
    print_result(await deck.search.route(" ".join(args.query)))
    return 0


async def cmd_show(deck: PlayDeck, args: argparse.Namespace) -> int:
    tracks = await deck.playlist.show_for(args.id, BROWSABLE_KINDS[args.kind])
    print_result(SearchResult(Kind.SONG, tracks))
    return 0


async def cmd_add(deck: PlayDeck, args: argparse.Namespace) -> int:
    await deck.playlist.add(Track(id=args.id))
    print(f"added {args.id}")
    return 0


async def cmd_add_all(deck: PlayDeck, args: argparse.Namespace) -> int:
    report = await deck.playlist.add_all_for(args.id, BROWSABLE_KINDS[args.kind])
    print(f"added {report.submitted} track(s)")
    if not report.complete:
        print(
            f"warning: no path for {len(report.unresolved_ids)} track(s): "
            + ", ".join(report.unresolved_ids),
            file=sys.stderr,
        )
    return 0


async def cmd_playlist(deck: PlayDeck, args: argparse.Namespace) -> int:
    for position, track in enumerate(await deck.playlist.get_playlist()):
        print(format_track(position, track))
    return 0


async def cmd_play(deck: PlayDeck, args: argparse.Namespace) -> int:
    if args.index is None:
        await deck.playlist.resume()
    else:
        await deck.playlist.play(args.index)
    return 0


async def cmd_remove(deck: PlayDeck, args: argparse.Namespace) -> int:
    await deck.playlist.remove(args.index)
    return 0


async def cmd_current(deck: PlayDeck, args: argparse.Namespace) -> int:
    print(await deck.playlist.current())
    return 0


async def cmd_volume(deck: PlayDeck, args: argparse.Namespace) -> int:
    if args.direction == "up":
        await deck.playlist.volume_up()
    else:
        await deck.playlist.volume_down()
    return 0


async def cmd_pause(deck: PlayDeck, args: argparse.Namespace) -> int:
    await deck.playlist.pause()
    return 0


async def cmd_next(deck: PlayDeck, args: argparse.Namespace) -> int:
    await deck.playlist.next()
    return 0


async def cmd_previous(deck: PlayDeck, args: argparse.Namespace) -> int:
    await deck.playlist.previous()
    return 0


HANDLERS: dict[str, Handler] = {
    "search": cmd_search,
    "show": cmd_show,
    "add": cmd_add,
    "add-all": cmd_add_all,
    "playlist": cmd_playlist,
    "play": cmd_play,
    "remove": cmd_remove,
    "pause": cmd_pause,
    "next": cmd_next,
    "previous": cmd_previous,
    "current": cmd_current,
    "volume": cmd_volume,
}


async def run(args: argparse.Namespace, settings: Settings) -> int:
    # Only the search command needs the artist/album indexes
    async with lifespan(settings, load_index=args.command == "search") as deck:
        return await HANDLERS[args.command](deck, args)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for `python -m playdeck` and the `playdeck` script."""
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.log.level, settings.log.json_format)
    set_correlation_id()

    try:
        return asyncio.run(run(args, settings))
    except DomainException as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())

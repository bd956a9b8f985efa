"""CLI interface for c2g."""

import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .animation_pipeline import encode_game
from .config import Colors, Config, ConfigError, StyleComponents
from .constants import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_DARK_COLOR,
    DEFAULT_FIRST_FRAME_DELAY,
    DEFAULT_FRAME_DELAY,
    DEFAULT_LAST_FRAME_DELAY,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PIECES_FAMILY,
)
from .delay import Delay, DelayError, Delays
from .drawer import DrawerError
from .output import GifOutputProvider, resolve_output_provider, supported_output_formats
from .output.base import EncodingError, OutputProvider

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()
STDOUT = "-"

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def _rgb_text(rgb: tuple[int, int, int]) -> str:
    return ",".join(str(channel) for channel in rgb)


def main(
    pgn: str = typer.Argument(None, help="A PGN string for a chess game (read from stdin when omitted)"),
    input_path: str = typer.Option(
        None,
        "--input",
        "-i",
        envvar="C2G_INPUT",
        help="Read the PGN from a file",
    ),
    out: str = typer.Option(
        DEFAULT_OUTPUT_PATH,
        "--output",
        "-o",
        envvar="C2G_OUTPUT",
        help=f"Write the animation to a file ({SUPPORTED_OUTPUT_FORMATS_TEXT}), or '-' for a GIF on stdout",
    ),
    flip: bool = typer.Option(
        False,
        "--flip",
        envvar="C2G_FLIP",
        help="Show black at the bottom of the board",
    ),
    size: int = typer.Option(
        DEFAULT_BOARD_SIZE,
        "--size",
        "-s",
        envvar="C2G_SIZE",
        help="The size of one side of the board in pixels, a multiple of 8",
    ),
    delay: str = typer.Option(
        str(DEFAULT_FRAME_DELAY),
        "--delay",
        "-d",
        envvar="C2G_DELAY",
        help="Delay between frames in ms, or 'real' to use the %clk comments",
    ),
    first_frame_delay: str = typer.Option(
        str(DEFAULT_FIRST_FRAME_DELAY),
        "--first-frame-delay",
        envvar="C2G_FIRST_FRAME_DELAY",
        help="Delay for the first frame in ms",
    ),
    last_frame_delay: str = typer.Option(
        str(DEFAULT_LAST_FRAME_DELAY),
        "--last-frame-delay",
        envvar="C2G_LAST_FRAME_DELAY",
        help="Delay for the last frame in ms, before the animation loops back around",
    ),
    style: str = typer.Option(
        "full",
        "--style",
        envvar="C2G_STYLE",
        help="Comma-separated style elements (full, plain, player-bars, terminations, coordinates, ranks, files)",
    ),
    dark: str = typer.Option(
        _rgb_text(DEFAULT_DARK_COLOR),
        "--dark",
        envvar="C2G_DARK",
        help="Color of the dark squares, as r,g,b[,a] or #rrggbb",
    ),
    light: str = typer.Option(
        _rgb_text(DEFAULT_LIGHT_COLOR),
        "--light",
        envvar="C2G_LIGHT",
        help="Color of the light squares, as r,g,b[,a] or #rrggbb",
    ),
    svgs_path: str = typer.Option(
        None,
        "--svgs-path",
        envvar="C2G_SVGS_PATH",
        help="Directory with piece sets and termination SVGs (built-in SVGs when omitted)",
    ),
    pieces: str = typer.Option(
        DEFAULT_PIECES_FAMILY,
        "--pieces",
        envvar="C2G_PIECES",
        help="Piece set directory name inside --svgs-path",
    ),
    font: str = typer.Option(
        None,
        "--font",
        envvar="C2G_FONT",
        help="TrueType font for coordinates and player bars",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Log progress (-v) or every move and frame (-vv) to stderr",
    ),
) -> None:
    """
    Turn a PGN chess game into an animated GIF.

    Examples:
      # Render a game passed as an argument
      c2g "1. e4 e5 2. Qh5 Nc6 3. Bc4 Nf6 4. Qxf7# 1-0"

      # Use real thinking time from clock comments, write WebP
      c2g --input game.pgn --delay real --output game.webp
    """
    to_stdout = out == STDOUT
    # Keep stdout clean for the animation bytes
    status_console = err_console if to_stdout else console
    _configure_logging(verbose)

    try:
        config = _build_config(
            size=size,
            flip=flip,
            delay=delay,
            first_frame_delay=first_frame_delay,
            last_frame_delay=last_frame_delay,
            style=style,
            dark=dark,
            light=light,
            svgs_path=svgs_path,
            pieces=pieces,
            font=font,
        )
        provider = _resolve_provider(out, to_stdout)
        pgn_text = _read_pgn(pgn, input_path, status_console)
        encoded = _generate_output(pgn_text, config, provider, status_console)

        if to_stdout:
            sys.stdout.buffer.write(encoded)
            sys.stdout.flush()
        else:
            _save_output(encoded, provider, status_console)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _configure_logging(verbosity: int) -> None:
    """Route the package's log records to stderr through rich."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    package_logger = logging.getLogger("c2g")
    package_logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False))


def _build_config(
    *,
    size: int,
    flip: bool,
    delay: str,
    first_frame_delay: str,
    last_frame_delay: str,
    style: str,
    dark: str,
    light: str,
    svgs_path: str | None,
    pieces: str,
    font: str | None,
) -> Config:
    """Build and validate the run configuration from CLI options."""
    try:
        delays = Delays(
            frame=Delay.parse(delay),
            first_frame=Delay.parse(first_frame_delay),
            last_frame=Delay.parse(last_frame_delay),
        )
        return Config(
            size=size,
            colors=Colors.from_strs(dark, light),
            flip=flip,
            delays=delays,
            style=StyleComponents.parse(style),
            svgs_path=svgs_path,
            pieces_family=pieces,
            font_path=font,
        ).validate()
    except (ConfigError, DelayError) as e:
        raise CLIError(str(e))


def _resolve_provider(output_path: str, to_stdout: bool) -> OutputProvider:
    if to_stdout:
        return GifOutputProvider()
    try:
        return resolve_output_provider(output_path)
    except ValueError as e:
        raise CLIError(str(e))


def _read_pgn(pgn: str | None, input_path: str | None, status_console: Console) -> str:
    """Read PGN text from the argument, the input file, or stdin."""
    if pgn and input_path:
        raise CLIError("Cannot specify both a PGN argument and --input. Choose one.")
    if pgn:
        return pgn
    if input_path:
        status_console.print(f"[bold blue]Loading PGN from {input_path}...[/bold blue]")
        try:
            with open(input_path, "r") as f:
                return f.read()
        except FileNotFoundError:
            raise CLIError(f"File '{input_path}' not found")
        except OSError as e:
            raise CLIError(f"Failed to read '{input_path}': {e}")

    status_console.print("[bold blue]Reading PGN from stdin...[/bold blue]")
    return sys.stdin.read()


def _generate_output(
    pgn_text: str,
    config: Config,
    provider: OutputProvider,
    status_console: Console,
) -> bytes:
    """Render the game and encode it with ``provider``."""
    ext = Path(provider.path).suffix[1:].upper() or "GIF"
    status_console.print(f"\n[bold blue]Generating {ext} animation...[/bold blue]")
    try:
        encoded = encode_game(pgn_text, config, provider)
    except (DrawerError, EncodingError) as e:
        raise CLIError(f"Failed to generate output: {e}")

    if encoded is None:
        raise CLIError("No game found in input")
    return encoded


def _save_output(encoded: bytes, provider: OutputProvider, status_console: Console) -> None:
    status_console.print(f"[bold blue]Saving to {provider.path}...[/bold blue]")
    try:
        provider.write(encoded)
    except OSError as e:
        raise CLIError(f"Failed to save file '{provider.path}': {e}")
    ext = Path(provider.path).suffix[1:].upper()
    status_console.print(f"[green]✓[/green] {ext} saved to {provider.path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()

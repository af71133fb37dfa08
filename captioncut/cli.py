"""
captioncut.cli - Typer CLI entry point.

Provides subcommands to caption a media file and to inspect or edit the
resulting SRT files.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from captioncut import __version__
from captioncut.config import CONFIG_FILENAME, create_default_config, load_config, write_config
from captioncut.exceptions import CaptionCutError
from captioncut.logging import configure_logging
from captioncut.models import Caption, MediaFile, ParseResult, ProgressEvent
from captioncut.subtitles.timecode import display_time
from captioncut.transcribe.prompts import STYLES, CaptionStyle
from captioncut.utils import format_duration, format_size, preview_text

app = typer.Typer(
    name="captioncut",
    help="Turn video and audio into editable, synchronized SRT captions.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"captioncut {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """CaptionCut - media-to-caption toolkit."""
    configure_logging(verbose)


def caption_table(captions: list[Caption] | tuple[Caption, ...], title: str = "Captions") -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Start", style="cyan")
    table.add_column("End", style="cyan")
    table.add_column("Text")
    for c in captions:
        table.add_row(str(c.id), c.start_time, c.end_time, escape(preview_text(c.text)))
    return table


def _load_srt(path: Path) -> ParseResult:
    from captioncut.io import read_text
    from captioncut.subtitles.parsing import parse_srt_detailed

    if not path.is_file():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)
    return parse_srt_detailed(read_text(path))


@app.command("init")
def init_config(
    path: str = typer.Option(".", "--path", "-d", help="Directory to write the config into"),
    style: str = typer.Option(
        CaptionStyle.REELS.value, "--style", "-s", help="Default style: reels, standard, fast"
    ),
) -> None:
    """Write a default captioncut.yaml."""
    config_path = Path(path) / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[red]Error: '{config_path}' already exists[/red]")
        raise typer.Exit(1)

    try:
        write_config(create_default_config(style), config_path)
    except ValueError as e:
        console.print(f"[red]Error creating config: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Created {config_path}")
    console.print("\nNext step: [cyan]captioncut caption <media_file>[/cyan]")


@app.command("styles")
def list_styles() -> None:
    """List the available caption styles."""
    table = Table(title="Caption Styles")
    table.add_column("Style", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Description")
    for style, spec in STYLES.items():
        table.add_row(style.value, spec.label, spec.description)
    console.print(table)


@app.command("caption")
def caption_file(
    media_path: Path = typer.Argument(..., help="Video or audio file to caption"),
    style: str | None = typer.Option(
        None, "--style", "-s", help="Caption style: reels, standard, fast"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Where to write the SRT (default: next to the input)"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Transcription model override"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Extract audio, transcribe it, and export an SRT file."""
    from captioncut.pipeline import CaptionPipeline
    from captioncut.subtitles.srt import export_srt

    try:
        config = load_config(config_path)
    except CaptionCutError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if model:
        config.transcription_model = model
    style_name = style or config.default_style
    if style_name not in {s.value for s in CaptionStyle}:
        console.print(f"[red]Unknown style: {style_name}[/red]")
        console.print(f"[dim]Valid styles: {', '.join(s.value for s in CaptionStyle)}[/dim]")
        raise typer.Exit(1)

    from captioncut.validation import validate_media_file

    try:
        validate_media_file(media_path, config.max_file_size_mb)
    except (FileNotFoundError, CaptionCutError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    media = MediaFile.from_path(media_path)
    console.print(
        f"[cyan]Captioning {media.name}[/cyan] "
        f"[dim]({format_size(media.size_bytes)}, {media.mime_type}, style {style_name})[/dim]\n"
    )

    def on_progress(event: ProgressEvent) -> None:
        console.print(f"[dim]  {event.fraction:4.0%}  {escape(event.message)}[/dim]")

    pipeline = CaptionPipeline.from_config(config, on_progress=on_progress)
    try:
        result = asyncio.run(pipeline.run(media, style_name))

        if not result.ok:
            console.print(f"\n[red]Error: {escape(result.message)}[/red]")
            raise typer.Exit(1)

        console.print()
        console.print(caption_table(result.captions))

        if result.dropped_blocks:
            console.print(
                f"[yellow]Warning: dropped {result.dropped_blocks} malformed SRT block(s)[/yellow]"
            )

        out_path = export_srt(
            pipeline.timeline.captions,
            media.name,
            output_dir or media_path.parent,
            suffix=config.export_suffix,
        )
    finally:
        pipeline.discard()

    length = result.captions[-1].end_seconds if result.captions else 0.0
    console.print(
        f"\n[green]✓[/green] {len(result.captions)} captions "
        f"({format_duration(length)}) written to {out_path}"
    )

    usage = pipeline.client.get_token_usage()
    if usage["total_tokens"]:
        console.print(
            f"[dim]Tokens: {usage['prompt_tokens']} prompt, "
            f"{usage['completion_tokens']} completion[/dim]"
        )


@app.command("inspect")
def inspect_srt(
    srt_path: Path = typer.Argument(..., help="SRT file to inspect"),
) -> None:
    """Parse an SRT file and show its captions."""
    parsed = _load_srt(srt_path)

    console.print(caption_table(parsed.captions, title=srt_path.name))
    console.print(
        f"\n{len(parsed.captions)} of {parsed.total} block(s) parsed, {parsed.dropped} dropped"
    )


@app.command("at")
def caption_at(
    srt_path: Path = typer.Argument(..., help="SRT file"),
    seconds: float = typer.Argument(..., help="Playback time in seconds"),
) -> None:
    """Show the caption active at a playback time."""
    from captioncut.subtitles.timecode import seconds_to_srt_time
    from captioncut.timeline import CaptionTimeline

    if seconds < 0:
        console.print(f"[red]Error: Playback time must not be negative: {seconds}[/red]")
        raise typer.Exit(1)

    timeline = CaptionTimeline(_load_srt(srt_path).captions)
    caption = timeline.active_caption(seconds)

    if caption is None:
        console.print(f"[dim]No caption at {seconds_to_srt_time(seconds)}[/dim]")
        return

    console.print(
        f"[cyan]#{caption.id}[/cyan] [dim]{display_time(caption.start_time)}[/dim] "
        f"{escape(caption.text)}"
    )


@app.command("edit")
def edit_caption(
    srt_path: Path = typer.Argument(..., help="SRT file to edit in place"),
    caption_id: int = typer.Argument(..., help="Caption number"),
    text: str = typer.Argument(..., help="Replacement text"),
) -> None:
    """Replace a caption's text and rewrite the file.

    Every block carrying the id is updated. Malformed blocks are not
    carried over into the rewritten file.
    """
    from captioncut.io import write_text
    from captioncut.timeline import CaptionTimeline

    parsed = _load_srt(srt_path)
    timeline = CaptionTimeline(parsed.captions)

    try:
        edited = timeline.edit_text(caption_id, text)
    except CaptionCutError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    write_text(srt_path, timeline.to_srt())
    console.print(
        f"[green]✓[/green] Updated #{caption_id} ({len(edited)} block(s)): "
        f"{escape(edited[0].text)}"
    )
    if parsed.dropped:
        console.print(f"[yellow]Removed {parsed.dropped} malformed block(s)[/yellow]")


@app.command("doctor")
def run_doctor(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Check dependencies and environment setup."""
    console.print("[cyan]Running preflight checks...[/cyan]\n")

    from captioncut.exceptions import DependencyError
    from captioncut.validation import check_api_key, check_ffmpeg

    table = Table(title="Dependency Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Version/Details")

    all_passed = True

    try:
        versions = check_ffmpeg()
        table.add_row("FFmpeg", "✓ Installed", versions.get("ffmpeg_version", "unknown"))
    except DependencyError as e:
        table.add_row("FFmpeg", "✗ Missing", e.install_hint or "")
        all_passed = False

    try:
        config = load_config(config_path)
        source = str(config.config_path) if config.config_path else "defaults"
        table.add_row("Config", "✓ Valid", source)
        table.add_row("Model", config.transcription_model, f"timeout {config.transcription_timeout}s")

        key = check_api_key(config.api_key_env)
        if key["present"]:
            table.add_row("API key", "✓ Set", key["env_var"] or "not required")
        else:
            table.add_row("API key", "✗ Missing", f"export {key['env_var']}=...")
            all_passed = False
    except CaptionCutError as e:
        table.add_row("Config", "✗ Invalid", str(e))
        all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)

"""Command-line interface for Pitch Transcriber.

Provides commands for:
- transcribe: Convert a monophonic recording to MIDI (and MusicXML/JSON)
- info: Show audio file information
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn

app = typer.Typer(
    name="pitch-transcriber",
    help="Monophonic audio to MIDI transcription",
    rich_markup_mode="markdown",
)
console = Console()


@dataclass
class StageTimings:
    """Track timing of processing stages."""

    stages: Dict[str, float] = field(default_factory=dict)
    _current_stage: Optional[str] = field(default=None, repr=False)
    _start_time: float = field(default=0.0, repr=False)

    def start(self, stage: str) -> None:
        """Start timing a stage."""
        self._current_stage = stage
        self._start_time = time.time()

    def stop(self) -> float:
        """Stop timing the current stage, return duration."""
        if self._current_stage is None:
            return 0.0
        duration = time.time() - self._start_time
        self.stages[self._current_stage] = duration
        self._current_stage = None
        return duration

    @property
    def total_time(self) -> float:
        """Get total time across all stages."""
        return sum(self.stages.values())

    def print_summary(self) -> None:
        """Print timing summary to console."""
        console.print("\n[bold]Timing Summary:[/bold]")
        for stage, duration in self.stages.items():
            console.print(f"  {stage}: {duration:.2f}s")
        console.print(f"  [bold]Total: {self.total_time:.2f}s[/bold]")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "stages": self.stages,
            "total_time": self.total_time,
        }


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def transcribe(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output MIDI file path"
    ),
    musicxml: Optional[Path] = typer.Option(
        None, "--musicxml", help="Also write MusicXML to this path"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "-c", "--config", help="JSON file with engine settings"
    ),
    frame_size: Optional[int] = typer.Option(
        None, "--frame-size", help="Analysis frame length in samples"
    ),
    hop_size: Optional[int] = typer.Option(
        None, "--hop-size", help="Samples between frames (<= frame size)"
    ),
    min_duration: Optional[float] = typer.Option(
        None, "--min-duration", help="Minimum note duration in seconds"
    ),
    threshold: Optional[float] = typer.Option(
        None, "--threshold", help="YIN threshold (lower = stricter voicing)"
    ),
    velocity: Optional[int] = typer.Option(
        None, "--velocity", help="Velocity of emitted notes (0-127)"
    ),
    tempo: Optional[float] = typer.Option(
        None, "-t", "--tempo", help="Score tempo in BPM (not detected)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Transcribe a monophonic recording to MIDI.

    **Examples:**

        pitch-transcriber transcribe melody.wav

        pitch-transcriber transcribe humming.mp3 -o humming.mid --musicxml humming.xml
    """
    from .core import TranscriptionConfig, TranscriptionError
    from .input import AudioLoader, FrameSource
    from .transcription import MonophonicTranscriber
    from .output import MIDIExporter, MusicXMLExporter

    _setup_logging(verbose)

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    if output is None:
        output = input_file.with_suffix(".mid")

    timings = StageTimings()

    try:
        config = (
            TranscriptionConfig.from_json(config_file)
            if config_file
            else TranscriptionConfig()
        )
        config = config.replace(
            frame_size=frame_size,
            hop_size=hop_size,
            min_note_duration=min_duration,
            yin_threshold=threshold,
            default_velocity=velocity,
            tempo=tempo,
        ).validate()

        if not json_output:
            console.print(f"[blue]Loading audio:[/blue] {input_file}")
        timings.start("load")
        loader = AudioLoader()
        audio, sr = loader.load(str(input_file))
        duration = loader.get_duration(audio, sr)
        timings.stop()

        if verbose and not json_output:
            console.print(f"  Duration: {duration:.2f}s, Sample rate: {sr}Hz")
            frames = len(FrameSource(audio, sr, config.frame_size, config.hop_size))
            console.print(f"  Frames: {frames} x {config.frame_size} samples")

        timings.start("transcribe")
        transcriber = MonophonicTranscriber(config)
        with Progress(
            TextColumn("[blue]Transcribing[/blue]"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=console,
            disable=json_output,
            transient=True,
        ) as progress:
            task = progress.add_task("transcribe", total=1.0)
            score = transcriber.transcribe(
                audio,
                sr,
                progress=lambda fraction: progress.update(task, completed=fraction),
            )
        timings.stop()

        if not json_output:
            console.print(f"  Detected {len(score.notes)} notes")
            console.print(f"[blue]Exporting to:[/blue] {output}")
        timings.start("export")
        MIDIExporter().export(score, output)
        if musicxml is not None:
            if not json_output:
                console.print(f"[blue]Exporting to:[/blue] {musicxml}")
            MusicXMLExporter().export(score, musicxml)
        timings.stop()

    except (TranscriptionError, ValueError, FileNotFoundError, ImportError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        result = {
            "input": str(input_file),
            "output": str(output),
            "musicxml": str(musicxml) if musicxml else None,
            "duration": duration,
            "sample_rate": sr,
            "config": config.to_dict(),
            "score": score.to_dict(),
            "timings": timings.to_dict(),
        }
        console.print_json(data=result)
        return

    console.print("[green]Transcription complete![/green]")
    if verbose:
        if score.notes:
            _show_notes_table(score.notes)
        timings.print_summary()


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    frame_size: int = typer.Option(2048, "--frame-size", help="Analysis frame length"),
    hop_size: int = typer.Option(2048, "--hop-size", help="Samples between frames"),
):
    """Show information about an audio file."""
    from .core import ConfigurationError
    from .input import AudioLoader, FrameSource

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        loader = AudioLoader()
        audio, sr = loader.load(str(input_file))
        frames = len(FrameSource(audio, sr, frame_size, hop_size))
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {len(audio):,}")
    console.print(f"  Analysis frames: {frames}")


def _show_notes_table(notes):
    """Display notes in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Pitch", style="cyan")
    table.add_column("Onset (s)", style="green")
    table.add_column("Duration (s)", style="yellow")
    table.add_column("Velocity", style="magenta")

    for note in notes:
        table.add_row(
            note.pitch_name,
            f"{note.onset:.3f}",
            f"{note.duration:.3f}",
            str(note.velocity),
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()

"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from glyphtrace.core import CoverageReport
from glyphtrace.domain import TextLayout
from glyphtrace.utils import TracingStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphtrace[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, family: str, font_type: str, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        family: Family name from the name table
        font_type: Font format type (e.g., "TrueType", "OpenType")
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    line2 = Text("  ")
    line2.append(family)
    line2.append(f" {SYM_DOT} {upm:,} UPM")
    console.print(line2)


def print_layout(layout: TextLayout, mode: str) -> None:
    """Print where the target text landed on the surface.

    Args:
        layout: Computed text layout
        mode: Tracing mode name
    """
    geometry = layout.geometry
    console.print(
        f"  {geometry.width:g}×{geometry.height:g} @{geometry.pixel_ratio:g}x "
        f"{SYM_DOT} {geometry.device_width}×{geometry.device_height} device px"
    )
    console.print(
        f"  {mode} mode {SYM_DOT} font size {layout.font_size:.1f} "
        f"{SYM_DOT} left {layout.left:.1f} {SYM_DOT} baseline {layout.baseline:.1f}"
    )


def print_bounds_table(layout: TextLayout, sampled: list[int] | None = None) -> None:
    """Print per-character column intervals.

    Args:
        layout: Computed text layout
        sampled: Sampled guide pixels per character, if known
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("char")
    table.add_column("columns")
    table.add_column("width", justify="right")
    if sampled is not None:
        table.add_column("guide samples", justify="right")

    for i, bound in enumerate(layout.bounds):
        row: list[str | Text] = [
            str(i),
            Text(repr(bound.char)),
            Text(f"[{bound.start}, {bound.end})"),
            str(bound.width),
        ]
        if sampled is not None:
            row.append(str(sampled[i]))
        table.add_row(*row)

    console.print(table)


def print_coverage_table(report: CoverageReport | None, threshold: float) -> None:
    """Print coverage, per character when available.

    Args:
        report: Coverage report, or None if not applicable
        threshold: Ratio needed to pass
    """
    if report is None:
        console.print("  [yellow]Coverage not applicable[/yellow] (guide has no ink)")
        return

    console.print(f"  overall {_format_ratio(report.ratio, threshold)} ({report.matched}/{report.total} samples)")
    if report.characters is None:
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("char")
    table.add_column("matched", justify="right")
    table.add_column("coverage", justify="right")

    for i, char in enumerate(report.characters):
        coverage = "[dim]n/a[/dim]" if char.ratio is None else _format_ratio(char.ratio, threshold)
        table.add_row(str(i), Text(repr(char.char)), f"{char.matched}/{char.total}", coverage)

    console.print(table)


def _format_ratio(ratio: float, threshold: float) -> str:
    style = "green" if ratio >= threshold else "red"
    return f"[{style}]{ratio:.1%}[/{style}]"


def print_replay_summary(events: int, completed: bool, effect_finished: bool, stats: TracingStats) -> None:
    """Print the outcome of a replayed session.

    Args:
        events: Number of pointer events replayed
        completed: Whether completion fired
        effect_finished: Whether the completion effect reported back
        stats: Tracing statistics collected during the replay
    """
    if completed:
        console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")
    else:
        console.print(f"\n[bold yellow]{SYM_DOT} Not complete[/bold yellow]")

    console.print(
        f"  {events} events {SYM_DOT} {stats.checks_scheduled} checks scheduled "
        f"{SYM_DOT} {stats.evaluations} evaluations {SYM_DOT} {stats.skipped_evaluations} skipped"
    )
    if completed:
        state = "finished" if effect_finished else "still playing"
        console.print(f"  celebration {state}")


def print_saved(path: str) -> None:
    """Print where a file was written.

    Args:
        path: Output path
    """
    line = Text(f"\n{SYM_OK} Saved ")
    line.append(path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    # Plain text: messages may quote paths or validation output
    line = Text.from_markup(f"\n[bold red]{SYM_ERR} Error:[/bold red] ")
    line.append(message)
    console.print(line)
    if details:
        console.print(Text(f"  {details}"))

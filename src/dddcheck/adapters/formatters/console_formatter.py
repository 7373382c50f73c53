"""Console formatter with colored output."""

from ...domain.models.validation import MarkerOutcome, ValidationRun, Violation
from .base_formatter import OutputFormatter


class ConsoleFormatter(OutputFormatter):
    """
    Format validation runs for console output.

    Provides human-readable output using ANSI codes. Verbose mode also
    lists every marked type and constructor.
    """

    COLORS = {
        "red": "\033[91m",
        "yellow": "\033[33m",
        "green": "\033[92m",
        "blue": "\033[94m",
        "gray": "\033[90m",
        "white": "\033[97m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True, verbose: bool = False):
        """
        Initialize console formatter.

        Args:
            use_color: Enable colored output
            verbose: List types and constructors as well as violations
        """
        self.use_color = use_color
        self.verbose = verbose

    def format_run(self, run: ValidationRun) -> str:
        """
        Format complete validation run for console.

        Args:
            run: ValidationRun to format

        Returns:
            Formatted console output
        """
        lines = [self._format_header(run), ""]

        for outcome in run.outcomes:
            lines.append(self._format_outcome(outcome))
            lines.append("")

        lines.append(self._format_summary(run))
        return "\n".join(lines)

    def format_violation(self, violation: Violation) -> str:
        """Format single violation as its rendered line."""
        return self._colorize(violation.render(), "red")

    def get_file_extension(self) -> str:
        """Get file extension."""
        return ".txt"

    def _format_header(self, run: ValidationRun) -> str:
        lines = [
            self._bold("=" * 70),
            self._bold("dddcheck Zero-Value Validation"),
            self._bold("=" * 70),
            f"Path: {run.root_path}",
            f"Files analyzed: {run.files_analyzed}",
        ]
        return "\n".join(lines)

    def _format_outcome(self, outcome: MarkerOutcome) -> str:
        marker = outcome.marker
        title = self._bold(f"{marker.label} ({marker.kind})")
        report = outcome.report

        if report is None:
            return f"{title}\n  {self._colorize('No marked types found', 'gray')}"

        lines = [title]
        lines.append(f"  Types: {len(report.types)}  Constructors: {len(report.constructors)}")

        if self.verbose:
            for type_name in report.sorted_types():
                lines.append(f"    type {type_name}")
                constructors = report.constructors_for(type_name)
                if not constructors:
                    lines.append(f"      {self._colorize('no constructor', 'yellow')}")
                for constructor in constructors:
                    lines.append(
                        f"      constructor {constructor.function} -> {constructor.type} "
                        f"at {constructor.file}:{constructor.start_line}-{constructor.end_line}"
                    )

        if report.violations:
            lines.append(f"  {self._colorize('Violations:', 'red')} {len(report.violations)}")
            for violation in report.sorted_violations():
                lines.append(f"    {self.format_violation(violation)}")
        else:
            lines.append(f"  {self._colorize('No violations', 'green')}")

        return "\n".join(lines)

    def _format_summary(self, run: ValidationRun) -> str:
        total = run.total_violations
        lines = [self._bold("=" * 70)]
        if total:
            lines.append(self._colorize(f"{total} violation{'s' if total != 1 else ''} found", "red"))
        else:
            lines.append(self._colorize("No violations found", "green"))
        if run.completed_at and run.started_at:
            lines.append(f"Duration: {run.completed_at - run.started_at}")
        lines.append(self._bold("=" * 70))
        return "\n".join(lines)

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{self.COLORS.get(color, self.COLORS['white'])}{text}{self.RESET}"

    def _bold(self, text: str) -> str:
        if not self.use_color:
            return text
        return f"\033[1m{text}{self.RESET}"

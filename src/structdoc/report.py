"""Report generation for lint results."""

import json
from dataclasses import dataclass, field

from rich.console import Console
from rich.table import Table

from structdoc.rules.base import StyleViolation
from structdoc.types import Severity


@dataclass
class Report:
    """Lint report containing all violations found."""

    violations: list[StyleViolation] = field(default_factory=list)
    files_checked: int = 0
    skipped_files: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        """Return a formatted string representation using Rich."""
        console = Console(force_terminal=True, width=100)
        with console.capture() as capture:
            self._print_to_console(console)
        return capture.get()

    def _print_to_console(self, console: Console) -> None:
        """Print the report to a Rich console."""
        console.print()
        console.print("[bold]structdoc Report[/bold]")
        console.print("━" * 52)

        if not self.violations:
            console.print(f"[green]✓ No violations found in {self.files_checked} files[/green]")
            console.print()
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Location", style="cyan")
        table.add_column("Rule", style="white")
        table.add_column("Reason", style="white")
        table.add_column("Severity", justify="center")

        # Errors first, then by position
        sorted_violations = sorted(
            self.violations,
            key=lambda v: (v.severity != Severity.ERROR, v.location.path or "", v.location.byte_offset),
        )

        for violation in sorted_violations:
            severity_style = self._get_severity_style(violation.severity)
            table.add_row(
                str(violation.location),
                violation.rule.identifier,
                violation.reason,
                f"[{severity_style}]{violation.severity.value}[/{severity_style}]",
            )

        console.print(table)
        console.print()

        unique_files = len({v.location.path for v in self.violations})
        console.print(
            f"Summary: {len(self.violations)} violations found in {unique_files} of "
            f"{self.files_checked} files"
        )
        if self.skipped_files:
            console.print(f"[dim]Skipped {len(self.skipped_files)} unreadable files[/dim]")
        console.print()

    def _get_severity_style(self, severity: Severity) -> str:
        """Get Rich style for severity level."""
        return {
            Severity.ERROR: "bold red",
            Severity.WARNING: "yellow",
        }[severity]

    def print(self) -> None:
        """Print the report to stdout."""
        console = Console()
        self._print_to_console(console)

    def to_dict(self) -> dict:
        """Convert report to dictionary for JSON serialization."""
        return {
            "files_checked": self.files_checked,
            "skipped_files": self.skipped_files,
            "violation_count": len(self.violations),
            "violations": [violation.to_dict() for violation in self.violations],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert report to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_xcode(self) -> str:
        """Convert report to Xcode-compatible diagnostic lines."""
        return "\n".join(violation.to_xcode() for violation in self.violations)

    def filter_by_severity(self, min_severity: Severity) -> "Report":
        """Return a new report with only violations at or above the given severity.

        Args:
            min_severity: Minimum severity level to include.

        Returns:
            New Report with filtered violations.
        """
        filtered = [v for v in self.violations if v.severity >= min_severity]
        return Report(
            violations=filtered,
            files_checked=self.files_checked,
            skipped_files=list(self.skipped_files),
        )

    @property
    def has_violations(self) -> bool:
        """Check if the report contains any violations."""
        return len(self.violations) > 0

    @property
    def has_errors(self) -> bool:
        """Check if the report contains error severity violations."""
        return any(v.severity == Severity.ERROR for v in self.violations)

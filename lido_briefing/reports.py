"""Reports module for tabular views of an OFP briefing."""
import sys

from lido_briefing.analyzer import BriefingResult, OfpAnalyzer
from lido_briefing.main import read_ofp_text, setup_logging


class ReportRunner:
    """Handles predefined report display for one analyzed OFP."""

    def __init__(self, result: BriefingResult):
        self.result = result

    @classmethod
    def from_file(cls, path: str) -> 'ReportRunner':
        return cls(OfpAnalyzer().analyze(read_ofp_text(path)))

    def _display_results(self, results: list) -> None:
        """Display rows in a formatted table."""
        if not results:
            print("No results found.")
            return

        # Get column names
        columns = list(results[0].keys())

        # Calculate column widths
        widths = {col: len(col) for col in columns}
        for row in results:
            for col in columns:
                val_len = len(str(row[col]))
                if val_len > widths[col]:
                    widths[col] = min(val_len, 100)  # Cap at 100 chars

        header = " | ".join(col.ljust(widths[col]) for col in columns)
        separator = "-+-".join("-" * widths[col] for col in columns)

        print(header)
        print(separator)

        for row in results:
            print(" | ".join(str(row[col])[:widths[col]].ljust(widths[col]) for col in columns))

        print(f"\n{len(results)} row(s).\n")

    def run_predefined_report(self, report_name: str) -> None:
        """Run a predefined report."""
        reports = {
            'notams': self._report_notams,
            'active': self._report_active,
            'weather': self._report_weather,
            'windows': self._report_windows,
        }

        if report_name not in reports:
            print(f"Unknown report: {report_name}")
            print(f"Available reports: {', '.join(reports.keys())}")
            sys.exit(1)

        reports[report_name]()

    def _report_notams(self) -> None:
        """Display every parsed bulletin record."""
        print("\n=== Bulletin Records ===\n")
        display_results = []
        for r in self.result.records:
            v = r.validity
            display_results.append({
                'ID': r.id_raw,
                'Type': r.id_type.value,
                'Airport': r.airport,
                'Start': v.start_utc.strftime('%Y-%m-%d %H:%M') if v.start_utc else 'N/A',
                'End': v.end_utc.strftime('%Y-%m-%d %H:%M') if v.end_utc else v.end_kind.value,
                'Schedule': ','.join(s.raw for s in r.schedules) or '-',
                'Warnings': len(r.parse_warnings),
            })
        self._display_results(display_results)

    def _report_active(self) -> None:
        """Display records relevant to at least one airport of the flight."""
        print("\n=== Relevant NOTAMs ===\n")
        if self.result.refs is None:
            print("No airport windows (see warnings).\n")
            for warning in self.result.warnings:
                print(f"  {warning}")
            return

        display_results = []
        for a in self.result.active:
            if not a.is_active:
                continue
            display_results.append({
                'ID': a.record.id_raw,
                'Airport': a.record.airport,
                'DEP': 'YES' if a.dep_active else 'No',
                'DEST': 'YES' if a.dest_active else 'No',
                'ALTN': ','.join(k for k, v in (a.altn_active or {}).items() if v) or '-',
                'Reasons': '; '.join(a.reasons),
            })
        self._display_results(display_results)

    def _report_weather(self) -> None:
        """Display METAR/TAF per weather block."""
        print("\n=== Airport Weather ===\n")
        display_results = []
        for w in self.result.weather:
            display_results.append({
                'Kind': w.kind.value,
                'ICAO': w.icao,
                'METAR': w.metar or '-',
                'TAF': w.taf or '-',
            })
        self._display_results(display_results)

    def _report_windows(self) -> None:
        """Display airport reference times and relevance windows."""
        print("\n=== Airport Windows ===\n")
        refs = self.result.refs
        if refs is None:
            print("No airport windows (see warnings).\n")
            return
        windows = [('DEP', refs.dep), ('DEST', refs.dest)] + [('ALTN', a) for a in (refs.altn or ())]
        self._display_results([
            {
                'Role': role,
                'ICAO': w.icao,
                'Ref': w.ref_utc.strftime('%Y-%m-%d %H:%MZ'),
                'From': w.window_start_utc.strftime('%Y-%m-%d %H:%MZ'),
                'To': w.window_end_utc.strftime('%Y-%m-%d %H:%MZ'),
            }
            for role, w in windows
        ])


def main():
    """Main entry point for report runner."""
    if len(sys.argv) < 3:
        print("Usage:")
        print("  python -m lido_briefing.reports <ofp_text_file> <report_name>")
        print("\nAvailable reports:")
        print("  notams       - Show all parsed bulletin records")
        print("  active       - Show NOTAMs relevant to the flight")
        print("  weather      - Show METAR/TAF per airport")
        print("  windows      - Show airport reference times and windows")
        sys.exit(1)

    setup_logging()
    runner = ReportRunner.from_file(sys.argv[1])
    runner.run_predefined_report(sys.argv[2])


if __name__ == '__main__':
    main()

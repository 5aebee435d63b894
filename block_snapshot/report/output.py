"""Write a rendered report to a file or stdout."""

import sys
from pathlib import Path


def write_output(text: str, output_path: Path | None) -> None:
    """Write *text* to *output_path*, or to stdout when no path is given."""
    if output_path is None:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")
        return
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
    except OSError as exc:
        print(f"[error] Could not write report to '{output_path}': {exc}", file=sys.stderr)
        sys.exit(1)

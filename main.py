"""Ad insights entrypoint."""

from __future__ import annotations

import sys
from pathlib import Path

from ad_insights.application.report_service import run_reporting_pipeline


def main() -> None:
    input_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None
    run_reporting_pipeline(input_path=input_path, output_dir=output_dir)


if __name__ == "__main__":
    main()

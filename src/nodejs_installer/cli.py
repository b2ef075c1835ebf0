"""Command line entry point run by the build on install and uninstall."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .bootstrap import path_export_line
from .config import collect_packages, load_root_package
from .errors import NodeJsInstallerError
from .orchestrator import Mode, NodeJsOrchestrator
from .settings import load_settings
from .versions.catalog import DEFAULT_DIST_URL

logger = logging.getLogger(__name__)

DEFAULT_BIN_DIR = "vendor/bin"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodejs-installer",
        description="Make sure a Node.js matching the project's constraints is available",
        epilog=(
            "With includeBinInPath set, install prints an 'export PATH=...' line: "
            "eval \"$(nodejs-installer install)\""
        ),
    )
    parser.add_argument("mode", choices=[m.value for m in Mode], help="Lifecycle event to run")
    parser.add_argument(
        "--project-root", type=Path, default=Path.cwd(), help="Project root (default: cwd)"
    )
    parser.add_argument(
        "--bin-dir", default=DEFAULT_BIN_DIR, help=f"Bin directory for shims (default: {DEFAULT_BIN_DIR})"
    )
    parser.add_argument(
        "--installed", default=None, help="Installed packages JSON (default: vendor/installed.json)"
    )
    parser.add_argument("--dist-url", default=DEFAULT_DIST_URL, help="Node.js dist mirror")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Show progress (-vv for debug output)"
    )
    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    project_root = args.project_root.resolve()
    mode = Mode(args.mode)

    try:
        root_package = load_root_package(project_root)
        settings = load_settings(root_package)
        packages = collect_packages(project_root, args.installed) if mode is Mode.INSTALL else []

        orchestrator = NodeJsOrchestrator(
            project_root=project_root,
            bin_dir=args.bin_dir,
            packages=packages,
            settings=settings,
            dist_url=args.dist_url,
        )
        outcome = orchestrator.run(mode)
    except NodeJsInstallerError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if mode is Mode.INSTALL and settings.include_bin_in_path:
        # PATH changes die with this process; the host evals this line
        print(path_export_line(orchestrator.bin_dir))

    logger.info("Done: %s", outcome.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())

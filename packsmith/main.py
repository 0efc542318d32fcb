# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# PACKSMITH - COMMAND LINE
# -----------------------------------------------------------------------------
# Responsibility: The operator entry point.
#
#   packsmith path/to/pack.toml [--compress]
#
# Exit codes:
# - 0: Build reached DONE (the server's own exit code is printed, not returned)
# - 1: Manifest, fetch, placement, archive or launch failure
# - 2: Invalid arguments or environment settings
# -----------------------------------------------------------------------------

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from packsmith.core.manifest import load_manifest
from packsmith.core.pipeline import BuildPipeline
from packsmith.core.settings import Settings
from packsmith.domain.errors import ArchiveGroupError, FetchError, PacksmithError
from packsmith.domain.models import LaunchResult

console = Console()

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"expected true/false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="packsmith",
        description="Build server and client mod-pack bundles from a manifest.",
    )
    parser.add_argument("config", type=Path, help="Path to the manifest (TOML or YAML)")
    parser.add_argument(
        "-c",
        "--compress",
        nargs="?",
        const=True,
        default=False,
        type=_parse_bool,
        help=(
            "Pack server/ and client/ into compressed containers; place after the config "
            "path, e.g. `packsmith pack.toml -c` (default: %(default)s)"
        ),
    )
    return parser


def _describe_failure(error: PacksmithError) -> str:
    """Error kind and underlying cause, for the operator."""
    lines = [f"[bold red]{type(error).__name__}[/bold red]: {error}"]
    if isinstance(error, FetchError) and error.status_code is not None:
        lines.append(f"HTTP status: {error.status_code}")
    if isinstance(error, ArchiveGroupError):
        lines.extend(f"- {inner}" for inner in error.errors)
    if error.__cause__ is not None:
        lines.append(f"Cause: {type(error.__cause__).__name__}: {error.__cause__}")
    return "\n".join(lines)


def report_launch(result: LaunchResult) -> None:
    """Print the loader's exit status and captured streams."""
    console.print(f"Exit Code: {result.exit_status}")
    console.print(result.stdout_text(), markup=False, highlight=False)
    console.print(result.stderr_text(), markup=False, highlight=False)
    console.print("[green]Server initialized[/green]")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()

    try:
        settings = Settings.from_env()
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Invalid PACKSMITH_* settings: {e}[/red]")
        return 2

    config_path: Path = args.config
    try:
        manifest = load_manifest(config_path)
        result = BuildPipeline(settings=settings).run(
            manifest, config_path.resolve().parent, compress=args.compress
        )
    except PacksmithError as e:
        console.print(Panel(_describe_failure(e), title="BUILD FAILED", border_style="red"))
        return 1

    report_launch(result)
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()

"""CLI entrypoints for setupgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigError, load_config
from .errors import InvalidInputError, MissingCredentialError, SetupGenError
from .logging import configure_logging
from .models import FileContent
from .orchestrator import Orchestrator, SetupInstructionsRequest
from .prompting.constants import PRICING_COMPONENTS


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_api_key_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--api-key",
        default=None,
        help="Billing API key (defaults to SETUPGEN_API_KEY or MCP_API_KEY).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="setupgen",
        description="Generate billing integration instructions from a codebase analysis.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Directory containing .setupgen.yml, or the file itself (defaults to cwd).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Print the analysis request for the given source files.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument("files", nargs="+", help="Files to include in the request.")
    analyze_parser.add_argument(
        "--project-root",
        default=None,
        help="Project root shown in the request (paths are reported relative to it).",
    )

    instructions_parser = subparsers.add_parser(
        "instructions",
        help="Generate setup instructions from a codebase analysis document.",
    )
    _add_verbose_option(instructions_parser, suppress_default=True)
    _add_api_key_option(instructions_parser)
    instructions_parser.add_argument(
        "--analysis",
        default=None,
        help="Path to the markdown codebase analysis.",
    )
    instructions_parser.add_argument(
        "--file",
        dest="files",
        action="append",
        default=[],
        help="Source file to inspect; without --analysis an analysis request is printed.",
    )
    instructions_parser.add_argument(
        "--project-structure",
        choices=("nextjs", "react"),
        default=None,
        help="Override the detected project structure.",
    )
    instructions_parser.add_argument(
        "--pricing-component",
        dest="pricing_components",
        action="append",
        choices=PRICING_COMPONENTS,
        default=[],
        help="Pricing aspect to consider (repeatable).",
    )
    instructions_parser.add_argument("--stack-details", default=None)
    instructions_parser.add_argument("--additional-details", default=None)
    instructions_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the instructions to this file instead of stdout.",
    )

    pricing_parser = subparsers.add_parser(
        "pricing-model",
        help="Print the organization's default pricing model.",
    )
    _add_verbose_option(pricing_parser, suppress_default=True)
    _add_api_key_option(pricing_parser)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP tool service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for setupgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "serve":
        from .service import run_service

        run_service(args.host or config.service.host, args.port or config.service.port)
        return

    orchestrator = Orchestrator.from_config(config)

    try:
        if args.command == "analyze":
            files = _read_files(args.files, args.project_root)
            output = orchestrator.analyze_codebase(files, project_root=args.project_root)
        elif args.command == "instructions":
            analysis = _read_text(Path(args.analysis)) if args.analysis else None
            request = SetupInstructionsRequest(
                pricing_components=list(args.pricing_components),
                file_contents=_read_files(args.files, None) or None,
                codebase_analysis=analysis,
                project_structure=args.project_structure,
                stack_details=args.stack_details,
                additional_details=args.additional_details,
            )
            output = orchestrator.get_setup_instructions(request, api_key=args.api_key)
        elif args.command == "pricing-model":
            output = orchestrator.get_default_pricing_model(api_key=args.api_key)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (FileNotFoundError, MissingCredentialError, InvalidInputError) as exc:
        parser.exit(1, f"{exc}\n")
    except SetupGenError as exc:
        parser.exit(
            1, f"setupgen {args.command} failed: {exc}\nRun with --verbose for more details.\n"
        )

    destination: Optional[str] = getattr(args, "output", None)
    if destination:
        target = Path(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(output, encoding="utf-8")
        print(f"Instructions written to {_relativize(target)}")
    else:
        sys.stdout.write(output if output.endswith("\n") else output + "\n")


def _read_files(paths: List[str], project_root: Optional[str]) -> List[FileContent]:
    root = Path(project_root) if project_root else None
    files: List[FileContent] = []
    for raw in paths:
        path = Path(raw)
        display = path
        if root is not None:
            try:
                display = path.resolve().relative_to(root.resolve())
            except ValueError:
                display = path
        files.append(FileContent(path=display.as_posix(), content=_read_text(path)))
    return files


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])

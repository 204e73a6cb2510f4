"""CLI entrypoints for modgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import StubGenerationError
from .generator import StubGenerator
from .logging import configure_logging
from .models import ModuleDescriptor
from .stubs.formatter import StubFormatter, StubPolicy


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modgen",
        description="Generate Go method stubs for Viam modules from SDK client sources.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    stubs_parser = subparsers.add_parser(
        "stubs",
        help="Render a Go model file with stubs for every client method.",
    )
    _add_verbose_option(stubs_parser, suppress_default=True)
    _add_log_file_option(stubs_parser, suppress_default=True)
    stubs_parser.add_argument("--module-name", required=True, help="Module name, e.g. my-module.")
    stubs_parser.add_argument("--namespace", required=True, help="Organization namespace.")
    stubs_parser.add_argument(
        "--resource",
        required=True,
        help='Resource to implement, e.g. "arm component" or "generic service".',
    )
    stubs_parser.add_argument("--model-name", required=True, help="Model name, e.g. my-model.")
    stubs_parser.add_argument(
        "--sdk-version",
        required=True,
        help="RDK release to read the client interface from, e.g. 0.44.0.",
    )
    stubs_parser.add_argument(
        "--policy",
        choices=[policy.value for policy in StubPolicy],
        default=None,
        help="Stub body policy (defaults to the configured policy, panic).",
    )
    stubs_parser.add_argument(
        "--config",
        default=".",
        help="Path to .modgen.yml or its directory (defaults to current directory).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve stub generation over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for modgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "stubs":
        try:
            config = load_config(Path(args.config))
            module = ModuleDescriptor.from_resource(
                module_name=args.module_name,
                namespace=args.namespace,
                resource=args.resource,
                model_name=args.model_name,
                sdk_version=args.sdk_version,
            )
            formatter = StubFormatter(StubPolicy(args.policy)) if args.policy else None
            output = StubGenerator(config, formatter=formatter).generate(module)
        except (ConfigError, ValueError) as exc:
            parser.exit(1, f"modgen stubs: {exc}\n")
        except StubGenerationError as exc:
            parser.exit(1, f"modgen stubs failed: {exc}\nRun with --verbose for more details.\n")
        sys.stdout.buffer.write(output)
        sys.stdout.flush()
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])

"""Command line entry point for qq-bot-adapter.

Parses one inbound payload and prints the result as JSON:
- a bare message payload prints its segments and brief
- with ``--dispatch`` (or a websocket dispatch envelope with ``t``/``d``),
  prints the built message event
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

import structlog
import yaml

from qq_bot_adapter._version import __version__
from qq_bot_adapter.utils.logging import LogEventNames

log = structlog.get_logger()


def setup_logging(
    debug: bool = False,
    log_format: str = "console",
    file_path: Path | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging with secret sanitization.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging
    """
    from qq_bot_adapter.utils.logging import LogFormat, LogLevel, configure_logging

    configure_logging(
        level=LogLevel.DEBUG if debug else LogLevel.INFO,
        log_format=LogFormat(log_format.lower()),
        file_path=file_path,
        file_enabled=file_enabled,
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="qq-bot-adapter",
        description="Parse QQ bot message payloads into segments and events",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "payload",
        nargs="?",
        default="-",
        help="JSON payload file, or - for stdin (default: -)",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--dispatch",
        metavar="TYPE",
        default=None,
        help="Dispatch type of the payload, e.g. AT_MESSAGE_CREATE",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the configuration and exit",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    return parser.parse_args(argv)


def read_payload(source: str, stdin: TextIO | None = None) -> dict[str, Any]:
    """Read one JSON object from a file or stdin.

    Raises:
        FileNotFoundError: If the payload file doesn't exist
        ValueError: If the content is not a JSON object
    """
    if source == "-":
        text = (stdin or sys.stdin).read()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Payload file not found: {path}")
        text = path.read_text(encoding="utf-8")

    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError("Payload must be a JSON object")
    return payload


def unwrap_dispatch(
    payload: dict[str, Any],
    dispatch_type: str | None,
) -> tuple[dict[str, Any], str | None]:
    """Split a websocket dispatch envelope into its data and event name."""
    if "op" in payload and isinstance(payload.get("d"), dict):
        return payload["d"], dispatch_type or payload.get("t")
    return payload, dispatch_type


def run(args: argparse.Namespace, stdout: TextIO | None = None) -> int:
    """Load configuration, parse the payload and print the result.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from qq_bot_adapter.config.loader import load_config
    from qq_bot_adapter.config.schema import AdapterConfig
    from qq_bot_adapter.core.event_builder import build_message_event
    from qq_bot_adapter.core.message_assembler import MessageAssembler
    from qq_bot_adapter.utils.errors import AdapterError, UnsupportedEventError
    from qq_bot_adapter.utils.logging import configure_logging, register_secret

    out = stdout or sys.stdout

    try:
        if args.config is not None:
            log.info(LogEventNames.CONFIG_LOADING, path=str(args.config))
            config = load_config(args.config)
            log.info(LogEventNames.CONFIG_LOADED)

            configure_logging(
                level="DEBUG" if args.debug else config.logging.level,
                log_format=config.logging.format,
                file_path=config.logging.file.path if config.logging.file.enabled else None,
                file_enabled=config.logging.file.enabled,
            )
        else:
            config = AdapterConfig()

        if config.bot is not None:
            register_secret(config.bot.secret)

        if args.dry_run:
            log.info(LogEventNames.DRY_RUN_OK)
            return 0

        payload, dispatch_type = unwrap_dispatch(read_payload(args.payload), args.dispatch)
        assembler = MessageAssembler(attachment_scheme=config.parser.attachment_scheme)

        result: dict[str, Any]
        if dispatch_type:
            if config.dispatch_types and dispatch_type not in config.dispatch_types:
                raise UnsupportedEventError(dispatch_type)
            result = build_message_event(dispatch_type, payload, assembler).to_dict()
        else:
            parsed = assembler.assemble(payload)
            result = {"message": parsed.to_list(), "brief": parsed.brief}

        out.write(json.dumps(result, ensure_ascii=False, indent=2) + "\n")
        return 0

    except FileNotFoundError as e:
        log.error(LogEventNames.FILE_NOT_FOUND, error=str(e))
        return 1
    except UnsupportedEventError as e:
        log.error(LogEventNames.EVENT_UNSUPPORTED, dispatch_type=e.dispatch_type)
        return 1
    except AdapterError as e:
        log.error(LogEventNames.EVENT_BUILD_FAILED, error=str(e))
        return 1
    except (ValueError, yaml.YAMLError) as e:
        log.error(LogEventNames.INPUT_INVALID, error=str(e))
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug, log_format=args.format)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())

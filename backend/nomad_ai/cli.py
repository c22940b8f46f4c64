"""CLI for checking configuration and running a feature against the live API."""
import argparse
import asyncio
import json
import sys

import httpx

from nomad_ai.components.contracts import Feature
from nomad_ai.core.config import Settings
from nomad_ai.core.errors import GeminiConfigurationError, GeminiUpstreamError, ResponseValidationError
from nomad_ai.core.gemini_client import GeminiClient
from nomad_ai.core.logging_config import LoggingConfig
from nomad_ai.services.nomad_assistant_service import NomadAssistantService

EXIT_CONFIG_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_UPSTREAM_ERROR = 3


def cmd_check(args):
    """Build settings and the gateway without sending anything."""
    try:
        client = GeminiClient(settings=Settings())
    except GeminiConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(f"OK: model={client.model} endpoint={client.endpoint}")
    return 0


def _read_input(path):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def cmd_run(args):
    """Run one feature and print the validated result as JSON."""
    payload = _read_input(args.input)
    try:
        service = NomadAssistantService(client=GeminiClient(settings=Settings()))
        result = asyncio.run(service.run_feature(args.feature, payload))
    except GeminiConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except ResponseValidationError as e:
        print(json.dumps(e.to_dict(), indent=2, ensure_ascii=False, default=str), file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except (GeminiUpstreamError, httpx.TransportError) as e:
        print(f"Upstream error: {e}", file=sys.stderr)
        return EXIT_UPSTREAM_ERROR

    print(json.dumps(result.to_payload(), indent=2, ensure_ascii=False))
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="nomad-ai")
    p.add_argument("--log-level", help="Override log level for nomad_ai loggers")
    sub = p.add_subparsers(dest="cmd")
    s = sub.add_parser("check", help="Validate configuration (no network call)")
    s.set_defaults(func=cmd_check)
    s = sub.add_parser("run", help="Run a feature with JSON input")
    s.add_argument("feature", choices=[f.value for f in Feature])
    s.add_argument("--input", "-i", default="-", help="JSON file with the feature payload ('-' for stdin)")
    s.set_defaults(func=cmd_run)
    return p


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    if not hasattr(args, "func"):
        p.print_help()
        return 2
    LoggingConfig.configure()
    if args.log_level:
        LoggingConfig.set_module_level("nomad_ai", args.log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())

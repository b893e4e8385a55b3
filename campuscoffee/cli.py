"""CLI entrypoint for the CampusCoffee POS backend."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from campuscoffee.common.config_loader import AppConfig, load_app_config
from campuscoffee.common.constants import (
    EXIT_BAD_INPUT,
    EXIT_CONFLICT,
    EXIT_HARD_FAIL,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
)
from campuscoffee.common.errors import (
    DuplicateName,
    ExternalNodeNotFound,
    MissingRequiredFields,
    PipelineError,
    RecordNotFound,
)
from campuscoffee.common.ids import generate_run_id
from campuscoffee.common.logging import build_logger, log_event
from campuscoffee.osm.node_fetcher import OsmNodeFetcher
from campuscoffee.pos.service import PosService
from campuscoffee.pos.store import PosStore

COMMANDS = ("import", "list", "get", "clear")

EXIT_CODE_BY_ERROR = (
    (ExternalNodeNotFound, EXIT_NOT_FOUND),
    (RecordNotFound, EXIT_NOT_FOUND),
    (MissingRequiredFields, EXIT_BAD_INPUT),
    (DuplicateName, EXIT_CONFLICT),
)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--node-id", type=int, default=None)
    parser.add_argument("--id", dest="record_id", type=int, default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    if args.command == "import" and args.node_id is None:
        parser.error("import requires --node-id")
    if args.command == "get" and args.record_id is None:
        parser.error("get requires --id")
    return args


def build_service(config: AppConfig, data_dir: Path) -> PosService:
    store = PosStore(data_dir / "store" / config.store_filename)
    return PosService(store, OsmNodeFetcher.from_config(config.osm))


def exit_code_for(exc: PipelineError) -> int:
    for error_type, code in EXIT_CODE_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return EXIT_HARD_FAIL


def execute_command(args: argparse.Namespace, service: PosService):
    if args.command == "import":
        return service.import_from_osm_node(args.node_id).to_dict()
    if args.command == "list":
        return [record.to_dict() for record in service.get_all()]
    if args.command == "get":
        return service.get_by_id(args.record_id).to_dict()
    if args.command == "clear":
        service.clear()
        return {"cleared": True}
    raise ValueError(f"Unknown command: {args.command}")


def run_command(args: argparse.Namespace, service: PosService | None = None) -> int:
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir)
    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)

    owns_service = service is None
    if service is None:
        overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
        config = load_app_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)
        service = build_service(config, data_dir)

    started = time.monotonic()
    log_event(logger, "command start", run_id=run_id, stage=args.command, event="COMMAND_START", status="ok")
    try:
        result = execute_command(args, service)
    except PipelineError as exc:
        log_event(
            logger,
            f"command failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage=args.command,
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        print(json.dumps({"error_code": exc.error_code, "message": str(exc)}, ensure_ascii=False))
        return exit_code_for(exc)
    finally:
        if owns_service:
            service.close()

    log_event(
        logger,
        "command end",
        run_id=run_id,
        stage=args.command,
        event="COMMAND_END",
        status="ok",
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    print(json.dumps(result, ensure_ascii=False, indent=2, sort_keys=True))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())

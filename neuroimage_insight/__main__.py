"""Command line entry point for the NeuroImage Insight project."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import AnalysisWorkflow, PredictionClient, SettingsStore, present_result
from .services.selection import load_image
from .services.workflow import Notification

logger = logging.getLogger("neuroimage_insight")


def _log_notification(notification: Notification) -> None:
    level = logging.WARNING if notification.destructive else logging.INFO
    logger.log(level, "%s: %s", notification.title, notification.description)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="NeuroImage Insight")
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        help="Brain scan image to analyze in headless mode.",
    )
    parser.add_argument(
        "--endpoint",
        help="Override the configured prediction endpoint URL.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Override the request timeout in seconds.",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without launching the GUI.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = SettingsStore()
    config = store.load_or_default()

    overrides = {}
    if args.endpoint:
        overrides["endpoint_url"] = args.endpoint
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if overrides:
        try:
            config = config.model_validate({**config.as_dict(), **overrides})
        except ValueError as exc:
            parser.error(str(exc))

    if args.show_config:
        json.dump(config.as_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
        return

    if not args.headless and args.input is None:
        from .gui import run_app

        run_app(config=config)
        return

    if args.input is None:
        parser.error("--input is required when running in headless mode.")
    if not args.input.is_file():
        parser.error(f"{args.input} does not exist or is not a file.")

    image = load_image(args.input, max_preview_size=config.preview_max_size)
    if image is None:
        parser.error(f"{args.input} is not a supported image file.")

    client = PredictionClient(config)
    workflow = AnalysisWorkflow(client, notify=_log_notification)
    try:
        workflow.select_image(image)
        state = workflow.analyze()
    finally:
        client.close()

    view = present_result(state.result)
    output = {
        "path": str(args.input),
        "endpoint": config.endpoint_url,
        "prediction": view.prediction if view else None,
        "confidence": state.result.confidence if state.result else None,
        "confidence_display": view.percentage_text if view else None,
        "status": state.result.status if state.result else None,
        "verdict": view.tone.value if view else None,
        "advisory": view.advisory if view else None,
        "error": state.error_detail,
    }

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()

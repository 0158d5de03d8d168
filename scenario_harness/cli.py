"""CLI entry point for the browser scenario harness."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from functools import partial
from pathlib import Path

from scenario_harness.artifacts import ArtifactStore
from scenario_harness.config import CONFIG_FILENAME, HarnessConfig, load_config
from scenario_harness.loading import load_client_manifest, load_scenario
from scenario_harness.models.report import RunReport
from scenario_harness.orchestrator import StepOrchestrator
from scenario_harness.recorder import FAILED_SYMBOL, PASSED_SYMBOL


def log_results_summary(log: logging.Logger, run_report: RunReport) -> None:
    """Log a formatted summary of the run outcomes."""
    summary = run_report.summary

    log.info("=" * 66)
    log.info("Test Results Summary:")
    log.info("=" * 66)
    log.info("Total Tests Run: %d", summary.total)
    log.info("%s Passed: %d", PASSED_SYMBOL, summary.passed)
    log.info("%s Failed: %d", FAILED_SYMBOL, summary.failed)
    log.info("Success Rate: %.2f%%", summary.pass_rate)

    for outcome in run_report.outcomes:
        symbol = PASSED_SYMBOL if outcome.passed else FAILED_SYMBOL
        log.info("%s %s", symbol, outcome.name)
        if outcome.details and not outcome.passed:
            log.info("  Message: %s", outcome.details)

    if run_report.report_path is not None:
        log.info("Report: %s", run_report.report_path)


async def run(config: HarnessConfig) -> RunReport:
    """Run the configured scenario and return its report."""
    log = logging.getLogger("scenario_harness")

    log.info("Loading automation client: %s", config.client)
    manifest = load_client_manifest(config.client)
    client_config = manifest.config_cls(**config.client_config)

    log.info("Loading scenario: %s", config.scenario)
    scenario = load_scenario(config.scenario)

    orchestrator = StepOrchestrator(
        launcher=partial(manifest.launcher, client_config),
        store=ArtifactStore(output_dir=config.output_dir),
        max_depth=config.max_depth,
    )
    run_report = await orchestrator.run(scenario)

    log_results_summary(log, run_report)
    return run_report


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run a browser scenario and write its test report"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(CONFIG_FILENAME),
        help="Path to the harness configuration file (defaults apply if missing)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    asyncio.run(run(load_config(args.config)))


if __name__ == "__main__":  # pragma: no cover
    main()

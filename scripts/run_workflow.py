#!/usr/bin/env python3
"""Run a RunningHub workflow from the command line and print its text output.

Usage:
    # Novel-to-script workflow, text on node 8
    python scripts/run_workflow.py 2014935539987783681 --param "8:text=Once upon a time"

    # Several parameters, custom time limit
    python scripts/run_workflow.py 2014935539987783681 \
        --param "8:text=$(cat chapter1.txt)" \
        --param "6:seed=42" \
        --timeout 900

The API key is read from RUNNINGHUB_API_KEY unless --api-key is given.
Ctrl-C cancels the run at the next poll.
"""

import argparse
import logging
import os
import signal
import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.runninghub.errors import RunError
from src.runninghub.runner import WorkflowRunner
from src.runninghub.schemas import CancellationToken, JobSpec, NodeInfo
from src.runninghub.transport import RunningHubTransport

logger = logging.getLogger("run_workflow")


def parse_param(value: str) -> NodeInfo:
    """Parse NODE:FIELD=VALUE into a NodeInfo."""
    target, sep, field_value = value.partition("=")
    node_id, colon, field_name = target.partition(":")
    if not sep or not colon or not node_id or not field_name:
        raise argparse.ArgumentTypeError(f"Expected NODE:FIELD=VALUE, got {value!r}")
    return NodeInfo(node_id=node_id, field_name=field_name, field_value=field_value)


def main():
    parser = argparse.ArgumentParser(
        description="Run a RunningHub workflow and print its text output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("workflow_id", help="RunningHub workflow ID")
    parser.add_argument(
        "--param",
        action="append",
        type=parse_param,
        default=[],
        metavar="NODE:FIELD=VALUE",
        help="Node parameter override (repeatable, order is kept)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the task (default: RUNNINGHUB_RUN_TIMEOUT)",
    )
    parser.add_argument(
        "--api-key",
        default=os.environ.get("RUNNINGHUB_API_KEY", ""),
        help="RunningHub API key (default: RUNNINGHUB_API_KEY)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if not args.api_key:
        parser.error("No API key: set RUNNINGHUB_API_KEY or pass --api-key")

    spec = JobSpec(
        credential=args.api_key,
        workflow_id=args.workflow_id,
        parameters=tuple(args.param),
    )

    token = CancellationToken()

    def _on_interrupt(signum, frame):
        logger.info("Interrupt received, cancelling at next poll")
        token.cancel()

    signal.signal(signal.SIGINT, _on_interrupt)

    with RunningHubTransport() as transport:
        runner = WorkflowRunner(transport)
        deadline = runner.deadline_after(args.timeout) if args.timeout else None
        try:
            content = runner.run_workflow(spec, deadline=deadline, cancellation=token)
        except RunError as e:
            logger.error(f"{type(e).__name__}: {e}")
            if e.payload:
                logger.error(f"Payload: {e.payload}")
            sys.exit(1)

    print(content)


if __name__ == "__main__":
    main()

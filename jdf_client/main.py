"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the
return-notification FastAPI service or runs one JMF client command.
"""

import argparse
import json
import logging

import uvicorn

from jdf_client.bootstrap import (
    bootstrap_create_application,
    bootstrap_create_jdf_message,
    bootstrap_create_transport,
    bootstrap_create_workflow_manager,
)
from jdf_client.config import config_load_settings
from jdf_client.domain import JdfClientError
from jdf_client.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a client command fails.
    """

    argument_parser = argparse.ArgumentParser(description="JDF/JMF client runtime entrypoint")
    argument_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = argument_parser.add_subparsers(dest="command")

    subparsers.add_parser("api", help="Serve the return-JMF notification API (default)")

    submit_parser = subparsers.add_parser("submit", help="Submit JDF files to one or more workflows")
    submit_parser.add_argument("files", nargs="+", help="JDF file paths relative to the JMF server, or URLs")
    submit_parser.add_argument(
        "--workflow",
        dest="workflows",
        action="append",
        required=True,
        help="Destination workflow (controller id); repeat for several workflows",
    )

    jobs_parser = subparsers.add_parser("jobs", help="List queue entries")
    jobs_parser.add_argument("--status", type=str, help="Completed, InProgress, Suspended or Aborted")
    jobs_parser.add_argument("--job-id", dest="job_id", type=int, help="Queue entry identifier")

    job_status_parser = subparsers.add_parser("job-status", help="Show one queue entry")
    job_status_parser.add_argument("job_id", type=int)

    ticket_parser = subparsers.add_parser("ticket", help="Write a JDF job ticket for one print file")
    ticket_parser.add_argument("print_file", help="Print file path or URL")
    ticket_parser.add_argument("--output", required=True, help="Destination .jdf file")
    ticket_parser.add_argument("--quantity", type=int, default=1)
    ticket_parser.add_argument("--name", type=str, default="", help="DescriptiveName of the job")

    parsed_arguments = argument_parser.parse_args()
    setup_logging(log_level=logging.DEBUG if parsed_arguments.verbose else logging.INFO)
    command = parsed_arguments.command or "api"

    settings = config_load_settings()
    if command == "api":
        application = bootstrap_create_application(settings=settings)
        uvicorn.run(
            application,
            host=settings.application_host,
            port=settings.application_port,
        )
        return

    if command == "ticket":
        jdf = bootstrap_create_jdf_message(settings=settings, name=parsed_arguments.name)
        jdf.message_set_print_file(parsed_arguments.print_file, quantity=parsed_arguments.quantity)
        print(jdf.message_save(parsed_arguments.output))
        return

    transport = bootstrap_create_transport(settings)
    try:
        manager = bootstrap_create_workflow_manager(settings=settings, transport=transport)
        if command == "submit":
            with manager:
                manager.job_queue_files(parsed_arguments.files)
                for workflow_name in parsed_arguments.workflows:
                    manager.job_to_destination(workflow_name)
            return

        if command == "jobs":
            for record in manager.job_get_jobs(status=parsed_arguments.status, job_id=parsed_arguments.job_id):
                print(json.dumps(record.record_as_dict()))
            return

        record = manager.job_get_job_status(parsed_arguments.job_id)
        if record is None:
            raise SystemExit(1)
        print(json.dumps(record.record_as_dict()))
    except JdfClientError as error:
        logger.error("%s failed: %s", command, error)
        raise SystemExit(1) from error
    finally:
        transport.adapter_close()


if __name__ == "__main__":
    main()

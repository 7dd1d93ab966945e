#!/usr/bin/env python3
"""docker-lsf entry point: keeps a logstash-forwarder config in sync with docker."""

import logging
import signal
import sys

from docker_lsf.config import load_config
from docker_lsf.debouncer import RefreshScheduler
from docker_lsf.errors import ForwarderError
from docker_lsf.generator import generate_config
from docker_lsf.runtime import DockerRuntime
from docker_lsf.watcher import EventWatcher

logger = logging.getLogger(__name__)


def make_refresh(runtime, config):
    """Trigger callback for the scheduler. Failures are logged, not raised."""

    def refresh():
        try:
            generate_config(runtime, config.logstash_endpoint, config.config_file, config.docker_root)
        except ForwarderError as e:
            logger.error("Config refresh failed: %s", e)

    return refresh


def run(config, runtime) -> int:
    """Initial sync, then regenerate on container events until stopped."""
    try:
        generate_config(runtime, config.logstash_endpoint, config.config_file, config.docker_root)
    except ForwarderError as e:
        logger.error("Initial config generation failed: %s", e)
        return 1

    scheduler = RefreshScheduler(config.laziness, make_refresh(runtime, config))
    watcher = EventWatcher(runtime, scheduler)

    def signal_handler(signum, frame):
        logger.info("Received signal %d, shutting down...", signum)
        watcher.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        watcher.run()
    except ForwarderError as e:
        logger.error("%s", e)
        return 1
    finally:
        scheduler.cancel()
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        config = load_config(argv)
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            stream=sys.stderr,
        )
    except ValueError as e:
        print(f"docker-lsf: error: {e}", file=sys.stderr)
        return 2
    logger.info("Starting up")

    try:
        runtime = DockerRuntime.connect(config.docker_endpoint)
        version = runtime.version()
    except ForwarderError as e:
        logger.error("%s", e)
        return 1
    logger.info("Connected to docker at %s (v%s)", config.docker_endpoint, version)

    try:
        code = run(config, runtime)
    finally:
        runtime.close()
    logger.info("done")
    return code


if __name__ == "__main__":
    sys.exit(main())

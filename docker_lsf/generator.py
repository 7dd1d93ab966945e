"""Rebuild the logstash-forwarder config from the running containers."""

import logging

from docker_lsf.forwarder_config import ForwarderConfig
from docker_lsf.merge import merge_container
from docker_lsf.paths import DEFAULT_DOCKER_ROOT

logger = logging.getLogger(__name__)


def build_config(runtime, logstash_endpoint: str, docker_root: str = DEFAULT_DOCKER_ROOT) -> ForwarderConfig:
    """Assemble a fresh config covering every running container."""
    config = ForwarderConfig.from_defaults(logstash_endpoint)

    container_ids = runtime.list_running_containers()
    logger.info("Found %d running container(s)", len(container_ids))
    for container_id in container_ids:
        container = runtime.inspect_container(container_id)
        if container is None:
            logger.info("Container %s is gone, skipping", container_id[:12])
            continue
        merge_container(container, config, docker_root)
    return config


def generate_config(
    runtime,
    logstash_endpoint: str,
    output_path: str,
    docker_root: str = DEFAULT_DOCKER_ROOT,
) -> ForwarderConfig:
    """Build the config and replace the file at `output_path`.

    Errors listing containers or writing the file propagate to the caller.
    """
    logger.info("Generating logstash-forwarder config %s", output_path)
    config = build_config(runtime, logstash_endpoint, docker_root)
    config.save(output_path)
    return config

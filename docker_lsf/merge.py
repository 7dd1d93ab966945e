"""Per-container contribution to the aggregate config."""

import logging
from dataclasses import dataclass
from enum import Enum

from docker_lsf.errors import ConfigParseError
from docker_lsf.forwarder_config import ForwarderConfig
from docker_lsf.models import ContainerSnapshot
from docker_lsf.paths import DEFAULT_DOCKER_ROOT, resolve_host_path

logger = logging.getLogger(__name__)

OVERRIDE_PATH = "/etc/logstash-forwarder.conf"


class LookupStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass
class OverrideLookup:
    status: LookupStatus
    config: ForwarderConfig | None = None
    error: str = ""


def load_container_override(
    container: ContainerSnapshot,
    docker_root: str = DEFAULT_DOCKER_ROOT,
) -> OverrideLookup:
    """Look for a logstash-forwarder config inside the container's filesystem.

    Paths of a found config are rewritten to host paths.
    """
    conf_path = resolve_host_path(container, OVERRIDE_PATH, docker_root)
    logger.debug("Checking for logstash-forwarder config in %s", conf_path)

    try:
        config = ForwarderConfig.from_file(conf_path)
    except ConfigParseError as e:
        return OverrideLookup(LookupStatus.MALFORMED, error=e.reason)
    except OSError as e:
        # missing, unreadable or a directory: all mean "no override"
        return OverrideLookup(LookupStatus.NOT_FOUND, error=str(e))

    for source in config.files:
        logger.info(
            "Adding files %s of type %s", source.paths, source.fields.get("type", ""),
        )
        source.paths = [resolve_host_path(container, p, docker_root) for p in source.paths]
    return OverrideLookup(LookupStatus.FOUND, config=config)


def merge_container(
    container: ContainerSnapshot,
    aggregate: ForwarderConfig,
    docker_root: str = DEFAULT_DOCKER_ROOT,
) -> OverrideLookup:
    """Append the container's file sources to `aggregate`.

    Uses the container's own config when present, otherwise the container's
    json log file.
    """
    lookup = load_container_override(container, docker_root)

    if lookup.status is LookupStatus.FOUND:
        logger.info("Found logstash-forwarder config in %s", container.short_id)
        aggregate.files.extend(lookup.config.files)
        return lookup

    if lookup.status is LookupStatus.MALFORMED:
        logger.warning(
            "Ignoring malformed logstash-forwarder config in %s: %s",
            container.short_id, lookup.error,
        )
    else:
        logger.info("No logstash-forwarder config found in %s", container.short_id)
    aggregate.add_container_log_file(container, docker_root)
    return lookup

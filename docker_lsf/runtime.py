"""Docker runtime adapter: container listing, inspection and lifecycle events."""

import logging

import docker
import docker.errors
import requests.exceptions

from docker_lsf.errors import RuntimeUnavailableError
from docker_lsf.models import ContainerEvent, ContainerSnapshot

logger = logging.getLogger(__name__)

DOCKER_ERRORS = (docker.errors.DockerException, requests.exceptions.RequestException)


class EventSubscription:
    """Iterator over container lifecycle events that can be closed from another thread."""

    def __init__(self, stream):
        self._stream = stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self):
        try:
            for raw in self._stream:
                if self._closed:
                    break
                if not isinstance(raw, dict):
                    continue
                event = ContainerEvent.from_dict(raw)
                if event is not None:
                    yield event
        except Exception as e:
            # reading from a stream closed by another thread fails in various ways
            if self._closed:
                return
            if isinstance(e, DOCKER_ERRORS):
                raise RuntimeUnavailableError(f"Docker event stream failed: {e}") from e
            raise

    def close(self):
        if self._closed:
            return
        self._closed = True
        try:
            self._stream.close()
        except Exception:
            logger.debug("Error closing docker event stream", exc_info=True)


class DockerRuntime:
    def __init__(self, client):
        self._client = client

    @classmethod
    def connect(cls, endpoint: str) -> "DockerRuntime":
        try:
            client = docker.DockerClient(base_url=endpoint)
        except DOCKER_ERRORS as e:
            raise RuntimeUnavailableError(f"Unable to connect to docker at {endpoint}: {e}") from e
        return cls(client)

    def version(self) -> str:
        try:
            info = self._client.version()
        except DOCKER_ERRORS as e:
            raise RuntimeUnavailableError(
                f"Unable to retrieve version information from docker: {e}"
            ) from e
        return info.get("Version", "unknown")

    def list_running_containers(self) -> list[str]:
        """Ids of the currently running containers."""
        try:
            return [c.id for c in self._client.containers.list()]
        except DOCKER_ERRORS as e:
            raise RuntimeUnavailableError(f"Unable to list containers: {e}") from e

    def inspect_container(self, container_id: str) -> ContainerSnapshot | None:
        """Snapshot of one container, or None if it no longer exists."""
        try:
            attrs = self._client.api.inspect_container(container_id)
        except docker.errors.NotFound:
            return None
        except DOCKER_ERRORS as e:
            raise RuntimeUnavailableError(f"Unable to inspect container {container_id}: {e}") from e
        return ContainerSnapshot.from_attrs(attrs)

    def subscribe_events(self) -> EventSubscription:
        try:
            stream = self._client.events(decode=True, filters={"type": "container"})
        except DOCKER_ERRORS as e:
            raise RuntimeUnavailableError(f"Unable to add docker event listener: {e}") from e
        return EventSubscription(stream)

    def close(self):
        self._client.close()

"""Shared fixtures: in-memory docker runtime and fake docker SDK client."""

import json
import threading

import pytest

from docker_lsf.models import ContainerEvent, ContainerSnapshot


class FakeSubscription:
    """Yields queued events, then blocks until close() unless `finite`."""

    def __init__(self, events, finite=True):
        self._events = list(events)
        self._finite = finite
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def __iter__(self):
        for event in self._events:
            if self._closed.is_set():
                return
            yield event
        if not self._finite:
            self._closed.wait()

    def close(self):
        self._closed.set()


class FakeRuntime:
    def __init__(self, containers=None, events=None, finite=True):
        self.containers = {c.id: c for c in containers or []}
        self.events = events or []
        self.finite = finite
        self.list_calls = 0
        self.subscriptions: list[FakeSubscription] = []
        self.fail_listing = None

    def list_running_containers(self) -> list[str]:
        self.list_calls += 1
        if self.fail_listing is not None:
            raise self.fail_listing
        return list(self.containers)

    def inspect_container(self, container_id):
        return self.containers.get(container_id)

    def subscribe_events(self):
        sub = FakeSubscription(self.events, finite=self.finite)
        self.subscriptions.append(sub)
        return sub

    def version(self):
        return "1.6.0"

    def close(self):
        pass


def make_container(cid="abc123", driver="aufs", volumes=None, **kwargs) -> ContainerSnapshot:
    return ContainerSnapshot(
        id=cid,
        driver=driver,
        hostname=kwargs.get("hostname", cid[:12]),
        name=kwargs.get("name", f"/{cid}-name"),
        image=kwargs.get("image", "busybox:latest"),
        volumes=volumes or {},
    )


def event(status, cid="abcdef0123456789") -> ContainerEvent:
    return ContainerEvent(container_id=cid, status=status)


def write_override(docker_root, container, data) -> str:
    """Place a logstash-forwarder config in the container's aufs root under `docker_root`."""
    conf_dir = docker_root / "aufs" / "mnt" / container.id / "etc"
    conf_dir.mkdir(parents=True, exist_ok=True)
    conf = conf_dir / "logstash-forwarder.conf"
    conf.write_text(data if isinstance(data, str) else json.dumps(data))
    return str(conf)


@pytest.fixture
def docker_root(tmp_path):
    root = tmp_path / "docker"
    root.mkdir()
    return root


@pytest.fixture
def container():
    return make_container()

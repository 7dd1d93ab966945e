"""Container snapshot and lifecycle event models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContainerSnapshot:
    """Read-only view of one container, taken from `docker inspect`."""

    id: str
    driver: str = ""
    hostname: str = ""
    name: str = ""
    image: str = ""
    # container path -> host path, in mount order
    volumes: dict[str, str] = field(default_factory=dict)

    @property
    def short_id(self) -> str:
        return self.id[:12]

    @classmethod
    def from_attrs(cls, attrs: dict) -> "ContainerSnapshot":
        """Build a snapshot from a docker inspect payload."""
        config = attrs.get("Config") or {}
        volumes: dict[str, str] = {}
        for mount in attrs.get("Mounts") or []:
            destination = mount.get("Destination")
            source = mount.get("Source")
            if destination and source:
                volumes.setdefault(destination, source)
        # Daemons before API 1.20 only report the legacy Volumes map
        if not volumes:
            volumes = dict(attrs.get("Volumes") or {})

        return cls(
            id=attrs["Id"],
            driver=attrs.get("Driver", ""),
            hostname=config.get("Hostname", ""),
            name=attrs.get("Name", ""),
            image=config.get("Image", ""),
            volumes=volumes,
        )


@dataclass(frozen=True)
class ContainerEvent:
    container_id: str
    status: str

    @classmethod
    def from_dict(cls, event: dict) -> "ContainerEvent | None":
        """Parse a decoded docker event. Returns None for payloads without a status."""
        status = event.get("status") or event.get("Action")
        actor = event.get("Actor") or {}
        container_id = event.get("id") or actor.get("ID") or ""
        if not status:
            return None
        return cls(container_id=container_id, status=status)

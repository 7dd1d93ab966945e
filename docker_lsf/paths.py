"""Map paths inside a container to paths on the docker host."""

from docker_lsf.models import ContainerSnapshot

DEFAULT_DOCKER_ROOT = "/var/lib/docker"

# storage driver -> (directory under the docker root, suffix after the container id)
DRIVER_LAYOUTS = {
    "aufs": ("aufs/mnt", ""),
    "devicemapper": ("devicemapper/mnt", "/rootfs"),
}
DEFAULT_LAYOUT = ("btrfs/subvolumes", "")


def container_root(container: ContainerSnapshot, docker_root: str = DEFAULT_DOCKER_ROOT) -> str:
    """Host directory holding the container's root filesystem for its storage driver."""
    subdir, suffix = DRIVER_LAYOUTS.get(container.driver, DEFAULT_LAYOUT)
    return f"{docker_root.rstrip('/')}/{subdir}/{container.id}{suffix}"


def resolve_host_path(
    container: ContainerSnapshot,
    path: str,
    docker_root: str = DEFAULT_DOCKER_ROOT,
) -> str:
    """Return the host path of `path` as seen from inside `container`.

    Volume mounts take precedence over the storage driver layout. Unknown
    drivers fall back to the btrfs layout.
    """
    for container_path, host_path in container.volumes.items():
        if path.startswith(container_path):
            return host_path + path[len(container_path):]

    if not path.startswith("/"):
        path = "/" + path
    return container_root(container, docker_root) + path

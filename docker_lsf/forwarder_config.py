"""logstash-forwarder config model: network section plus a list of file sources."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field

from docker_lsf.errors import ConfigParseError, ConfigWriteError
from docker_lsf.models import ContainerSnapshot
from docker_lsf.paths import DEFAULT_DOCKER_ROOT
from docker_lsf.schema import validate_config

logger = logging.getLogger(__name__)

SSL_CERTIFICATE = "/mnt/logstash-forwarder/logstash-forwarder.crt"
SSL_KEY = "/mnt/logstash-forwarder/logstash-forwarder.key"
SSL_CA = "/mnt/logstash-forwarder/logstash-forwarder.crt"
DEFAULT_TIMEOUT = 15


@dataclass
class Network:
    servers: list[str] = field(default_factory=list)
    ssl_certificate: str = ""
    ssl_key: str = ""
    ssl_ca: str = ""
    timeout: int = 0

    def to_dict(self) -> dict:
        return {
            "servers": list(self.servers),
            "ssl certificate": self.ssl_certificate,
            "ssl key": self.ssl_key,
            "ssl ca": self.ssl_ca,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Network":
        return cls(
            servers=list(d.get("servers") or []),
            ssl_certificate=d.get("ssl certificate", ""),
            ssl_key=d.get("ssl key", ""),
            ssl_ca=d.get("ssl ca", ""),
            timeout=d.get("timeout", 0),
        )


@dataclass
class FileSource:
    paths: list[str] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"paths": list(self.paths), "fields": dict(self.fields)}

    @classmethod
    def from_dict(cls, d: dict) -> "FileSource":
        return cls(paths=list(d.get("paths") or []), fields=dict(d.get("fields") or {}))


@dataclass
class ForwarderConfig:
    network: Network = field(default_factory=Network)
    files: list[FileSource] = field(default_factory=list)

    @classmethod
    def from_defaults(cls, logstash_endpoint: str) -> "ForwarderConfig":
        network = Network(
            servers=[logstash_endpoint],
            ssl_certificate=SSL_CERTIFICATE,
            ssl_key=SSL_KEY,
            ssl_ca=SSL_CA,
            timeout=DEFAULT_TIMEOUT,
        )
        return cls(network=network, files=[])

    @classmethod
    def from_dict(cls, d: dict) -> "ForwarderConfig":
        """Build a config from an already validated document."""
        return cls(
            network=Network.from_dict(d.get("network") or {}),
            files=[FileSource.from_dict(f) for f in d.get("files") or []],
        )

    @classmethod
    def from_file(cls, path: str) -> "ForwarderConfig":
        """Load a config from `path`.

        Raises FileNotFoundError when the file does not exist and
        ConfigParseError when it is not a valid config document.
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ConfigParseError(path, str(e)) from e

        errors = validate_config(data)
        if errors:
            raise ConfigParseError(path, "; ".join(errors))
        return cls.from_dict(data)

    def add_container_log_file(
        self,
        container: ContainerSnapshot,
        docker_root: str = DEFAULT_DOCKER_ROOT,
    ) -> FileSource:
        """Append a file source for the container's json-file log."""
        cid = container.id
        source = FileSource(
            paths=[f"{docker_root.rstrip('/')}/containers/{cid}/{cid}-json.log"],
            fields={
                "type": "docker",
                "codec": "json",
                "docker.id": cid,
                "docker.hostname": container.hostname,
                "docker.name": container.name,
                "docker.image": container.image,
            },
        )
        self.files.append(source)
        return source

    def to_dict(self) -> dict:
        return {
            "network": self.network.to_dict(),
            "files": [f.to_dict() for f in self.files],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: str):
        """Atomic write: write to a temp file next to `path` then replace."""
        directory = os.path.dirname(os.path.abspath(path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        except OSError as e:
            raise ConfigWriteError(f"Unable to write {path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(self.to_json())
                f.write("\n")
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ConfigWriteError(f"Unable to write {path}: {e}") from e
        logger.info("Wrote %s with %d file source(s)", path, len(self.files))

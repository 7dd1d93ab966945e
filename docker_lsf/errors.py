"""Exception types raised by the config generator."""


class ForwarderError(Exception):
    """Base class for docker-lsf errors."""


class ConfigParseError(ForwarderError):
    """A logstash-forwarder config file exists but is not valid JSON of the expected shape."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid logstash-forwarder config {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigWriteError(ForwarderError):
    """The generated config could not be written to its destination."""


class RuntimeUnavailableError(ForwarderError):
    """The Docker daemon could not be reached or returned an error."""

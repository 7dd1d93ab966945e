"""Process configuration: defaults <- YAML settings file <- env vars <- CLI args."""

import argparse
import logging
import os
import sys
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    docker_endpoint: str = "unix:///var/run/docker.sock"
    logstash_endpoint: str = "logstash:5043"
    config_file: str = "/etc/logstash-forwarder.conf"
    laziness: int = 5
    docker_root: str = "/var/lib/docker"
    log_level: str = "INFO"


# field name -> environment variable
ENV_VARS = {
    "docker_endpoint": "DOCKER_HOST",
    "logstash_endpoint": "LOGSTASH_HOST",
    "config_file": "LSF_CONFIG_FILE",
    "laziness": "LSF_LAZINESS",
    "docker_root": "DOCKER_ROOT",
    "log_level": "LOG_LEVEL",
}


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a logstash-forwarder config for the running docker containers",
    )
    parser.add_argument(
        "--docker", dest="docker_endpoint", default=None,
        help="docker api endpoint (default: $DOCKER_HOST or unix:///var/run/docker.sock)",
    )
    parser.add_argument(
        "--logstash", dest="logstash_endpoint", default=None,
        help="logstash endpoint (default: $LOGSTASH_HOST or logstash:5043)",
    )
    parser.add_argument(
        "--config", dest="config_file", default=None,
        help="path of the generated logstash-forwarder config",
    )
    parser.add_argument(
        "--laziness", "--lazyness", dest="laziness", type=int, default=None,
        help="seconds to wait after an event for more events to accumulate (default: 5)",
    )
    parser.add_argument(
        "--docker-root", dest="docker_root", default=None,
        help="docker data directory on the host (default: /var/lib/docker)",
    )
    parser.add_argument(
        "--log-level", dest="log_level", default=None,
        help="logging level (default: INFO)",
    )
    parser.add_argument(
        "--settings", default=None,
        help="optional YAML file providing any of the settings above",
    )
    return parser


def load_yaml_settings(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or file missing."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Settings file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    logger.info("Loaded settings from %s", path)
    return data


def _pick(cli_value, env_var: str, yaml_value, default):
    """First non-empty value of CLI flag, env var, YAML setting, default."""
    for value in (cli_value, os.environ.get(env_var), yaml_value):
        if value is not None and value != "":
            return value
    return default


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from CLI args, env vars, and the optional YAML settings file."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_cli_parser().parse_args(argv)
    yaml_data = load_yaml_settings(args.settings)

    kwargs = {}
    for f in fields(Config):
        kwargs[f.name] = _pick(
            getattr(args, f.name), ENV_VARS[f.name], yaml_data.get(f.name), f.default,
        )

    kwargs["laziness"] = int(kwargs["laziness"])
    if kwargs["laziness"] < 0:
        raise ValueError(f"laziness must be >= 0, got {kwargs['laziness']}")
    kwargs["log_level"] = str(kwargs["log_level"]).upper()
    if not isinstance(logging.getLevelName(kwargs["log_level"]), int):
        raise ValueError(f"unknown log level {kwargs['log_level']!r}")

    return Config(**kwargs)

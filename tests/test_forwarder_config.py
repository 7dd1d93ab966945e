"""Tests for the logstash-forwarder config model."""

import json
import os

import pytest

from docker_lsf.errors import ConfigParseError, ConfigWriteError
from docker_lsf.forwarder_config import FileSource, ForwarderConfig, Network

from conftest import make_container


class TestDefaults:
    def test_network_section(self):
        cfg = ForwarderConfig.from_defaults("logstash:5043")
        assert cfg.network.servers == ["logstash:5043"]
        assert cfg.network.ssl_certificate == "/mnt/logstash-forwarder/logstash-forwarder.crt"
        assert cfg.network.ssl_key == "/mnt/logstash-forwarder/logstash-forwarder.key"
        assert cfg.network.ssl_ca == "/mnt/logstash-forwarder/logstash-forwarder.crt"
        assert cfg.network.timeout == 15
        assert cfg.files == []

    def test_serialized_keys(self):
        d = ForwarderConfig.from_defaults("ls:1").to_dict()
        assert d == {
            "network": {
                "servers": ["ls:1"],
                "ssl certificate": "/mnt/logstash-forwarder/logstash-forwarder.crt",
                "ssl key": "/mnt/logstash-forwarder/logstash-forwarder.key",
                "ssl ca": "/mnt/logstash-forwarder/logstash-forwarder.crt",
                "timeout": 15,
            },
            "files": [],
        }


class TestAddContainerLogFile:
    def test_default_entry(self):
        cfg = ForwarderConfig.from_defaults("ls:1")
        c = make_container("abc123", hostname="abc123", name="/web", image="nginx")
        cfg.add_container_log_file(c)
        assert len(cfg.files) == 1
        assert cfg.files[0].paths == ["/var/lib/docker/containers/abc123/abc123-json.log"]
        assert cfg.files[0].fields == {
            "type": "docker",
            "codec": "json",
            "docker.id": "abc123",
            "docker.hostname": "abc123",
            "docker.name": "/web",
            "docker.image": "nginx",
        }

    def test_twice_gives_two_identical_entries(self):
        cfg = ForwarderConfig.from_defaults("ls:1")
        c = make_container("abc123")
        cfg.add_container_log_file(c)
        cfg.add_container_log_file(c)
        assert len(cfg.files) == 2
        assert cfg.files[0] == cfg.files[1]
        assert cfg.files[0] is not cfg.files[1]

    def test_preserves_order(self):
        cfg = ForwarderConfig.from_defaults("ls:1")
        for cid in ("c1", "c2", "c3"):
            cfg.add_container_log_file(make_container(cid))
        assert [f.fields["docker.id"] for f in cfg.files] == ["c1", "c2", "c3"]


class TestFromFile:
    def test_round_trip(self, tmp_path):
        cfg = ForwarderConfig.from_defaults("ls:1")
        cfg.add_container_log_file(make_container("abc"))
        cfg.files.append(FileSource(paths=["/a", "/b"], fields={"type": "nginx"}))
        path = str(tmp_path / "lsf.conf")
        cfg.save(path)
        assert ForwarderConfig.from_file(path) == cfg

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ForwarderConfig.from_file(str(tmp_path / "nope.conf"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.conf"
        path.write_text("{not json")
        with pytest.raises(ConfigParseError):
            ForwarderConfig.from_file(str(path))

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "bad.conf"
        path.write_text(json.dumps({"files": [{"paths": "/not/a/list"}]}))
        with pytest.raises(ConfigParseError):
            ForwarderConfig.from_file(str(path))

    def test_top_level_array(self, tmp_path):
        path = tmp_path / "bad.conf"
        path.write_text("[]")
        with pytest.raises(ConfigParseError):
            ForwarderConfig.from_file(str(path))

    def test_files_only_config(self, tmp_path):
        path = tmp_path / "lsf.conf"
        path.write_text(json.dumps({"files": [{"paths": ["/var/log/app.log"], "fields": {"type": "app"}}]}))
        cfg = ForwarderConfig.from_file(str(path))
        assert cfg.network == Network()
        assert cfg.files == [FileSource(paths=["/var/log/app.log"], fields={"type": "app"})]


class TestSave:
    def test_replaces_existing_file(self, tmp_path):
        path = tmp_path / "lsf.conf"
        path.write_text("old content")
        ForwarderConfig.from_defaults("ls:1").save(str(path))
        data = json.loads(path.read_text())
        assert data["network"]["servers"] == ["ls:1"]

    def test_no_temp_files_left(self, tmp_path):
        path = tmp_path / "lsf.conf"
        ForwarderConfig.from_defaults("ls:1").save(str(path))
        assert os.listdir(tmp_path) == ["lsf.conf"]

    def test_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "lsf.conf"
        ForwarderConfig.from_defaults("ls:1").save(str(path))
        assert path.exists()

    def test_unwritable_destination(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ConfigWriteError):
            ForwarderConfig.from_defaults("ls:1").save(str(blocker / "lsf.conf"))

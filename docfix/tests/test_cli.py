"""Tests for docfix.cli module."""

import logging
import textwrap

import pytest

from conftest import FakeCollection
from docfix import Fixture, Registry, dumps, loads
from docfix.cli import main, run_command


FIXTURE_MODULE = textwrap.dedent('''
    from docfix import Fixture, InMemoryCollection, Registry

    registry = Registry.for_module(__file__)

    USERS = InMemoryCollection("UserColl", [
        {"_id": 1, "user_name": "alan"},
        {"_id": 2, "user_name": "neil"},
        {"_id": 3, "user_name": "buzz"},
    ])

    users = registry.register(Fixture(
        name="users",
        collections={"user_name": USERS},
        keys=["alan", "neil"],
    ))
''')


@pytest.fixture
def fixture_module(temp_dir):
    path = temp_dir / "cli_fixtures.py"
    path.write_text(FIXTURE_MODULE)
    return path


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr("docfix.cli.configure_logging", lambda level="INFO": None)
    monkeypatch.delenv("DOCFIX_CONFIG", raising=False)


class TestMain:

    def test_get_writes_files(self, fixture_module, temp_dir):
        assert main(["get", str(fixture_module)]) == 0
        assert (temp_dir / "users.UserColl.ejson").exists()

    def test_get_file_contents(self, fixture_module, temp_dir):
        assert main(["get", str(fixture_module)]) == 0

        docs = loads((temp_dir / "users.UserColl.ejson").read_text())
        assert [d["user_name"] for d in docs] == ["alan", "neil"]

    def test_load_reads_files(self, fixture_module, temp_dir):
        assert main(["get", str(fixture_module)]) == 0
        assert main(["load", str(fixture_module)]) == 0

    def test_load_without_files_fails(self, fixture_module, caplog):
        with caplog.at_level(logging.ERROR, logger="docfix.cli"):
            assert main(["load", str(fixture_module)]) == 1
        assert "load failed" in caplog.text

    @pytest.mark.parametrize("argv", [[], ["clear"], ["bogus", "x.py"]])
    def test_invalid_or_missing_command(self, argv, caplog):
        with caplog.at_level(logging.ERROR, logger="docfix.cli"):
            assert main(argv) == 1
        assert "Invalid or missing command" in caplog.text

    def test_missing_module(self):
        assert main(["get"]) == 1

    def test_module_without_registry(self, temp_dir):
        path = temp_dir / "empty_mod.py"
        path.write_text("x = 1\n")
        assert main(["get", str(path)]) == 1

    def test_duplicate_fixture_fails_before_running(self, temp_dir):
        path = temp_dir / "dupes.py"
        path.write_text(FIXTURE_MODULE + textwrap.dedent('''
            registry.register(Fixture(
                name="users",
                collections={"user_name": USERS},
                keys=["buzz"],
            ))
        '''))

        assert main(["get", str(path)]) == 1
        assert not (temp_dir / "users.UserColl.ejson").exists()

    def test_config_fixture_path(self, temp_dir):
        out = temp_dir / "out"
        config = temp_dir / "docfix.yaml"
        config.write_text(f"fixture_path: {out}\n")
        module = temp_dir / "no_default_path.py"
        module.write_text(FIXTURE_MODULE.replace("Registry.for_module(__file__)", "Registry()"))

        assert main(["get", str(module), "--config", str(config)]) == 0
        assert (out / "users.UserColl.ejson").exists()

    def test_missing_config_file(self, fixture_module, temp_dir, caplog):
        missing = temp_dir / "missing.yaml"
        with caplog.at_level(logging.ERROR):
            assert main(["get", str(fixture_module), "--config", str(missing)]) == 1
        assert "Could not load configuration" in caplog.text
        assert not (temp_dir / "users.UserColl.ejson").exists()

    def test_invalid_config_file(self, fixture_module, temp_dir, caplog):
        config = temp_dir / "docfix.yaml"
        config.write_text("- just\n- a list\n")
        with caplog.at_level(logging.ERROR):
            assert main(["get", str(fixture_module), "--config", str(config)]) == 1
        assert "Could not load configuration" in caplog.text


class TestRegistryMain:

    def test_registry_main(self, temp_dir):
        registry = Registry(default_path=temp_dir)
        registry.register(Fixture(
            name="f",
            collections={"k": FakeCollection("X", find_result=[{"_id": 1}])},
            keys=["a"],
        ))

        assert registry.main(["get"]) == 0
        assert (temp_dir / "f.X.ejson").exists()

    def test_registry_main_invalid(self):
        assert Registry().main(["nope"]) == 1

    def test_registry_main_missing_config(self, temp_dir, caplog):
        missing = temp_dir / "missing.yaml"
        with caplog.at_level(logging.ERROR):
            assert Registry().main(["get", "--config", str(missing)]) == 1
        assert "Could not load configuration" in caplog.text


class TestRunCommand:

    def test_run_command_reports_total(self, temp_dir, caplog):
        coll = FakeCollection("X")
        registry = Registry(default_path=temp_dir)
        registry.register(Fixture(name="f", collections={"k": coll}, keys=[]))
        (temp_dir / "f.X.ejson").write_text(dumps([{"_id": 1}, {"_id": 2}]))

        with caplog.at_level(logging.INFO, logger="docfix.cli"):
            status = run_command(registry, "load")

        assert status == 0
        assert len(coll.saved) == 2
        assert "Wrote 2 documents to database." in caplog.text

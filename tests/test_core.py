import pytest

from chatwootctl.core import ChatwootManager
from chatwootctl.errors import ManagerError
from chatwootctl.presets import get_preset
from chatwootctl.services.compose import ContainerOrchestrator


class ScriptedPrompter:
    def __init__(self, answers=()):
        self.answers = list(answers)
        self.questions = []

    def ask(self, question, password=False):
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {question}")
        return self.answers.pop(0)


class FakeDependencies:
    def __init__(self, error=None):
        self.calls = 0
        self.error = error

    def ensure_dependencies(self):
        self.calls += 1
        if self.error:
            raise self.error
        return ["docker", "compose"]


class FakeOrchestrator(ContainerOrchestrator):
    def __init__(self, down_error=None):
        self.calls = []
        self.down_error = down_error

    def up(self):
        self.calls.append(("up",))

    def down(self, remove_images=False, volumes=False, remove_orphans=False):
        self.calls.append(("down", remove_images, volumes, remove_orphans))
        if self.down_error:
            raise self.down_error

    def ps(self):
        self.calls.append(("ps",))
        return "NAME STATUS"

    def run_once(self, service, command):
        self.calls.append(("run_once", service, tuple(command)))

    def force_remove(self, targets):
        self.calls.append(("force_remove", targets.networks))


class FakeHost:
    def primary_ip(self):
        return "10.0.0.5"


def build_manager(tmp_path, answers=(), preset="strict", orchestrator=None, dependencies=None):
    orchestrator = orchestrator or FakeOrchestrator()
    factory_calls = []

    def factory(compose_cmd, paths):
        factory_calls.append((compose_cmd, paths))
        return orchestrator

    manager = ChatwootManager(
        install_dir=str(tmp_path / "chatwoot"),
        preset=get_preset(preset),
        prompter=ScriptedPrompter(answers),
        dependency_service=dependencies or FakeDependencies(),
        orchestrator_factory=factory,
        host_service=FakeHost(),
    )
    return manager, orchestrator, factory_calls


def test_fresh_install_prepares_database_then_starts(tmp_path):
    manager, orchestrator, factory_calls = build_manager(
        tmp_path, answers=["chat.example.com", "", "", "", ""]
    )

    access = manager.install_or_update()

    assert orchestrator.calls == [
        ("run_once", "chatwoot", ("bundle", "exec", "rails", "db:chatwoot_prepare")),
        ("up",),
    ]
    assert factory_calls[0][0] == ["docker", "compose"]
    assert manager.paths.env_file.exists()
    assert manager.paths.compose_file.exists()
    assert manager.paths.postgres_data_dir.is_dir()
    assert manager.paths.root.stat().st_mode & 0o777 == 0o755
    assert access.local_url == "http://10.0.0.5:6698"
    assert access.public_url == "https://chat.example.com"


def test_update_reuses_settings_and_skips_bootstrap(tmp_path):
    manager, orchestrator, _ = build_manager(tmp_path, answers=["chat.example.com", "7100", "", "", ""])
    manager.install_or_update()
    settings_before = manager.paths.env_file.read_bytes()
    manifest_before = manager.paths.compose_file.read_bytes()
    (manager.paths.postgres_data_dir / "PG_VERSION").write_text("16", encoding="utf-8")
    orchestrator.calls.clear()

    access = manager.install_or_update()

    assert orchestrator.calls == [("up",)]
    assert len(manager.prompter.questions) == 5
    assert manager.paths.env_file.read_bytes() == settings_before
    assert manager.paths.compose_file.read_bytes() == manifest_before
    assert access.local_url == "http://10.0.0.5:7100"


def test_dependency_failure_is_fatal_before_prompting(tmp_path):
    dependencies = FakeDependencies(error=ManagerError("Docker installation failed."))
    manager, orchestrator, _ = build_manager(tmp_path, dependencies=dependencies)

    with pytest.raises(ManagerError, match="Docker installation failed"):
        manager.install_or_update()

    assert manager.prompter.questions == []
    assert orchestrator.calls == []


def test_status_without_installation_makes_no_external_calls(tmp_path):
    dependencies = FakeDependencies()
    manager, orchestrator, factory_calls = build_manager(tmp_path, dependencies=dependencies)

    assert manager.show_status() is False

    assert dependencies.calls == 0
    assert factory_calls == []
    assert orchestrator.calls == []


def test_status_lists_containers(tmp_path):
    manager, orchestrator, _ = build_manager(tmp_path)
    manager.paths.root.mkdir()

    assert manager.show_status() is True
    assert orchestrator.calls == [("ps",)]


def test_restart_is_down_then_up(tmp_path):
    manager, orchestrator, _ = build_manager(tmp_path)
    manager.paths.root.mkdir()

    assert manager.restart_service() is True
    assert orchestrator.calls == [("down", False, False, False), ("up",)]


def test_restart_without_installation_reports_error(tmp_path):
    manager, orchestrator, _ = build_manager(tmp_path)

    assert manager.restart_service() is False
    assert orchestrator.calls == []


def _installed_manager(tmp_path, answers, preset="strict", orchestrator=None):
    manager, orchestrator, factory_calls = build_manager(
        tmp_path,
        answers=["chat.example.com", "", "", "", "", *answers],
        preset=preset,
        orchestrator=orchestrator,
    )
    manager.install_or_update()
    orchestrator.calls.clear()
    return manager, orchestrator


@pytest.mark.parametrize("answer", ["no", "", "n", "yes please"])
def test_declined_uninstall_leaves_everything_untouched(tmp_path, answer):
    manager, orchestrator = _installed_manager(tmp_path, [answer])
    env_before = manager.paths.env_file.read_bytes()
    manifest_before = manager.paths.compose_file.read_bytes()

    assert manager.uninstall_all() is False

    assert orchestrator.calls == []
    assert manager.paths.env_file.read_bytes() == env_before
    assert manager.paths.compose_file.read_bytes() == manifest_before


@pytest.mark.parametrize("answer", ["y", "Y"])
def test_confirmed_uninstall_removes_installation(tmp_path, answer):
    manager, orchestrator = _installed_manager(tmp_path, [answer])

    assert manager.uninstall_all() is True

    assert orchestrator.calls == [
        ("down", True, True, True),
        ("force_remove", ("chatwoot_default",)),
    ]
    assert not manager.paths.root.exists()


def test_quick_preset_requires_literal_yes(tmp_path):
    manager, _ = _installed_manager(tmp_path, ["y", "YES", "yes"], preset="quick")

    assert manager.uninstall_all() is False
    assert manager.uninstall_all() is False
    assert manager.uninstall_all() is True
    assert not manager.paths.root.exists()


def test_uninstall_ignores_teardown_failure(tmp_path):
    orchestrator = FakeOrchestrator(down_error=ManagerError("Command failed (1): docker compose down"))
    manager, orchestrator = _installed_manager(tmp_path, ["y"], orchestrator=orchestrator)

    assert manager.uninstall_all() is True
    assert ("force_remove", ("chatwoot_default",)) in orchestrator.calls
    assert not manager.paths.root.exists()


def test_uninstall_without_installation_does_not_prompt(tmp_path):
    manager, orchestrator, _ = build_manager(tmp_path)

    assert manager.uninstall_all() is False
    assert manager.prompter.questions == []
    assert orchestrator.calls == []

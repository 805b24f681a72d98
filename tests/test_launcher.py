import pytest

from metal_hud.config import Settings
from metal_hud.errors import LaunchError, MissingPathError, ToolNotFoundError, hints_for
from metal_hud.launcher import build_launch_command, launch_app
from metal_hud.models import ApplicationInfo

APP = ApplicationInfo(bundle_id="com.example.app", display_name="App.app", pid="412", full_path="/path/App.app")


def test_launch_command_shape():
    command = build_launch_command("D1", "/path/App.app", Settings())

    assert command == [
        "xcrun",
        "devicectl",
        "device",
        "process",
        "launch",
        "-e",
        '{"MTL_HUD_ENABLED": "1"}',
        "--console",
        "--device",
        "D1",
        "/path/App.app",
    ]


def test_dry_run_only_prints_command(console, fake_runner):
    runner = fake_runner()

    rendered = launch_app("D1", APP, console, dry_run=True, settings=Settings(), runner=runner)

    assert runner.calls == []
    assert rendered == "xcrun devicectl device process launch -e '{\"MTL_HUD_ENABLED\": \"1\"}' --console --device D1 /path/App.app"
    printed = console.file.getvalue()
    for fragment in ("D1", "/path/App.app", '"MTL_HUD_ENABLED": "1"'):
        assert fragment in printed


def test_paths_with_spaces_are_quoted(console, fake_runner):
    app = ApplicationInfo(bundle_id="b", display_name="Notes Pro.app", full_path="/private/var/Notes Pro.app")

    rendered = launch_app("D1", app, console, dry_run=True, settings=Settings(), runner=fake_runner())

    assert rendered.endswith("'/private/var/Notes Pro.app'")


@pytest.mark.parametrize("dry_run", [True, False])
def test_missing_path_fails_before_running(console, fake_runner, dry_run):
    runner = fake_runner()
    app = ApplicationInfo(bundle_id="com.example.app", display_name="App.app", pid="412")

    with pytest.raises(MissingPathError):
        launch_app("D1", app, console, dry_run=dry_run, settings=Settings(), runner=runner)
    assert runner.calls == []


def test_execute_runs_once_and_shows_output(console, fake_runner):
    runner = fake_runner((0, "Launched application with com.example.app bundle identifier.\n", ""))

    launch_app("D1", APP, console, settings=Settings(), runner=runner)

    assert len(runner.calls) == 1
    assert runner.calls[0][-3:] == ["--device", "D1", "/path/App.app"]
    printed = console.file.getvalue()
    assert "App launched" in printed
    assert "Launched application with com.example.app" in printed


def test_launch_failure_for_missing_app(console, fake_runner):
    runner = fake_runner((1, "", "ERROR: The requested application was not found on the device."))

    with pytest.raises(LaunchError) as excinfo:
        launch_app("D1", APP, console, settings=Settings(), runner=runner)

    assert hints_for(excinfo.value) == ["Check that the app is installed on the device."]


def test_launch_failure_for_developer_mode(console, fake_runner):
    runner = fake_runner((1, "", "ERROR: Operation not permitted: permission denied by security policy."))

    with pytest.raises(LaunchError) as excinfo:
        launch_app("D1", APP, console, settings=Settings(), runner=runner)

    assert hints_for(excinfo.value) == ["Check that Developer Mode is enabled on the device."]


def test_generic_launch_failure_has_no_hint(console, fake_runner):
    runner = fake_runner((1, "", "ERROR: Something unexpected happened."))

    with pytest.raises(LaunchError) as excinfo:
        launch_app("D1", APP, console, settings=Settings(), runner=runner)

    assert hints_for(excinfo.value) == []


def test_launch_without_xcrun(console, fake_runner):
    runner = fake_runner(FileNotFoundError(2, "No such file or directory", "xcrun"))

    with pytest.raises(ToolNotFoundError, match="Failed to launch App.app"):
        launch_app("D1", APP, console, settings=Settings(), runner=runner)

from click.testing import CliRunner

import harbormigrate.cli as cli_module


class FakeMigrator:
    captured = {}

    def __init__(self, options):
        FakeMigrator.captured["options"] = options

    def run(self, context):
        FakeMigrator.captured["context"] = context
        return 0


def _patch(monkeypatch):
    FakeMigrator.captured = {}
    monkeypatch.setattr(cli_module, "HarborMigrator", FakeMigrator)
    monkeypatch.setattr(cli_module, "setup_signal_context", lambda: "root-context")


def test_cli_uses_config_and_allows_cli_override(tmp_path, monkeypatch):
    _patch(monkeypatch)
    config_file = tmp_path / "migrate.yml"
    config_file.write_text(
        "source_url: https://old.example.com\n"
        "source_password: from-config\n"
        "target_url: https://new.example.com\n"
        "target_user: robot\n"
        "target_password: target-secret\n"
        "connect_timeout: 12\n",
        encoding="utf-8",
    )

    runner = CliRunner()
    result = runner.invoke(
        cli_module.main,
        ["--config", str(config_file), "--source-pass", "from-cli", "--insecure"],
    )

    assert result.exit_code == 0, result.output
    options = FakeMigrator.captured["options"]
    assert options.source.url == "https://old.example.com"
    assert options.source.username == "admin"
    assert options.source.password == "from-cli"
    assert options.target.username == "robot"
    assert options.target.password == "target-secret"
    assert options.connect_timeout == 12.0
    assert options.verify_tls is False
    assert FakeMigrator.captured["context"] == "root-context"


def test_cli_reads_passwords_from_environment(tmp_path, monkeypatch):
    _patch(monkeypatch)
    monkeypatch.chdir(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli_module.main,
        ["--source-url", "https://old.example.com", "--target-url", "https://new.example.com"],
        env={"HARBOR_SOURCE_PASSWORD": "env-source", "HARBOR_TARGET_PASSWORD": "env-target"},
    )

    assert result.exit_code == 0, result.output
    assert FakeMigrator.captured["options"].source.password == "env-source"
    assert FakeMigrator.captured["options"].target.password == "env-target"


def test_cli_uses_default_config_file_when_present(tmp_path, monkeypatch):
    _patch(monkeypatch)
    (tmp_path / ".harbormigrate.yml").write_text(
        "source_url: https://old.example.com\n"
        "source_password: a\n"
        "target_url: https://new.example.com\n"
        "target_password: b\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [], env={"HARBOR_SOURCE_PASSWORD": None, "HARBOR_TARGET_PASSWORD": None})

    assert result.exit_code == 0, result.output
    assert FakeMigrator.captured["options"].target.url == "https://new.example.com"


def test_cli_requires_target_url(tmp_path, monkeypatch):
    _patch(monkeypatch)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(
        cli_module.main,
        ["--source-url", "https://old.example.com", "--source-pass", "a", "--target-pass", "b"],
    )

    assert result.exit_code == 1
    assert "Missing required option '--target-url'" in result.output
    assert "options" not in FakeMigrator.captured


def test_cli_propagates_run_exit_code(tmp_path, monkeypatch):
    _patch(monkeypatch)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(FakeMigrator, "run", lambda self, context: 1)

    result = CliRunner().invoke(
        cli_module.main,
        [
            "--source-url",
            "https://old.example.com",
            "--source-pass",
            "a",
            "--target-url",
            "https://new.example.com",
            "--target-pass",
            "b",
        ],
    )

    assert result.exit_code == 1


def test_cli_rejects_non_positive_connect_timeout_option(tmp_path, monkeypatch):
    _patch(monkeypatch)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(
        cli_module.main,
        [
            "--source-url",
            "https://old.example.com",
            "--source-pass",
            "a",
            "--target-url",
            "https://new.example.com",
            "--target-pass",
            "b",
            "--connect-timeout",
            "0",
        ],
    )

    assert result.exit_code == 2
    assert "options" not in FakeMigrator.captured


def test_cli_reports_invalid_connect_timeout_in_config(tmp_path, monkeypatch):
    _patch(monkeypatch)
    config_file = tmp_path / "migrate.yml"
    config_file.write_text(
        "source_url: https://old.example.com\n"
        "source_password: a\n"
        "target_url: https://new.example.com\n"
        "target_password: b\n"
        "connect_timeout: soon\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(cli_module.main, ["--config", str(config_file)])

    assert result.exit_code == 1
    assert "connect_timeout" in result.output
    assert not isinstance(result.exception, ValueError)
    assert "options" not in FakeMigrator.captured

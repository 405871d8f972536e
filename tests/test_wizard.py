"""Unit tests for the interactive wizard."""

import click
from click.testing import CliRunner

from bender_config.config import Config, default
from bender_config.wizard import run_wizard

FIELD_COUNT = len(Config.keys())


def run(existing, answers):
    """Run the wizard inside a click command, feeding answers on stdin."""
    result_holder = {}

    @click.command()
    def cmd():
        result_holder["config"] = run_wizard(existing)

    result = CliRunner().invoke(cmd, input="".join(a + "\n" for a in answers))
    assert result.exit_code == 0, result.output
    return result_holder["config"], result.output


class TestRunWizard:
    """Tests for run_wizard()."""

    def test_accepting_everything_gives_defaults(self):
        config, output = run(None, [""] * FIELD_COUNT)

        assert config.is_default()
        assert "Creating a new bender configuration" in output

    def test_answers_are_applied(self):
        answers = [""] * FIELD_COUNT
        answers[Config.keys().index("limits.max_workers")] = "16"
        answers[Config.keys().index("server.host")] = "farm.example.com"

        config, _ = run(None, answers)

        assert config.limits.max_workers == 16
        assert config.server.host == "farm.example.com"

    def test_invalid_answer_is_asked_again(self):
        index = Config.keys().index("server.port")
        answers = [""] * index + ["not-a-port", "70000", "8080"]
        answers += [""] * (FIELD_COUNT - index - 1)

        config, output = run(None, answers)

        assert config.server.port == 8080
        assert output.count("server.port") >= 3

    def test_existing_values_are_suggested(self):
        existing = default()
        existing.limits.upload = 7

        config, output = run(existing, [""] * FIELD_COUNT)

        assert config.limits.upload == 7
        assert "existing: 7   default: 2" in output
        assert "Updating the existing bender configuration" in output

    def test_existing_config_not_modified(self):
        existing = default()
        answers = [""] * FIELD_COUNT
        answers[Config.keys().index("limits.max_workers")] = "9"

        config, _ = run(existing, answers)

        assert config.limits.max_workers == 9
        assert existing.limits.max_workers == 4

    def test_extra_keys_survive(self):
        existing = Config.from_dict({"render": {"engine": "cycles"}})
        config, _ = run(existing, [""] * FIELD_COUNT)
        assert config.extra == {"render": {"engine": "cycles"}}

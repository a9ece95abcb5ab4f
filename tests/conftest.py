"""Shared test fixtures and configuration."""

import subprocess
import tempfile
from pathlib import Path

import pytest

from gyst.llm.base import BaseProvider, RetryPolicy
from gyst.models import CommitDecision
from gyst.workflow.ui import TerminalUI


def run_git(cwd: Path, *args: str) -> str:
    """Run git in a test repository and return stripped stdout."""
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real git repository with one initial commit."""
    run_git(temp_dir, "init", "-q")
    run_git(temp_dir, "config", "user.email", "dev@example.com")
    run_git(temp_dir, "config", "user.name", "Test Dev")
    run_git(temp_dir, "config", "commit.gpgsign", "false")

    (temp_dir / "README.md").write_text("# demo\n\nA small demo project.\n")
    (temp_dir / "app.py").write_text("def main():\n    return 1\n")
    run_git(temp_dir, "add", ".")
    run_git(temp_dir, "commit", "-q", "-m", "initial commit")
    return temp_dir


@pytest.fixture(autouse=True)
def isolated_config(mocker, monkeypatch, tmp_path):
    """Point ~/.gyst at a temp dir and clear gyst environment variables."""
    config_dir = tmp_path / ".gyst"
    mocker.patch("gyst.global_config._CONFIG_DIR", config_dir)
    mocker.patch("gyst.config.load_dotenv")
    for var in ("ANTHROPIC_API_KEY", "GYST_MODE", "GYST_RELAY_URL"):
        monkeypatch.delenv(var, raising=False)
    return config_dir


NO_WAIT = RetryPolicy(max_attempts=3, base_delay=0.0, max_delay=0.0, jitter=0.0)


class FakeProvider(BaseProvider):
    """Provider returning scripted responses; items may be exceptions."""

    name = "fake"

    def __init__(self, responses, retry_policy=NO_WAIT):
        super().__init__(retry_policy=retry_policy, sleep=lambda seconds: None)
        self.responses = list(responses)
        self.prompts = []

    def _request(self, prompt, count):
        self.prompts.append(prompt)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return list(response)


class ScriptedUI(TerminalUI):
    """TerminalUI that answers from a script and records what it showed."""

    def __init__(self, decisions=None, stage_all=False, choice=0):
        self.decisions = list(decisions or [])
        self.stage_all = stage_all
        self.choice = choice
        self.messages = []
        self.shown = []
        self.prompts = 0

    def info(self, message):
        self.messages.append(message)

    def warn(self, message):
        self.messages.append(f"Warning: {message}")

    def show_candidate(self, candidate):
        self.shown.append(candidate.message)

    def show_candidates(self, candidates):
        self.shown.append([c.message for c in candidates])

    def show_committed(self, sha, message):
        self.messages.append(f"Committed {sha}")

    def confirm_stage_all(self):
        self.prompts += 1
        return self.stage_all

    def ask_decision(self):
        self.prompts += 1
        decision = self.decisions.pop(0) if self.decisions else CommitDecision.reject()
        if isinstance(decision, BaseException):
            raise decision
        return decision

    def choose_candidate(self, candidates):
        self.prompts += 1
        return self.choice


@pytest.fixture
def make_provider():
    """Build a FakeProvider from a list of scripted responses."""
    return FakeProvider


@pytest.fixture
def make_ui():
    """Build a ScriptedUI with scripted answers."""
    return ScriptedUI

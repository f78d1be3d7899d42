"""
Shared test fixtures for kubefuzzy tests.
"""

import json
import sys
import tempfile
from pathlib import Path

import pytest
import structlog

import kubefuzzy.core.config as config_module
from kubefuzzy.core.errors import CommandError
from kubefuzzy.core.kubectl import Kubectl
from kubefuzzy.core.picker import Selector

# Fake kubectl: records argv, answers from cluster.json
FAKE_KUBECTL = r'''
import json, os, sys

state = os.environ["KUBEFUZZY_FAKE_DIR"]
args = sys.argv[1:]
with open(os.path.join(state, "kubectl.jsonl"), "a") as f:
    f.write(json.dumps(args) + "\n")
with open(os.path.join(state, "cluster.json")) as f:
    cluster = json.load(f)

key = " ".join(args)
if key in cluster["outputs"]:
    sys.stdout.write(cluster["outputs"][key])
elif len(args) == 2 and args[0] == "get":
    sys.stdout.write(cluster["listings"].get(args[1], ""))
sys.exit(cluster["exit"].get(key, 0))
'''

# Fake sk: each invocation plays the next step of session.json.
# A step presses "keys" (running their --bind actions against the
# "highlight" line), then prints "output" or the "select"ed lines.
FAKE_SK = r'''
import json, os, re, subprocess, sys

state = os.environ["KUBEFUZZY_FAKE_DIR"]
args = sys.argv[1:]
with open(os.path.join(state, "sk.jsonl"), "a") as f:
    f.write(json.dumps(args) + "\n")
lines = [line.rstrip("\n") for line in sys.stdin if line.strip()]

session_path = os.path.join(state, "session.json")
with open(session_path) as f:
    session = json.load(f)
step = session.pop(0)
with open(session_path, "w") as f:
    json.dump(session, f)

bindings = {}
if "--bind" in args:
    for binding in args[args.index("--bind") + 1].split(","):
        key, _, action = binding.partition(":")
        bindings[key] = action

highlighted = lines[step.get("highlight", 0)] if lines else ""
for key in step.get("keys", []):
    action = bindings[key]
    if action == "abort":
        sys.exit(130)
    command = re.fullmatch(r"execute\((.*)\)", action).group(1)
    command = command.replace("{1}", "'" + highlighted.split()[0] + "'")
    subprocess.run(["sh", "-c", command], check=True)

if "output" in step:
    print(step["output"])
    sys.exit(0)
selected = [lines[i] for i in step.get("select", [])]
if not selected:
    sys.exit(130)
print("\n".join(selected))
'''


@pytest.fixture(autouse=True)
def isolate(tmp_path, monkeypatch):
    """No user config, temp files under tmp_path/tmp, logging off."""
    monkeypatch.setattr(config_module, "USER_CONFIG", tmp_path / "no-such-config")
    monkeypatch.delenv(config_module.ENV_CONFIG, raising=False)
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))
    yield
    config_module._logger = None
    structlog.reset_defaults()


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    return tmp_path / "tmp"


def leftover_temp_files(temp_dir: Path) -> list[Path]:
    """kubefuzzy temp files still on disk."""
    return sorted(temp_dir.glob("kube_fuzzy.*"))


class FakeKubectl(Kubectl):
    """Kubectl that records calls instead of running anything.

    outputs maps argument tuples to canned stdout; interactive calls return
    returncode and write their canned output to the given stream.
    """

    def __init__(self, outputs: dict | None = None, returncode: int = 0):
        super().__init__(["kubectl"])
        self.outputs = outputs or {}
        self.returncode = returncode
        self.calls: list[list[str]] = []

    def run(self, *args, stdout=None):
        self.calls.append(list(args))
        if stdout is not None and args in self.outputs:
            stdout.write(self.outputs[args])
        return self.returncode

    def output(self, *args):
        self.calls.append(list(args))
        if args not in self.outputs:
            raise CommandError(self.argv(*args), 1, f"Error from server (NotFound): {args}")
        return self.outputs[args]


class FakeSelector(Selector):
    """Selector whose single pick returns a fixed choice."""

    def __init__(self, choice: str | None = None):
        super().__init__(["sk"])
        self.choice = choice
        self.picks: list[tuple[list[str], str]] = []

    def pick_one(self, items, preview):
        self.picks.append((list(items), preview))
        return self.choice


@pytest.fixture
def fake_kubectl():
    """Factory for FakeKubectl."""
    return FakeKubectl


@pytest.fixture
def fake_selector():
    """Factory for FakeSelector."""
    return FakeSelector


class FakeCluster:
    """Fake kubectl and sk executables sharing one state directory."""

    def __init__(self, root: Path):
        self.root = root
        self.kubectl = self._install("kubectl", FAKE_KUBECTL)
        self.sk = self._install("sk", FAKE_SK)
        self.listings: dict[str, str] = {}
        self.outputs: dict[str, str] = {}
        self.exit: dict[str, int] = {}
        self.session: list[dict] = []

    def _install(self, name: str, source: str) -> Path:
        script = self.root / f"{name}.py"
        script.write_text(source)
        wrapper = self.root / name
        wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n')
        wrapper.chmod(0o755)
        return wrapper

    def save(self) -> None:
        (self.root / "cluster.json").write_text(
            json.dumps({"listings": self.listings, "outputs": self.outputs, "exit": self.exit})
        )
        (self.root / "session.json").write_text(json.dumps(self.session))

    def config_text(self) -> str:
        return f"set kubectl {self.kubectl}\nset selector {self.sk}\n"

    def _calls(self, name: str) -> list[list[str]]:
        path = self.root / f"{name}.jsonl"
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text().splitlines()]

    @property
    def kubectl_calls(self) -> list[list[str]]:
        return self._calls("kubectl")

    @property
    def sk_calls(self) -> list[list[str]]:
        return self._calls("sk")


@pytest.fixture
def cluster(tmp_path, monkeypatch):
    """Fake cluster wired in through $KUBEFUZZY_CONFIG; call save() before use."""
    root = tmp_path / "cluster"
    root.mkdir()
    fake = FakeCluster(root)
    config_path = tmp_path / "config"
    config_path.write_text(fake.config_text())
    monkeypatch.setenv("KUBEFUZZY_FAKE_DIR", str(root))
    monkeypatch.setenv(config_module.ENV_CONFIG, str(config_path))
    return fake


PODS_LISTING = (
    "NAME        READY   STATUS    RESTARTS   AGE\n"
    "web-1       1/1     Running   0          3d\n"
    "web-2       1/1     Running   0          3d\n"
    "worker-7    2/2     Running   1          1h\n"
)

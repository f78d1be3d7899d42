"""Tests for bash quoting and command splitting."""

import pytest

from kubefuzzy.core.bash import bash_join, bash_quote, split_command


class TestBashQuote:
    def test_empty_string(self):
        assert bash_quote("") == "''"

    def test_simple_word(self):
        assert bash_quote("kubectl") == "kubectl"

    def test_temp_path(self):
        assert bash_quote("/tmp/kube_fuzzy.command.a1b2c3") == "/tmp/kube_fuzzy.command.a1b2c3"

    def test_with_spaces(self):
        assert bash_quote("my context") == "'my context'"

    def test_with_single_quote(self):
        assert bash_quote("it's") == "'it'\"'\"'s'"

    def test_flag_with_value(self):
        assert bash_quote("--context=prod") == "--context=prod"

    def test_special_chars(self):
        assert bash_quote("$HOME") == "'$HOME'"
        assert bash_quote("{1}") == "'{1}'"
        assert bash_quote("a,b") == "'a,b'"
        assert bash_quote("a;b") == "'a;b'"


class TestBashJoin:
    def test_simple(self):
        assert bash_join(["kubectl", "delete", "pods"]) == "kubectl delete pods"

    def test_with_spaces(self):
        assert bash_join(["kubectl", "--context", "my ctx"]) == "kubectl --context 'my ctx'"

    def test_empty_list(self):
        assert bash_join([]) == ""


class TestSplitCommand:
    @pytest.mark.parametrize(
        "command,expected",
        [
            ("kubectl", ["kubectl"]),
            ("less -e", ["less", "-e"]),
            ("kubectl --context staging", ["kubectl", "--context", "staging"]),
            ("kubectl --context 'prod cluster'", ["kubectl", "--context", "prod cluster"]),
            ('bat --style "numbers,grid"', ["bat", "--style", "numbers,grid"]),
            ("  fzf  ", ["fzf"]),
        ],
    )
    def test_splits(self, command, expected):
        assert split_command(command) == expected

    def test_expands_home(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/kube")
        assert split_command("~/bin/kubectl get") == ["/home/kube/bin/kubectl", "get"]

    @pytest.mark.parametrize(
        "command",
        [
            "",
            "   ",
            "kubectl | grep foo",
            "kubectl; rm -rf /",
            "kubectl && echo done",
            "kubectl > out.txt",
            "KUBECONFIG=x kubectl",
            "kubectl 'unterminated",
        ],
    )
    def test_rejects(self, command):
        with pytest.raises(ValueError):
            split_command(command)

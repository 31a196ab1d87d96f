"""Tests for the enforcement dispatch layer."""

import pytest

from casbin_cli.enforcer import EnforcementDispatcher, split_lines, unescape_newlines
from casbin_cli.exceptions import EnforcementError

from conftest import BASIC_MODEL


class TestEnforcementDispatcher:
    """Test EnforcementDispatcher against a basic ACL model."""

    def test_enforce(self, basic_acl):
        model, policy = basic_acl
        dispatcher = EnforcementDispatcher(str(model), str(policy))

        assert dispatcher.enforce("alice", "data1", "read") is True
        assert dispatcher.enforce("alice", "data1", "write") is False

    def test_enforce_ex_explains_match(self, basic_acl):
        model, policy = basic_acl
        dispatcher = EnforcementDispatcher(str(model), str(policy))

        allowed, explain = dispatcher.enforce_ex("bob", "data2", "write")

        assert allowed is True
        assert explain == ["bob", "data2", "write"]

    def test_enforce_ex_without_match(self, basic_acl):
        model, policy = basic_acl
        allowed, explain = EnforcementDispatcher(str(model), str(policy)).enforce_ex(
            "bob", "data1", "read"
        )
        assert allowed is False
        assert explain == []

    def test_add_policy_is_saved(self, basic_acl):
        model, policy = basic_acl
        dispatcher = EnforcementDispatcher(str(model), str(policy))

        assert dispatcher.add_policy("alice", "data2", "write") is True
        assert dispatcher.add_policy("alice", "data2", "write") is False

        reloaded = EnforcementDispatcher(str(model), str(policy))
        assert reloaded.enforce("alice", "data2", "write") is True

    def test_remove_policy_is_saved(self, basic_acl):
        model, policy = basic_acl
        dispatcher = EnforcementDispatcher(str(model), str(policy))

        assert dispatcher.remove_policy("alice", "data1", "read") is True
        assert dispatcher.remove_policy("alice", "data1", "read") is False

        reloaded = EnforcementDispatcher(str(model), str(policy))
        assert reloaded.enforce("alice", "data1", "read") is False

    def test_inline_model_text(self, basic_acl):
        """Model text may be passed inline with '|' line separators."""
        _, policy = basic_acl
        inline = "|".join(line for line in BASIC_MODEL.splitlines() if line)
        dispatcher = EnforcementDispatcher(inline, str(policy))
        assert dispatcher.enforce("alice", "data1", "read") is True

    def test_inline_policy_text(self, basic_acl):
        """Policy rules may be passed inline with '|' or '\\n' separators."""
        model, _ = basic_acl
        dispatcher = EnforcementDispatcher(
            str(model), "p, alice, data1, read|p, bob, data2, write"
        )
        assert dispatcher.policy_file is None
        assert dispatcher.enforce("alice", "data1", "read") is True
        assert dispatcher.enforce("bob", "data2", "write") is True
        assert dispatcher.enforce("bob", "data1", "read") is False

    def test_inline_policy_with_escaped_newlines(self, basic_acl):
        model, _ = basic_acl
        dispatcher = EnforcementDispatcher(
            str(model), "p, alice, data1, read\\np, bob, data2, write"
        )
        assert dispatcher.enforce("bob", "data2", "write") is True

    def test_inline_policy_changes_are_not_saved(self, basic_acl, monkeypatch):
        model, policy = basic_acl
        before = policy.read_text()
        dispatcher = EnforcementDispatcher(str(model), "p, alice, data1, read")

        def fail():
            raise AssertionError("save_policy must not be called for inline policy")

        monkeypatch.setattr(dispatcher.enforcer, "save_policy", fail)

        assert dispatcher.add_policy("carol", "data3", "read") is True
        assert dispatcher.enforce("carol", "data3", "read") is True
        assert dispatcher.remove_policy("alice", "data1", "read") is True
        assert dispatcher.enforce("alice", "data1", "read") is False
        assert policy.read_text() == before

    def test_missing_policy_file(self, basic_acl, tmp_path):
        model, _ = basic_acl
        with pytest.raises(EnforcementError, match="Policy file not found"):
            EnforcementDispatcher(str(model), str(tmp_path / "missing.csv"))

    def test_missing_model(self, basic_acl):
        _, policy = basic_acl
        with pytest.raises(EnforcementError):
            EnforcementDispatcher("", str(policy))


def test_unescape_newlines():
    assert unescape_newlines("a\\nb") == "a\nb"
    assert unescape_newlines("plain") == "plain"


def test_split_lines():
    assert split_lines("a, b|c, d\\ne, f") == ["a, b", "c, d", "e, f"]
    assert split_lines(" | ") == []

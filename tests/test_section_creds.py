"""Tests for realm.realmcore.section and realm.realmcore.creds."""
import pytest

from realm.realmcore.creds import ConnectionCred
from realm.realmcore.lines import LineKind, classify
from realm.realmcore.section import SectionState, SectionTracker


class TestSectionTracker:
    def test_starts_in_default_section(self):
        t = SectionTracker()
        assert t.state is SectionState.DEFAULT
        assert t.active

    def test_default_differs_from_explicit_main(self):
        t = SectionTracker()
        t.update(classify("[main]"))
        assert t.state is SectionState.MAIN
        assert t.state is not SectionState.DEFAULT
        assert t.active

    @pytest.mark.parametrize("start", list(SectionState))
    def test_transitions(self, start):
        t = SectionTracker(start)
        assert t.update(classify("[test]")) is SectionState.TEST
        assert not t.active
        assert t.update(classify("[main]")) is SectionState.MAIN
        assert t.active

    @pytest.mark.parametrize("line", ["# comment", "somegarbage", "rpcuser=bob", "RPCUSER=x", ""])
    @pytest.mark.parametrize("start", list(SectionState))
    def test_other_kinds_leave_state_unchanged(self, line, start):
        t = SectionTracker(start)
        t.update(classify(line))
        assert t.state is start


class TestConnectionCred:
    def test_starts_empty(self):
        cred = ConnectionCred()
        assert cred.missing() == ["rpcconnect", "rpcuser", "rpcpassword"]
        assert not cred.is_complete()

    def test_merge_assignments(self):
        cred = ConnectionCred()
        assert cred.merge(classify("rpcconnect=127.0.0.1:8333"))
        assert cred.merge(classify("rpcuser=alice"))
        assert cred.merge(classify("rpcpassword=s3cr3t"))
        assert cred == ConnectionCred("127.0.0.1:8333", "alice", "s3cr3t")
        assert cred.is_complete()

    @pytest.mark.parametrize("line", ["[main]", "[test]", "# rpcuser=x", "somegarbage", "RPCUSER=bob"])
    def test_non_assignments_are_ignored(self, line):
        cred = ConnectionCred(rpcuser="alice")
        assert not cred.merge(classify(line))
        assert cred == ConnectionCred(rpcuser="alice")

    def test_last_write_wins(self):
        cred = ConnectionCred()
        cred.merge(classify("rpcuser=alice"))
        cred.merge(classify("rpcuser=bob"))
        assert cred.rpcuser == "bob"

    def test_empty_value_counts_as_present(self):
        cred = ConnectionCred()
        cred.merge(classify("rpcpassword="))
        assert cred.rpcpassword == ""
        assert "rpcpassword" not in cred.missing()

    def test_repr_hides_password(self):
        cred = ConnectionCred("host", "alice", "s3cr3t")
        assert "s3cr3t" not in repr(cred)
        assert "alice" in repr(cred)

    def test_kind_to_field(self):
        for kind, name in [(LineKind.RPC_CONNECT, "rpcconnect"),
                           (LineKind.RPC_USER, "rpcuser"),
                           (LineKind.RPC_PASSWORD, "rpcpassword")]:
            cred = ConnectionCred()
            cred.merge(classify(f"{kind.value}=v"))
            assert getattr(cred, name) == "v"

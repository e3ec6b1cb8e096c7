"""
Unit tests for MemberLockRegistry
"""
import threading
import time

import pytest

from strengthsync.app.core.member_locks import MemberLockRegistry, get_member_lock_registry


@pytest.mark.unit
class TestMemberLockRegistry:
    """Test suite for per-member locks"""

    def test_entry_exists_only_while_held(self):
        registry = MemberLockRegistry()

        with registry.hold("m1"):
            with registry.hold("m2"):
                assert len(registry) == 2
            assert len(registry) == 1

        assert len(registry) == 0

    def test_entry_released_after_error(self):
        registry = MemberLockRegistry()

        with pytest.raises(RuntimeError):
            with registry.hold("m1"):
                raise RuntimeError("insert failed")

        assert len(registry) == 0
        with registry.hold("m1"):
            assert len(registry) == 1

    def test_many_members_do_not_accumulate(self):
        registry = MemberLockRegistry()

        for i in range(500):
            with registry.hold(f"member-{i}"):
                pass

        assert len(registry) == 0

    def test_hold_serializes_same_member(self):
        registry = MemberLockRegistry()
        events = []

        def writer(tag):
            with registry.hold("m1"):
                events.append(f"{tag}-start")
                time.sleep(0.02)
                events.append(f"{tag}-end")

        threads = [threading.Thread(target=writer, args=(tag,)) for tag in ("a", "b")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # No interleaving: each start is immediately followed by its own end
        assert events[0][0] == events[1][0]
        assert events[2][0] == events[3][0]
        assert len(registry) == 0

    def test_shared_registry(self):
        assert get_member_lock_registry() is get_member_lock_registry()

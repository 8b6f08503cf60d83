from __future__ import annotations

from maternal_wellness.infrastructure.hashing import HASH_PREFIX_LENGTH, stable_text_hash, user_ref


class TestStableHashing:
    def test_stable_text_hash_is_deterministic_and_short(self) -> None:
        value = stable_text_hash("hello world")
        assert value == stable_text_hash("hello world")
        assert len(value) == HASH_PREFIX_LENGTH

    def test_user_ref_hides_identity(self) -> None:
        ref = user_ref("mum@example.com")
        assert ref.startswith("u_")
        assert "mum" not in ref
        assert ref == user_ref("mum@example.com")
        assert ref != user_ref("other@example.com")

    def test_user_ref_accepts_ints(self) -> None:
        assert user_ref(42) == user_ref("42")

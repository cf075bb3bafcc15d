"""Tests for review reactions."""

import pytest

from bookclub.core import store
from bookclub.core.exceptions import NotFoundError, ValidationError
from bookclub.models.enums import ReactionType
from bookclub.models.review import Reaction
from bookclub.services import reaction_service


class TestToggleReaction:
    """Test the reaction toggle."""

    def test_adds_then_removes(self, db, alice, test_review):
        on = reaction_service.toggle_reaction(db, test_review.id, alice.id, "Like")
        assert on.active is True
        assert on.counts[ReactionType.LIKE] == 1
        assert on.mine == [ReactionType.LIKE]

        off = reaction_service.toggle_reaction(db, test_review.id, alice.id, ReactionType.LIKE)
        assert off.active is False
        assert off.counts[ReactionType.LIKE] == 0
        assert db.query(Reaction).count() == 0

    @pytest.mark.parametrize("reaction_type", list(ReactionType))
    def test_toggle_twice_is_identity(self, db, alice, bob, test_review, reaction_type):
        reaction_service.toggle_reaction(db, test_review.id, bob.id, reaction_type)
        before = reaction_service.counts_by_type(db, test_review.id).counts

        reaction_service.toggle_reaction(db, test_review.id, alice.id, reaction_type)
        reaction_service.toggle_reaction(db, test_review.id, alice.id, reaction_type)

        assert reaction_service.counts_by_type(db, test_review.id).counts == before

    def test_types_are_independent(self, db, alice, test_review):
        reaction_service.toggle_reaction(db, test_review.id, alice.id, "Like")
        reaction_service.toggle_reaction(db, test_review.id, alice.id, "Funny")

        tally = reaction_service.counts_by_type(db, test_review.id, viewer_id=alice.id)

        assert tally.counts == {
            ReactionType.LIKE: 1,
            ReactionType.HELPFUL: 0,
            ReactionType.FUNNY: 1,
        }
        assert tally.mine == [ReactionType.LIKE, ReactionType.FUNNY]

    def test_duplicate_insert_absorbed(self, db, alice, test_review, monkeypatch):
        """A reaction inserted by another session first reads as "reacted"."""
        real_insert = store.insert_unique

        def insert_after_concurrent_reaction(session, row):
            session.add(Reaction(review_id=test_review.id, user_id=alice.id, type=ReactionType.FUNNY))
            session.commit()
            return real_insert(session, row)

        monkeypatch.setattr(store, "insert_unique", insert_after_concurrent_reaction)

        result = reaction_service.toggle_reaction(db, test_review.id, alice.id, "Funny")

        assert result.active is True
        assert result.counts[ReactionType.FUNNY] == 1
        assert db.query(Reaction).filter_by(review_id=test_review.id, user_id=alice.id).count() == 1

    def test_unknown_type(self, db, alice, test_review):
        with pytest.raises(ValidationError):
            reaction_service.toggle_reaction(db, test_review.id, alice.id, "Love")

    def test_unknown_review(self, db, alice):
        with pytest.raises(NotFoundError):
            reaction_service.toggle_reaction(db, 8080, alice.id, "Like")


class TestCountsByType:
    """Test reaction tallies."""

    def test_all_types_present_when_empty(self, db, test_review):
        tally = reaction_service.counts_by_type(db, test_review.id)

        assert tally.counts == {t: 0 for t in ReactionType}
        assert tally.mine == []

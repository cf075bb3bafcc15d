"""Tests for team reading stats."""

import pytest

from bookclub.services import review_service, stats_service


class TestTeamStats:
    """Test the team stats summary."""

    def test_empty(self, db, test_books):
        stats = stats_service.team_stats(db)

        assert stats.books_read == 2
        assert stats.team_average is None
        assert stats.most_reviews == []
        assert stats.highest_average == []
        assert stats.lowest_average == []

    def test_leaderboards(self, db, alice, bob, carol, test_books):
        review_service.upsert_review(db, test_books[0].id, bob.id, 4, "Good")
        review_service.upsert_review(db, test_books[1].id, bob.id, 2, "Slow")
        review_service.upsert_review(db, test_books[0].id, carol.id, 5, "Loved it")
        review_service.upsert_review(db, test_books[1].id, carol.id, 5, "Also loved it")
        review_service.upsert_review(db, test_books[2].id, carol.id, 2, "Not for me")
        # Unrated reviews stay out of every number
        review_service.upsert_review(db, test_books[0].id, alice.id, None, "No score")

        stats = stats_service.team_stats(db)

        assert stats.team_average == pytest.approx(18 / 5)
        assert [(r.name, r.count) for r in stats.most_reviews] == [("Carol-Ann", 3), ("Bob", 2)]
        assert [(r.name, r.avg) for r in stats.highest_average] == [("Carol-Ann", 4.0), ("Bob", 3.0)]
        assert [(r.name, r.avg) for r in stats.lowest_average] == [("Bob", 3.0), ("Carol-Ann", 4.0)]

    def test_average_boards_need_two_ratings(self, db, bob, test_review):
        stats = stats_service.team_stats(db)

        assert stats.team_average == pytest.approx(4.0)
        assert [(r.name, r.count) for r in stats.most_reviews] == [("Bob", 1)]
        assert stats.highest_average == []
        assert stats.lowest_average == []

"""API tests for reviews, reactions, comments and notifications."""

from conftest import headers_for


class TestReviewEndpoints:
    """Test saving and reading reviews."""

    def test_save_and_update_my_review(self, client, member_headers, test_books):
        book_id = test_books[0].id
        url = f"/api/v1/books/{book_id}/reviews/me"

        first = client.put(url, json={"rating": 5, "thoughts": "Strange and lovely"}, headers=member_headers)
        second = client.put(url, json={"rating": None, "thoughts": "Still thinking"}, headers=member_headers)

        assert first.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["author_name"] == "Bob"

        reviews = client.get(f"/api/v1/books/{book_id}/reviews", headers=member_headers).json()
        assert len(reviews) == 1

        rating = client.get(f"/api/v1/books/{book_id}/rating", headers=member_headers).json()
        assert rating["review_count"] == 1
        assert rating["average_rating"] is None

    def test_rating_out_of_range(self, client, member_headers, test_books):
        response = client.put(
            f"/api/v1/books/{test_books[0].id}/reviews/me",
            json={"rating": 7, "thoughts": "Too good"},
            headers=member_headers,
        )
        assert response.status_code == 422

    def test_get_review(self, client, member_headers, test_review):
        response = client.get(f"/api/v1/reviews/{test_review.id}", headers=member_headers)

        assert response.status_code == 200
        assert response.json()["rating"] == 4


class TestReactionEndpoints:
    """Test reaction toggles over HTTP."""

    def test_toggle(self, client, admin_headers, test_review):
        url = f"/api/v1/reviews/{test_review.id}/reactions/Helpful"

        on = client.post(url, headers=admin_headers).json()
        assert on["active"] is True
        assert on["counts"] == {"Like": 0, "Helpful": 1, "Funny": 0}
        assert on["mine"] == ["Helpful"]

        off = client.post(url, headers=admin_headers).json()
        assert off["active"] is False
        assert off["counts"]["Helpful"] == 0

    def test_unknown_reaction(self, client, admin_headers, test_review):
        response = client.post(f"/api/v1/reviews/{test_review.id}/reactions/Love", headers=admin_headers)
        assert response.status_code == 422


class TestCommentsAndInbox:
    """Test comments, mentions and the inbox end to end."""

    def test_mention_reaches_inbox(self, client, alice, bob, test_review):
        response = client.post(
            f"/api/v1/reviews/{test_review.id}/comments",
            json={"body": "@Alice great read @Alice"},
            headers=headers_for(bob),
        )
        assert response.status_code == 201
        assert response.json()["mentioned_user_ids"] == [alice.id]

        inbox = client.get("/api/v1/notifications/", headers=headers_for(alice)).json()
        assert inbox["unread_count"] == 1
        assert inbox["items"][0]["text"] == "Bob mentioned you in a comment"
        assert inbox["items"][0]["comment_id"] == response.json()["id"]

        bob_inbox = client.get("/api/v1/notifications/", headers=headers_for(bob)).json()
        assert bob_inbox == {"unread_count": 0, "items": []}

    def test_mark_read_and_read_all(self, client, alice, bob, test_review):
        for body in ("@alice one", "@alice two"):
            client.post(
                f"/api/v1/reviews/{test_review.id}/comments",
                json={"body": body},
                headers=headers_for(bob),
            )
        items = client.get("/api/v1/notifications/", headers=headers_for(alice)).json()["items"]

        # Bob cannot read Alice's notification
        denied = client.post(f"/api/v1/notifications/{items[0]['id']}/read", headers=headers_for(bob))
        assert denied.status_code == 404

        marked = client.post(f"/api/v1/notifications/{items[0]['id']}/read", headers=headers_for(alice))
        assert marked.json()["is_read"] is True

        result = client.post("/api/v1/notifications/read-all", headers=headers_for(alice)).json()
        assert result["count"] == 1

    def test_blank_comment(self, client, member_headers, test_review):
        response = client.post(
            f"/api/v1/reviews/{test_review.id}/comments",
            json={"body": "  "},
            headers=member_headers,
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Write a comment first."

    def test_list_comments(self, client, member_headers, test_review):
        client.post(
            f"/api/v1/reviews/{test_review.id}/comments",
            json={"body": "First!"},
            headers=member_headers,
        )

        comments = client.get(f"/api/v1/reviews/{test_review.id}/comments", headers=member_headers).json()

        assert [c["body"] for c in comments] == ["First!"]


class TestStatsEndpoint:
    def test_stats(self, client, member_headers, test_review):
        data = client.get("/api/v1/stats/", headers=member_headers).json()

        assert data["books_read"] == 2
        assert data["team_average"] == 4.0
        assert data["most_reviews"] == [{"name": "Bob", "count": 1}]

"""API tests for the shelf and admin book management."""

from bookclub.services import book_service
from conftest import current_count


class TestShelfEndpoints:
    """Test reading the shelf."""

    def test_list_shelf(self, client, member_headers, test_books):
        response = client.get("/api/v1/books/", headers=member_headers)

        assert response.status_code == 200
        data = response.json()
        assert data[0]["title"] == "Project Hail Mary"
        assert data[0]["status"] == "Current"

    def test_current_book(self, client, member_headers, test_books):
        response = client.get("/api/v1/books/current", headers=member_headers)

        assert response.status_code == 200
        assert response.json()["id"] == test_books[2].id

    def test_no_current_book(self, client, member_headers):
        response = client.get("/api/v1/books/current", headers=member_headers)

        assert response.status_code == 200
        assert response.json() is None

    def test_unknown_book_is_404(self, client, member_headers):
        response = client.get("/api/v1/books/9999", headers=member_headers)

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_rating_without_reviews(self, client, member_headers, test_books):
        response = client.get(f"/api/v1/books/{test_books[0].id}/rating", headers=member_headers)

        assert response.status_code == 200
        assert response.json() == {
            "book_id": test_books[0].id,
            "review_count": 0,
            "average_rating": None,
        }


class TestAdminBooks:
    """Test admin shelf mutations."""

    def test_add_current_book(self, client, db, admin_headers, test_books):
        response = client.post(
            "/api/v1/admin/books",
            json={"title": "Dune", "author": "Frank Herbert", "status": "Current"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["status"] == "Current"
        assert current_count(db) == 1

    def test_add_book_rejects_next_up(self, client, admin_headers):
        response = client.post(
            "/api/v1/admin/books",
            json={"title": "Dune", "author": "Frank Herbert", "status": "NextUp"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_add_book_blank_title(self, client, admin_headers):
        response = client.post(
            "/api/v1/admin/books",
            json={"title": "  ", "author": "Frank Herbert"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["detail"]

    def test_set_current(self, client, db, admin_headers, test_books):
        response = client.post(
            f"/api/v1/admin/books/{test_books[0].id}/set-current", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Current"
        assert current_count(db) == 1

    def test_archive_hides_from_shelf(self, client, admin_headers, test_books):
        book_id = test_books[0].id
        assert client.post(f"/api/v1/admin/books/{book_id}/archive", headers=admin_headers).status_code == 200

        shelf = client.get("/api/v1/books/", headers=admin_headers).json()
        everything = client.get("/api/v1/admin/books", headers=admin_headers).json()

        assert book_id not in [b["id"] for b in shelf]
        assert book_id in [b["id"] for b in everything]

    def test_lost_current_race_is_409(self, client, db, admin_headers, test_books, monkeypatch):
        """Another admin's concurrent change wins; this request changes nothing."""
        monkeypatch.setattr(book_service, "_demote_current", lambda session: 0)

        response = client.post(
            f"/api/v1/admin/books/{test_books[0].id}/set-current", headers=admin_headers
        )

        assert response.status_code == 409
        assert current_count(db) == 1
        assert book_service.get_current_book(db).id == test_books[2].id

    def test_set_current_unknown(self, client, admin_headers):
        response = client.post("/api/v1/admin/books/424242/set-current", headers=admin_headers)
        assert response.status_code == 404


class TestReadingStatusEndpoints:
    """Test reading status and who's in."""

    def test_set_status_and_whos_in(self, client, member_headers, test_books):
        book_id = test_books[2].id
        response = client.put(
            f"/api/v1/books/{book_id}/reading-status",
            json={"status": "Reading"},
            headers=member_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Reading"

        whos_in = client.get(f"/api/v1/books/{book_id}/whos-in", headers=member_headers).json()
        assert whos_in["count"] == 1
        assert whos_in["participants"][0]["name"] == "Bob"
        assert whos_in["breakdown"]["Reading"] == 1

    def test_retired_out_status(self, client, member_headers, test_books):
        response = client.put(
            f"/api/v1/books/{test_books[2].id}/reading-status",
            json={"status": "Out"},
            headers=member_headers,
        )
        assert response.status_code == 422

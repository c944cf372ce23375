from datetime import datetime

import pytest
from fastapi import status

from reviewhub.models.review import Review
from reviewhub.models.review_assignment import ReviewAssignment
from reviewhub.models.user import User


@pytest.fixture
def team(make_employee, assign, auth_headers, db_session):
    """Alice (with a login) is assigned to review Bob; Carol is unassigned."""
    alice = make_employee("Alice", with_login=True)
    bob = make_employee("Bob")
    carol = make_employee("Carol")
    assign(alice, bob)
    user = db_session.query(User).filter(User.id == alice.user_id).first()
    return {"alice": alice, "bob": bob, "carol": carol, "headers": auth_headers(user)}


def test_create_review_for_assigned_employee(client, team):
    response = client.post("/api/reviews/", headers=team["headers"], json={
        "content": "Bob unblocked the release twice this week.",
        "targetEmployee": team["bob"].id
    })
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["targetEmployee"]["name"] == "Bob"
    assert data["reviewedBy"]["name"] == "Alice"
    assert "timestamp" in data


def test_create_review_without_assignment_is_forbidden(client, team, db_session):
    response = client.post("/api/reviews/", headers=team["headers"], json={
        "content": "Not my reviewee",
        "targetEmployee": team["carol"].id
    })
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert db_session.query(Review).count() == 0


def test_admin_cannot_write_reviews(client, admin_headers, team):
    response = client.post("/api/reviews/", headers=admin_headers, json={
        "content": "Admin feedback", "targetEmployee": team["bob"].id
    })
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_my_reviews(client, team, add_review):
    add_review(team["bob"], "Older note", datetime(2024, 1, 3), reviewer=team["alice"])
    add_review(team["bob"], "Newer note", datetime(2024, 2, 3), reviewer=team["alice"])
    add_review(team["alice"], "Someone else's review", datetime(2024, 2, 4), reviewer=team["carol"])

    response = client.get("/api/reviews/my", headers=team["headers"])
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["reviewer"]["id"] == team["alice"].id
    assert [r["content"] for r in data["reviews"]] == ["Newer note", "Older note"]


def test_update_own_review(client, team, add_review):
    review = add_review(team["bob"], "Draft", datetime(2024, 3, 1), reviewer=team["alice"])
    response = client.put(f"/api/reviews/{review.id}", headers=team["headers"], json={"content": "Final wording"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["content"] == "Final wording"


def test_update_after_assignment_removed(client, team, add_review, db_session):
    review = add_review(team["bob"], "Draft", datetime(2024, 3, 1), reviewer=team["alice"])
    db_session.query(ReviewAssignment).delete()
    db_session.commit()

    response = client.put(f"/api/reviews/{review.id}", headers=team["headers"], json={"content": "Edit"})
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_update_someone_elses_review(client, team, add_review):
    review = add_review(team["alice"], "By Carol", datetime(2024, 3, 1), reviewer=team["carol"])
    response = client.put(f"/api/reviews/{review.id}", headers=team["headers"], json={"content": "Hijack"})
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_lists_with_filters(client, admin_headers, team, add_review):
    add_review(team["bob"], "From Alice", datetime(2024, 3, 1), reviewer=team["alice"])
    add_review(team["bob"], "From Carol", datetime(2024, 3, 2), reviewer=team["carol"])
    add_review(team["carol"], "About Carol", datetime(2024, 3, 3), reviewer=team["alice"])

    everything = client.get("/api/reviews/", headers=admin_headers).json()
    assert len(everything) == 3

    about_bob = client.get(f"/api/reviews/?targetEmployee={team['bob'].id}", headers=admin_headers).json()
    assert {r["content"] for r in about_bob} == {"From Alice", "From Carol"}

    by_alice = client.get(f"/api/reviews/?reviewedBy={team['alice'].id}", headers=admin_headers).json()
    assert {r["content"] for r in by_alice} == {"From Alice", "About Carol"}


def test_get_review_access(client, admin_headers, team, add_review):
    mine = add_review(team["bob"], "Mine", datetime(2024, 3, 1), reviewer=team["alice"])
    theirs = add_review(team["bob"], "Theirs", datetime(2024, 3, 1), reviewer=team["carol"])

    assert client.get(f"/api/reviews/{mine.id}", headers=team["headers"]).status_code == status.HTTP_200_OK
    assert client.get(f"/api/reviews/{theirs.id}", headers=team["headers"]).status_code == status.HTTP_403_FORBIDDEN
    assert client.get(f"/api/reviews/{theirs.id}", headers=admin_headers).status_code == status.HTTP_200_OK
    assert client.get("/api/reviews/9999", headers=admin_headers).status_code == status.HTTP_404_NOT_FOUND


def test_delete_review(client, team, add_review, db_session):
    review = add_review(team["bob"], "Remove me", datetime(2024, 3, 1), reviewer=team["alice"])
    response = client.delete(f"/api/reviews/{review.id}", headers=team["headers"])
    assert response.status_code == status.HTTP_200_OK
    assert db_session.query(Review).count() == 0

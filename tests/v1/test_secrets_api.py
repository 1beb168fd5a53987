# tests/v1/test_secrets_api.py
"""Tests for posting, reading and hiding secrets over HTTP."""

from fastapi import status


def _payload(room, question, **overrides):
    payload = {
        "roomId": room.id,
        "questionId": question.id,
        "body": "I still have my childhood blanket",
        "selfRating": 3,
        "importance": 4,
    }
    payload.update(overrides)
    return payload


def test_submit_creates_then_edits(client, bob_headers, room, question):
    created = client.post("/api/v1/secrets", json=_payload(room, question), headers=bob_headers)
    assert created.status_code == status.HTTP_201_CREATED
    secret = created.json()["secret"]
    assert secret["isOwnSecret"] is True
    assert secret["avgRating"] == 3.0
    assert secret["buyersCount"] == 0
    assert secret["questionId"] == question.id

    edited = client.post(
        "/api/v1/secrets",
        json=_payload(room, question, body="Actually it is a teddy bear"),
        headers=bob_headers,
    )
    assert edited.status_code == status.HTTP_200_OK
    assert edited.json()["secret"]["id"] == secret["id"]
    assert edited.json()["secret"]["body"] == "Actually it is a teddy bear"


def test_submit_accepts_snake_case(client, bob_headers, room, question):
    response = client.post(
        "/api/v1/secrets",
        json={
            "room_id": room.id,
            "question_id": question.id,
            "body": "snake case body",
            "self_rating": 2,
            "importance": 2,
            "answer_type": "multipleChoice",
            "answer_data": {"selected": ["pizza"]},
        },
        headers=bob_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["secret"]["answerData"] == {"type": "multipleChoice", "selected": ["pizza"]}


def test_submit_rejects_long_body(client, bob_headers, room, question):
    response = client.post(
        "/api/v1/secrets",
        json=_payload(room, question, body=" ".join(["word"] * 101)),
        headers=bob_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Secret must be 100 words or less"
    assert response.headers["X-Error-Kind"] == "InvalidAnswer"


def test_submit_rejects_out_of_range_rating(client, bob_headers, room, question):
    response = client.post(
        "/api/v1/secrets", json=_payload(room, question, selfRating=7), headers=bob_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.headers["X-Error-Kind"] == "InvalidRating"


def test_submit_without_body_or_ratings_is_a_bad_request(client, bob_headers, room, question):
    no_body = {"roomId": room.id, "questionId": question.id, "selfRating": 3, "importance": 4}
    response = client.post("/api/v1/secrets", json=no_body, headers=bob_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.headers["X-Error-Kind"] == "InvalidAnswer"

    no_ratings = {"roomId": room.id, "questionId": question.id, "body": "I hum while I eat"}
    response = client.post("/api/v1/secrets", json=no_ratings, headers=bob_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.headers["X-Error-Kind"] == "InvalidRating"


def test_submit_rejects_malformed_types(client, bob_headers, room, question):
    response = client.post(
        "/api/v1/secrets", json=_payload(room, question, selfRating="lots"), headers=bob_headers
    )
    assert response.status_code == 422


def test_submit_requires_membership(client, outsider_headers, room, question):
    response = client.post("/api/v1/secrets", json=_payload(room, question), headers=outsider_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "You must be a member of this room"


def test_submit_unknown_room(client, bob_headers, room, question):
    response = client.post(
        "/api/v1/secrets", json=_payload(room, question, roomId="0" * 32), headers=bob_headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Room not found"


def test_get_secret_is_redacted_until_unlocked(client, bob_headers, alice_secret, grant_access, bob):
    locked = client.get(f"/api/v1/secrets/{alice_secret.id}", headers=bob_headers)
    assert locked.status_code == status.HTTP_200_OK
    assert locked.json()["body"] is None
    assert locked.json()["selfRating"] == 3

    grant_access(alice_secret, bob)
    unlocked = client.get(f"/api/v1/secrets/{alice_secret.id}", headers=bob_headers)
    assert unlocked.json()["body"] == "I ate the last slice and blamed the dog"
    assert unlocked.json()["isUnlocked"] is True


def test_get_secret_requires_membership(client, outsider_headers, alice_secret):
    response = client.get(f"/api/v1/secrets/{alice_secret.id}", headers=outsider_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_get_missing_secret(client, bob_headers):
    response = client.get(f"/api/v1/secrets/{'0' * 32}", headers=bob_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Secret not found"


def test_delete_secret(client, alice_headers, bob_headers, alice_secret):
    forbidden = client.delete(f"/api/v1/secrets/{alice_secret.id}", headers=bob_headers)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
    assert forbidden.headers["X-Error-Kind"] == "NotAuthor"

    deleted = client.delete(f"/api/v1/secrets/{alice_secret.id}", headers=alice_headers)
    assert deleted.status_code == status.HTTP_204_NO_CONTENT

    gone = client.get(f"/api/v1/secrets/{alice_secret.id}", headers=alice_headers)
    assert gone.status_code == status.HTTP_404_NOT_FOUND

    again = client.delete(f"/api/v1/secrets/{alice_secret.id}", headers=alice_headers)
    assert again.status_code == status.HTTP_404_NOT_FOUND

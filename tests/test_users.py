from fastapi import status


JACK = {"name": "Jack Doe", "email": "jack@mailinator.com", "phonenumber": "04475368829"}


def create_user(client, **overrides):
    payload = dict(JACK, **overrides)
    return client.post("/user", json=payload)


def test_register_user(client):
    response = create_user(client)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["name"] == "Jack Doe"
    assert data["email"] == "jack@mailinator.com"
    assert data["phonenumber"] == "04475368829"


def test_register_user_round_trip(client):
    created = create_user(client).json()

    listed = client.get("/user").json()
    assert listed == [created]

    fetched = client.get(f"/user/{created['id']}")
    assert fetched.status_code == status.HTTP_200_OK
    assert fetched.json() == created


def test_invalid_register_reports_every_field(client):
    response = client.post("/user", json={"name": "", "email": "", "phonenumber": ""})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    reasons = response.json()["reasons"]
    assert set(reasons) == {"name", "email", "phonenumber"}


def test_invalid_email_and_name(client):
    response = create_user(client, name="Jack 2", email="not-an-email")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["reasons"] == {
        "name": "Please use a name without numbers or specials",
        "email": "The email address must be in the format of name@domain.com",
    }


def test_duplicate_email(client):
    first = create_user(client)
    assert first.status_code == status.HTTP_201_CREATED

    second = create_user(client, name="Jill Doe", phonenumber="04475368830")
    assert second.status_code == status.HTTP_409_CONFLICT
    assert second.json()["reasons"] == {
        "email": "That email is already used, please use a unique email"
    }
    assert len(client.get("/user").json()) == 1


def test_register_with_id_is_rejected(client):
    response = create_user(client, id=7)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "UserId should be null"
    assert client.get("/user").json() == []


def test_register_without_body_is_rejected(client):
    response = client.post("/user")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_malformed_json_is_rejected(client):
    response = client.post("/user", raw=b"{not json")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "reasons" in response.json()


def test_users_are_listed_by_name(client):
    create_user(client, name="Zoe Adams", email="zoe@mailinator.com")
    create_user(client, name="Adam Smith", email="adam@mailinator.com")
    names = [user["name"] for user in client.get("/user").json()]
    assert names == ["Adam Smith", "Zoe Adams"]


def test_delete_user(client):
    created = create_user(client).json()

    response = client.delete(f"/user/{created['id']}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""

    assert client.get(f"/user/{created['id']}").status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(f"/user/{created['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_delete_unknown_user(client):
    response = client.delete("/user/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "No User with the id 999 was found!"


def test_delete_with_non_numeric_id(client):
    response = client.delete("/user/abc")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_user_removes_their_reviews(client):
    user = create_user(client).json()
    restaurant = client.post(
        "/restaurants",
        json={"name": "Smiths", "phonenumber": "01234567890", "postcode": "AB16HO"},
    ).json()
    review = client.post(
        "/reviews",
        json={
            "review": "Great",
            "rating": 4,
            "user": {"id": user["id"]},
            "restaurant": {"id": restaurant["id"]},
        },
    )
    assert review.status_code == status.HTTP_201_CREATED

    assert client.delete(f"/user/{user['id']}").status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/reviews").json() == []
    assert client.get(f"/restaurants/{restaurant['id']}").status_code == status.HTTP_200_OK


def test_ids_beyond_integer_range_are_rejected(client):
    too_big = "99999999999999999999"
    for response in (
        client.get(f"/user/{too_big}"),
        client.delete(f"/user/{too_big}"),
        client.get(f"/contacts/{too_big}"),
        client.delete(f"/restaurants/{too_big}"),
        client.delete(f"/reviews/{too_big}"),
        client.get(f"/reviews/getByUserId?userId={too_big}"),
        client.get(f"/reviews?restaurantId={too_big}"),
    ):
        assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_register_with_special_use_email_domain(client):
    response = create_user(client, email="jack@example.test")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["email"] == "jack@example.test"

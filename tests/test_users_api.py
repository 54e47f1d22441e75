"""API tests for user settings and onboarding."""


class TestSettings:
    """Tests for /api/v1/users/me/settings."""

    def test_get_settings(self, client, auth_headers):
        response = client.get("/api/v1/users/me/settings", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "cook@example.com"
        assert data["skill_level"] == "BEGINNER"
        assert data["favorite_dishes"] == ["lasagna"]

    def test_update_only_given_fields(self, client, auth_headers, user_repo, current_user):
        async def update_settings(user_id, **changes):
            for field, value in changes.items():
                setattr(current_user, field, value)
            return current_user

        user_repo.update_settings.side_effect = update_settings

        response = client.put(
            "/api/v1/users/me/settings",
            json={"skill_level": "ADVANCED", "dietary_restrictions": ["vegan", " "]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["skill_level"] == "ADVANCED"
        assert response.json()["name"] == "Home Cook"
        user_repo.update_settings.assert_awaited_once_with(
            "user-1", skill_level="ADVANCED", dietary_restrictions=["vegan"]
        )

    def test_null_list_clears_it(self, client, auth_headers, user_repo, current_user):
        user_repo.update_settings.return_value = current_user

        client.put(
            "/api/v1/users/me/settings",
            json={"favorite_dishes": None},
            headers=auth_headers,
        )

        user_repo.update_settings.assert_awaited_once_with("user-1", favorite_dishes=[])

    def test_invalid_skill_level(self, client, auth_headers, user_repo):
        response = client.put(
            "/api/v1/users/me/settings", json={"skill_level": "CHEF"}, headers=auth_headers
        )

        assert response.status_code == 422
        user_repo.update_settings.assert_not_called()

    def test_requires_identity(self, client):
        response = client.get("/api/v1/users/me/settings")
        assert response.status_code == 401


class TestOnboarding:
    """Tests for POST /api/v1/users/me/onboarding."""

    def test_complete_onboarding(self, client, auth_headers, user_repo, current_user):
        user_repo.complete_onboarding.return_value = current_user

        response = client.post(
            "/api/v1/users/me/onboarding",
            json={"skill_level": "INTERMEDIATE", "favorite_dishes": ["curry", ""]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Onboarding completed",
            "email": "cook@example.com",
        }
        user_repo.complete_onboarding.assert_awaited_once_with(
            "user-1", "INTERMEDIATE", ["curry"]
        )

    def test_skill_level_required(self, client, auth_headers):
        response = client.post(
            "/api/v1/users/me/onboarding", json={"favorite_dishes": []}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_storage_failure(self, client, auth_headers, user_repo):
        user_repo.complete_onboarding.side_effect = RuntimeError("connection lost")

        response = client.post(
            "/api/v1/users/me/onboarding",
            json={"skill_level": "BEGINNER"},
            headers=auth_headers,
        )

        assert response.status_code == 500

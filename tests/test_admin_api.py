"""API tests for the admin dashboard."""

from datetime import datetime

from recipebox.admin.repository import PlatformStats, RecipeSummary, UserSummary


class TestDashboard:
    """Tests for GET /api/v1/admin/dashboard."""

    def test_dashboard(self, client, admin_headers, admin_repo):
        admin_repo.get_stats.return_value = PlatformStats(
            total_users=12, total_recipes=40, total_shopping_lists=7
        )
        admin_repo.recent_users.return_value = [
            UserSummary(
                id="user-1",
                name="Home Cook",
                email="cook@example.com",
                role="USER",
                skill_level="BEGINNER",
                created_at=datetime(2024, 1, 10),
                saved_recipes=3,
            )
        ]
        admin_repo.recent_recipes.return_value = [
            RecipeSummary(
                id="recipe-1",
                title="Homemade Pizza",
                description=None,
                difficulty="INTERMEDIATE",
                created_at=datetime(2024, 2, 1),
                saves=5,
            )
        ]

        response = client.get("/api/v1/admin/dashboard", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["stats"] == {
            "total_users": 12,
            "total_recipes": 40,
            "total_shopping_lists": 7,
        }
        assert data["recent_users"][0]["saved_recipes"] == 3
        assert data["recent_recipes"][0]["saves"] == 5
        admin_repo.recent_users.assert_awaited_once_with(limit=10)
        admin_repo.recent_recipes.assert_awaited_once_with(limit=10)

    def test_dashboard_limit(self, client, admin_headers, admin_repo):
        admin_repo.get_stats.return_value = PlatformStats()
        admin_repo.recent_users.return_value = []
        admin_repo.recent_recipes.return_value = []

        response = client.get("/api/v1/admin/dashboard?limit=3", headers=admin_headers)

        assert response.status_code == 200
        admin_repo.recent_users.assert_awaited_once_with(limit=3)

    def test_non_admin_forbidden(self, client, auth_headers, admin_repo):
        response = client.get("/api/v1/admin/dashboard", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"
        admin_repo.get_stats.assert_not_called()

    def test_requires_identity(self, client):
        response = client.get("/api/v1/admin/dashboard")
        assert response.status_code == 401

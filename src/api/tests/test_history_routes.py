"""Tests for /main history routes behind the bearer gate."""

import unittest

from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import get_history_repo, get_token_service
from adapter.memory.history_repository import InMemoryHistoryRepository
from domain.model.identity import Identity
from services.token_service import TokenService


class TestHistoryRoutes(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.repo = InMemoryHistoryRepository()
        self.tokens = TokenService("history-test-secret")
        app.dependency_overrides[get_history_repo] = lambda: self.repo
        app.dependency_overrides[get_token_service] = lambda: self.tokens
        self.alice = {"Authorization": f"Bearer {self.tokens.issue(Identity(id=1, username='alice'))}"}
        self.bob = {"Authorization": f"Bearer {self.tokens.issue(Identity(id=2, username='bob'))}"}

    def tearDown(self):
        """Clean up dependency overrides."""
        app.dependency_overrides.clear()

    def _add(self, headers, **overrides):
        body = {"from": "USD", "to": "KRW", "amount": 10, "result": 13500}
        body.update(overrides)
        return self.client.post("/main", json=body, headers=headers)

    def test_requires_authentication(self):
        for response in (
            self.client.get("/main"),
            self.client.post("/main", json={"from": "USD", "to": "KRW", "amount": 1, "result": 1}),
            self.client.delete("/main/1"),
        ):
            self.assertEqual(response.status_code, 401)
        self.assertEqual(self.repo.list_entries(1), [])

    def test_add_then_list(self):
        response = self._add(self.alice)
        self.assertEqual(response.json(), {"success": True})

        response = self.client.get("/main", headers=self.alice)

        self.assertEqual(response.status_code, 200)
        history = response.json()["history"]
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0]["from"], "USD")
        self.assertEqual(history[0]["to"], "KRW")
        self.assertEqual(history[0]["amount"], 10)
        self.assertEqual(history[0]["result"], 13500)

    def test_history_is_partitioned_by_user(self):
        self._add(self.alice)

        response = self.client.get("/main", headers=self.bob)

        self.assertEqual(response.json(), {"history": []})

    def test_missing_field_returns_400(self):
        response = self.client.post("/main", json={"from": "USD", "to": "KRW", "amount": 1}, headers=self.alice)

        self.assertEqual(response.status_code, 400)

    def test_delete(self):
        self._add(self.alice)
        entry_id = self.client.get("/main", headers=self.alice).json()["history"][0]["id"]

        self.assertEqual(self.client.delete(f"/main/{entry_id}", headers=self.bob).status_code, 404)
        self.assertEqual(self.client.delete(f"/main/{entry_id}", headers=self.alice).status_code, 200)
        self.assertEqual(self.client.delete(f"/main/{entry_id}", headers=self.alice).status_code, 404)


if __name__ == '__main__':
    unittest.main()

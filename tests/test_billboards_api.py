import unittest
from unittest.mock import patch

from tests.api_case import ApiTestCase, IMAGE


class TestBillboardsApi(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.store = self.make_store()
        self.base = f"/api/{self.store['id']}/billboards"

    def test_create_returns_full_shape(self):
        bb = self.make_billboard(self.store["id"], label="Été", labelEn="Summer")
        self.assertEqual(bb["label"], "Été")
        self.assertEqual(bb["labelEn"], "Summer")
        self.assertEqual(bb["imageUrl"], IMAGE)
        self.assertTrue(bb["isBillboardActive"])
        self.assertEqual(bb["storeId"], self.store["id"])
        self.assertIn("createdAt", bb)
        self.assertIn("updatedAt", bb)

    def test_bad_url_rejected_before_store_lookup(self):
        body = {"label": "Sale", "labelEn": "Sale", "imageUrl": "not-a-url", "isBillboardActive": False}
        with patch("store_admin.crud.get_owned_store") as lookup:
            res = self.client.post(self.base, json=body, headers=self.headers)
        self.assertEqual(res.status_code, 400)
        self.assertIn("imageUrl", res.json()["detail"])
        lookup.assert_not_called()
        self.assertEqual(self.client.get(self.base).json(), [])

    def test_unauthorized_checked_first(self):
        res = self.client.post(self.base, json={})
        self.assertEqual(res.status_code, 401)

    def test_other_users_store(self):
        body = {"label": "Sale", "labelEn": "Sale", "imageUrl": IMAGE}
        res = self.client.post(self.base, json=body, headers=self.auth("intruder"))
        self.assertEqual(res.status_code, 401)

    def test_list_get_and_active_filter(self):
        active = self.make_billboard(self.store["id"], label="On")
        idle = self.make_billboard(self.store["id"], label="Off", isBillboardActive=False)
        self.assertEqual({b["id"] for b in self.client.get(self.base).json()}, {active["id"], idle["id"]})
        self.assertEqual([b["id"] for b in self.client.get(self.base, params={"isActive": "true"}).json()], [active["id"]])
        self.assertEqual([b["id"] for b in self.client.get(self.base, params={"isActive": "false"}).json()], [idle["id"]])

        res = self.client.get(f"{self.base}/{idle['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["label"], "Off")
        self.assertEqual(self.client.get(f"{self.base}/missing").status_code, 404)

    def test_update(self):
        bb = self.make_billboard(self.store["id"])
        body = {"label": "Winter", "labelEn": "Winter", "imageUrl": "https://cdn.example.com/w.png", "isBillboardActive": False}
        res = self.client.patch(f"{self.base}/{bb['id']}", json=body, headers=self.headers)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["label"], "Winter")
        self.assertFalse(res.json()["isBillboardActive"])
        res = self.client.patch(f"{self.base}/nope", json=body, headers=self.headers)
        self.assertEqual(res.status_code, 404)

    def test_delete_blocked_by_categories(self):
        bb = self.make_billboard(self.store["id"])
        cat = self.make_category(self.store["id"], bb["id"])
        res = self.client.delete(f"{self.base}/{bb['id']}", headers=self.headers)
        self.assertEqual(res.status_code, 409)
        self.assertIn("categories", res.json()["detail"])
        self.assertEqual(self.client.get(f"{self.base}/{bb['id']}").status_code, 200)

        self.client.delete(f"/api/{self.store['id']}/categories/{cat['id']}", headers=self.headers)
        res = self.client.delete(f"{self.base}/{bb['id']}", headers=self.headers)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.client.get(f"{self.base}/{bb['id']}").status_code, 404)

    def test_bad_active_filter_is_invalid_shape(self):
        res = self.client.get(self.base, params={"isActive": "sometimes"})
        self.assertEqual(res.status_code, 400)
        self.assertTrue(res.json()["detail"].startswith("Invalid isActive"), res.json())

    def test_delete_conflict_from_foreign_key(self):
        bb = self.make_billboard(self.store["id"])
        self.make_category(self.store["id"], bb["id"])
        # dependent row slips in after the pre-delete count
        with patch("store_admin.crud._count", return_value=0):
            res = self.client.delete(f"{self.base}/{bb['id']}", headers=self.headers)
        self.assertEqual(res.status_code, 409)
        self.assertIn("categories", res.json()["detail"])
        self.assertEqual(self.client.get(f"{self.base}/{bb['id']}").status_code, 200)


if __name__ == "__main__":
    unittest.main()

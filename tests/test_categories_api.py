import unittest
from unittest.mock import patch

from tests.api_case import ApiTestCase

SIZE_FIELDS = [{"fieldName": "Size", "fieldType": "dropdown", "options": ["S", "M", "L"]}]


class TestCategoriesApi(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.store = self.make_store()
        self.billboard = self.make_billboard(self.store["id"])
        self.base = f"/api/{self.store['id']}/categories"

    def test_fields_round_trip(self):
        cat = self.make_category(self.store["id"], self.billboard["id"], fields=SIZE_FIELDS)
        self.assertEqual(cat["fields"], SIZE_FIELDS)
        res = self.client.get(f"{self.base}/{cat['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["fields"], SIZE_FIELDS)
        self.assertEqual(res.json()["billboard"]["id"], self.billboard["id"])

    def test_optional_text_and_defaults(self):
        cat = self.make_category(
            self.store["id"], self.billboard["id"],
            nameEn="Shirts", categoryDescription="Cotton &amp;  linen", categoryType="apparel",
        )
        # entities are stored as typed, only whitespace is tidied
        self.assertEqual(cat["categoryDescription"], "Cotton &amp; linen")
        self.assertIsNone(cat["categoryDescriptionEn"])
        self.assertEqual(cat["categoryType"], "apparel")
        self.assertEqual(cat["fields"], [])

    def test_missing_fields(self):
        res = self.client.post(self.base, json={"billboardId": self.billboard["id"]}, headers=self.headers)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["detail"], "Missing name")
        res = self.client.post(self.base, json={"name": "Shirts"}, headers=self.headers)
        self.assertEqual(res.json()["detail"], "Missing billboardId")

    def test_billboard_must_belong_to_store(self):
        other_store = self.make_store("Other")
        foreign = self.make_billboard(other_store["id"])
        res = self.client.post(self.base, json={"name": "Shirts", "billboardId": foreign["id"]}, headers=self.headers)
        self.assertEqual(res.status_code, 404)
        self.assertEqual(self.client.get(self.base).json(), [])

    def test_update_replaces_fields(self):
        cat = self.make_category(self.store["id"], self.billboard["id"], fields=SIZE_FIELDS)
        second = self.make_billboard(self.store["id"], label="Autumn")
        body = {
            "name": "Tops",
            "billboardId": second["id"],
            "fields": [{"fieldName": "Weight", "fieldType": "number"}],
        }
        res = self.client.patch(f"{self.base}/{cat['id']}", json=body, headers=self.headers)
        self.assertEqual(res.status_code, 200, res.text)
        data = res.json()
        self.assertEqual(data["name"], "Tops")
        self.assertEqual(data["billboard"]["label"], "Autumn")
        self.assertEqual(data["fields"], [{"fieldName": "Weight", "fieldType": "number", "options": []}])
        self.assertEqual(self.client.get(f"{self.base}/{cat['id']}").json()["fields"], data["fields"])

    def test_list_newest_first_with_billboard(self):
        first = self.make_category(self.store["id"], self.billboard["id"], name="A")
        second = self.make_category(self.store["id"], self.billboard["id"], name="B")
        listed = self.client.get(self.base).json()
        self.assertEqual([c["id"] for c in listed], [second["id"], first["id"]])
        self.assertEqual(listed[0]["billboard"]["label"], self.billboard["label"])

    def test_delete_blocked_by_products(self):
        cat = self.make_category(self.store["id"], self.billboard["id"])
        self.make_product(self.store["id"], cat["id"])
        res = self.client.delete(f"{self.base}/{cat['id']}", headers=self.headers)
        self.assertEqual(res.status_code, 409)
        self.assertIn("products", res.json()["detail"])
        self.assertEqual(self.client.get(f"{self.base}/{cat['id']}").status_code, 200)

    def test_delete_requires_ownership(self):
        cat = self.make_category(self.store["id"], self.billboard["id"])
        res = self.client.delete(f"{self.base}/{cat['id']}", headers=self.auth("intruder"))
        self.assertEqual(res.status_code, 401)
        res = self.client.delete(f"{self.base}/{cat['id']}", headers=self.headers)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.client.get(f"{self.base}/{cat['id']}").status_code, 404)

    def test_delete_conflict_from_foreign_key(self):
        cat = self.make_category(self.store["id"], self.billboard["id"])
        self.make_product(self.store["id"], cat["id"])
        with patch("store_admin.crud._count", return_value=0):
            res = self.client.delete(f"{self.base}/{cat['id']}", headers=self.headers)
        self.assertEqual(res.status_code, 409)
        self.assertIn("products", res.json()["detail"])
        listed = self.client.get(f"/api/{self.store['id']}/products").json()
        self.assertEqual(len(listed), 1)
        self.assertEqual(self.client.get(f"{self.base}/{cat['id']}").status_code, 200)


if __name__ == "__main__":
    unittest.main()

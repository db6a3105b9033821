"""Basket load test scenarios.

Two stateful SequentialTaskSet journeys: a shopper building a basket through
to its final total, and a merchandiser repricing products that live baskets
already hold.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import basket_data, basket_lines, discount_data, product_data, shipping_data
from loadtests.helpers.response import decimal_field, extract_error_detail
from loadtests.helpers.state import BasketState, CatalogueState


def _create_products(client, state: CatalogueState, count: int) -> None:
    for _ in range(count):
        with client.post("/products", json=product_data(), catch_response=True, name="POST /products") as resp:
            if resp.status_code == 201:
                state.product_ids.append(resp.json()["product_id"])
            else:
                resp.failure(f"Add product failed: {resp.status_code}: {extract_error_detail(resp)}")


class BasketShopperJourney(SequentialTaskSet):
    """Create Basket -> Add Lines -> Add One More -> Change Quantity -> Discount -> Shipping -> Totals -> Remove.

    Generates events: BasketCreated, BasketItemAdded (xN), BasketItemQuantityUpdated,
    DiscountApplied, ShippingAddressSet, BasketItemRemoved.
    """

    def on_start(self):
        self.catalogue = CatalogueState()
        self.state = BasketState()
        _create_products(self.client, self.catalogue, count=4)

        payload = discount_data()
        with self.client.post("/discounts", json=payload, catch_response=True, name="POST /discounts") as resp:
            if resp.status_code == 201:
                self.catalogue.discount_codes.append(payload["code"])
            else:
                resp.failure(f"Create discount failed: {resp.status_code}: {extract_error_detail(resp)}")

    def _remember_items(self, resp):
        self.state.item_ids = [item["id"] for item in resp.json()["items"]]

    @task
    def create_basket(self):
        with self.client.post("/baskets", json=basket_data(), catch_response=True, name="POST /baskets") as resp:
            if resp.status_code == 201:
                self.state.basket_id = resp.json()["basket_id"]
            else:
                resp.failure(f"Create basket failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_lines(self):
        if not self.catalogue.product_ids:
            self.interrupt()
        with self.client.post(
            f"/baskets/{self.state.basket_id}/items",
            json=basket_lines(self.catalogue.product_ids),
            catch_response=True,
            name="POST /baskets/{id}/items",
        ) as resp:
            if resp.status_code == 200:
                self._remember_items(resp)
            else:
                resp.failure(f"Add lines failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def add_single_item(self):
        product_id = random.choice(self.catalogue.product_ids)
        with self.client.post(
            f"/baskets/{self.state.basket_id}/items/{product_id}",
            json={"quantity": 1},
            catch_response=True,
            name="POST /baskets/{id}/items/{product_id}",
        ) as resp:
            if resp.status_code == 200:
                self._remember_items(resp)
            else:
                resp.failure(f"Add item failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def change_quantity(self):
        if not self.state.item_ids:
            return
        item_id = random.choice(self.state.item_ids)
        with self.client.put(
            f"/baskets/{self.state.basket_id}/items/{item_id}/quantity/{random.randint(1, 5)}",
            catch_response=True,
            name="PUT /baskets/{id}/items/{item_id}/quantity/{q}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Change quantity failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def apply_discount(self):
        if not self.catalogue.discount_codes:
            return
        with self.client.post(
            f"/baskets/{self.state.basket_id}/discount",
            json={"code": self.catalogue.discount_codes[0]},
            catch_response=True,
            name="POST /baskets/{id}/discount",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Apply discount failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def set_shipping(self):
        with self.client.put(
            f"/baskets/{self.state.basket_id}/shipping",
            json=shipping_data(),
            catch_response=True,
            name="PUT /baskets/{id}/shipping",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Set shipping failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def read_totals(self):
        with self.client.get(
            f"/baskets/{self.state.basket_id}/total",
            catch_response=True,
            name="GET /baskets/{id}/total",
        ) as resp:
            total = decimal_field(resp, "total") if resp.status_code == 200 else None
            if total is None:
                resp.failure(f"Read total failed: {resp.status_code}: {extract_error_detail(resp)}")
            else:
                self.state.last_total = str(total)

        with self.client.get(
            f"/baskets/{self.state.basket_id}/total/excluding-vat",
            catch_response=True,
            name="GET /baskets/{id}/total/excluding-vat",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read net total failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        if self.state.item_ids:
            item_id = self.state.item_ids.pop()
            with self.client.delete(
                f"/baskets/{self.state.basket_id}/items/{item_id}",
                catch_response=True,
                name="DELETE /baskets/{id}/items/{item_id}",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Remove item failed: {resp.status_code}: {extract_error_detail(resp)}")
        self.interrupt()


class RepricingJourney(SequentialTaskSet):
    """Add Products -> Fill Basket -> Reprice -> Re-read Basket.

    Baskets price lines from the live catalogue, so the final read picks up
    the new prices without touching the basket.
    """

    def on_start(self):
        self.catalogue = CatalogueState()
        self.state = BasketState()
        _create_products(self.client, self.catalogue, count=2)

    @task
    def fill_basket(self):
        with self.client.post("/baskets", json=basket_data(), catch_response=True, name="POST /baskets") as resp:
            if resp.status_code != 201:
                resp.failure(f"Create basket failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()
            self.state.basket_id = resp.json()["basket_id"]

        self.client.post(
            f"/baskets/{self.state.basket_id}/items",
            json=basket_lines(self.catalogue.product_ids, max_lines=2),
            name="POST /baskets/{id}/items",
        )

    @task
    def reprice(self):
        for product_id in self.catalogue.product_ids:
            with self.client.put(
                f"/products/{product_id}/pricing",
                json={"is_discounted": True, "discounted_price": "3.99"},
                catch_response=True,
                name="PUT /products/{id}/pricing",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Reprice failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def reread_basket(self):
        with self.client.get(
            f"/baskets/{self.state.basket_id}",
            catch_response=True,
            name="GET /baskets/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read basket failed: {resp.status_code}: {extract_error_detail(resp)}")
        self.interrupt()


class BasketUser(HttpUser):
    """Locust user simulating basket traffic.

    Weighted distribution:
    - 80% Shopper journey
    - 20% Repricing journey
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        BasketShopperJourney: 4,
        RepricingJourney: 1,
    }

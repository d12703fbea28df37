from coffee_club.models import Ingredient


def test_list_products(client, seeded):
    resp = client.get("/menu/products")
    assert resp.status_code == 200
    names = [p["name"] for p in resp.json()]
    assert names == ["Cortado", "House Drip Coffee", "Latte"]


def test_list_products_by_category(client, seeded):
    assert len(client.get("/menu/products", params={"category": "Drink"}).json()) == 3
    assert client.get("/menu/products", params={"category": "food"}).json() == []


def test_product_fields(client, seeded):
    products = {p["name"]: p for p in client.get("/api/v1/menu/products").json()}
    assert products["Latte"]["has_sizes"] is True
    assert products["Latte"]["price"] is None
    assert products["Cortado"]["price"] == 3.75
    assert products["Cortado"]["fixed_size_ounces"] == 4.5


def test_sizes_in_display_order(client, seeded):
    resp = client.get(f"/menu/products/{seeded['products']['Latte']}/sizes")
    assert resp.status_code == 200
    sizes = resp.json()
    assert [s["size_name"] for s in sizes] == ["Small", "Medium", "Large"]
    assert [s["price"] for s in sizes] == [4.00, 4.50, 5.00]


def test_unsized_product_has_no_sizes(client, seeded):
    resp = client.get(f"/menu/products/{seeded['products']['Cortado']}/sizes")
    assert resp.status_code == 200
    assert resp.json() == []


def test_sizes_unknown_product(client, seeded):
    assert client.get("/menu/products/99999/sizes").status_code == 404


def test_ingredients_grouped(client, seeded):
    resp = client.get("/menu/ingredients")
    assert resp.status_code == 200
    data = resp.json()

    assert data["degraded"] is False
    assert [g["category"] for g in data["groups"]] == [
        "base_drink", "sugar", "liquid_creamer", "topping",
    ]
    sugars = next(g for g in data["groups"] if g["category"] == "sugar")
    assert sugars["title"] == "Sugars"
    assert [i["name"] for i in sugars["ingredients"]][:2] == ["Caramel Syrup", "Hazelnut Syrup"]


def test_unavailable_ingredient_hidden(client, db_session, seeded):
    whipped = db_session.get(Ingredient, seeded["ingredients"]["Whipped Cream"])
    whipped.available = False
    db_session.commit()

    data = client.get("/menu/ingredients").json()
    names = {i["name"] for g in data["groups"] for i in g["ingredients"]}
    assert "Whipped Cream" not in names
    assert "Toasted Pecans" in names


def test_ingredients_degraded(client, engine, seeded):
    Ingredient.__table__.drop(engine)

    data = client.get("/menu/ingredients").json()

    assert data["degraded"] is True
    assert data["error"]
    total = sum(len(g["ingredients"]) for g in data["groups"])
    assert total == 13

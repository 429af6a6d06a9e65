from datetime import date, timedelta


def add(client, description, amount, category="Food", day=None):
    payload = {
        "description": description,
        "amount": amount,
        "category": category,
        "date": (day or date.today()).isoformat(),
    }
    return client.post("/api/expenses/", json=payload)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "FamilyExpenseTracker" in response.json()["message"]


def test_create_expense(client, store):
    response = add(client, "Milk", 45.5)
    assert response.status_code == 201
    body = response.json()
    assert body["description"] == "Milk"
    assert body["amount"] == 45.5
    assert body["amount_display"] == "₹45.5"
    assert body["category"] == "Food"
    assert body["id"] in store.items


def test_create_expense_validation(client, store):
    assert add(client, "   ", 10).status_code == 422
    assert add(client, "Car", 10_000_001).status_code == 422
    assert add(client, "Refund", 0).status_code == 422
    assert add(client, "Rent", 100, category="Rent").status_code == 422
    assert add(client, "Concert", 100, day=date.today() + timedelta(days=3)).status_code == 422
    assert add(client, "Chai", "1.00000000000000000000000000000000000000001").status_code == 422
    assert add(client, "Chai", 12.345).status_code == 422
    assert store.items == {}


def test_list_expenses_newest_first(client):
    add(client, "Bread", 40)
    add(client, "Taxi", 250, category="Transportation")

    response = client.get("/api/expenses/")
    assert response.status_code == 200
    assert [item["description"] for item in response.json()] == ["Taxi", "Bread"]


def test_recent_expenses_limited_to_ten(client):
    for i in range(12):
        add(client, f"Snack {i}", 10 + i)

    response = client.get("/api/expenses/recent")
    assert response.status_code == 200
    items = response.json()
    assert len(items) == 10
    assert items[0]["description"] == "Snack 11"


def test_delete_expense(client, store):
    created = add(client, "Movie", 300, category="Entertainment").json()

    response = client.delete(f"/api/expenses/{created['id']}")
    assert response.status_code == 204
    assert store.items == {}


def test_delete_missing_expense(client):
    response = client.delete("/api/expenses/does-not-exist")
    assert response.status_code == 404


def test_store_failure_is_reported(client, store):
    store.fail = True
    response = client.get("/api/expenses/")
    assert response.status_code == 503
    assert "Error loading expenses" in response.json()["detail"]

    assert add(client, "Milk", 45).status_code == 503
    assert client.delete("/api/expenses/exp-1").status_code == 503


def test_summary_empty(client):
    response = client.get("/api/analytics/summary")
    assert response.status_code == 200
    body = response.json()
    assert body["total_amount"] == 0
    assert body["transaction_count"] == 0
    assert body["daily_average"] == 0
    assert body["days_tracked"] == 1
    assert body["monthly_change"] == 0
    assert body["monthly_change_direction"] == "flat"
    assert body["top_category"] is None


def test_summary(client):
    add(client, "Groceries", 1200)
    add(client, "Electricity", 800, category="Utilities")

    body = client.get("/api/analytics/summary").json()
    assert body["total_amount"] == 2000
    assert body["total_display"] == "₹2,000"
    assert body["transaction_count"] == 2
    assert body["this_month_total"] == 2000
    assert body["this_month_count"] == 2
    assert body["top_category"]["category"] == "Food"
    assert body["top_category"]["count"] == 1


def test_category_breakdown_endpoint(client):
    add(client, "Groceries", 300)
    add(client, "Bus", 100, category="Transportation")
    add(client, "Lunch", 100)

    body = client.get("/api/analytics/categories").json()
    categories = body["categories"]
    assert [item["category"] for item in categories] == ["Food", "Transportation"]
    assert categories[0]["amount"] == 400
    assert categories[0]["count"] == 2
    assert categories[0]["percentage"] == 80.0
    assert categories[0]["amount_display"] == "₹400"


def test_monthly_breakdown_endpoint(client):
    add(client, "Groceries", 300)

    months = client.get("/api/analytics/monthly").json()["months"]
    assert len(months) == 1
    assert months[0]["year_month"] == date.today().strftime("%Y-%m")
    assert months[0]["count"] == 1


def test_summary_reflects_deletion(client):
    add(client, "Groceries", 300)
    gone = add(client, "Laptop", 50000, category="Shopping").json()
    assert client.get("/api/analytics/summary").json()["total_amount"] == 50300

    client.delete(f"/api/expenses/{gone['id']}")

    body = client.get("/api/analytics/summary").json()
    assert body["total_amount"] == 300
    assert body["top_category"]["category"] == "Food"
    categories = client.get("/api/analytics/categories").json()["categories"]
    assert [item["category"] for item in categories] == ["Food"]


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "healthy"


def test_status_degraded(client, store):
    assert client.get("/api/status").json()["overall_status"] == "healthy"
    store.fail = True
    assert client.get("/api/status").json()["overall_status"] == "degraded"

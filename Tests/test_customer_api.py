# Tests/test_customer_api.py
import uuid
from datetime import datetime

from Models import Customer
from Tests.conftest import add_car, customer_body

URL = "/api/customer"
CARS = "/api/car-inventory"


def test_create_customer_with_purchase(client, db):
    car = add_car(db, "CN09817")
    res = client.post(URL, json=customer_body(
        purchaseHistory=[{"chasisNo": "CN09817", "purchaseDate": "2024-01-30T13:51:43.647Z"}]))

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Customer added successfully"
    assert body["data"]["cnic"] == 3660347880473
    [purchase] = body["data"]["purchaseHistory"]
    assert purchase["chasisNo"] == "CN09817"
    assert purchase["purchaseDate"].startswith("2024-01-30T13:51:43")
    assert client.get(f"{CARS}/{car.id}").json()["data"]["isSold"] is True


def test_create_customer_with_sold_car_is_409(client, db):
    add_car(db, "CN1", is_sold=True)
    res = client.post(URL, json=customer_body(purchaseHistory=[{"chasisNo": "CN1"}]))

    assert res.status_code == 409
    assert res.json()["message"] == "Car with chasis No is already sold."
    assert client.get(URL).status_code == 404


def test_create_customer_with_unknown_car_is_404(client):
    res = client.post(URL, json=customer_body(purchaseHistory=[{"chasisNo": "NOPE"}]))

    assert res.status_code == 404
    assert res.json() == {"message": "Car with chasis No does not exists.", "errors": "NOPE"}
    assert client.get(URL).status_code == 404


def test_create_duplicate_cnic_is_409(client):
    assert client.post(URL, json=customer_body()).status_code == 201
    res = client.post(URL, json=customer_body(name="Ali"))
    assert res.status_code == 409
    assert res.json()["message"] == "Customer with cnic already exists."


def test_create_customer_validation(client):
    res = client.post(URL, json=customer_body(
        name="A", cnic="12345", contact="0335",
        purchaseHistory=[{"chasisNo": "CN1"}, {"chasisNo": "CN1"}]))

    assert res.status_code == 422
    assert res.json() == {
        "message": "Validation Error",
        "errors": [
            "Name must be at least 2 characters",
            "CNIC must be 13 digits",
            "Contact must be 11 digits",
            "Each Chasis No must be unique within the purchase history",
        ],
    }


def test_missing_required_fields(client):
    res = client.post(URL, json={})
    assert res.status_code == 422
    assert res.json()["errors"] == [
        "Name is required", "CNIC is required", "Address is required", "Contact is required",
    ]


def test_list_customers_by_cnic(client):
    client.post(URL, json=customer_body())
    client.post(URL, json=customer_body(cnic=4210112345671, name="Ali"))

    body = client.get(URL, params={"search": "4210112345671"}).json()
    assert [c["name"] for c in body["data"]] == ["Ali"]
    assert body["totalItems"] == 1

    assert client.get(URL, params={"search": "1111111111111"}).status_code == 404


def test_non_numeric_search_lists_everyone(client):
    client.post(URL, json=customer_body())
    client.post(URL, json=customer_body(cnic=4210112345671, name="Ali"))

    body = client.get(URL, params={"search": "Ali", "sortBy": "createdAt"}).json()
    assert body["totalItems"] == 2


def test_get_customer(client):
    created = client.post(URL, json=customer_body()).json()["data"]
    res = client.get(f"{URL}/{created['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Saad Shahid"
    assert client.get(f"{URL}/xyz").status_code == 400
    assert client.get(f"{URL}/{uuid.uuid4()}").status_code == 404


def test_update_customer(client, db):
    add_car(db, "CN1")
    created = client.post(URL, json=customer_body(purchaseHistory=[{"chasisNo": "CN1"}])).json()["data"]

    res = client.put(f"{URL}/{created['id']}", json={
        "address": "Islamabad",
        "purchaseHistory": [{"chasisNo": "CN1"}],
    })

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["address"] == "Islamabad"
    assert data["name"] == "Saad Shahid"
    assert [p["chasisNo"] for p in data["purchaseHistory"]] == ["CN1"]


def test_update_customer_errors(client):
    first = client.post(URL, json=customer_body()).json()["data"]
    second = client.post(URL, json=customer_body(cnic=4210112345671, name="Ali")).json()["data"]

    empty = client.put(f"{URL}/{first['id']}", json={})
    assert empty.status_code == 400
    assert empty.json() == {"message": "Payload cannot be empty"}

    taken = client.put(f"{URL}/{second['id']}", json={"cnic": first["cnic"]})
    assert taken.status_code == 409
    assert taken.json() == {"message": "Cnic already exists"}

    assert client.put(f"{URL}/{uuid.uuid4()}", json={"name": "Ghost"}).status_code == 404
    assert client.put(f"{URL}/{first['id']}", json={"purchaseHistory": [{"chasisNo": "NOPE"}]}).status_code == 404


def test_delete_customer_removes_purchased_cars(client, db):
    first = add_car(db, "CN1")
    second = add_car(db, "CN2")
    kept = add_car(db, "CN3")
    first_id, second_id, kept_id = first.id, second.id, kept.id
    created = client.post(URL, json=customer_body(
        purchaseHistory=[{"chasisNo": "CN1"}, {"chasisNo": "CN2"}])).json()["data"]

    res = client.delete(f"{URL}/{created['id']}")

    assert res.status_code == 200
    assert res.json() == {"message": "Customer deleted successfully"}
    assert client.get(f"{URL}/{created['id']}").status_code == 404
    assert client.get(f"{CARS}/{first_id}").status_code == 404
    assert client.get(f"{CARS}/{second_id}").status_code == 404
    assert client.get(f"{CARS}/{kept_id}").status_code == 200


def test_delete_unknown_customer(client):
    assert client.delete(f"{URL}/{uuid.uuid4()}").status_code == 404


def test_search_terms_that_cannot_be_a_cnic(client):
    client.post(URL, json=customer_body())

    too_long = client.get(URL, params={"search": "99999999999999999999"})
    assert too_long.status_code == 404
    assert too_long.json() == {"message": "Customers not found"}

    superscript = client.get(URL, params={"search": "²"})
    assert superscript.status_code == 200
    assert superscript.json()["totalItems"] == 1


def test_huge_page_number_is_past_the_end(client):
    client.post(URL, json=customer_body())

    res = client.get(URL, params={"pageNumber": "99999999999999999999", "pageSize": "99999999999999999999"})
    assert res.status_code == 404
    assert res.json() == {"message": "Customers not found"}


def test_history_only_update_moves_updated_at(client, db):
    add_car(db, "CN1")
    created = client.post(URL, json=customer_body(purchaseHistory=[{"chasisNo": "CN1"}])).json()["data"]
    customer = db.get(Customer, created["id"])
    customer.updated_at = datetime(2020, 1, 1)
    db.commit()

    res = client.put(f"{URL}/{created['id']}", json={"purchaseHistory": []})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["purchaseHistory"] == []
    assert data["updatedAt"] > "2020-01-01T00:00:00"


def test_update_unknown_customer_is_404_before_body_checks(client):
    res = client.put(f"{URL}/{uuid.uuid4()}", json={"cnic": "12", "contact": ""})
    assert res.status_code == 404
    assert res.json() == {"message": "Customer not found"}


def test_update_body_is_checked_for_existing_customer(client):
    created = client.post(URL, json=customer_body()).json()["data"]

    res = client.put(f"{URL}/{created['id']}", json={"cnic": "12"})
    assert res.status_code == 422
    assert res.json() == {"message": "Validation Error", "errors": ["CNIC must be 13 digits"]}

"""Integration tests for Quote API endpoints."""
import csv
import io
import pytest
from datetime import datetime


def _create(client, headers, payload):
    response = client.post('/api/quotes', json=payload, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


class TestCreateQuote:
    """Tests for POST /api/quotes endpoint."""

    def test_create_quote_success(self, client, auth_headers, sample_quote_data):
        response = client.post('/api/quotes', json=sample_quote_data, headers=auth_headers)

        assert response.status_code == 201
        result = response.get_json()
        assert result["success"] is True
        quote = result["data"]
        assert quote["quote_number"] == f"Q-{datetime.utcnow().year}-0001"
        assert quote["status"] == "draft"
        assert quote["subtotal"] == pytest.approx(35.0)
        assert quote["discount_amount"] == pytest.approx(3.5)
        assert quote["total"] == pytest.approx(31.5)
        assert quote["valid_until"] == "2030-12-31"
        assert [item["line_total"] for item in quote["items"]] == [20.0, 15.0]

    def test_create_quote_requires_auth(self, client, sample_quote_data):
        response = client.post('/api/quotes', json=sample_quote_data)

        assert response.status_code == 401
        assert response.get_json()["error"]["code"] == "MISSING_USER"

    def test_create_quote_missing_fields(self, client, auth_headers):
        response = client.post('/api/quotes', json={"customer_name": "Acme"}, headers=auth_headers)

        assert response.status_code == 400
        error = response.get_json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "items" in error["details"]["fields"]

    def test_create_quote_invalid_item(self, client, auth_headers, sample_quote_data):
        sample_quote_data["items"][0]["unit_price"] = -5

        response = client.post('/api/quotes', json=sample_quote_data, headers=auth_headers)

        assert response.status_code == 400

    def test_create_quote_without_body(self, client, auth_headers):
        response = client.post('/api/quotes', headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.parametrize("quantity", [1.5, 2.9])
    def test_create_quote_fractional_quantity(self, client, auth_headers, sample_quote_data, quantity):
        """Test a fractional quantity is rejected and nothing is stored."""
        sample_quote_data["items"][0]["quantity"] = quantity

        response = client.post('/api/quotes', json=sample_quote_data, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"
        assert client.get('/api/quotes', headers=auth_headers).get_json()["data"] == []


class TestListQuotes:
    """Tests for GET /api/quotes endpoint."""

    def test_list_quotes(self, client, auth_headers, sample_quote_data):
        first = _create(client, auth_headers, sample_quote_data)
        second = _create(client, auth_headers, sample_quote_data)

        response = client.get('/api/quotes', headers=auth_headers)

        assert response.status_code == 200
        result = response.get_json()
        assert [q["id"] for q in result["data"]] == [second["id"], first["id"]]
        assert result["metadata"]["count"] == 2
        assert "items" not in result["data"][0]

    def test_list_quotes_filtered(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)
        _create(client, auth_headers, sample_quote_data)
        client.put(f'/api/quotes/{quote["id"]}', json={"status": "sent"}, headers=auth_headers)

        response = client.get('/api/quotes?status=sent', headers=auth_headers)

        assert [q["id"] for q in response.get_json()["data"]] == [quote["id"]]

    def test_list_quotes_unknown_status(self, client, auth_headers):
        response = client.get('/api/quotes?status=archived', headers=auth_headers)
        assert response.status_code == 400

    def test_quote_stats(self, client, auth_headers, sample_quote_data):
        _create(client, auth_headers, sample_quote_data)

        response = client.get('/api/quotes?stats=true', headers=auth_headers)

        stats = response.get_json()["data"]
        assert stats["draft"] == 1
        assert stats["total"] == 1

    def test_list_quotes_requires_auth(self, client):
        assert client.get('/api/quotes').status_code == 401


class TestGetUpdateDeleteQuote:
    """Tests for GET/PUT/DELETE /api/quotes/<id>."""

    def test_get_quote(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)

        response = client.get(f'/api/quotes/{quote["id"]}', headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()["data"]["quote_number"] == quote["quote_number"]
        assert len(response.get_json()["data"]["items"]) == 2

    def test_get_quote_not_found(self, client, auth_headers):
        response = client.get('/api/quotes/999', headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()["error"]["code"] == "NOT_FOUND"

    def test_get_quote_non_numeric_id(self, client, auth_headers):
        assert client.get('/api/quotes/abc', headers=auth_headers).status_code == 404

    def test_other_owner_gets_404(self, client, auth_headers, other_auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)

        assert client.get(f'/api/quotes/{quote["id"]}', headers=other_auth_headers).status_code == 404
        assert client.put(f'/api/quotes/{quote["id"]}', json={"status": "sent"},
                          headers=other_auth_headers).status_code == 404
        assert client.delete(f'/api/quotes/{quote["id"]}', headers=other_auth_headers).status_code == 404

    def test_update_quote(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)

        response = client.put(
            f'/api/quotes/{quote["id"]}',
            json={"discount_percent": 20, "notes": ""},
            headers=auth_headers
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["discount_amount"] == pytest.approx(7.0)
        assert data["total"] == pytest.approx(28.0)
        assert data["notes"] is None
        assert data["customer_name"] == "Acme Corp"

    def test_update_quote_replaces_items(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)
        new_items = [{
            "product_id": 9, "product_name": "Service Pack", "product_sku": "SVC-9",
            "unit_price": 50, "quantity": 2
        }]

        response = client.put(f'/api/quotes/{quote["id"]}', json={"items": new_items}, headers=auth_headers)

        data = response.get_json()["data"]
        assert [item["product_sku"] for item in data["items"]] == ["SVC-9"]
        assert data["subtotal"] == pytest.approx(100.0)
        assert data["total"] == pytest.approx(90.0)

    def test_update_quote_fractional_quantity(self, client, auth_headers, sample_quote_data, sample_items):
        quote = _create(client, auth_headers, sample_quote_data)
        sample_items[1]["quantity"] = 1.5

        response = client.put(f'/api/quotes/{quote["id"]}', json={"items": sample_items}, headers=auth_headers)

        assert response.status_code == 400
        data = client.get(f'/api/quotes/{quote["id"]}', headers=auth_headers).get_json()["data"]
        assert data["subtotal"] == pytest.approx(35.0)

    @pytest.mark.parametrize("body,content_type", [
        ("xx", "text/plain"),
        ("xx", "application/json"),
        ('"xx"', "application/json"),
        ("[]", "application/json"),
    ])
    def test_update_quote_rejects_non_object_body(self, client, auth_headers, sample_quote_data,
                                                  body, content_type):
        quote = _create(client, auth_headers, sample_quote_data)

        response = client.put(f'/api/quotes/{quote["id"]}', data=body,
                              content_type=content_type, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"

    def test_update_quote_invalid_status(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)

        response = client.put(f'/api/quotes/{quote["id"]}', json={"status": "won"}, headers=auth_headers)

        assert response.status_code == 400

    def test_delete_quote(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)

        response = client.delete(f'/api/quotes/{quote["id"]}', headers=auth_headers)

        assert response.status_code == 200
        assert client.get(f'/api/quotes/{quote["id"]}', headers=auth_headers).status_code == 404


class TestConvertQuote:
    """Tests for POST /api/quotes/<id>/convert."""

    def test_convert_approved_quote(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)
        client.put(f'/api/quotes/{quote["id"]}', json={"status": "approved"}, headers=auth_headers)

        response = client.post(f'/api/quotes/{quote["id"]}/convert', headers=auth_headers)

        assert response.status_code == 201
        order = response.get_json()["data"]
        assert order["order_number"] == f"ORD-{datetime.utcnow().year}-0001"
        assert order["status"] == "pending"
        assert order["quote_id"] == quote["id"]
        assert order["total"] == pytest.approx(31.5)
        assert len(order["items"]) == 2

    def test_convert_draft_quote_rejected(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)

        response = client.post(f'/api/quotes/{quote["id"]}/convert', headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "PRECONDITION_FAILED"
        assert client.get('/api/orders', headers=auth_headers).get_json()["data"] == []

    def test_convert_missing_quote(self, client, auth_headers):
        response = client.post('/api/quotes/4040/convert', headers=auth_headers)
        assert response.status_code == 404


class TestExportQuoteCsv:
    """Tests for GET /api/quotes/<id>/export/csv."""

    def test_export_csv(self, client, auth_headers, sample_quote_data):
        quote = _create(client, auth_headers, sample_quote_data)

        response = client.get(f'/api/quotes/{quote["id"]}/export/csv', headers=auth_headers)

        assert response.status_code == 200
        assert response.mimetype == 'text/csv'
        assert f'{quote["quote_number"]}.csv' in response.headers["Content-Disposition"]

        rows = list(csv.reader(io.StringIO(response.get_data(as_text=True))))
        assert rows[0] == ['Quote', quote["quote_number"]]
        assert ['WID-A', 'Widget A', '2', '10.00', '20.00'] in rows
        assert ['Total:', '31.50'] in rows

    def test_export_csv_not_found(self, client, auth_headers):
        assert client.get('/api/quotes/77/export/csv', headers=auth_headers).status_code == 404

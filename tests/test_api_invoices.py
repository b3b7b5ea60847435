from decimal import Decimal
from fastapi import Depends
import app.main as main_module
from app.api import deps
from app.config import XML_PATH_QUEUE_SUBMISSION_ENABLED
from app.models.db import Invoice, QueueEntry
from app.services.invoice_persistence import InterceptedInvoiceResource


def _create(client, increment_id="100000001", **extra):
    payload = {
        "increment_id": increment_id,
        "store_id": 0,
        "grand_total": "110.00",
        "base_tax_amount": "10.00",
        **extra,
    }
    return client.post("/api/v1/invoices/", json=payload)


def test_create_enqueues_and_persists_extension(enabled_module, client, db_session):
    r = _create(client, extension_attributes={"avatax_is_unbalanced": True, "base_avatax_tax_amount": "12.50"})
    assert r.status_code == 201, r.text
    entity_id = r.json()["entity_id"]

    queue = client.get("/api/v1/queue/", params={"status": "pending"}).json()["data"]
    assert queue["count"] == 1
    entry = queue["entries"][0]
    assert entry["entity_id"] == entity_id
    assert entry["increment_id"] == "100000001"
    assert entry["entity_type_code"] == "invoice"
    assert entry["queue_status"] == "pending"

    loaded = client.get(f"/api/v1/invoices/{entity_id}").json()
    assert loaded["extension_attributes"]["avatax_is_unbalanced"] is True
    assert Decimal(loaded["extension_attributes"]["base_avatax_tax_amount"]) == Decimal("12.50")


def test_update_never_enqueues(enabled_module, client, db_session):
    entity_id = _create(client).json()["entity_id"]

    r = client.put(f"/api/v1/invoices/{entity_id}", json={
        "grand_total": "115.00",
        "extension_attributes": {"avatax_is_unbalanced": False},
    })
    assert r.status_code == 200, r.text
    assert db_session.query(QueueEntry).count() == 1

    loaded = client.get(f"/api/v1/invoices/{entity_id}").json()
    assert Decimal(loaded["grand_total"]) == Decimal("115.00")
    assert loaded["extension_attributes"] == {"avatax_is_unbalanced": False, "base_avatax_tax_amount": None}


def test_update_without_extension_keeps_loaded_values(enabled_module, client):
    entity_id = _create(client, extension_attributes={"avatax_is_unbalanced": True}).json()["entity_id"]

    r = client.put(f"/api/v1/invoices/{entity_id}", json={"base_tax_amount": "11.00"})

    assert r.status_code == 200
    assert r.json()["extension_attributes"]["avatax_is_unbalanced"] is True


def test_queue_submission_disabled(enabled_module, config_factory, client, db_session):
    config_factory({XML_PATH_QUEUE_SUBMISSION_ENABLED: "0"})
    assert _create(client).status_code == 201
    assert db_session.query(QueueEntry).count() == 0


def test_module_disabled_no_queue_no_extension(client, db_session):
    r = _create(client, extension_attributes={"avatax_is_unbalanced": True})
    assert r.status_code == 201
    assert db_session.query(QueueEntry).count() == 0
    loaded = client.get(f"/api/v1/invoices/{r.json()['entity_id']}").json()
    assert loaded["extension_attributes"] is None


def test_duplicate_increment_id_conflict(client):
    assert _create(client).status_code == 201
    r = _create(client)
    assert r.status_code == 409
    assert r.json()["success"] is False


def test_duplicate_inserted_after_check_is_conflict(client, db_session):
    class RacingInvoiceResource(InterceptedInvoiceResource):
        def save(self, invoice):
            db_session.add(Invoice(increment_id=invoice.increment_id, store_id=0))
            db_session.commit()
            return super().save(invoice)

    def _racing_resource(db=Depends(deps.get_db)):
        return RacingInvoiceResource(db)

    main_module.app.dependency_overrides[deps.get_invoice_resource] = _racing_resource

    r = _create(client, increment_id="100000777")

    assert r.status_code == 409
    assert r.json()["message"] == "Invoice '100000777' already exists"
    assert db_session.query(Invoice).filter(Invoice.increment_id == "100000777").count() == 1


def test_missing_invoice_404(client):
    r = client.get("/api/v1/invoices/999")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "No such invoice with entity_id = 999"
    assert r.headers["X-Request-ID"]


def test_request_id_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.status_code == 200
    assert r.headers["X-Request-ID"] == "req-123"
    assert r.json()["status"] == "healthy"


def test_detailed_health_checks_database(client, session_factory, monkeypatch):
    monkeypatch.setattr(main_module, "SessionLocal", session_factory)
    r = client.get("/health/detailed")
    assert r.status_code == 200
    assert r.json()["checks"]["database"] == "healthy"

from urllib.parse import parse_qs, urlparse

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from modules.products.models import Product, Stock
from modules.reference.sites.models import Site
from modules.warehouse.models import Transaction


def _stock_level(db, product_id):
    return db.session.execute(
        select(Stock.stock_level).where(Stock.product_id == product_id)
    ).scalar_one()


def _register(client, **overrides):
    data = {"productName": "Cement", "packagingType": ["bag"], "initialStock": "100"}
    data.update(overrides)
    return client.post("/add-product", data=data)


def test_index_renders_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b'name="productName"' in resp.data
    assert b'name="packagingType"' in resp.data
    assert b'name="initialStock"' in resp.data


def test_add_product_redirects_to_settings(client, db):
    resp = _register(client)

    assert resp.status_code == 302
    location = urlparse(resp.headers["Location"])
    assert location.path == "/settings"
    query = parse_qs(location.query)
    assert query["productName"] == ["Cement"]
    assert query["entryQR"][0].startswith("data:image/png;base64,")
    assert query["exitQR"][0].startswith("data:image/png;base64,")

    product_id = int(query["productId"][0])
    assert _stock_level(db, product_id) == 100

    settings = client.get(resp.headers["Location"])
    assert settings.status_code == 200
    assert b"Cement" in settings.data
    assert f"/download-entry-qr/{product_id}".encode() in settings.data


def test_add_product_accepts_bracketed_packaging_field(client):
    resp = client.post(
        "/add-product",
        data={"productName": "Sand", "packagingType[]": ["bag", "drum"], "initialStock": "5"},
    )
    assert resp.status_code == 302


def test_add_product_missing_fields(client, db):
    resp = client.post("/add-product", data={"productName": "Cement", "initialStock": "1"})

    assert resp.status_code == 400
    assert b"All fields are required." in resp.data
    assert db.session.execute(select(func.count(Stock.id))).scalar_one() == 0


def test_download_qr_codes(client):
    resp = _register(client)
    product_id = parse_qs(urlparse(resp.headers["Location"]).query)["productId"][0]

    for kind in ("entry", "exit"):
        resp = client.get(f"/download-{kind}-qr/{product_id}")
        assert resp.status_code == 200
        assert resp.mimetype == "image/png"
        assert f"{kind}_{product_id}.png" in resp.headers["Content-Disposition"]
        assert resp.data.startswith(b"\x89PNG")


def test_download_missing_qr(client):
    resp = client.get("/download-entry-qr/404")
    assert resp.status_code == 404
    assert b"Entry QR code not found." in resp.data


def test_download_labels_pdf(client):
    resp = _register(client)
    product_id = parse_qs(urlparse(resp.headers["Location"]).query)["productId"][0]

    resp = client.get(f"/download-qr-labels/{product_id}")
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")


def test_download_labels_unknown_product(client):
    assert client.get("/download-qr-labels/404").status_code == 404


def test_stock_entry_page(client, make_product):
    pid = make_product(stock_level=42)

    resp = client.get(f"/stock-entry/{pid}")
    assert resp.status_code == 200
    assert b"42" in resp.data
    assert b'name="transactionType" type="hidden" value="entry"' in resp.data
    assert b'name="site"' not in resp.data


def test_stock_exit_page_lists_sites(client, make_product, make_site):
    pid = make_product()
    make_site("SiteA")
    make_site("SiteB")

    resp = client.get(f"/stock-exit/{pid}")
    assert resp.status_code == 200
    assert b'<option value="SiteA">SiteA</option>' in resp.data
    assert b'<option value="SiteB">SiteB</option>' in resp.data


def test_stock_page_unknown_product(client):
    assert client.get("/stock-entry/999").status_code == 404
    assert client.get("/stock-exit/999").status_code == 404


def test_update_stock_exit(client, db, make_product, make_site):
    pid = make_product(stock_level=100)
    make_site("SiteA")

    resp = client.post(
        "/update-stock",
        data={"productId": str(pid), "transactionType": "exit", "quantity": "30", "site": "SiteA"},
    )

    assert resp.status_code == 200
    assert b"Stock exit successful! Quantity: 30." in resp.data
    assert _stock_level(db, pid) == 70
    tx = db.session.execute(select(Transaction)).scalar_one()
    assert (tx.quantity, tx.site) == (30, "SiteA")


def test_update_stock_zero_quantity(client, db, make_product):
    pid = make_product(stock_level=100)

    resp = client.post(
        "/update-stock",
        data={"productId": str(pid), "transactionType": "entry", "quantity": "0"},
    )

    assert resp.status_code == 400
    assert _stock_level(db, pid) == 100
    assert db.session.execute(select(func.count(Transaction.id))).scalar_one() == 0


def test_update_stock_exit_without_site(client, db, make_product):
    pid = make_product(stock_level=100)

    resp = client.post(
        "/update-stock",
        data={"productId": str(pid), "transactionType": "exit", "quantity": "5"},
    )

    assert resp.status_code == 400
    assert _stock_level(db, pid) == 100


def test_update_stock_missing_product_id(client):
    resp = client.post("/update-stock", data={"transactionType": "entry", "quantity": "5"})
    assert resp.status_code == 400


def test_journal(client, make_product):
    pid = make_product("Cement")
    client.post("/update-stock", data={"productId": str(pid), "transactionType": "entry", "quantity": "9"})

    resp = client.get(f"/transactions?product_id={pid}")
    assert resp.status_code == 200
    assert b"Cement" in resp.data
    assert b"entry" in resp.data


def test_sites_crud(client, db):
    resp = client.post("/reference/sites/create", data={"name": "SiteA"})
    assert resp.status_code == 302

    site = db.session.execute(select(Site)).scalar_one()
    assert site.name == "SiteA"

    resp = client.post(f"/reference/sites/edit/{site.id}", data={"name": "SiteB"})
    assert resp.status_code == 302
    assert db.session.execute(select(Site.name)).scalar_one() == "SiteB"

    assert b"SiteB" in client.get("/reference/sites/").data

    resp = client.post(f"/reference/sites/delete/{site.id}")
    assert resp.status_code == 302
    assert db.session.execute(select(func.count(Site.id))).scalar_one() == 0


def test_duplicate_site_is_refused(client, db, make_site):
    make_site("SiteA")

    resp = client.post("/reference/sites/create", data={"name": "SiteA"})

    assert resp.status_code == 200
    assert db.session.execute(select(func.count(Site.id))).scalar_one() == 1


def test_oversized_numbers_are_client_errors(client, db, make_product):
    pid = make_product(stock_level=100)

    for quantity in ("1e30", "1e999999999", "99999999999999999999"):
        resp = client.post(
            "/update-stock",
            data={"productId": str(pid), "transactionType": "entry", "quantity": quantity},
        )
        assert resp.status_code == 400

    resp = client.post(
        "/update-stock",
        data={"productId": "99999999999999999999", "transactionType": "entry", "quantity": "1"},
    )
    assert resp.status_code == 400

    resp = _register(client, initialStock="99999999999999999999")
    assert resp.status_code == 400

    assert _stock_level(db, pid) == 100
    assert db.session.execute(select(func.count(Product.id))).scalar_one() == 1
    assert db.session.execute(select(func.count(Transaction.id))).scalar_one() == 0


def test_out_of_range_path_ids_are_not_found(client):
    for path in (
        "/stock-entry/99999999999999999999",
        "/stock-exit/2147483648",
        "/stock-entry/0",
        "/download-entry-qr/99999999999999999999",
        "/download-exit-qr/99999999999999999999",
        "/download-qr-labels/99999999999999999999",
    ):
        assert client.get(path).status_code == 404, path


def test_journal_out_of_range_filter(client):
    assert client.get("/transactions?product_id=99999999999999999999").status_code == 400


def test_dependency_failure_shows_only_fixed_phrase(client, db, make_product, monkeypatch):
    pid = make_product(stock_level=100)

    def broken_execute(*args, **kwargs):
        raise OperationalError("UPDATE Stock", {}, Exception("secret connection detail"))

    monkeypatch.setattr(db.session, "execute", broken_execute)

    resp = client.post(
        "/update-stock",
        data={"productId": str(pid), "transactionType": "entry", "quantity": "5"},
    )

    assert resp.status_code == 500
    assert b"Failed to update stock." in resp.data
    assert b"secret connection detail" not in resp.data
    assert b"OperationalError" not in resp.data

import asyncio
import threading
from unittest.mock import MagicMock, patch

import pytest
import requests

from tienda.core.exceptions import ExtractionFailed, ValidationError
from tienda.modules.scraper import extractors
from tienda.modules.scraper.schemas import (
    MAX_NAME_LENGTH, ImportScrapedRequest, ProductSource, ScrapedProduct
)
from tienda.modules.scraper.service import ScraperService, detect_source, parse_product_page
from tienda.shared.database.models import Product

IMPORTER_URL = "/api/v1/admin/importer"
ALIEXPRESS_URL = "https://es.aliexpress.com/item/1005006.html"

PRODUCT_PAGE = """
<html><head>
<title>Red Dress Summer | Women Clothing - AliExpress 200000345</title>
<meta property="og:title" content="Red Dress - AliExpress">
<meta name="description" content="Vestido rojo de verano &amp; fresco">
<meta property="og:image" content="https://ae01.alicdn.com/kf/main.jpg">
</head><body>
<img src="https://ae01.alicdn.com/kf/avatar_user.png">
<script>
window.runParams = {"imagePathList": ["https://ae01.alicdn.com/kf/main.jpg", "https://ae01.alicdn.com/kf/side.jpg", "//relative.jpg"]};
</script>
<span class="price">US $12.99</span>
</body></html>
"""


def fake_response(text="", status_code=200):
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    return response


# ==================== EXTRACTORES ====================

def test_og_title_strips_marketplace_suffix():
    page = '<meta property="og:title" content="Red Dress - AliExpress">'

    assert extractors.extract_title(page) == "Red Dress"


def test_title_tag_used_when_og_title_missing():
    page = "<title>Bolso de Cuero | Mujer - Alibaba.com</title>"

    assert extractors.extract_title(page) == "Bolso de Cuero"


def test_title_missing():
    assert extractors.extract_title("<html><body>nada</body></html>") is None


def test_description_from_og_description():
    page = '<meta property="og:description" content="Tela suave">'

    assert extractors.extract_description(page) == "Tela suave"


@pytest.mark.parametrize("page, expected", [
    ("<span>$ 1,299.50</span>", 1299.5),
    ("<span>USD 45</span>", 45.0),
    ('{"price": "19.90"}', 19.9),
    ("<span>$0</span> USD 8.50", 8.5),
    ("<span>$25000</span>", 0.0),
    ("<span>sin precio</span>", 0.0),
])
def test_extract_price(page, expected):
    assert extractors.extract_price(page) == expected


def test_extract_images_order_dedup_and_filters():
    images = extractors.extract_images(PRODUCT_PAGE)

    assert images == [
        "https://ae01.alicdn.com/kf/main.jpg",
        "https://ae01.alicdn.com/kf/side.jpg",
    ]


def test_extract_images_capped_at_five():
    page = " ".join(f"https://ae01.alicdn.com/kf/img{i}.jpg" for i in range(8))

    assert len(extractors.extract_images(page)) == 5


@pytest.mark.parametrize("url, expected", [
    ("https://es.aliexpress.com/item/1.html", ProductSource.aliexpress),
    ("https://aliexpress.com/item/1.html", ProductSource.aliexpress),
    ("https://www.alibaba.com/product-detail/x.html", ProductSource.alibaba),
    ("https://www.amazon.com/dp/B01", None),
    ("https://aliexpress.com.evil.net/item", None),
])
def test_detect_source(url, expected):
    assert detect_source(url) == expected


def test_parse_product_page():
    scraped = parse_product_page(PRODUCT_PAGE, ProductSource.aliexpress)

    assert scraped.title == "Red Dress"
    assert scraped.description == "Vestido rojo de verano & fresco"
    assert scraped.price == 12.99
    assert scraped.images[0] == "https://ae01.alicdn.com/kf/main.jpg"


def test_parse_product_page_default_description():
    scraped = parse_product_page("<title>Collar de Perlas</title>", ProductSource.alibaba)

    assert scraped.description == "Producto importado desde Alibaba: Collar de Perlas"
    assert scraped.price == 0.0
    assert scraped.images == []


@pytest.mark.parametrize("page", [
    "<html><body>Verifica que eres humano</body></html>",
    "<title>Hi</title>",
])
def test_parse_product_page_without_usable_title(page):
    with pytest.raises(ExtractionFailed):
        parse_product_page(page, ProductSource.aliexpress)


def test_parse_product_page_truncates_long_title():
    page = f'<meta property="og:title" content="{"Vestido " * 40}">'

    scraped = parse_product_page(page, ProductSource.aliexpress)

    assert len(scraped.title) <= MAX_NAME_LENGTH
    assert scraped.title.startswith("Vestido Vestido")
    assert not scraped.title.endswith(" ")


# ==================== ENDPOINTS ====================

def test_scrape_endpoint(client):
    with patch("tienda.modules.scraper.service.requests.get", return_value=fake_response(PRODUCT_PAGE)) as get:
        response = client.post(f"{IMPORTER_URL}/scrape", json={"url": ALIEXPRESS_URL})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Red Dress"
    assert data["source"] == "aliexpress"
    headers = get.call_args.kwargs["headers"]
    assert headers["User-Agent"].startswith("Mozilla/5.0")


def test_scrape_unsupported_source_does_not_fetch(client):
    with patch("tienda.modules.scraper.service.requests.get") as get:
        response = client.post(f"{IMPORTER_URL}/scrape", json={"url": "https://shein.com/p/1"})

    assert response.status_code == 400
    assert response.json()["code"] == "unsupported_source"
    get.assert_not_called()


def test_scrape_blank_url(client):
    response = client.post(f"{IMPORTER_URL}/scrape", json={"url": "   "})

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


def test_scrape_non_2xx(client):
    with patch("tienda.modules.scraper.service.requests.get", return_value=fake_response(status_code=403)):
        response = client.post(f"{IMPORTER_URL}/scrape", json={"url": ALIEXPRESS_URL})

    assert response.status_code == 502
    body = response.json()
    assert body["code"] == "fetch_failed"
    assert body["upstream_status"] == 403


def test_scrape_network_error(client):
    error = requests.ConnectionError("connection reset")
    with patch("tienda.modules.scraper.service.requests.get", side_effect=error):
        response = client.post(f"{IMPORTER_URL}/scrape", json={"url": ALIEXPRESS_URL})

    assert response.status_code == 502
    assert response.json()["code"] == "fetch_failed"


def test_scrape_blocked_page(client):
    captcha = fake_response("<html><body>captcha</body></html>")
    with patch("tienda.modules.scraper.service.requests.get", return_value=captcha):
        response = client.post(f"{IMPORTER_URL}/scrape", json={"url": ALIEXPRESS_URL})

    assert response.status_code == 502
    assert response.json()["code"] == "extraction_failed"


def test_import_scraped_product_with_overrides(client, db_session, category):
    response = client.post(f"{IMPORTER_URL}/import", json={
        "product": {
            "title": "Red Dress",
            "description": "Vestido rojo",
            "price": 12.99,
            "images": ["https://ae01.alicdn.com/kf/main.jpg"],
            "source": "aliexpress"
        },
        "category_id": category.id,
        "custom_price": 25.0,
        "custom_name": "Vestido Rojo Verano"
    })

    assert response.status_code == 201
    product = db_session.get(Product, response.json()["product_id"])
    assert product.name == "Vestido Rojo Verano"
    assert product.price_usd == 25.0
    assert product.stock == 10
    assert product.image == "https://ae01.alicdn.com/kf/main.jpg"
    assert product.is_offer is False


def test_import_scraped_product_defaults(client, db_session, category):
    response = client.post(f"{IMPORTER_URL}/import", json={
        "product": {"title": "Collar de Perlas", "price": 0, "source": "alibaba"},
        "category_id": category.id
    })

    product = db_session.get(Product, response.json()["product_id"])
    assert product.name == "Collar de Perlas"
    assert product.price_usd == 10.0
    assert product.image.startswith("https://via.placeholder.com/")


def test_import_scraped_product_unknown_category(client):
    response = client.post(f"{IMPORTER_URL}/import", json={
        "product": {"title": "Collar de Perlas", "source": "alibaba"},
        "category_id": 999
    })

    assert response.status_code == 404


def test_import_rejects_title_longer_than_product_name(client, db_session, category):
    response = client.post(f"{IMPORTER_URL}/import", json={
        "product": {"title": "Vestido " * 40, "source": "aliexpress"},
        "category_id": category.id
    })

    assert response.status_code == 422
    assert db_session.query(Product).count() == 0


def test_import_rejects_custom_name_longer_than_product_name(client, db_session, category):
    response = client.post(f"{IMPORTER_URL}/import", json={
        "product": {"title": "Vestido Lino", "source": "aliexpress"},
        "category_id": category.id,
        "custom_name": "V" * 256
    })

    assert response.status_code == 422
    assert db_session.query(Product).count() == 0


def test_import_blank_custom_name_keeps_scraped_title(client, db_session, category):
    response = client.post(f"{IMPORTER_URL}/import", json={
        "product": {"title": "Vestido Lino", "source": "aliexpress"},
        "category_id": category.id,
        "custom_name": "   "
    })

    assert response.status_code == 201
    product = db_session.get(Product, response.json()["product_id"])
    assert product.name == "Vestido Lino"


def test_import_invalid_product_data_raises_store_error(db_session, category):
    scraped = ScrapedProduct.model_construct(
        title="Vestido " * 40,
        description="",
        price=0.0,
        images=[],
        attributes={},
        source=ProductSource.aliexpress
    )
    import_data = ImportScrapedRequest.model_construct(
        product=scraped,
        category_id=category.id,
        custom_price=None,
        custom_name=None
    )

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(ScraperService(db_session).import_scraped_product(import_data))

    assert exc_info.value.details["fields"] == ["name"]
    assert db_session.query(Product).count() == 0


def test_scrape_fetches_outside_event_loop_thread(db_session):
    fetch_threads = []

    def fetch(*args, **kwargs):
        fetch_threads.append(threading.current_thread())
        return fake_response(PRODUCT_PAGE)

    with patch("tienda.modules.scraper.service.requests.get", side_effect=fetch):
        scraped = asyncio.run(ScraperService(db_session).scrape_product(ALIEXPRESS_URL))

    assert scraped.title == "Red Dress"
    assert fetch_threads and fetch_threads[0] is not threading.main_thread()

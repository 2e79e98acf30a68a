"""Public storefront endpoints."""

ROOT = "/api/v1"


def seed_account(fake, **fields):
    row = {
        "title": "Account",
        "description": "",
        "price": 5000,
        "skins": 10,
        "collector_level": None,
        "category": "mobile_legend",
    }
    row.update(fields)
    return fake.db.seed("accounts", **row)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["endpoints"]["catalog"] == "/api/v1/accounts"


def test_home_lists_active_ads_and_latest_mobile_legend(client, fake):
    fake.db.seed("ads", title="b", image_url="https://x/b.png", order_index=2)
    fake.db.seed("ads", title="a", image_url="https://x/a.png", order_index=1)
    fake.db.seed("ads", title="off", image_url="https://x/c.png", order_index=0, is_active=False)
    for i in range(8):
        seed_account(fake, title=f"ml-{i}")
    seed_account(fake, title="pubg", category="pubg")

    body = client.get(f"{ROOT}/home").json()

    assert [ad["title"] for ad in body["ads"]] == ["a", "b"]
    assert [a["title"] for a in body["accounts"]] == [f"ml-{i}" for i in range(7, 1, -1)]


def test_accounts_paginated_newest_first(client, fake):
    for i in range(15):
        seed_account(fake, title=f"acc-{i}")

    first = client.get(f"{ROOT}/accounts").json()
    assert first["total"] == 15
    assert first["page_size"] == 12
    assert first["total_pages"] == 2
    assert first["items"][0]["title"] == "acc-14"

    second = client.get(f"{ROOT}/accounts", params={"page": 2}).json()
    assert [a["title"] for a in second["items"]] == ["acc-2", "acc-1", "acc-0"]


def test_accounts_filters(client, fake):
    seed_account(fake, title="mega", collector_level="Mega Collector")
    seed_account(fake, title="world", collector_level="World Collector")
    seed_account(fake, title="pubg", category="pubg")

    by_level = client.get(f"{ROOT}/accounts", params={"collector_level": "Mega Collector"}).json()
    assert [a["title"] for a in by_level["items"]] == ["mega"]

    everything = client.get(f"{ROOT}/accounts", params={"collector_level": "all"}).json()
    assert everything["total"] == 3

    pubg = client.get(f"{ROOT}/accounts", params={"category": "pubg"}).json()
    assert [a["title"] for a in pubg["items"]] == ["pubg"]

    unknown = client.get(f"{ROOT}/accounts", params={"category": "dota"}).json()
    assert unknown["total"] == 3


def test_sold_and_pending_rows_still_listed(client, fake):
    seed_account(fake, title="sold", is_sold=True, sold_at="2026-03-01T10:00:00Z",
                 deleted_at="2026-03-01T10:00:00Z")
    items = client.get(f"{ROOT}/accounts").json()["items"]
    assert items[0]["is_sold"] is True


def test_offer_detail_final_price(client, fake):
    row = seed_account(fake, price=20000, discount=25)
    body = client.get(f"{ROOT}/accounts/{row['id']}").json()
    assert body["final_price"] == 15000
    assert client.get(f"{ROOT}/accounts/missing").status_code == 404


def test_search(client, fake):
    seed_account(fake, title="Glory Mythic")
    seed_account(fake, title="Mythic sold", is_sold=True)
    body = client.get(f"{ROOT}/accounts/search", params={"q": "mythic"}).json()
    assert [a["title"] for a in body] == ["Glory Mythic"]
    assert client.get(f"{ROOT}/accounts/search").json() == []


def test_public_ads_and_rank_boosts(client, fake):
    fake.db.seed("ads", title="a", image_url="https://x/a.png", order_index=1)
    fake.db.seed("rank_boost", title="Epic to Legend", price=15000)
    fake.db.seed("rank_boost", title="Legend to Mythic", price=25000)

    assert len(client.get(f"{ROOT}/ads").json()["ads"]) == 1
    boosts = client.get(f"{ROOT}/rank-boosts").json()["rank_boosts"]
    assert [b["title"] for b in boosts] == ["Legend to Mythic", "Epic to Legend"]


def test_catalog_constants(client):
    body = client.get(f"{ROOT}/catalog/constants").json()
    assert body["collector_levels"][0] == "Discount Accounts"
    assert body["categories"] == {"mobile_legend": "Mobile Legend", "pubg": "PUBG"}
    assert "telegram" in body["contact_links"]


def test_rows_with_nulls_and_retired_levels_still_list(client, fake):
    seed_account(fake, title="nulls", description=None, skins=None, images=None, discount=None)
    seed_account(fake, title="retired level", collector_level="Legend")
    seed_account(fake, title="blank category", category=None)

    for path in ("/accounts", "/home"):
        assert client.get(f"{ROOT}{path}").status_code == 200

    items = {a["title"]: a for a in client.get(f"{ROOT}/accounts").json()["items"]}
    assert items["nulls"]["description"] == ""
    assert items["nulls"]["skins"] == 0
    assert items["nulls"]["images"] == []
    assert items["retired level"]["collector_level"] == "Legend"
    assert items["blank category"]["category"] == "mobile_legend"

    found = client.get(f"{ROOT}/accounts/search", params={"q": "retired"})
    assert [a["title"] for a in found.json()] == ["retired level"]

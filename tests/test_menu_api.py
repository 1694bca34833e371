from __future__ import annotations


def _menu(year, week, **extra):
    return {
        "year": year,
        "week": week,
        "monday": "Lentil soup",
        "tuesday": "Spaghetti",
        "wednesday": "Vegetable curry",
        "thursday": "Goulash",
        **extra,
    }


def test_publish_and_read_menu(client, url, admin_headers, fresh_week):
    year, week = fresh_week
    created = client.post(url("/menu"), headers=admin_headers, json=_menu(year, week, friday="Fish"))
    assert created.status_code == 201

    single = client.get(url(f"/menu/single?year={year}&week={week}"))
    assert single.status_code == 200
    body = single.json()
    assert body["monday"] == "Lentil soup"
    assert body["friday"] == "Fish"

    listed = client.get(url("/menu/all"))
    assert listed.status_code == 200
    assert any(m["year"] == year and m["week"] == week for m in listed.json())


def test_friday_is_optional(client, url, admin_headers, fresh_week):
    year, week = fresh_week
    assert client.post(url("/menu"), headers=admin_headers, json=_menu(year, week)).status_code == 201
    assert client.get(url(f"/menu/single?year={year}&week={week}")).json()["friday"] is None


def test_duplicate_week_is_conflict(client, url, admin_headers, fresh_week):
    year, week = fresh_week
    client.post(url("/menu"), headers=admin_headers, json=_menu(year, week))
    resp = client.post(url("/menu"), headers=admin_headers, json=_menu(year, week, monday="Changed"))
    assert resp.status_code == 409
    assert client.get(url(f"/menu/single?year={year}&week={week}")).json()["monday"] == "Lentil soup"


def test_unknown_week_is_not_found(client, url):
    assert client.get(url("/menu/single?year=1990&week=1")).status_code == 404


def test_menu_requires_weekday_dishes(client, url, admin_headers, fresh_week):
    year, week = fresh_week
    resp = client.post(url("/menu"), headers=admin_headers, json={"year": year, "week": week, "monday": "Soup"})
    assert resp.status_code == 400


def test_all_menus_are_ordered(client, url):
    menus = client.get(url("/menu/all")).json()
    keys = [(m["year"], m["week"]) for m in menus]
    assert keys == sorted(keys)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"

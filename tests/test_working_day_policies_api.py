"""
Working day policy API endpoint tests.
"""

from educard.repositories.working_day_policy_repository import WORKING_DAY_POLICY_ENDPOINT

from fakes import envelope, pagination

POLICY = {
    "public_id": "p1",
    "sunday_off": True,
    "saturday_off_pattern": "NONE",
    "effective_from": "2024-04-01",
    "effective_to": None,
}


async def test_current_policy_is_most_recent(test_client, fake_http):
    older = {**POLICY, "public_id": "p0", "effective_from": "2023-04-01", "effective_to": "2024-03-31"}
    fake_http.on("GET", WORKING_DAY_POLICY_ENDPOINT, envelope([POLICY, older], pagination(2)))

    response = await test_client.get("/api/v1/working-day-policies/current")

    assert response.status_code == 200
    assert response.json()["public_id"] == "p1"


async def test_current_policy_when_none(test_client, fake_http):
    fake_http.on("GET", WORKING_DAY_POLICY_ENDPOINT, envelope([], pagination(0)))

    response = await test_client.get("/api/v1/working-day-policies/current")

    assert response.status_code == 200
    assert response.json() is None


async def test_save_current_updates_existing(test_client, fake_http):
    fake_http.on("GET", WORKING_DAY_POLICY_ENDPOINT, envelope([POLICY], pagination(1)))
    fake_http.on("PATCH", f"{WORKING_DAY_POLICY_ENDPOINT}p1/", lambda json, **_: envelope({**POLICY, **json}))
    body = {"sunday_off": True, "saturday_off_pattern": "SECOND_AND_FOURTH", "effective_from": "2024-04-01"}

    response = await test_client.put("/api/v1/working-day-policies/current", json=body)

    assert response.status_code == 200
    assert response.json()["saturday_off_pattern"] == "SECOND_AND_FOURTH"
    sent = fake_http.calls_to("PATCH", f"{WORKING_DAY_POLICY_ENDPOINT}p1/")[0]["json"]
    assert sent["saturday_off_pattern"] == "SECOND_AND_FOURTH"
    assert fake_http.calls_to("POST", WORKING_DAY_POLICY_ENDPOINT) == []


async def test_save_current_creates_first_policy(test_client, fake_http):
    fake_http.on("GET", WORKING_DAY_POLICY_ENDPOINT, envelope([], pagination(0)))
    fake_http.on("POST", WORKING_DAY_POLICY_ENDPOINT, lambda json, **_: envelope({"public_id": "p9", **json}))

    response = await test_client.put("/api/v1/working-day-policies/current", json={
        "saturday_off_pattern": "ALL",
        "effective_from": "2025-04-01",
    })

    assert response.status_code == 200
    assert response.json()["public_id"] == "p9"
    assert response.json()["sunday_off"] is True


async def test_policy_change_refreshes_calendar(test_client, fake_http):
    fake_http.on("GET", WORKING_DAY_POLICY_ENDPOINT, envelope([POLICY], pagination(1)))
    fake_http.on("GET", "/attendance/admin/holiday-calendar/", envelope([], pagination(0)))
    fake_http.on("PATCH", f"{WORKING_DAY_POLICY_ENDPOINT}p1/", lambda json, **_: envelope({**POLICY, **json}))

    before = await test_client.get("/api/v1/holidays/calendar", params={"year": 2025, "month": 1})
    fake_http.on("GET", WORKING_DAY_POLICY_ENDPOINT, envelope(
        [{**POLICY, "saturday_off_pattern": "ALL"}], pagination(1)
    ))
    await test_client.put("/api/v1/working-day-policies/p1", json={"saturday_off_pattern": "ALL"})
    after = await test_client.get("/api/v1/holidays/calendar", params={"year": 2025, "month": 1})

    def saturdays(response):
        return [h for h in response.json()["holidays"] if h["holiday_type"] == "SATURDAY"]

    assert saturdays(before) == []
    assert len(saturdays(after)) == 4


async def test_create_policy_validates_dates(test_client, fake_http):
    response = await test_client.post("/api/v1/working-day-policies", json={
        "effective_from": "2025-04-01",
        "effective_to": "2025-03-01",
    })

    assert response.status_code == 422
    assert fake_http.calls == []


async def test_delete_policy(test_client, fake_http):
    fake_http.on("DELETE", f"{WORKING_DAY_POLICY_ENDPOINT}p1/", None)

    response = await test_client.delete("/api/v1/working-day-policies/p1")

    assert response.status_code == 204

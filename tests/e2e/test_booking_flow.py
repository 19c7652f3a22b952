"""
E2E tests for the main booking flow.

Covers:
- Manager configures the catalog, a closure and a block
- Clients book, one reschedules, one cancels
- Availability and dashboard follow every step
"""
import pytest

DATE = "2030-06-11"  # Tuesday
PHONE = "(11) 98888-7777"


@pytest.mark.e2e
class TestBookingFlow:
    """Full cycle of an appointment through the API."""

    async def available(self, client, date=DATE):
        response = await client.get(f"/api/available-slots/{date}")
        assert response.status_code == 200
        return [s["slotTime"] for s in response.json()]

    @pytest.mark.asyncio
    async def test_full_booking_cycle(self, client):
        # 1. Catalog
        for slot_time in ["09:00", "09:30", "10:00", "10:30"]:
            assert (await client.post("/api/time-slots", json={"slotTime": slot_time})).status_code == 201

        # 2. Closed on Wednesdays, lunch block on the booking date
        response = await client.post("/api/schedule-closures", json={"closureType": "weekly", "dayOfWeek": "wednesday"})
        assert response.status_code == 201
        response = await client.post(
            "/api/time-slot-blocks",
            json={"specificDate": DATE, "startTime": "10:00", "endTime": "11:00"},
        )
        assert response.status_code == 201

        assert await self.available(client) == ["09:00", "09:30"]
        assert await self.available(client, "2030-06-12") == []

        # 3. Two clients book
        first = await client.post(
            "/api/appointments",
            json={"clientName": "Maria Silva", "clientPhone": PHONE, "date": DATE, "time": "09:00"},
        )
        second = await client.post(
            "/api/appointments",
            json={"clientName": "Joao Souza", "clientPhone": PHONE, "date": DATE, "time": "09:30"},
        )
        assert first.status_code == 201
        assert second.status_code == 201
        assert await self.available(client) == []

        # 4. The block is lifted and the first client moves into the freed range
        blocks = (await client.get(f"/api/time-slot-blocks/{DATE}")).json()
        await client.delete(f"/api/time-slot-blocks/{blocks[0]['id']}")
        response = await client.put(
            f"/api/appointments/{first.json()['id']}",
            json={"time": "10:30", "status": "rescheduled"},
        )
        assert response.status_code == 200
        assert await self.available(client) == ["09:00", "10:00"]

        # 5. The second client cancels; the record stays
        response = await client.delete(f"/api/appointments/{second.json()['id']}")
        assert response.status_code == 200
        assert await self.available(client) == ["09:00", "09:30", "10:00"]

        appointments = (await client.get(f"/api/appointments/{DATE}")).json()
        assert [(a["time"], a["status"], a["displayStatus"]) for a in appointments] == [
            ("09:30", "cancelled", None),
            ("10:30", "rescheduled", "rescheduled"),
        ]

    @pytest.mark.asyncio
    async def test_slot_is_never_double_booked(self, client):
        assert (await client.post("/api/time-slots", json={"slotTime": "09:00"})).status_code == 201
        payload = {"clientName": "Maria Silva", "clientPhone": PHONE, "date": DATE, "time": "09:00"}

        statuses = [(await client.post("/api/appointments", json=payload)).status_code for _ in range(3)]

        assert statuses == [201, 409, 409]
        appointments = (await client.get(f"/api/appointments/{DATE}")).json()
        assert len(appointments) == 1

import re
from datetime import date

import pytest
from fastapi.testclient import TestClient

from hospital_admin.core.config import Settings
from hospital_admin.main import create_app
from hospital_admin.services.repository import HospitalRepository

@pytest.fixture
def client():
    app = create_app(Settings(TESTING=True, SEED_DATA=True))
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

@pytest.fixture
def empty_client():
    app = create_app(Settings(TESTING=True), repository=HospitalRepository(seed=False))
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

# Test data
test_patient_data = {
    "name": "Jane Doe",
    "bloodType": "O+"
}

class TestService:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    def test_independent_instances(self, client, empty_client):
        """Each application owns its own repository."""
        assert len(client.get("/api/patients").json()) == 8
        assert empty_client.get("/api/patients").json() == []

class TestPatientsAPI:

    def test_list_patients(self, client):
        response = client.get("/api/patients")
        assert response.status_code == 200

        data = response.json()
        assert len(data) == 8
        assert data[0]["patientId"] == "PT10834"
        assert data[0]["bloodType"] == "A+"
        assert "createdAt" in data[0]

    def test_search_patients(self, client):
        response = client.get("/api/patients", params={"search": "garcia"})
        assert [p["patientId"] for p in response.json()] == ["PT10742"]

    def test_create_patient(self, client):
        response = client.post("/api/patients", json=test_patient_data)
        assert response.status_code == 201

        data = response.json()
        assert re.match(r"^PT[0-9A-Z]+$", data["patientId"])
        assert data["bloodType"] == "O+"
        assert data["email"] is None
        assert data["createdAt"]

        fetched = client.get(f"/api/patients/{data['patientId']}")
        assert fetched.status_code == 200
        assert fetched.json() == data

    def test_create_patient_invalid(self, client):
        response = client.post("/api/patients", json={"email": "no-name@example.com"})
        assert response.status_code == 400

        data = response.json()
        assert data["message"] == "Invalid patient data"
        assert data["errors"]

    def test_create_patient_duplicate_key(self, client):
        response = client.post("/api/patients", json={"name": "Copy", "patientId": "PT10834"})
        assert response.status_code == 409

    def test_get_patient_not_found(self, client):
        response = client.get("/api/patients/PT00000")
        assert response.status_code == 404
        assert response.json()["message"] == "Patient not found"

    def test_update_patient(self, client):
        response = client.put("/api/patients/PT10834", json={"phone": "555-000-0000"})
        assert response.status_code == 200

        data = response.json()
        assert data["phone"] == "555-000-0000"
        assert data["name"] == "Emma Wilson"
        assert data["bloodType"] == "A+"

    def test_update_patient_not_found(self, client):
        response = client.put("/api/patients/PT00000", json={"phone": "555"})
        assert response.status_code == 404

    def test_delete_patient(self, client):
        response = client.delete("/api/patients/PT10321")
        assert response.status_code == 204
        assert response.content == b""

        assert client.get("/api/patients/PT10321").status_code == 404
        assert client.delete("/api/patients/PT10321").status_code == 404

class TestDoctorsAPI:

    def test_get_doctor(self, client):
        response = client.get("/api/doctors/DR1002")
        assert response.status_code == 200
        assert response.json()["specialization"] == "General Medicine"

    def test_filter_by_specialization(self, client):
        response = client.get("/api/doctors", params={"specialization": "Neurology"})
        assert [d["doctorId"] for d in response.json()] == ["DR1004"]

    def test_create_doctor_requires_specialization(self, client):
        response = client.post("/api/doctors", json={"name": "Dr. Who"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid doctor data"

    def test_create_and_delete_doctor(self, client):
        response = client.post(
            "/api/doctors",
            json={"name": "Dr. Grey", "specialization": "Surgery", "availability": {"monday": ["08:00-16:00"]}}
        )
        assert response.status_code == 201

        doctor_id = response.json()["doctorId"]
        assert doctor_id.startswith("DR")
        assert response.json()["availability"] == {"monday": ["08:00-16:00"]}
        assert client.delete(f"/api/doctors/{doctor_id}").status_code == 204

class TestAppointmentsAPI:

    def test_filters(self, client):
        today = date.today().isoformat()

        assert len(client.get("/api/appointments").json()) == 4
        assert len(client.get("/api/appointments", params={"date": today}).json()) == 4
        assert client.get("/api/appointments", params={"date": "1999-01-01"}).json() == []

        by_patient = client.get("/api/appointments", params={"patientId": "PT10834"}).json()
        assert [a["appointmentId"] for a in by_patient] == ["AP1001"]

        by_doctor = client.get("/api/appointments", params={"doctorId": "DR1002"}).json()
        assert [a["appointmentId"] for a in by_doctor] == ["AP1002"]

    def test_create_appointment_scenario(self, client):
        patient = client.post("/api/patients", json=test_patient_data).json()

        response = client.post("/api/appointments", json={
            "patientId": patient["patientId"],
            "doctorId": "DR1001",
            "date": "2024-01-10",
            "time": "09:00",
            "status": "scheduled"
        })
        assert response.status_code == 201
        appointment_id = response.json()["appointmentId"]

        on_day = client.get("/api/appointments", params={"date": "2024-01-10"}).json()
        next_day = client.get("/api/appointments", params={"date": "2024-01-11"}).json()
        assert appointment_id in [a["appointmentId"] for a in on_day]
        assert appointment_id not in [a["appointmentId"] for a in next_day]

    def test_invalid_status(self, client):
        response = client.put("/api/appointments/AP1001", json={"status": "rescheduled"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid appointment data"

    def test_update_status(self, client):
        response = client.put("/api/appointments/AP1002", json={"status": "checking-in"})
        assert response.status_code == 200
        assert response.json()["status"] == "checking-in"
        assert response.json()["time"] == "11:15"

    def test_delete_appointment(self, client):
        assert client.delete("/api/appointments/AP1001").status_code == 204
        assert client.get("/api/appointments/AP1001").status_code == 404

class TestRecordsAndBillingsAPI:

    def test_records_by_patient(self, client):
        response = client.get("/api/records", params={"patientId": "PT10834"})
        assert [r["recordId"] for r in response.json()] == ["MR1001"]

    def test_record_not_found(self, client):
        response = client.get("/api/records/MR0000")
        assert response.status_code == 404
        assert response.json()["message"] == "Medical record not found"

    def test_refund_billing(self, client):
        response = client.put("/api/billings/BL1001", json={"status": "refunded"})
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "refunded"
        assert data["amount"] == "1850.00"
        assert data["date"] == "2023-10-16"
        assert data["patientId"] == "PT10834"

    def test_create_billing(self, client):
        response = client.post("/api/billings", json={
            "patientId": "PT10456",
            "date": "2024-01-10",
            "description": "Blood panel",
            "amount": 89.5
        })
        assert response.status_code == 201

        data = response.json()
        assert data["amount"] == "89.5"
        assert data["status"] == "pending"
        assert data["billingId"].startswith("BL")

        by_patient = client.get("/api/billings", params={"patientId": "PT10456"}).json()
        assert [b["billingId"] for b in by_patient] == [data["billingId"]]

class TestResourcesAndDashboardAPI:

    def test_resources(self, client):
        response = client.get("/api/resources")
        assert [r["resourceName"] for r in response.json()] == [
            "beds", "icu", "operating-rooms", "ventilators"
        ]

        icu = client.get("/api/resources", params={"name": "icu"}).json()
        assert icu[0]["id"] == 2

    def test_update_resource(self, client):
        response = client.put("/api/resources/2", json={"usedCount": 18})
        assert response.status_code == 200

        data = response.json()
        assert data["usedCount"] == 18
        assert data["totalCount"] == 20
        assert "lastUpdated" in data

    def test_resource_not_found(self, client):
        assert client.get("/api/resources/99").status_code == 404
        assert client.put("/api/resources/99", json={"usedCount": 1}).status_code == 404
        assert client.delete("/api/resources/99").status_code == 404

    def test_resource_bad_id(self, client):
        response = client.get("/api/resources/abc")
        assert response.status_code == 400

    def test_create_and_delete_resource(self, client):
        response = client.post("/api/resources", json={"resourceName": "ambulances", "totalCount": 5, "usedCount": 1})
        assert response.status_code == 201

        resource_id = response.json()["id"]
        assert resource_id == 5
        assert client.delete(f"/api/resources/{resource_id}").status_code == 204

    def test_dashboard_stats(self, client):
        response = client.get("/api/dashboard/stats")
        assert response.status_code == 200

        data = response.json()
        assert data["todayAppointments"] == 4
        assert data["admittedPatients"] == 137
        assert data["availableDoctors"] == 8
        assert data["onLeaveCount"] == 2
        assert data["weekChange"] == 8.2

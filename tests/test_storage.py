import re
import threading
from datetime import datetime, timedelta, timezone

import pytest

from hospital_admin.core import storage
from hospital_admin.core.exceptions import DuplicateKeyError, RepositoryError, ValidationError
from hospital_admin.core.storage import EntityStore, generate_business_key, to_base36
from hospital_admin.models.patient import Patient
from hospital_admin.models.resource import HospitalResource
from hospital_admin.services.repository import HospitalRepository

@pytest.fixture
def patients():
    return EntityStore(Patient, label="patient", key_field="patient_id", key_prefix="PT")

@pytest.fixture
def resources():
    return EntityStore(
        HospitalResource, label="resource", timestamp_field="last_updated", touch_on_update=True
    )

class TestBusinessKeys:

    def test_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"
        assert to_base36(1295) == "zz"

    def test_generated_key_format(self):
        key = generate_business_key("PT")
        assert re.match(r"^PT[0-9A-Z]+$", key)
        # prefix + millisecond timestamp + six random characters
        assert len(key) >= 2 + 8 + 6

    def test_generated_keys_are_unique(self, patients):
        """Rapid creates never hand out the same key twice."""
        keys = [patients.create({"name": f"Patient {i}"}).patient_id for i in range(500)]
        assert len(set(keys)) == 500

    def test_collision_is_retried(self):
        candidates = iter(["PTDUP", "PTDUP", "PTNEW"])
        store = EntityStore(
            Patient, label="patient", key_field="patient_id", key_prefix="PT",
            key_generator=lambda prefix: next(candidates),
        )

        first = store.create({"name": "First"})
        second = store.create({"name": "Second"})

        assert first.patient_id == "PTDUP"
        assert second.patient_id == "PTNEW"

    def test_collision_retries_are_bounded(self):
        store = EntityStore(
            Patient, label="patient", key_field="patient_id", key_prefix="PT",
            max_key_attempts=3, key_generator=lambda prefix: "PTSAME",
        )
        store.create({"name": "First"})

        with pytest.raises(RepositoryError):
            store.create({"name": "Second"})
        assert len(store) == 1

    def test_supplied_key_is_kept(self, patients):
        patient = patients.create({"name": "Emma", "patient_id": "PT10834"})
        assert patient.patient_id == "PT10834"

    def test_duplicate_supplied_key_rejected(self, patients):
        patients.create({"name": "Emma", "patient_id": "PT10834"})

        with pytest.raises(DuplicateKeyError) as exc_info:
            patients.create({"name": "Other", "patient_id": "PT10834"})
        assert exc_info.value.field == "patient_id"

    def test_empty_key_is_generated(self, patients):
        patient = patients.create({"name": "Emma", "patient_id": ""})
        assert patient.patient_id.startswith("PT")
        assert len(patient.patient_id) > 2

class TestInternalIds:

    def test_ids_start_at_one_and_increase(self, patients):
        ids = [patients.create({"name": f"P{i}"}).id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_ids_not_reused_after_delete(self, patients):
        first = patients.create({"name": "A"})
        second = patients.create({"name": "B"})
        assert patients.delete(second.patient_id)

        third = patients.create({"name": "C"})
        assert third.id == 3
        assert first.id < second.id < third.id

    def test_failed_create_does_not_consume_id(self, patients):
        with pytest.raises(ValidationError):
            patients.create({"email": "missing-name@example.com"})

        assert patients.create({"name": "Valid"}).id == 1

class TestQueries:

    def test_round_trip(self, patients):
        created = patients.create({"name": "Jane Doe", "blood_type": "O+"})
        assert patients.get_by_key(created.patient_id) == created
        assert patients.get(created.id) == created

    def test_missing_lookups_return_none(self, patients):
        assert patients.get_by_key("PT404") is None
        assert patients.get(404) is None

    def test_list_all_in_insertion_order(self, patients):
        names = ["C", "A", "B"]
        for name in names:
            patients.create({"name": name})
        assert [p.name for p in patients.list_all()] == names

    def test_filter_preserves_order(self, patients):
        for name in ["Ann", "Bob", "Anna", "Ben"]:
            patients.create({"name": name})
        result = patients.filter(lambda p: p.name.startswith("A"))
        assert [p.name for p in result] == ["Ann", "Anna"]

    def test_find_first(self, patients):
        patients.create({"name": "Ann", "gender": "Female"})
        second = patients.create({"name": "Bea", "gender": "Female"})
        assert patients.find_first(lambda p: p.name == "Bea") == second
        assert patients.find_first(lambda p: p.name == "Zed") is None

class TestUpdates:

    def test_partial_update_preserves_other_fields(self, patients):
        created = patients.create({"name": "Jane", "blood_type": "O+", "phone": "555-0000"})

        updated = patients.update(created.patient_id, {"phone": "555-1111"})

        assert updated.phone == "555-1111"
        assert updated.name == "Jane"
        assert updated.blood_type == "O+"
        assert updated.created_at == created.created_at

    def test_key_and_id_are_immutable(self, patients):
        created = patients.create({"name": "Jane"})

        updated = patients.update(
            created.patient_id, {"patient_id": "PTHIJACK", "id": 99, "name": "Janet"}
        )

        assert updated.patient_id == created.patient_id
        assert updated.id == created.id
        assert updated.name == "Janet"
        assert patients.get_by_key("PTHIJACK") is None

    def test_update_missing_returns_none(self, patients):
        assert patients.update("PT404", {"name": "Nobody"}) is None

    def test_update_validates_merged_record(self, patients):
        created = patients.create({"name": "Jane"})

        with pytest.raises(ValidationError):
            patients.update(created.patient_id, {"name": None})
        assert patients.get_by_key(created.patient_id).name == "Jane"

    def test_stored_records_are_not_mutated(self, patients):
        created = patients.create({"name": "Jane"})
        patients.update(created.patient_id, {"name": "Janet"})
        assert created.name == "Jane"

    def test_resource_update_refreshes_timestamp(self, resources, monkeypatch):
        resource = resources.create({"resource_name": "beds", "total_count": 10, "used_count": 2})
        later = resource.last_updated + timedelta(minutes=5)
        monkeypatch.setattr(storage, "utcnow", lambda: later)

        updated = resources.update_by_id(resource.id, {"used_count": 3})

        assert updated.last_updated == later
        assert updated.total_count == 10
        assert updated.used_count == 3

    def test_timestamps_are_utc(self, patients):
        created = patients.create({"name": "Jane"})
        assert created.created_at.tzinfo == timezone.utc
        assert created.created_at <= datetime.now(timezone.utc)

    def test_update_log_lists_applied_fields(self, patients, caplog):
        created = patients.create({"name": "Jane"})

        with caplog.at_level("DEBUG", logger="hospital_admin.core.storage"):
            patients.update(created.patient_id, {"patient_id": "PTX", "id": 9, "phone": "555"})

        assert "fields=['phone']" in caplog.text

class TestDeletes:

    def test_delete_then_get(self, patients):
        created = patients.create({"name": "Jane"})

        assert patients.delete(created.patient_id) is True
        assert patients.get_by_key(created.patient_id) is None
        assert patients.get(created.id) is None
        assert patients.delete(created.patient_id) is False

    def test_delete_by_id(self, resources):
        resource = resources.create({"resource_name": "icu", "total_count": 4, "used_count": 1})

        assert resources.delete_by_id(resource.id) is True
        assert resources.get(resource.id) is None
        assert resources.delete_by_id(resource.id) is False

    def test_deleted_key_can_be_reused(self, patients):
        patients.create({"name": "Jane", "patient_id": "PT1"})
        patients.delete("PT1")

        again = patients.create({"name": "Janet", "patient_id": "PT1"})
        assert again.id == 2

class TestConcurrency:

    def test_parallel_creates(self):
        """Concurrent writers get distinct ids and keys and no record is lost."""
        repository = HospitalRepository(seed=False)
        errors = []

        def worker(n):
            try:
                for i in range(200):
                    repository.create_patient({"name": f"Patient {n}-{i}"})
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        patients = repository.get_all_patients()
        assert errors == []
        assert len(patients) == 1600
        assert len({p.id for p in patients}) == 1600
        assert len({p.patient_id for p in patients}) == 1600
        assert sorted(p.id for p in patients) == list(range(1, 1601))

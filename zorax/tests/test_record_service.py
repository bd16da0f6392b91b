import pytest
from sqlalchemy.exc import IntegrityError

from zorax.core.errors import Conflict, InternalError
from zorax.schemas.records import RecordCreate, RecordUpdate
from zorax.services.record_service import expense_service, gain_service, is_sl_no_violation

from conftest import EXPENSE_PAYLOAD


def make(service, db, created_by=1, **overrides):
    payload = {**EXPENSE_PAYLOAD, **overrides}
    return service.create(db, RecordCreate(**payload), created_by=created_by)


def test_create_allocates_sequential_codes(db):
    first = make(expense_service, db)
    second = make(expense_service, db)

    assert first.sl_no == "EXP001"
    assert second.sl_no == "EXP002"
    assert first.id != second.id
    assert first.created_by == 1


def test_expense_and_gain_sequences_are_independent(db):
    make(expense_service, db)
    make(expense_service, db)

    assert make(gain_service, db).sl_no == "GN001"
    assert expense_service.next_sl_no(db) == "EXP003"
    assert gain_service.next_sl_no(db) == "GN002"


def test_next_sl_no_follows_max_after_gaps(db):
    for code in ("EXP001", "EXP002", "EXP005"):
        make(expense_service, db, slNo=code)

    assert expense_service.next_sl_no(db) == "EXP006"


def test_deleting_latest_leaves_gap_without_recompacting(db):
    make(expense_service, db)
    middle = make(expense_service, db)
    make(expense_service, db)

    assert expense_service.delete(db, middle.id) is True
    assert expense_service.next_sl_no(db) == "EXP004"


def test_duplicate_sl_no_is_a_conflict(db):
    make(gain_service, db, slNo="GN007")

    with pytest.raises(Conflict):
        make(gain_service, db, slNo="GN007")
    assert len(gain_service.list(db)) == 1


def test_list_orders_by_date_descending(db):
    make(expense_service, db, date="2024-01-15")
    make(expense_service, db, date="2024-03-02")
    make(expense_service, db, date="2023-12-31")

    dates = [r.date for r in expense_service.list(db)]
    assert dates == ["2024-03-02", "2024-01-15", "2023-12-31"]


def test_get_missing_returns_none(db):
    assert expense_service.get(db, 999) is None


def test_empty_update_returns_unchanged_record(db):
    record = make(expense_service, db)

    updated = expense_service.update(db, record.id, RecordUpdate())

    assert updated.id == record.id
    assert updated.amount == EXPENSE_PAYLOAD["amount"]
    assert updated.name == EXPENSE_PAYLOAD["name"]


def test_partial_update_keeps_other_fields(db):
    record = make(gain_service, db)

    updated = gain_service.update(db, record.id, RecordUpdate(amount=10, detail="fixed"))

    assert updated.amount == 10
    assert updated.detail == "fixed"
    assert updated.name == EXPENSE_PAYLOAD["name"]
    assert updated.sl_no == "GN001"


def test_update_missing_id_does_not_create(db):
    assert expense_service.update(db, 42, RecordUpdate(name="ghost")) is None
    assert expense_service.list(db) == []


def test_delete_reports_whether_a_row_was_removed(db):
    record = make(expense_service, db)

    assert expense_service.delete(db, record.id) is True
    assert expense_service.delete(db, record.id) is False
    assert expense_service.list(db) == []


def test_failed_delete_keeps_list_intact(db):
    make(expense_service, db)
    make(expense_service, db)

    assert expense_service.delete(db, 12345) is False
    assert len(expense_service.list(db)) == 2


def unique_violation(message):
    return IntegrityError("INSERT INTO expenses ...", {}, Exception(message))


def test_is_sl_no_violation_reads_failed_constraint():
    assert is_sl_no_violation(unique_violation("UNIQUE constraint failed: expenses.sl_no"))
    assert is_sl_no_violation(unique_violation('duplicate key value violates unique constraint "ix_gains_sl_no"'))
    assert not is_sl_no_violation(
        unique_violation('insert or update on table "expenses" violates foreign key constraint "expenses_created_by_fkey"')
    )


def test_other_integrity_errors_are_not_reported_as_duplicates(db, monkeypatch):
    def failing_commit():
        raise unique_violation('violates foreign key constraint "expenses_created_by_fkey"')

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(InternalError) as excinfo:
        make(expense_service, db, created_by=999)
    assert excinfo.value.message == "Failed to create expense"


def test_odd_codes_do_not_break_allocation(db):
    make(expense_service, db, slNo="EXP²")
    make(expense_service, db, slNo="EXP004")

    assert expense_service.next_sl_no(db) == "EXP005"
    assert make(expense_service, db).sl_no == "EXP005"

"""
Record store for period records, symptom log entries and cycle configuration.

This is the persistence collaborator of the calculation services: it lists,
writes and deletes single records and never computes anything. Callers load
one snapshot of a user's records, run the pure services on it and write the
resulting changes back with save_period_history.

Typical usage:
    store = PeriodRecordStore()
    records = store.list_periods(user_id)
    updated = log_period_start(records, today, store.get_configuration(user_id), today)
    store.save_period_history(user_id, records, updated)
"""
from typing import Any, Dict, List
from datetime import date
from decimal import Decimal

from botocore.exceptions import ClientError

from src.models.period import PeriodRecord, CycleConfiguration
from src.models.symptom import SymptomLogEntry
from src.services.exceptions import RecordStoreError
from src.utils.dynamo import (
    get_dynamo,
    create_pk,
    create_period_sk,
    create_symptom_sk,
    PERIOD_SK_PREFIX,
    SYMPTOM_SK_PREFIX,
    CONFIG_SK
)
from src.utils.logging import logger, log_exception

def _without_none(item: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in item.items() if v is not None}

def _to_int(value: Any) -> Any:
    return int(value) if isinstance(value, Decimal) else value

def period_to_item(user_id: str, record: PeriodRecord) -> Dict[str, Any]:
    """Convert a period record to a DynamoDB item."""
    return _without_none({
        "PK": create_pk(user_id),
        "SK": create_period_sk(record.id),
        "id": record.id,
        "start_date": record.start_date.isoformat(),
        "end_date": record.end_date.isoformat() if record.end_date else None,
        "period_length": record.period_length,
        "cycle_length": record.cycle_length,
        "notes": record.notes
    })

def item_to_period(item: Dict[str, Any]) -> PeriodRecord:
    """Convert a DynamoDB item to a period record."""
    return PeriodRecord(
        id=item["id"],
        start_date=date.fromisoformat(item["start_date"]),
        end_date=date.fromisoformat(item["end_date"]) if item.get("end_date") else None,
        period_length=_to_int(item["period_length"]),
        cycle_length=_to_int(item.get("cycle_length")),
        notes=item.get("notes")
    )

def symptom_to_item(user_id: str, entry: SymptomLogEntry) -> Dict[str, Any]:
    """Convert a symptom log entry to a DynamoDB item."""
    return _without_none({
        "PK": create_pk(user_id),
        "SK": create_symptom_sk(entry.date.isoformat(), entry.symptom_id),
        "date": entry.date.isoformat(),
        "symptom_id": entry.symptom_id,
        "severity": entry.severity.value,
        "cycle_phase": entry.cycle_phase.value if entry.cycle_phase else None,
        "cycle_day": entry.cycle_day,
        "notes": entry.notes
    })

def item_to_symptom(item: Dict[str, Any]) -> SymptomLogEntry:
    """Convert a DynamoDB item to a symptom log entry."""
    return SymptomLogEntry(
        date=date.fromisoformat(item["date"]),
        symptom_id=item["symptom_id"],
        severity=item["severity"],
        cycle_phase=item.get("cycle_phase"),
        cycle_day=_to_int(item.get("cycle_day")),
        notes=item.get("notes")
    )

class PeriodRecordStore:
    """DynamoDB-backed store for one table of user cycle data."""

    def __init__(self):
        self.dynamo = get_dynamo()

    def _call(self, action: str, user_id: str, func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClientError as e:
            log_exception(logger, f"Record store {action} failed", extra={"user_id": user_id})
            raise RecordStoreError(f"Could not {action} for user {user_id}") from e

    def list_periods(self, user_id: str) -> List[PeriodRecord]:
        """List all period records of a user, in no particular order."""
        items = self._call(
            "list periods", user_id,
            self.dynamo.query_items, "PK", create_pk(user_id), PERIOD_SK_PREFIX
        )
        return [item_to_period(item) for item in items]

    def put_period(self, user_id: str, record: PeriodRecord) -> None:
        """Create or replace one period record."""
        self._call("save period", user_id, self.dynamo.put_item, period_to_item(user_id, record))

    def delete_period(self, user_id: str, period_id: str) -> None:
        key = {"PK": create_pk(user_id), "SK": create_period_sk(period_id)}
        self._call("delete period", user_id, self.dynamo.delete_item, key)

    def save_period_history(
        self,
        user_id: str,
        previous: List[PeriodRecord],
        updated: List[PeriodRecord]
    ) -> Dict[str, int]:
        """
        Write the difference between two snapshots of a user's periods.

        Records that are new or changed (including a recomputed cycle length)
        are written; records missing from the updated snapshot are deleted.

        Returns:
            Counts of written and deleted records
        """
        previous_by_id = {record.id: record for record in previous}
        updated_ids = {record.id for record in updated}

        written = 0
        for record in updated:
            if previous_by_id.get(record.id) != record:
                self.put_period(user_id, record)
                written += 1

        deleted = 0
        for period_id in previous_by_id:
            if period_id not in updated_ids:
                self.delete_period(user_id, period_id)
                deleted += 1

        logger.info(
            "Saved period history",
            extra={"user_id": user_id, "written": written, "deleted": deleted}
        )
        return {"written": written, "deleted": deleted}

    def list_symptoms(self, user_id: str) -> List[SymptomLogEntry]:
        """List all symptom log entries of a user."""
        items = self._call(
            "list symptoms", user_id,
            self.dynamo.query_items, "PK", create_pk(user_id), SYMPTOM_SK_PREFIX
        )
        return [item_to_symptom(item) for item in items]

    def put_symptom(self, user_id: str, entry: SymptomLogEntry) -> None:
        """Create or replace the entry for the entry's date and symptom."""
        self._call("save symptom", user_id, self.dynamo.put_item, symptom_to_item(user_id, entry))

    def delete_symptom(self, user_id: str, entry_date: date, symptom_id: str) -> None:
        key = {"PK": create_pk(user_id), "SK": create_symptom_sk(entry_date.isoformat(), symptom_id)}
        self._call("delete symptom", user_id, self.dynamo.delete_item, key)

    def get_configuration(self, user_id: str) -> CycleConfiguration:
        """
        Get the user's cycle configuration.

        Returns the default configuration when the user has not saved one.
        """
        key = {"PK": create_pk(user_id), "SK": CONFIG_SK}
        item = self._call("read configuration", user_id, self.dynamo.get_item, key)
        if not item:
            return CycleConfiguration()
        return CycleConfiguration(
            cycle_length=_to_int(item["cycle_length"]),
            period_length=_to_int(item["period_length"]),
            life_stage=item.get("life_stage", "regular")
        )

    def save_configuration(self, user_id: str, config: CycleConfiguration) -> None:
        item = {
            "PK": create_pk(user_id),
            "SK": CONFIG_SK,
            "cycle_length": config.cycle_length,
            "period_length": config.period_length,
            "life_stage": config.life_stage.value
        }
        self._call("save configuration", user_id, self.dynamo.put_item, item)

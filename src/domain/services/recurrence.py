"""Recurring expense expansion and group update resolution.

A recurring submission expands into one record per installment, all sharing
a ``recurring_group`` token. Edits flagged to apply to the whole group are
resolved here into the complete next state of that group:

* resequencing: the target moves to a new position and the group is
  renumbered contiguously;
* resize: the installment count shrinks (trailing members are dropped) or
  grows (trailing members are synthesized when editing the last one);
* plain edit: the field updates are applied to every member;
* detach: clearing ``recurring`` turns every member into a one-off expense
  with no group and a single installment.

Non-recurring results must stay ungrouped with one installment; numbering
edits that break this raise InvariantViolation.

Group membership is always keyed by the group token, never by the name.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from logging import Logger
import uuid

from src.domain.errors import InvariantViolation, NotFoundError, ValidationError
from src.domain.models.expenses import (
    NUMBERING_FIELDS,
    ExpenseDraft,
    ExpenseRecord,
    ExpenseUpdate,
)
from src.domain.services.calendar import add_months


IdFactory = Callable[[], str]


def new_token() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class GroupResolution:
    """Next state of the records touched by an update.

    Attributes:
        updated: Existing records with their new values.
        created: Records synthesized by a resize.
        removed_ids: Ids of records dropped by a resize.
    """

    updated: tuple[ExpenseRecord, ...]
    created: tuple[ExpenseRecord, ...] = ()
    removed_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def records(self) -> list[ExpenseRecord]:
        """Return the surviving and created records, in position order."""
        return [*self.updated, *self.created]


def validate_draft(draft: ExpenseDraft) -> None:
    """Reject drafts that should never have left the form.

    Raises:
        ValidationError: When a required field is empty, the amount is
            negative, or the installment count is below one.
    """
    if not draft.name.strip():
        raise ValidationError("Expense name is required")
    if not draft.category.name.strip():
        raise ValidationError("Expense category is required")
    if not draft.bank.name.strip():
        raise ValidationError("Expense bank is required")
    if not isinstance(draft.amount, Decimal) or not draft.amount.is_finite():
        raise ValidationError(f"Invalid amount: {draft.amount!r}")
    if draft.amount < 0:
        raise ValidationError(f"Amount must not be negative: {draft.amount}")
    if draft.installments_total < 1:
        raise ValidationError(
            f"Installment count must be at least 1: {draft.installments_total}"
        )


def expand_draft(
    draft: ExpenseDraft,
    id_factory: IdFactory = new_token,
    group_factory: IdFactory = new_token,
    now: datetime | None = None,
) -> list[ExpenseRecord]:
    """Expand a draft into the records to insert.

    A recurring draft with more than one installment yields one record per
    installment, dated ``draft.date + i`` months. A recurring draft with a
    single installment passes through as one ungrouped record that keeps
    ``recurring=True``.

    Args:
        draft: Validated draft from the form.
        id_factory: Source of record ids.
        group_factory: Source of group tokens.
        now: Creation timestamp; defaults to the current time.

    Returns:
        list[ExpenseRecord]: Records in ascending installment order.
    """
    validate_draft(draft)
    created_at = now or datetime.now()

    if not draft.recurring or draft.installments_total <= 1:
        return [
            ExpenseRecord(
                id=id_factory(),
                name=draft.name,
                date=draft.date,
                category=draft.category,
                bank=draft.bank,
                amount=draft.amount,
                recurring=draft.recurring,
                installments_total=1,
                current_installment=1,
                recurring_group="",
                created_at=created_at,
            )
        ]

    group = group_factory()
    return [
        ExpenseRecord(
            id=id_factory(),
            name=draft.name,
            date=add_months(draft.date, index),
            category=draft.category,
            bank=draft.bank,
            amount=draft.amount,
            recurring=True,
            installments_total=draft.installments_total,
            current_installment=index + 1,
            recurring_group=group,
            created_at=created_at,
        )
        for index in range(draft.installments_total)
    ]


def resolve_update(
    records: Sequence[ExpenseRecord],
    target_id: str,
    update: ExpenseUpdate,
    apply_to_group: bool,
    id_factory: IdFactory = new_token,
    now: datetime | None = None,
    logger: Logger | None = None,
) -> GroupResolution:
    """Resolve an edit into the next state of the affected records.

    Args:
        records: Current store contents.
        target_id: Id of the edited record.
        update: Requested field changes.
        apply_to_group: Whether the user chose to edit the whole group.
        id_factory: Source of ids for synthesized installments.
        now: Creation timestamp for synthesized installments.
        logger: Optional logger for limitation warnings.

    Returns:
        GroupResolution: Updated, created and removed records.

    Raises:
        NotFoundError: If ``target_id`` is not in ``records``.
        ValidationError: If the update carries a non-positive count.
        InvariantViolation: If the resulting numbering is inconsistent.
    """
    target = next((r for r in records if r.id == target_id), None)
    if target is None:
        raise NotFoundError(target_id)
    _validate_update(update)

    if not apply_to_group or not target.is_grouped:
        updated = update.apply_to(target)
        if update.recurring is False:
            _warn_ignored_numbering(update, target, logger)
            updated = _detach(updated)
        _check_range([updated])
        return GroupResolution(updated=(updated,))

    members = sorted(
        (r for r in records if r.recurring_group == target.recurring_group),
        key=lambda r: r.current_installment,
    )

    if update.recurring is False:
        _warn_ignored_numbering(update, target, logger)
        shared = update.without_numbering()
        resolution = GroupResolution(
            updated=tuple(_detach(shared.apply_to(m)) for m in members)
        )
    elif (
        update.current_installment is not None
        and update.current_installment != target.current_installment
    ):
        resolution = _resequence(members, target, update, logger)
    elif (
        update.installments_total is not None
        and update.installments_total != target.installments_total
    ):
        resolution = _resize(members, target, update, id_factory, now, logger)
    else:
        shared = update.without_numbering()
        resolution = GroupResolution(
            updated=tuple(shared.apply_to(m) for m in members)
        )

    _check_group(resolution.records)
    return resolution


def merge_resolution(
    records: Iterable[ExpenseRecord],
    resolution: GroupResolution,
) -> list[ExpenseRecord]:
    """Fold a resolution into the full collection.

    Unaffected records keep their order; created records are placed right
    after the last surviving member of their group.
    """
    replacements = {r.id: r for r in resolution.updated}
    merged: list[ExpenseRecord] = []
    anchor = -1
    for record in records:
        if record.id in resolution.removed_ids:
            continue
        if record.id in replacements:
            merged.append(replacements[record.id])
            anchor = len(merged)
        else:
            merged.append(record)
    if not resolution.created:
        return merged
    insert_at = anchor if anchor >= 0 else len(merged)
    return [*merged[:insert_at], *resolution.created, *merged[insert_at:]]


def _validate_update(update: ExpenseUpdate) -> None:
    if update.installments_total is not None and update.installments_total < 1:
        raise ValidationError(
            "Installment count must be at least 1: "
            f"{update.installments_total}"
        )
    if update.current_installment is not None and update.current_installment < 1:
        raise ValidationError(
            "Installment position must be at least 1: "
            f"{update.current_installment}"
        )
    if update.name is not None and not update.name.strip():
        raise ValidationError("Expense name is required")
    if update.amount is not None and not update.amount.is_finite():
        raise ValidationError(f"Invalid amount: {update.amount!r}")


def _resequence(
    members: list[ExpenseRecord],
    target: ExpenseRecord,
    update: ExpenseUpdate,
    logger: Logger | None,
) -> GroupResolution:
    position = update.current_installment
    if not 1 <= position <= len(members):
        raise InvariantViolation(
            f"Installment position {position} is outside 1..{len(members)} "
            f"for group {target.recurring_group}"
        )
    if (
        update.installments_total is not None
        and update.installments_total != target.installments_total
        and logger is not None
    ):
        logger.warning(
            "Ignoring installment count change while resequencing group "
            f"{target.recurring_group}"
        )

    ordered = [m for m in members if m.id != target.id]
    ordered.insert(position - 1, target)
    shared = update.without_numbering()
    return GroupResolution(
        updated=tuple(
            replace(shared.apply_to(member), current_installment=index)
            for index, member in enumerate(ordered, start=1)
        )
    )


def _resize(
    members: list[ExpenseRecord],
    target: ExpenseRecord,
    update: ExpenseUpdate,
    id_factory: IdFactory,
    now: datetime | None,
    logger: Logger | None,
) -> GroupResolution:
    new_total = update.installments_total
    shared = update.without_numbering()

    if new_total < target.installments_total:
        survivors = [m for m in members if m.current_installment <= new_total]
        removed = frozenset(
            m.id for m in members if m.current_installment > new_total
        )
        return GroupResolution(
            updated=tuple(
                replace(shared.apply_to(m), installments_total=new_total)
                for m in survivors
            ),
            removed_ids=removed,
        )

    updated = tuple(
        replace(shared.apply_to(m), installments_total=new_total)
        for m in members
    )
    if not target.is_last_installment:
        if logger is not None:
            logger.warning(
                "Growing group "
                f"{target.recurring_group} from installment "
                f"{target.current_installment}/{target.installments_total}: "
                "new total applied without adding installments"
            )
        return GroupResolution(updated=updated)

    created_at = now or datetime.now()
    previous = updated[-1]
    created: list[ExpenseRecord] = []
    for position in range(previous.current_installment + 1, new_total + 1):
        previous = replace(
            previous,
            id=id_factory(),
            date=add_months(previous.date, 1),
            current_installment=position,
            created_at=created_at,
        )
        created.append(previous)
    return GroupResolution(updated=updated, created=tuple(created))


def _detach(record: ExpenseRecord) -> ExpenseRecord:
    """Turn a record into a standalone one-off expense."""
    return replace(
        record,
        recurring=False,
        recurring_group="",
        installments_total=1,
        current_installment=1,
    )


def _warn_ignored_numbering(
    update: ExpenseUpdate,
    target: ExpenseRecord,
    logger: Logger | None,
) -> None:
    if logger is None or not (update.changes().keys() & set(NUMBERING_FIELDS)):
        return
    logger.warning(
        f"Ignoring installment numbering for expense {target.id}: "
        "it is no longer recurring"
    )


def _check_range(records: Iterable[ExpenseRecord]) -> None:
    for record in records:
        if not 1 <= record.current_installment <= record.installments_total:
            raise InvariantViolation(
                f"Expense {record.id} would hold installment "
                f"{record.current_installment}/{record.installments_total}"
            )
        if not record.recurring and (
            record.recurring_group or record.installments_total != 1
        ):
            raise InvariantViolation(
                f"Non-recurring expense {record.id} would hold installment "
                f"{record.current_installment}/{record.installments_total} "
                f"of group {record.recurring_group!r}"
            )


def _check_group(records: Sequence[ExpenseRecord]) -> None:
    _check_range(records)
    positions = [r.current_installment for r in records if r.recurring_group]
    if len(positions) != len(set(positions)):
        raise InvariantViolation(
            f"Duplicate installment positions after update: {sorted(positions)}"
        )


__all__ = [
    "GroupResolution",
    "IdFactory",
    "new_token",
    "validate_draft",
    "expand_draft",
    "resolve_update",
    "merge_resolution",
]

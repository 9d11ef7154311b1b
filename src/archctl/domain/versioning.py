"""Version graph operations over an ArrangementState.

Each operation is a pure function from ``(state, args)`` to a new state.
Arrangements the operation does not touch are carried over as-is (they
are frozen); the touched arrangement is replaced by a new object.

Unknown arrangement or service ids are not errors: the input state is
returned unchanged, so callers holding a stale id degrade to a no-op.
Callers detect the no-op with ``new_state is state``.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import BaseModel

from archctl.domain.ids import IdAllocator
from archctl.domain.lifecycle import next_evaluation_status
from archctl.domain.models import Arrangement, ArrangementState, ExternalService

DEFAULT_FORK_HYPOTHESIS = "Exploratory fork to test new boundary conditions."


class ForkPolicy(BaseModel):
    """Texts applied to a forked arrangement and its container."""

    model_config = {"frozen": True}

    name_suffix: str = " (Fork)"
    label_suffix: str = ".1"
    hypothesis: str = DEFAULT_FORK_HYPOTHESIS
    arrangement_prefix: str = "arr"
    container_prefix: str = "cont"


def fork(
    state: ArrangementState,
    source_id: str,
    *,
    ids: IdAllocator,
    policy: ForkPolicy | None = None,
    now: datetime | None = None,
) -> tuple[ArrangementState, str | None]:
    """Fork *source_id* into a new, active arrangement.

    Returns the new state and the fork's id, or ``(state, None)`` when the
    source does not exist.
    """
    source = state.get(source_id)
    if source is None:
        return state, None

    policy = policy or ForkPolicy()
    new_id = ids.allocate(policy.arrangement_prefix, state.ids())
    container = source.container.clone(
        new_id=ids.allocate(policy.container_prefix, state.container_ids()),
        version_label=f"{source.container.version_label}{policy.label_suffix}",
        hypothesis=policy.hypothesis,
    )
    forked = Arrangement(
        id=new_id,
        name=f"{source.name}{policy.name_suffix}",
        container=container,
        services=tuple(s.clone() for s in source.services),
        parent_id=source.id,
        created_at=now or datetime.now(UTC),
    )
    new_state = ArrangementState(
        arrangements=(*state.arrangements, forked),
        active_id=new_id,
    )
    return new_state, new_id


def toggle_service(
    state: ArrangementState,
    arrangement_id: str,
    service_id: str,
    catalog: Sequence[ExternalService],
) -> ArrangementState:
    """Remove *service_id* if present, else add a fresh clone from *catalog*."""
    arr = state.get(arrangement_id)
    if arr is None:
        return state

    if arr.has_service(service_id):
        services = tuple(s for s in arr.services if s.id != service_id)
    else:
        template = next((s for s in catalog if s.id == service_id), None)
        if template is None:
            return state
        services = (*arr.services, template.clone())

    return state.replace(arr.model_copy(update={"services": services}))


def update_hypothesis(state: ArrangementState, arrangement_id: str, text: str) -> ArrangementState:
    """Replace the container hypothesis of one arrangement."""
    arr = state.get(arrangement_id)
    if arr is None or arr.container.hypothesis == text:
        return state
    container = arr.container.model_copy(update={"hypothesis": text})
    return state.replace(arr.model_copy(update={"container": container}))


def cycle_evaluation_status(
    state: ArrangementState,
    arrangement_id: str,
    service_id: str,
) -> ArrangementState:
    """Advance one service's status: VALIDATED -> CONFLICT -> UNCERTAIN -> VALIDATED."""
    arr = state.get(arrangement_id)
    if arr is None or not arr.has_service(service_id):
        return state

    services = tuple(
        s.with_status(next_evaluation_status(s.evaluation_status)) if s.id == service_id else s
        for s in arr.services
    )
    return state.replace(arr.model_copy(update={"services": services}))


def activate(state: ArrangementState, arrangement_id: str) -> ArrangementState:
    """Make *arrangement_id* the active arrangement."""
    if state.get(arrangement_id) is None or state.active_id == arrangement_id:
        return state
    return state.model_copy(update={"active_id": arrangement_id})

"""Directed transition graph shared by the order workflows.

A workflow is described by a ``TransitionGraph``: a total, read-only
mapping from each status to the ordered statuses directly reachable from
it, plus the canonical forward order, the final-state set and a list of
guarded edges that get a dedicated denial reason.

Every query is a pure function of its arguments and the graph, so a
single graph instance is shared by all threads without locking.
Denied transitions are reported as a ``TransitionResult`` value; nothing
in this module raises for an invalid ``(current, requested)`` pair,
including status strings that belong to no workflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import AbstractSet, Any, FrozenSet, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class TransitionReason(str, Enum):
    """Why a transition was denied."""

    SAME_STATUS = "SAME_STATUS"
    FINAL_STATE = "FINAL_STATE"
    PRODUCTION_LOCKED = "PRODUCTION_LOCKED"
    SKIPPED_STEP = "SKIPPED_STEP"
    BACKWARD_TRANSITION = "BACKWARD_TRANSITION"
    GENERIC_INVALID = "GENERIC_INVALID"


DEFAULT_MESSAGES: Mapping[TransitionReason, str] = MappingProxyType(
    {
        TransitionReason.SAME_STATUS: "O status já está definido como este valor",
        TransitionReason.FINAL_STATE: 'Não é possível alterar o status "{current}"',
        TransitionReason.PRODUCTION_LOCKED: (
            "Não é possível cancelar após o início da produção"
        ),
        TransitionReason.SKIPPED_STEP: (
            'Não é possível ir de "{current}" para "{requested}" sem passar '
            "pela etapa intermediária"
        ),
        TransitionReason.BACKWARD_TRANSITION: (
            'Não é possível voltar de "{current}" para "{requested}"'
        ),
        TransitionReason.GENERIC_INVALID: (
            'Transição de "{current}" para "{requested}" não é permitida'
        ),
    }
)


def _tags(statuses: Iterable[Any]) -> Tuple[str, ...]:
    return tuple(status_tag(s) for s in statuses)


def status_tag(status: Any) -> str:
    """Return the raw string tag of a status (enum member or plain string)."""
    if isinstance(status, Enum):
        return str(status.value)
    return str(status)


class TransitionResult(BaseModel):
    """Outcome of a transition validation query.

    ``reason`` and ``message`` are ``None`` when the transition is allowed.
    """

    model_config = ConfigDict(frozen=True)

    allowed: bool
    current: str
    requested: str
    reason: Optional[TransitionReason] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, current: Any, requested: Any) -> TransitionResult:
        return cls(
            allowed=True,
            current=status_tag(current),
            requested=status_tag(requested),
        )

    @classmethod
    def denied(
        cls,
        current: Any,
        requested: Any,
        reason: TransitionReason,
        message: str,
    ) -> TransitionResult:
        return cls(
            allowed=False,
            current=status_tag(current),
            requested=status_tag(requested),
            reason=reason,
            message=message,
        )


GuardedEdge = Tuple[str, str, TransitionReason]


@dataclass(frozen=True)
class TransitionGraph:
    """Immutable description of one workflow.

    ``statuses`` is the closed status vocabulary; construction fails with
    ``ValueError`` if ``transitions`` is not total over it, if an arm
    points outside it, or if a final status has outbound edges.
    """

    name: str
    statuses: Tuple[str, ...]
    transitions: Mapping[str, Tuple[str, ...]]
    canonical_order: Tuple[str, ...]
    final_states: FrozenSet[str]
    guarded_edges: Tuple[GuardedEdge, ...] = ()
    backward_exempt: FrozenSet[str] = frozenset()
    labels: Mapping[str, str] = field(default_factory=dict)
    messages: Mapping[TransitionReason, str] = field(
        default_factory=lambda: DEFAULT_MESSAGES
    )

    def __post_init__(self) -> None:
        transitions = {
            status_tag(key): _tags(arm) for key, arm in self.transitions.items()
        }
        object.__setattr__(self, "transitions", MappingProxyType(transitions))
        object.__setattr__(self, "statuses", _tags(self.statuses))
        object.__setattr__(self, "canonical_order", _tags(self.canonical_order))
        object.__setattr__(self, "final_states", frozenset(_tags(self.final_states)))
        object.__setattr__(
            self, "backward_exempt", frozenset(_tags(self.backward_exempt))
        )
        guarded = tuple(
            (status_tag(source), status_tag(target), reason)
            for source, target, reason in self.guarded_edges
        )
        object.__setattr__(self, "guarded_edges", guarded)
        labels = {status_tag(key): label for key, label in self.labels.items()}
        object.__setattr__(self, "labels", MappingProxyType(labels))
        object.__setattr__(
            self, "messages", MappingProxyType({**DEFAULT_MESSAGES, **self.messages})
        )
        self._validate()

    def _validate(self) -> None:
        known = set(self.statuses)
        missing = [s for s in self.statuses if s not in self.transitions]
        if missing:
            raise ValueError(f"{self.name}: no transition entry for {missing}")
        for status, arm in self.transitions.items():
            unknown = [t for t in arm if status_tag(t) not in known]
            if unknown:
                raise ValueError(f"{self.name}: {status} -> {unknown} unknown")
            if status in self.final_states and arm:
                raise ValueError(f"{self.name}: final status {status} has exits")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def allowed_transitions(self, current: Any) -> Tuple[str, ...]:
        return self.transitions.get(status_tag(current), ())

    def is_final(self, status: Any) -> bool:
        return status_tag(status) in self.final_states

    def next_status(
        self, current: Any, excluding: AbstractSet[str] = frozenset()
    ) -> Optional[str]:
        """First allowed transition that is not one of ``excluding``."""
        excluded = set(_tags(excluding))
        for candidate in self.allowed_transitions(current):
            if status_tag(candidate) not in excluded:
                return candidate
        return None

    def label(self, status: Any) -> str:
        tag = status_tag(status)
        return self.labels.get(tag, tag)

    def evaluate(self, current: Any, requested: Any) -> TransitionResult:
        if status_tag(current) == status_tag(requested):
            return self._deny(current, requested, TransitionReason.SAME_STATUS)
        if status_tag(requested) in self.allowed_transitions(current):
            return TransitionResult.ok(current, requested)
        return self._deny(current, requested, self.classify(current, requested))

    def classify(self, current: Any, requested: Any) -> TransitionReason:
        """Reason kind for a transition already known to be absent from the table."""
        current_tag, requested_tag = status_tag(current), status_tag(requested)
        if current_tag in self.final_states:
            return TransitionReason.FINAL_STATE
        for source, target, reason in self.guarded_edges:
            if current_tag == source and requested_tag == target:
                return reason
        if self._is_backward(current_tag, requested_tag):
            return TransitionReason.BACKWARD_TRANSITION
        return TransitionReason.GENERIC_INVALID

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_backward(self, current: str, requested: str) -> bool:
        order = self.canonical_order
        if current not in order or requested not in order:
            return False
        if requested in self.backward_exempt:
            return False
        return order.index(requested) < order.index(current)

    def _deny(
        self, current: Any, requested: Any, reason: TransitionReason
    ) -> TransitionResult:
        message = self.messages[reason].format(
            current=self.label(current),
            requested=self.label(requested),
        )
        return TransitionResult.denied(current, requested, reason, message)

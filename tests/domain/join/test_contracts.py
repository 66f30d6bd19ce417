from __future__ import annotations

from datajoin.domain.join import JoinSummary, KeyTransition, by_field, reconcile
from tests.support.joins import bound_from, item


def test_transitions_classify_every_key() -> None:
    result = reconcile(bound_from("A", "B"), [item("B"), item("C")], by_field("id"))

    assert result.transitions() == {
        "A": KeyTransition.EXIT,
        "B": KeyTransition.UPDATE,
        "C": KeyTransition.ENTER,
    }


def test_summary_counts_partitions() -> None:
    result = reconcile(bound_from("A", "B", "C"), [item("C"), item("D")], by_field("id"))

    assert result.summary() == JoinSummary(entering=1, updating=1, exiting=2)
    assert not result.is_noop


def test_rebind_keeps_key_and_element() -> None:
    (bound,) = bound_from("A")

    rebound = bound.rebind(item("A", 9))

    assert rebound.key == "A"
    assert rebound.element is bound.element
    assert rebound.datum == {"id": "A", "value": 9}
    assert bound.datum == {"id": "A", "value": 0}


def test_rebind_with_none_element_keeps_current_element() -> None:
    (bound,) = bound_from("A")

    rebound = bound.rebind(item("A", 1), element=None)

    assert rebound.element is bound.element
